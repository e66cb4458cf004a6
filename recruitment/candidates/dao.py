import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from recruitment.candidates.models import Candidate

logger = logging.getLogger(__name__)


class DAO:
    def __init__(self, db: Session):
        self.db = db

    def _commit_with_rollback(self, operation: str) -> None:
        """Helper method to handle commit and rollback"""
        try:
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error("Error during %s: %s", operation, str(e))
            raise

    def get_candidate_for_user(self, user_id: int) -> Optional[Candidate]:
        return self.db.query(Candidate).filter(Candidate.user_id == user_id).first()

    def update_profile(
        self,
        candidate: Candidate,
        first_name: str,
        last_name: str,
        profile: Optional[Dict[str, Any]],
    ) -> Candidate:
        """
        Replace the candidate's names and free-form profile.

        Callers must check ``candidate.submitted`` first; this method does not.
        """
        logger.info("Updating profile for candidate %s", candidate.id)
        candidate.first_name = first_name
        candidate.last_name = last_name
        candidate.profile = profile or {}
        self._commit_with_rollback("updating candidate profile")
        self.db.refresh(candidate)
        return candidate
