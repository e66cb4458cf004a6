import logging
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from recruitment.admin_actions.models import AdminAction
from recruitment.auth.models import Admin

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

    def get_admin_for_user(self, user_id: int) -> Optional[Admin]:
        return self.db.query(Admin).filter(Admin.user_id == user_id).first()

    def add_action(self, admin_id: int, action: str, details: Optional[str] = None) -> AdminAction:
        logger.info("Recording admin action '%s' by admin %s", action, admin_id)
        admin_action = AdminAction(admin_id=admin_id, action=action, details=details)
        self.db.add(admin_action)
        self._commit_with_rollback("recording admin action")
        self.db.refresh(admin_action)
        return admin_action

    def record_for_user(self, user_id: int, action: str, details: Optional[str] = None) -> Optional[AdminAction]:
        """Audit an action performed by the admin behind ``user_id``."""
        admin = self.get_admin_for_user(user_id)
        if not admin:
            logger.warning("No admin row for user %s; action '%s' not recorded", user_id, action)
            return None
        return self.add_action(admin.id, action, details)

    def list_actions(self, search: Optional[str] = None, offset: int = 0, limit: int = 20) -> Tuple[List[AdminAction], int]:
        query = self.db.query(AdminAction)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(
                AdminAction.action.ilike(pattern),
                AdminAction.details.ilike(pattern),
            ))

        total = query.count()
        rows = (
            query.options(joinedload(AdminAction.admin).joinedload(Admin.user))
            .order_by(AdminAction.created_at.desc(), AdminAction.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return rows, total
