import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from recruitment.applications.models import Application, ApplicationStatus
from recruitment.candidates.models import Candidate
from recruitment.companies.models import Company
from recruitment.jobs.models import Job

logger = logging.getLogger(__name__)

# Profile keys that live in dedicated candidate columns
_NAME_KEYS = ("firstName", "lastName", "email")


class DuplicateApplicationError(Exception):
    """The candidate already applied to this job."""


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

    def find_application(self, candidate_id: int, job_id: int) -> Optional[Application]:
        return self.db.query(Application).filter(
            Application.candidate_id == candidate_id,
            Application.job_id == job_id,
        ).first()

    def submit_application(
        self,
        candidate: Candidate,
        job: Job,
        answers: Optional[Dict[str, Any]],
        profile_snapshot: Optional[Dict[str, Any]],
        documents: Optional[Dict[str, Any]],
    ) -> Application:
        """
        Create the application and freeze the candidate's profile.

        The first submission also copies the snapshot into the candidate's
        profile. Both writes share one commit.

        Raises:
            DuplicateApplicationError: the candidate already applied to ``job``
        """
        if self.find_application(candidate.id, job.id):
            raise DuplicateApplicationError()

        snapshot = dict(profile_snapshot or {})
        application = Application(
            candidate_id=candidate.id,
            job_id=job.id,
            company_id=job.company_id,
            status=ApplicationStatus.PENDING.value,
            answers=answers or {},
            profile_snapshot=snapshot,
            documents=documents or {},
        )
        self.db.add(application)

        if not candidate.submitted and snapshot:
            candidate.first_name = str(snapshot.get("firstName") or candidate.first_name)
            candidate.last_name = str(snapshot.get("lastName") or candidate.last_name)
            candidate.profile = {k: v for k, v in snapshot.items() if k not in _NAME_KEYS}
        candidate.submitted = True

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            # Only the (candidate_id, job_id) constraint means "already applied"
            if not self.find_application(candidate.id, job.id):
                logger.error("Integrity error during submitting application: %s", str(e))
                raise
            logger.warning("Duplicate application for candidate %s on job %s", candidate.id, job.id)
            raise DuplicateApplicationError() from e
        except Exception as e:
            self.db.rollback()
            logger.error("Error during submitting application: %s", str(e))
            raise

        self.db.refresh(application)
        logger.info("Application %s created (candidate %s, job %s)", application.id, candidate.id, job.id)
        return application

    def get_company_application(self, application_id: int, company_id: int) -> Optional[Application]:
        return self.db.query(Application).filter(
            Application.id == application_id,
            Application.company_id == company_id,
        ).first()

    def update_status(self, application: Application, status: ApplicationStatus) -> Application:
        application.status = status.value
        self._commit_with_rollback("updating application status")
        self.db.refresh(application)
        return application

    def list_for_candidate(self, candidate_id: int) -> List[Application]:
        return (
            self.db.query(Application)
            .filter(Application.candidate_id == candidate_id)
            .order_by(Application.created_at.desc(), Application.id.desc())
            .all()
        )

    def list_for_company(
        self,
        company_id: int,
        job_id: Optional[int] = None,
        status: Optional[ApplicationStatus] = None,
    ) -> List[Application]:
        query = self.db.query(Application).filter(Application.company_id == company_id)
        if job_id is not None:
            query = query.filter(Application.job_id == job_id)
        if status is not None:
            query = query.filter(Application.status == status.value)
        return query.order_by(Application.created_at.desc(), Application.id.desc()).all()

    def search(
        self,
        search: Optional[str] = None,
        status: Optional[ApplicationStatus] = None,
        company_id: Optional[int] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Application], int]:
        """Admin listing across all companies; returns ``(page, total)``."""
        query = (
            self.db.query(Application)
            .join(Candidate, Application.candidate_id == Candidate.id)
            .join(Job, Application.job_id == Job.id)
            .join(Company, Application.company_id == Company.id)
        )
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(
                Candidate.first_name.ilike(pattern),
                Candidate.last_name.ilike(pattern),
                Job.title.ilike(pattern),
                Company.company_name.ilike(pattern),
            ))
        if status is not None:
            query = query.filter(Application.status == status.value)
        if company_id is not None:
            query = query.filter(Application.company_id == company_id)

        total = query.count()
        rows = (
            query.order_by(Application.created_at.desc(), Application.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return rows, total

    def count_all(self, status: Optional[ApplicationStatus] = None) -> int:
        query = self.db.query(Application)
        if status is not None:
            query = query.filter(Application.status == status.value)
        return query.count()
