import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from recruitment.applications.models import Application
from recruitment.companies.models import Company
from recruitment.jobs.models import Job

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

    def get_company_for_user(self, user_id: int) -> Optional[Company]:
        return self.db.query(Company).filter(Company.user_id == user_id).first()

    def list_jobs_with_counts(self, company_id: int) -> List[Tuple[Job, int]]:
        """Jobs owned by ``company_id``, newest first, with their application count."""
        counts = (
            self.db.query(Application.job_id, func.count(Application.id).label("applications_count"))
            .group_by(Application.job_id)
            .subquery()
        )
        rows = (
            self.db.query(Job, func.coalesce(counts.c.applications_count, 0))
            .outerjoin(counts, counts.c.job_id == Job.id)
            .filter(Job.company_id == company_id)
            .order_by(Job.created_at.desc(), Job.id.desc())
            .all()
        )
        return [(job, int(count)) for job, count in rows]

    def get_job(self, job_id: int) -> Optional[Job]:
        return self.db.query(Job).filter(Job.id == job_id).first()

    def get_owned_job(self, job_id: int, company_id: int) -> Optional[Job]:
        return self.db.query(Job).filter(Job.id == job_id, Job.company_id == company_id).first()

    def create_job(self, company_id: int, data: Dict[str, Any]) -> Job:
        logger.info("Creating job '%s' for company %s", data.get("title"), company_id)
        job = Job(company_id=company_id, **data)
        self.db.add(job)
        self._commit_with_rollback("creating job")
        self.db.refresh(job)
        return job

    def update_job(self, job: Job, changes: Dict[str, Any]) -> Job:
        for field, value in changes.items():
            setattr(job, field, value)
        self._commit_with_rollback("updating job")
        self.db.refresh(job)
        logger.info("Updated job %s fields: %s", job.id, sorted(changes))
        return job

    def delete_job(self, job: Job) -> None:
        job_id = job.id
        self.db.delete(job)
        self._commit_with_rollback("deleting job")
        logger.info("Deleted job %s", job_id)
