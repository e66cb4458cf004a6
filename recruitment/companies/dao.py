import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from recruitment.auth.models import User
from recruitment.companies.models import Company, CompanyStatus
from recruitment.jobs.models import Job

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "createdAt": Company.created_at,
    "updatedAt": Company.updated_at,
    "companyName": Company.company_name,
    "status": Company.status,
}


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

    def get_company(self, company_id: int) -> Optional[Company]:
        return self.db.query(Company).filter(Company.id == company_id).first()

    def count_jobs(self, company_id: int) -> int:
        return self.db.query(func.count(Job.id)).filter(Job.company_id == company_id).scalar() or 0

    def search(
        self,
        search: Optional[str] = None,
        status: Optional[CompanyStatus] = None,
        sort_by: str = "createdAt",
        order: str = "desc",
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Tuple[Company, int]], int]:
        """
        Admin listing of companies with their job counts.

        Returns:
            ``([(company, jobs_count), ...], total)``
        """
        job_counts = (
            self.db.query(Job.company_id, func.count(Job.id).label("jobs_count"))
            .group_by(Job.company_id)
            .subquery()
        )
        query = self.db.query(Company).join(User, Company.user_id == User.id)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(Company.company_name.ilike(pattern), User.email.ilike(pattern)))
        if status is not None:
            query = query.filter(Company.status == status.value)

        total = query.count()

        sort_column = SORT_COLUMNS.get(sort_by, Company.created_at)
        ordering = sort_column.asc() if order == "asc" else sort_column.desc()
        rows = (
            query.add_columns(func.coalesce(job_counts.c.jobs_count, 0))
            .outerjoin(job_counts, job_counts.c.company_id == Company.id)
            .order_by(ordering, Company.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [(company, int(count)) for company, count in rows], total

    def count_companies(self, status: Optional[CompanyStatus] = None) -> int:
        query = self.db.query(Company)
        if status is not None:
            query = query.filter(Company.status == status.value)
        return query.count()

    def update_status(self, company: Company, status: CompanyStatus) -> Company:
        logger.info("Company %s status %s -> %s", company.id, company.status, status.value)
        company.status = status.value
        self._commit_with_rollback("updating company status")
        self.db.refresh(company)
        return company

    def update_styling(self, company: Company, styling: Dict[str, Any]) -> Company:
        company.styling = styling
        self._commit_with_rollback("updating company styling")
        self.db.refresh(company)
        return company

    def update_password(self, company: Company, password_hash: str) -> None:
        company.user.password_hash = password_hash
        self._commit_with_rollback("resetting company password")

    def delete_company(self, company: Company) -> None:
        """Delete the owning user; jobs and applications cascade."""
        user = company.user
        logger.info("Deleting company %s and user %s", company.id, user.id)
        self.db.delete(user)
        self._commit_with_rollback("deleting company")
