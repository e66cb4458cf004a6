import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from recruitment.auth.models import User, Admin
from recruitment.candidates.models import Candidate
from recruitment.companies.models import Company, CompanyStatus, PaymentStatus
from recruitment.core.security import Role

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

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def email_taken(self, email: str) -> bool:
        return self.get_user_by_email(email) is not None

    def _create_user(self, email: str, password_hash: str, role: Role) -> User:
        user = User(email=email, password_hash=password_hash, role=role.value)
        self.db.add(user)
        self.db.flush()
        return user

    def create_admin(self, email: str, password_hash: str) -> User:
        logger.info("Creating admin user: %s", email)
        user = self._create_user(email, password_hash, Role.ADMIN)
        self.db.add(Admin(user_id=user.id))
        self._commit_with_rollback("creating admin")
        self.db.refresh(user)
        return user

    def create_company(
        self,
        email: str,
        password_hash: str,
        company_name: str,
        display_name: Optional[str] = None,
        status: CompanyStatus = CompanyStatus.INACTIVE,
        payment_status: PaymentStatus = PaymentStatus.PENDING,
    ) -> Company:
        """
        Create a COMPANY principal together with its company profile.

        Returns:
            Company: The created company record (``company.user`` is loaded)
        """
        logger.info("Creating company user: %s (%s)", email, company_name)
        user = self._create_user(email, password_hash, Role.COMPANY)
        company = Company(
            user_id=user.id,
            company_name=company_name,
            display_name=display_name,
            status=status.value,
            payment_status=payment_status.value,
        )
        self.db.add(company)
        self._commit_with_rollback("creating company")
        self.db.refresh(company)
        return company

    def create_candidate(
        self,
        email: str,
        password_hash: str,
        first_name: str = "",
        last_name: str = "",
    ) -> Candidate:
        logger.info("Creating candidate user: %s", email)
        user = self._create_user(email, password_hash, Role.CANDIDATE)
        candidate = Candidate(
            user_id=user.id,
            first_name=first_name or "",
            last_name=last_name or "",
            profile={},
            submitted=False,
        )
        self.db.add(candidate)
        self._commit_with_rollback("creating candidate")
        self.db.refresh(candidate)
        return candidate

    def set_reset_token(self, user: User, token_hash: str, expires_at: datetime) -> None:
        user.reset_token_hash = token_hash
        user.reset_token_expires_at = expires_at
        self._commit_with_rollback("storing reset token")

    def get_user_by_reset_token(self, token_hash: str, role: Role) -> Optional[User]:
        return self.db.query(User).filter(
            User.reset_token_hash == token_hash,
            User.role == role.value,
            User.reset_token_expires_at > datetime.utcnow(),
        ).first()

    def update_password(self, user: User, password_hash: str) -> None:
        user.password_hash = password_hash
        user.reset_token_hash = None
        user.reset_token_expires_at = None
        self._commit_with_rollback("updating password")
