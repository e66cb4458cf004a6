from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from recruitment.companies.models import CompanyStatus, PaymentStatus
from recruitment.core.schema import CamelModel, check_password_bytes, normalize_email, require_text


class CompanySortField(str, Enum):
    createdAt = "createdAt"
    updatedAt = "updatedAt"
    companyName = "companyName"
    status = "status"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


class CompanyCreate(CamelModel):
    email: str
    password: str = Field(min_length=8, max_length=72)
    company_name: str
    display_name: Optional[str] = None
    status: CompanyStatus = CompanyStatus.ACTIVE
    payment_status: PaymentStatus = PaymentStatus.PENDING

    @field_validator("email")
    @classmethod
    def validate_email(cls, value):
        return normalize_email(value)

    @field_validator("company_name")
    @classmethod
    def validate_company_name(cls, value):
        return require_text(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value):
        return check_password_bytes(value)


class CompanyStatusUpdate(CamelModel):
    status: CompanyStatus


class CompanyPasswordReset(CamelModel):
    new_password: str = Field(min_length=6, max_length=72)

    @field_validator("new_password")
    @classmethod
    def validate_password(cls, value):
        return check_password_bytes(value)


class StylingUpdate(CamelModel):
    styling: Dict[str, Any]


class CompanyOut(CamelModel):
    id: int
    company_name: str
    display_name: Optional[str] = None
    email: str
    status: CompanyStatus
    payment_status: PaymentStatus
    styling: Optional[Dict[str, Any]] = None
    jobs_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_company(cls, company, jobs_count: int = 0):
        return cls(
            id=company.id,
            company_name=company.company_name,
            display_name=company.display_name,
            email=company.user.email,
            status=company.status,
            payment_status=company.payment_status,
            styling=company.styling,
            jobs_count=jobs_count,
            created_at=company.created_at,
            updated_at=company.updated_at,
        )


class CompanyJobSummary(CamelModel):
    id: int
    title: str
    deadline: Optional[datetime] = None
    created_at: Optional[datetime] = None


class CompanyDetailOut(CompanyOut):
    jobs: List[CompanyJobSummary] = Field(default_factory=list)
