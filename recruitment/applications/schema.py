from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from recruitment.applications.models import ApplicationStatus
from recruitment.core.schema import CamelModel


class ApplicationCreate(CamelModel):
    job_id: int
    # Derived server-side; when supplied they must agree with the token and the job
    candidate_id: Optional[int] = None
    company_id: Optional[int] = None
    answers: Optional[Dict[str, Any]] = None
    profile: Optional[Dict[str, Any]] = None
    documents: Optional[Dict[str, Optional[str]]] = None


class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus


class ApplicationCandidateOut(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: Optional[str] = None


class ApplicationJobOut(CamelModel):
    id: int
    title: str


class ApplicationCompanyOut(CamelModel):
    id: int
    company_name: str


class ApplicationOut(CamelModel):
    id: int
    candidate_id: int
    job_id: int
    company_id: int
    status: ApplicationStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ApplicationDetailOut(ApplicationOut):
    answers: Dict[str, Any] = Field(default_factory=dict)
    profile_snapshot: Dict[str, Any] = Field(default_factory=dict)
    documents: Dict[str, Any] = Field(default_factory=dict)
    candidate: Optional[ApplicationCandidateOut] = None
    job: Optional[ApplicationJobOut] = None
    company: Optional[ApplicationCompanyOut] = None
