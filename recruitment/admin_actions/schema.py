from datetime import datetime
from typing import Optional

from pydantic import field_validator

from recruitment.core.schema import CamelModel, require_text


class AdminActionCreate(CamelModel):
    action: str
    details: Optional[str] = None

    @field_validator("action")
    @classmethod
    def validate_action(cls, value):
        return require_text(value)


class AdminActionOut(CamelModel):
    id: int
    admin_id: int
    admin_email: Optional[str] = None
    action: str
    details: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record):
        admin_user = record.admin.user if record.admin else None
        return cls(
            id=record.id,
            admin_id=record.admin_id,
            admin_email=admin_user.email if admin_user else None,
            action=record.action,
            details=record.details,
            created_at=record.created_at,
        )
