from typing import Any, Dict, Optional

from pydantic import field_validator

from recruitment.core.schema import CamelModel, require_text


class CandidateProfileUpdate(CamelModel):
    first_name: str
    last_name: str
    profile: Optional[Dict[str, Any]] = None

    @field_validator("first_name", "last_name")
    @classmethod
    def validate_name(cls, value):
        return require_text(value)


class CandidateProfileOut(CamelModel):
    id: int
    first_name: str
    last_name: str
    email: str
    profile: Dict[str, Any] = {}
    submitted: bool = False
