from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from recruitment.core.schema import CamelModel, check_password_bytes, normalize_email, require_text
from recruitment.core.security import Role


class LoginRequest(CamelModel):
    email: str
    password: str = Field(min_length=1)
    role: Role

    @field_validator("email")
    @classmethod
    def validate_email(cls, value):
        return normalize_email(value)


class CompanySignupRequest(CamelModel):
    company_name: str
    display_name: Optional[str] = None
    email: str
    password: str = Field(min_length=8, max_length=72)

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


class CandidateSignupRequest(CamelModel):
    email: str
    password: str = Field(min_length=8, max_length=72)
    first_name: Optional[str] = ""
    last_name: Optional[str] = ""

    @field_validator("email")
    @classmethod
    def validate_email(cls, value):
        return normalize_email(value)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value):
        return check_password_bytes(value)


class ForgotPasswordRequest(CamelModel):
    email: str
    role: Role

    @field_validator("email")
    @classmethod
    def validate_email(cls, value):
        return normalize_email(value)


class ResetPasswordRequest(CamelModel):
    token: str = Field(min_length=1)
    password: str = Field(min_length=8, max_length=72)
    role: Role

    @field_validator("password")
    @classmethod
    def validate_password(cls, value):
        return check_password_bytes(value)


class UserOut(CamelModel):
    id: int
    email: str
    role: Role
    created_at: Optional[datetime] = None
