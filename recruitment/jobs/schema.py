from datetime import datetime, date, timezone
from enum import Enum
from typing import List, Optional, Union

from pydantic import Field, field_validator, model_validator

from recruitment.core.schema import CamelModel, require_text


class QuestionType(str, Enum):
    text = "text"
    textarea = "textarea"
    select = "select"
    radio = "radio"


class CustomQuestion(CamelModel):
    id: str = Field(min_length=1)
    question: str
    type: QuestionType = QuestionType.text
    options: Optional[List[str]] = None
    required: bool = False

    @field_validator("question")
    @classmethod
    def validate_question(cls, value):
        return require_text(value)

    @model_validator(mode="after")
    def check_options(self):
        if self.type in (QuestionType.select, QuestionType.radio) and not self.options:
            raise ValueError(f"'{self.type.value}' questions need at least one option")
        return self


def parse_deadline(value: Union[str, datetime, date, None]) -> Optional[datetime]:
    """
    Parse a deadline into naive UTC and require it to be in the future.

    Accepts ``YYYY-MM-DD`` or an ISO-8601 timestamp; a date means midnight UTC.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError("Invalid deadline date")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)

    if parsed <= datetime.utcnow():
        raise ValueError("Deadline must be in the future")
    return parsed


class JobCreate(CamelModel):
    title: str
    description: str
    deadline: Optional[datetime] = None
    extra_questions: Optional[List[CustomQuestion]] = None

    @field_validator("title", "description")
    @classmethod
    def validate_text(cls, value):
        return require_text(value)

    @field_validator("deadline", mode="before")
    @classmethod
    def validate_deadline(cls, value):
        return parse_deadline(value)

    @field_validator("extra_questions")
    @classmethod
    def validate_question_ids(cls, value):
        if value:
            ids = [q.id for q in value]
            if len(ids) != len(set(ids)):
                raise ValueError("Question ids must be unique")
        return value or None


class JobUpdate(JobCreate):
    """Partial update: only the fields present in the body are applied."""
    title: Optional[str] = None
    description: Optional[str] = None

    @field_validator("title", "description")
    @classmethod
    def validate_text(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return require_text(value)


class JobOut(CamelModel):
    id: int
    company_id: int
    title: str
    description: str
    deadline: Optional[datetime] = None
    extra_questions: Optional[List[CustomQuestion]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class JobWithCountOut(JobOut):
    applications_count: int = 0


class PublicCompanyOut(CamelModel):
    id: int
    company_name: str
    display_name: Optional[str] = None


class PublicJobOut(CamelModel):
    id: int
    title: str
    description: str
    deadline: Optional[datetime] = None
    extra_questions: Optional[List[CustomQuestion]] = None
    company: PublicCompanyOut
