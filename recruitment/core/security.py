"""
Token codec and password helpers.

Tokens are HS256 JWTs carrying ``{id, email, role}`` plus ``iat``/``exp``.
``verify_token`` never raises: any fault (bad signature, expiry, malformed
payload, unknown role) yields ``None`` and the caller answers 401.
"""
import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional, Tuple

import bcrypt
from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

from recruitment.core.config import settings
from recruitment.core.logger_setup import setup_logger

logger = setup_logger(__name__)


class Role(str, Enum):
    ADMIN = "ADMIN"
    COMPANY = "COMPANY"
    CANDIDATE = "CANDIDATE"


class Identity(BaseModel):
    """The authenticated principal attached to a request."""
    id: int
    email: str
    role: Role

    class Config:
        frozen = True


def issue_token(identity: Identity, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.JWT_EXPIRES_DAYS))
    claims = {
        "id": identity.id,
        "email": identity.email,
        "role": identity.role.value,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> Optional[Identity]:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        logger.debug(f"Token rejected: {str(e)}")
        return None

    try:
        return Identity(id=payload.get("id"), email=payload.get("email"), role=payload.get("role"))
    except ValidationError:
        logger.warning("Token carried a malformed identity payload")
        return None


def hash_password(plain: str) -> str:
    hashed = bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def generate_reset_token() -> Tuple[str, str]:
    """Return ``(raw_token, sha256_hex)``; only the hash is stored."""
    raw = secrets.token_hex(32)
    return raw, hash_reset_token(raw)
