from datetime import datetime, timedelta, timezone

from jose import jwt

from recruitment.core.config import settings
from recruitment.core.security import (
    Identity,
    Role,
    issue_token,
    verify_token,
    hash_password,
    verify_password,
    generate_reset_token,
    hash_reset_token,
)


def test_token_round_trip():
    identity = Identity(id=7, email="jane@example.com", role=Role.CANDIDATE)
    assert verify_token(issue_token(identity)) == identity


def test_token_expires_after_seven_days():
    before = datetime.now(timezone.utc)
    token = issue_token(Identity(id=1, email="a@example.com", role=Role.ADMIN))
    claims = jwt.get_unverified_claims(token)

    expires = datetime.fromtimestamp(claims["exp"], tz=timezone.utc)
    assert timedelta(days=7) - timedelta(seconds=5) <= expires - before <= timedelta(days=7, seconds=5)
    assert claims["role"] == "ADMIN"


def test_expired_token_is_rejected():
    token = issue_token(
        Identity(id=1, email="a@example.com", role=Role.ADMIN),
        expires_delta=timedelta(seconds=-10),
    )
    assert verify_token(token) is None


def test_tampered_token_is_rejected():
    token = issue_token(Identity(id=1, email="a@example.com", role=Role.COMPANY))
    header, payload, signature = token.split(".")
    forged = ".".join([header, payload, signature[::-1]])
    assert verify_token(forged) is None


def test_token_signed_with_other_secret_is_rejected():
    claims = {"id": 1, "email": "a@example.com", "role": "ADMIN",
              "exp": datetime.now(timezone.utc) + timedelta(hours=1)}
    token = jwt.encode(claims, "some-other-secret", algorithm="HS256")
    assert verify_token(token) is None


def test_token_with_unknown_role_is_rejected():
    claims = {"id": 1, "email": "a@example.com", "role": "ROOT",
              "exp": datetime.now(timezone.utc) + timedelta(hours=1)}
    token = jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    assert verify_token(token) is None


def test_garbage_token_is_rejected():
    assert verify_token("not-a-token") is None
    assert verify_token("") is None


def test_password_hashing():
    hashed = hash_password("correct horse")
    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_verify_password_with_malformed_hash():
    assert not verify_password("anything", "not-a-bcrypt-hash")


def test_reset_token_only_hash_is_derivable():
    raw, token_hash = generate_reset_token()
    assert raw != token_hash
    assert hash_reset_token(raw) == token_hash
    assert len(token_hash) == 64
