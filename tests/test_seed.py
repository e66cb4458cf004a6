import pytest

from recruitment.core.security import verify_password
from recruitment.seed import seed_admin


def test_seed_creates_admin(db):
    user, created = seed_admin(db, "Root@Example.com", "root-password")
    assert created
    assert user.email == "root@example.com"
    assert user.role == "ADMIN"
    assert user.admin is not None


def test_seed_is_idempotent(db):
    first, _ = seed_admin(db, "root@example.com", "root-password")
    again, created = seed_admin(db, "root@example.com", "rotated-password")
    assert not created
    assert again.id == first.id
    assert verify_password("rotated-password", again.password_hash)


def test_seed_refuses_non_admin_email(db, candidate):
    with pytest.raises(ValueError):
        seed_admin(db, "jane@example.com", "root-password")


def test_seeded_admin_can_log_in(client, db):
    seed_admin(db, "root@example.com", "root-password")
    response = client.post("/api/auth/login", json={"email": "root@example.com", "password": "root-password", "role": "ADMIN"})
    assert response.status_code == 200
