"""
Create the schema and make sure an ADMIN principal exists.

Run with ``python -m recruitment.seed``. Credentials come from
``ADMIN_EMAIL`` / ``ADMIN_PASSWORD``; an existing admin only gets its
password refreshed.
"""
import sys

from recruitment.database import SessionLocal, Base, init_db
from recruitment.all_models import *  # Ensure all models are imported
from recruitment.auth.dao import DAO
from recruitment.core.config import settings
from recruitment.core.logger_setup import setup_logger
from recruitment.core.schema import normalize_email
from recruitment.core.security import Role, hash_password

logger = setup_logger(__name__)


def seed_admin(db, email, password):
    """Create or update the admin account. Returns ``(user, created)``."""
    dao = DAO(db)
    email = normalize_email(email)
    user = dao.get_user_by_email(email)

    if user is None:
        user = dao.create_admin(email, hash_password(password))
        logger.info(f"Admin created: {email}")
        return user, True

    if user.role != Role.ADMIN.value:
        raise ValueError(f"{email} already belongs to a {user.role} account")

    dao.update_password(user, hash_password(password))
    logger.info(f"Admin password refreshed: {email}")
    return user, False


def main():
    if not settings.ADMIN_PASSWORD:
        logger.error("ADMIN_PASSWORD is not set; refusing to seed an admin without a password")
        return 1

    init_db(Base)
    db = SessionLocal()
    try:
        user, created = seed_admin(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
        print(f"{'Created' if created else 'Updated'} admin {user.email} (id {user.id})")
    except ValueError as e:
        logger.error(str(e))
        return 1
    finally:
        db.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
