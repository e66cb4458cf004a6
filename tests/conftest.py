import os
import tempfile

# Configure before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["LOGS_DIR"] = tempfile.mkdtemp(prefix="recruitment-logs-")
os.environ["SMTP_HOST"] = ""
os.environ["COMPANY_REQUIRES_APPROVAL"] = "True"

import pytest
from fastapi.testclient import TestClient

from recruitment.main import app
from recruitment.database import Base, engine, SessionLocal
from recruitment.auth.dao import DAO as AuthDAO
from recruitment.companies.models import CompanyStatus
from recruitment.core.errors import StorageError
from recruitment.core.security import Identity, Role, issue_token, hash_password
from recruitment.notifications.email_service import EmailService, get_email_service
from recruitment.uploads.b2_client import UploadedFile, get_storage_client

PASSWORD = "password123"


class FakeEmailService(EmailService):
    """Records outgoing mail instead of talking to SMTP."""

    def __init__(self):
        super().__init__()
        self.sent = []

    def send_email(self, to, subject, html, text=None):
        self.sent.append({"to": to, "subject": subject, "html": html, "text": text})

    def sent_to(self, address):
        return [m for m in self.sent if m["to"] == address]


class FakeStorage:
    def __init__(self):
        self.files = {}
        self.deleted = []
        self.calls = 0
        self.fail_with = None

    def upload_file(self, data, file_name, content_type):
        self.calls += 1
        if self.fail_with:
            raise StorageError(self.fail_with)
        file_id = f"file-{len(self.files) + 1}"
        self.files[file_id] = {
            "fileId": file_id,
            "fileName": file_name,
            "contentType": content_type,
            "contentLength": len(data),
        }
        return UploadedFile(file_id=file_id, file_name=file_name, url=f"https://f000.example/file/bucket/{file_name}")

    def get_file_info(self, file_id):
        self.calls += 1
        if file_id not in self.files:
            raise StorageError("b2_get_file_info failed with status 404")
        return dict(self.files[file_id])

    def delete_file(self, file_name, file_id):
        self.calls += 1
        self.deleted.append((file_name, file_id))
        self.files.pop(file_id, None)


def auth_headers(user):
    token = issue_token(Identity(id=user.id, email=user.email, role=Role(user.role)))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for():
    return auth_headers


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db(reset_database):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def email_service():
    return FakeEmailService()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def client(email_service, storage):
    app.dependency_overrides[get_email_service] = lambda: email_service
    app.dependency_overrides[get_storage_client] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def create_company(db):
    def _create(email="acme@example.com", name="Acme", status=CompanyStatus.ACTIVE):
        return AuthDAO(db).create_company(
            email=email,
            password_hash=hash_password(PASSWORD),
            company_name=name,
            status=status,
        )
    return _create


@pytest.fixture
def create_candidate(db):
    def _create(email="jane@example.com", first_name="Jane", last_name="Doe"):
        return AuthDAO(db).create_candidate(
            email=email,
            password_hash=hash_password(PASSWORD),
            first_name=first_name,
            last_name=last_name,
        )
    return _create


@pytest.fixture
def admin_user(db):
    return AuthDAO(db).create_admin("admin@example.com", hash_password(PASSWORD))


@pytest.fixture
def admin_headers(admin_user):
    return auth_headers(admin_user)


@pytest.fixture
def company(create_company):
    return create_company()


@pytest.fixture
def company_headers(company):
    return auth_headers(company.user)


@pytest.fixture
def candidate(create_candidate):
    return create_candidate()


@pytest.fixture
def candidate_headers(candidate):
    return auth_headers(candidate.user)
