"""
Pytest configuration and shared fixtures.
"""

from datetime import date
from typing import Any, Dict, List, Tuple

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.errors import StoreError
from app.db.session import build_engine, init_db
from app.main import create_app
from app.services import CredentialService, JobCatalog, TokenResetProvider, UserDirectory
from app.store.record_store import RecordStore, SQLAlchemyRecordStore


class FailingStore(RecordStore):
    """Record store whose every call fails like an unreachable database."""

    def _fail(self, *args, **kwargs):
        raise StoreError("connection refused")

    insert = select = update = delete = _fail


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        BCRYPT_ROUNDS=10,
        ENFORCE_JOB_OWNERSHIP=False,
        BACKEND_CORS_ORIGINS="https://ihospitaljobs.com,https://localhost:3001",
    )


@pytest.fixture
def engine(test_settings):
    """In-memory SQLite engine shared by every connection of a test."""
    engine = build_engine(
        test_settings.DATABASE_URL,
        test_settings.STORE_TIMEOUT_SECONDS,
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine) -> SQLAlchemyRecordStore:
    return SQLAlchemyRecordStore(engine)


@pytest.fixture
def sent_resets() -> List[Tuple[str, str]]:
    """Collects (email, token) pairs handed to the reset provider."""
    return []


@pytest.fixture
def reset_provider(sent_resets) -> TokenResetProvider:
    return TokenResetProvider(deliver=lambda email, token: sent_resets.append((email, token)))


@pytest.fixture
def credentials(store, reset_provider) -> CredentialService:
    return CredentialService(store, reset_provider=reset_provider)


@pytest.fixture
def users(store, credentials) -> UserDirectory:
    return UserDirectory(store, credentials)


@pytest.fixture
def jobs(store) -> JobCatalog:
    return JobCatalog(store, enforce_ownership=False)


@pytest.fixture
def signup_payload() -> Dict[str, Any]:
    """Valid signup request body."""
    return {
        "firstname": "Ada",
        "lastname": "Lovelace",
        "email": "a@x.com",
        "password": "pw1",
        "gender": "female",
        "dob": "1990-12-10",
    }


@pytest.fixture
def registered_user(users) -> Dict[str, Any]:
    """A user registered through the directory, returned as a public row."""
    users.register(
        firstname="Ada",
        lastname="Lovelace",
        email="a@x.com",
        password="pw1",
        gender="female",
        dob=date(1990, 12, 10),
    )
    return users.authenticate("a@x.com", "pw1").user


@pytest.fixture
def make_job():
    """Factory for ``JobCatalog.create`` keyword arguments."""

    def _make(**overrides) -> Dict[str, Any]:
        job = {
            "owner_id": 1,
            "title": "Nurse",
            "company": "St. Mary's Hospital",
            "location": "Boston, MA",
            "job_type": "Full-time",
            "apply_link": "https://ihospitaljobs.com/apply/1",
            "date": date(2024, 3, 1),
            "contact": "hr@stmarys.org",
            "salary": "$78,000",
        }
        job.update(overrides)
        return job

    return _make


@pytest.fixture
def job_payload() -> Dict[str, Any]:
    """Valid registerjob request body."""
    return {
        "title": "Nurse",
        "company": "St. Mary's Hospital",
        "location": "Boston, MA",
        "job_type": "Full-time",
        "apply_link": "https://ihospitaljobs.com/apply/1",
        "date": "2024-03-01",
        "contact": "hr@stmarys.org",
        "userId": 1,
        "jobSalary": "$78,000",
    }


@pytest.fixture
def client(test_settings, store, reset_provider):
    """Test client for an app wired to the in-memory store."""
    app = create_app(test_settings, store=store, reset_provider=reset_provider)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def failing_client(test_settings):
    """Test client for an app whose store always fails."""
    app = create_app(test_settings, store=FailingStore())
    with TestClient(app) as client:
        yield client
