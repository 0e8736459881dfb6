# tests/conftest.py
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from infra.db.base import Base
import infra.db.models  # noqa
from infra.services import build_service_dict


ADMIN_EMAIL = "admin@admin.com"
ADMIN_PASSWORD = "ChangeMe123!"


@pytest.fixture(autouse=True)
def _fast_password_hashing(monkeypatch):
    monkeypatch.setenv("PM_PASSWORD_ITERATIONS", "1000")
    monkeypatch.delenv("PM_ADMIN_EMAIL", raising=False)
    monkeypatch.delenv("PM_ADMIN_PASSWORD", raising=False)


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def services(session):
    return build_service_dict(session)


@pytest.fixture
def login_as(services):
    def _login(email: str, password: str):
        return services["auth_service"].login(email, password)

    return _login


@pytest.fixture
def admin_session(services, login_as):
    login_as(ADMIN_EMAIL, ADMIN_PASSWORD)
    return services["user_session"]
