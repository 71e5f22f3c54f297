"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown (in-memory SQLite)
- Seed data: companies c1-c3, users u1/u2/admin, jobs T1/T2, applications
- FastAPI test client and auth headers
"""

import os

# Must be set before jobly settings are imported
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("JSON_LOGS", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobly.core.database import Base, SqlStore, get_db
from jobly.core.security import create_access_token, get_password_hash
from jobly.models import Application, Company, Job, User
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record):
    # ON DELETE CASCADE needs this on SQLite
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def store(db_session):
    return SqlStore(db_session)


@pytest.fixture
def seeded(db_session):
    """
    Seed the shared fixture data.

    Returns the generated ids of jobs T1 and T2.
    """
    db_session.add_all([
        Company(handle="c1", name="C1", num_employees=1, description="Desc1", logo_url="http://c1.img"),
        Company(handle="c2", name="C2", num_employees=2, description="Desc2", logo_url="http://c2.img"),
        Company(handle="c3", name="C3", num_employees=3, description="Desc3", logo_url="http://c3.img"),
    ])
    db_session.add_all([
        User(username="u1", password=get_password_hash("password1"), first_name="U1F",
             last_name="U1L", email="u1@email.com", is_admin=False),
        User(username="u2", password=get_password_hash("password2"), first_name="U2F",
             last_name="U2L", email="u2@email.com", is_admin=False),
        User(username="admin", password=get_password_hash("adminpass"), first_name="AdF",
             last_name="AdL", email="admin@email.com", is_admin=True),
    ])
    db_session.flush()

    t1 = Job(company_handle="c1", title="T1", salary=10000, equity=0.2)
    t2 = Job(company_handle="c2", title="T2", salary=20000, equity=0)
    db_session.add_all([t1, t2])
    db_session.flush()

    db_session.add_all([
        Application(username="u1", job_id=t1.id),
        Application(username="u1", job_id=t2.id),
    ])
    db_session.commit()

    return {"T1": t1.id, "T2": t2.id}


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def u1_headers():
    token = create_access_token({"username": "u1", "isAdmin": False})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    token = create_access_token({"username": "admin", "isAdmin": True})
    return {"Authorization": f"Bearer {token}"}
