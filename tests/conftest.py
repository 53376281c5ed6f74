import os

os.environ["ENV"] = "test"

import uuid
from datetime import datetime, UTC

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db import Base, get_db
from app.models.user import User, UserRole
from app.services.auth import get_current_user

# Use SQLite in-memory for test DB
TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"
# For in-memory SQLite we must use a StaticPool so multiple connections share the
# same in-memory database during the test run (TestClient requests vs test setup).
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

app.dependency_overrides[get_db] = override_get_db

@pytest.fixture(autouse=True)
def setup_test_db():
    # recreate schema for each test to ensure isolation
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    app.dependency_overrides.pop(get_current_user, None)

@pytest.fixture
def client():
    return TestClient(app)

@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()

def _make_user(db_session, role: UserRole, name: str) -> User:
    user = User(
        id=str(uuid.uuid4()),
        name=name,
        email=f"user+{uuid.uuid4().hex[:8]}@example.com",
        role=role,
        created_at=datetime.now(UTC),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user

@pytest.fixture
def member_user(db_session):
    return _make_user(db_session, UserRole.member, "Member One")

@pytest.fixture
def other_member(db_session):
    return _make_user(db_session, UserRole.member, "Member Two")

@pytest.fixture
def church_admin_user(db_session):
    return _make_user(db_session, UserRole.church_admin, "Church Admin One")

@pytest.fixture
def act_as():
    """Route requests through ``get_current_user`` as the given user."""
    def _act(user):
        app.dependency_overrides[get_current_user] = lambda: user
        return {"Authorization": f"Bearer mock-{user.id}"}
    return _act
