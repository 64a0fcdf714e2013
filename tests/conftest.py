"""
Shared fixtures: an in-memory SQLite database (one shared connection, foreign
keys on), a TestClient bound to it and a handful of ready-made accounts.
"""
import os

# Set testing environment before the app reads its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-the-volunteer-suite"
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from main import app
from config.database import Base, SessionLocal, engine, get_db
from api.user.user_model import User, UserRole
from api.user.user_service import hash_password
from api.events.events_model import Event
from helpers.token_helper import create_user_token
from utils.datetime_utils import utcnow


@pytest.fixture
def db_session():
    """Fresh schema for each test"""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """Test client with the database dependency pointed at the test session"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_account(db, email, role=UserRole.volunteer, name=None, password="password123"):
    user = User(email=email, name=name, password=hash_password(password), role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_event(db, creator, title="Beach Cleanup", days_ahead=7, **fields):
    event = Event(
        title=title,
        description=fields.pop("description", f"{title} description"),
        date=fields.pop("date", utcnow() + timedelta(days=days_ahead)),
        location=fields.pop("location", "Colombo"),
        created_by=creator.id,
        **fields,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def actor(user):
    """The dict the auth middleware hands to services"""
    return {"id": user.id, "email": user.email, "name": user.display_name,
            "role": user.role.value, "roles": [user.role.value]}


def bearer(user):
    return {"Authorization": f"Bearer {create_user_token(user)}"}


@pytest.fixture
def admin_user(db_session):
    return make_account(db_session, "coordinator@srcs.org", role=UserRole.admin, name="Ada Coordinator")


@pytest.fixture
def volunteer(db_session):
    return make_account(db_session, "vera@srcs.org", name="Vera Volunteer")


@pytest.fixture
def other_volunteer(db_session):
    return make_account(db_session, "omar@srcs.org", name="Omar Helper")


@pytest.fixture
def event(db_session, admin_user):
    return make_event(db_session, admin_user)


@pytest.fixture
def admin_headers(admin_user):
    return bearer(admin_user)


@pytest.fixture
def volunteer_headers(volunteer):
    return bearer(volunteer)
