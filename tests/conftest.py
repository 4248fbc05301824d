"""
Shared fixtures: throwaway SQLite database, sample events and an API client
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from eventboard.core.config import settings
from eventboard.core.db import Base, get_db
from eventboard.domain.status import UserRole
from eventboard.models import BackofficeUser, Category, Event
from eventboard.services.post_service import PostSubmissionService
from eventboard.utils.security import rate_limiter
from main import app

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_eventboard.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def draft_event(db_session):
    """Draft event without categories"""
    event = Event(name="Conf", slug="conf", description="Yearly conference")
    db_session.add(event)
    db_session.commit()
    db_session.refresh(event)
    return event

@pytest.fixture
def active_event(db_session):
    """Active event with two categories, Tech (10) and Design (20)"""
    event = Event(name="Summit", slug="summit", location="Main hall")
    tech = Category(event, "Tech", "#3366ff")
    tech.set_sort_order(10)
    design = Category(event, "Design", "#ff6633", "UX and visual design")
    design.set_sort_order(20)
    event.activate()
    db_session.add(event)
    db_session.commit()
    db_session.refresh(event)
    return event

@pytest.fixture
def make_post(db_session):
    """Factory submitting a post through the public submission service"""
    def _make_post(event, category, title="Talk", email="author@example.com", **kwargs):
        return PostSubmissionService(db_session).submit_post(
            event, category.id, title, kwargs.pop("content", "Some content"), email, **kwargs
        )
    return _make_post

@pytest.fixture
def backoffice_users(db_session):
    """One administrator and one moderator"""
    admin = BackofficeUser("admin@example.com", "Ada Admin", UserRole.ADMIN)
    moderator = BackofficeUser("mod@example.com", "Max Moderator", UserRole.MODERATOR)
    db_session.add_all([admin, moderator])
    db_session.commit()
    return admin, moderator

@pytest.fixture
def admin_headers(backoffice_users):
    return {
        "Authorization": f"Bearer {settings.ADMIN_TOKEN}",
        "X-Backoffice-User": "admin@example.com",
    }

@pytest.fixture
def moderator_headers(backoffice_users):
    return {
        "Authorization": f"Bearer {settings.ADMIN_TOKEN}",
        "X-Backoffice-User": "mod@example.com",
    }

@pytest.fixture
def api_client(db_session):
    """TestClient bound to the test database"""
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    rate_limiter.clear()
    client = TestClient(app)
    try:
        yield client
    finally:
        app.dependency_overrides.clear()
