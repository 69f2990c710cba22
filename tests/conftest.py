"""
Shared fixtures: in-memory SQLite, fake object storage and signed-in users.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.models.university import University
from app.db.models.course import Course, BACHELORS, MASTERS
from app.core.auth_dependency import get_db
from app.services import auth_service
from app.services.storage_service import get_storage
from tests.fakes import FakeStorage


# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function", autouse=True)
def setup_db():
    """Create and drop tables for each test."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    """Provide a database session for tests."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def client(storage):
    """Test client wired to the test database and fake storage."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def test_user(db_session):
    """Signed-up user with a complete profile, plus their bearer token."""
    user, token = auth_service.sign_up(
        db_session,
        email="student@example.com",
        password="testpass123",
        full_name="Test Student",
        education_level="Bachelor's",
        current_gpa=3.4,
    )
    return {"user": user, "token": token, "headers": {"Authorization": f"Bearer {token}"}}


@pytest.fixture
def admin_user(db_session):
    user, token = auth_service.sign_up(
        db_session,
        email="admin@example.com",
        password="adminpass123",
        full_name="Catalog Admin",
        education_level="Master's",
        current_gpa=4.0,
    )
    user.is_admin = True
    db_session.commit()
    return {"user": user, "token": token, "headers": {"Authorization": f"Bearer {token}"}}


@pytest.fixture
def university(db_session):
    """University with one Bachelor's and two Master's courses."""
    university = University(
        name="University of Toronto",
        location="Toronto",
        country="Canada",
        tuition_fee=45000,
        acceptance_rate=43,
        scholarship_available=True,
        minimum_gpa=3.0,
        education_gap=2,
        description="Public research university.",
        image_url="https://example.com/uoft.jpg",
    )
    university.courses = [
        Course(name="BSc Computer Science", level=BACHELORS, duration="4 years"),
        Course(name="MSc Computer Science", level=MASTERS, duration="2 years"),
        Course(name="MEng Civil Engineering", level=MASTERS, duration="1 year"),
    ]
    db_session.add(university)
    db_session.commit()
    db_session.refresh(university)
    return university


@pytest.fixture
def course(university):
    return university.courses[1]
