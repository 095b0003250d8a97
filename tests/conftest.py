"""
Test Configuration and Fixtures
Shared testing infrastructure for Stockroom
"""

import os

# Must be set before the application modules read their settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from typing import Generator, Dict, Any
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from stockroom.main import app
from stockroom.core.database import get_db, Base
from stockroom.models.auth import User
from stockroom.schemas.auth import Role, UserCreate
from stockroom.services.auth_service import AuthService
from stockroom.services.category_service import CategoryService
from stockroom.services.item_service import ItemService

# Single shared in-memory database for each test
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

STAFF_PASSWORD = "staffpass123"
ADMIN_PASSWORD = "adminpass123"


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test"""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database dependency override"""
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
def test_user(db_session: Session) -> User:
    """Create a staff account"""
    return AuthService(db_session).create_user(UserCreate(
        email="staff@example.com",
        password=STAFF_PASSWORD,
        name="Staff User",
        role=Role.STAFF,
    ))


@pytest.fixture
def test_admin_user(db_session: Session) -> User:
    """Create an admin account"""
    return AuthService(db_session).create_user(UserCreate(
        email="admin@example.com",
        password=ADMIN_PASSWORD,
        name="Admin User",
        role=Role.ADMIN,
    ))


def _login(client: TestClient, email: str, password: str) -> Dict[str, str]:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200

    token = response.json()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(client: TestClient, test_user: User) -> Dict[str, str]:
    """Get authentication headers for the staff account"""
    return _login(client, test_user.email, STAFF_PASSWORD)


@pytest.fixture
def admin_auth_headers(client: TestClient, test_admin_user: User) -> Dict[str, str]:
    """Get authentication headers for the admin account"""
    return _login(client, test_admin_user.email, ADMIN_PASSWORD)


@pytest.fixture
def sample_category(db_session: Session):
    return CategoryService(db_session).create_category({"name": "Dairy", "description": "Chilled"})


@pytest.fixture
def sample_item_data(sample_category) -> Dict[str, Any]:
    """Sample item data for testing"""
    return {
        "name": "Milk",
        "category_id": sample_category.id,
        "unit": "L",
        "quantity": 10,
        "min_quantity": 5,
        "max_quantity": 30,
        "supplier": "Acme Dairy",
    }


@pytest.fixture
def sample_item(db_session: Session, sample_item_data) -> Dict[str, Any]:
    """A persisted item, as returned by ItemService"""
    return ItemService(db_session).create_item(sample_item_data)
