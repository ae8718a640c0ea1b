"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from budget_gateway.api.dependencies import get_today
from budget_gateway.api.main import create_app
from budget_gateway.infrastructure.database.models import Base, Category, User
from budget_gateway.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Every request in the API tests runs as if it were this day
TODAY = date(2024, 3, 10)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and a fixed current date"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    return TestClient(app)


@pytest.fixture
def user(db: Session) -> User:
    """Household member with an e-mail address"""
    user = User(username="maria", password_hash="x", email="maria@example.com", name="Maria")
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def housing(db: Session) -> Category:
    category = Category(name="Housing", color="#EF4444", icon="fas fa-home")
    db.add(category)
    db.commit()
    return category


@pytest.fixture
def food(db: Session) -> Category:
    category = Category(name="Food", color="#10B981", icon="fas fa-utensils")
    db.add(category)
    db.commit()
    return category
