"""
pytest Fixtures for Bookstore API Tests

This file contains shared fixtures used across all test files.

HOW THE TEST APP IS BUILT
=========================
create_app() takes its Settings explicitly, so every test builds its own app:
- db.url = "sqlite://" → in-memory SQLite (StaticPool, one shared connection)
- a fixed 32+ character JWT secret
- bcrypt_rounds = 4 so hashing stays fast

Each test gets a fresh app and therefore a fresh, empty database. No
dependency overrides or environment variables are needed.

FIXTURE SCOPES:
- function (default) for everything here: full isolation between tests
"""

from collections.abc import Generator
from datetime import timedelta

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from bookstore.config import AppConfig, AuthConfig, DatabaseConfig, JWTConfig, Settings
from bookstore.database import create_tables
from bookstore.main import create_app
from bookstore.models import Book, User
from bookstore.repositories import InMemoryBookRepository, InMemoryUserRepository
from bookstore.services import BookService, JWTTokenProvider, PasswordHasher, UserService

TEST_SECRET = "test-signing-key-for-unit-tests-0123456789abcdef"
TEST_PASSWORD = "SecurePass123"
TEST_BCRYPT_ROUNDS = 4


# =============================================================================
# SETTINGS / APP FIXTURES
# =============================================================================
@pytest.fixture
def test_settings() -> Settings:
    """Settings pointing at in-memory SQLite with a fixed signing secret."""
    return Settings(
        app=AppConfig(name="Bookstore API (test)", log_level="WARNING"),
        db=DatabaseConfig(url="sqlite://"),
        auth=AuthConfig(
            jwt=JWTConfig(secret=TEST_SECRET, expire_minutes=15),
            bcrypt_rounds=TEST_BCRYPT_ROUNDS,
        ),
    )


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """
    Application under test with its tables created.

    The in-memory database lives as long as the app's engine.
    """
    application = create_app(test_settings)
    create_tables(application.state.engine)
    return application


@pytest.fixture
def db_session(app: FastAPI) -> Generator[Session, None, None]:
    """
    Session on the same database the app uses.

    Fixtures insert rows through it; requests made through the client see
    them because StaticPool shares one connection.
    """
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    Test client for the app.

    Entering the context runs the lifespan (startup and shutdown).
    """
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# SECURITY FIXTURES
# =============================================================================
@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def token_provider() -> JWTTokenProvider:
    """Provider with the same secret as the test app, so its tokens are accepted."""
    return JWTTokenProvider(TEST_SECRET, timedelta(minutes=15))


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
# These depend on db_session, so they're created fresh for each test.


@pytest.fixture
def sample_user(db_session: Session, hasher: PasswordHasher) -> User:
    """Create a sample user for testing."""
    user = User(
        email="testuser@example.com",
        hashed_password=hasher.hash(TEST_PASSWORD),
        username="testuser",
        first_name="Test",
        last_name="User",
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def second_user(db_session: Session, hasher: PasswordHasher) -> User:
    """Create a second user for testing list and cross-user scenarios."""
    user = User(
        email="seconduser@example.com",
        hashed_password=hasher.hash("SecurePass456"),
        username="seconduser",
        first_name="Second",
        last_name="User",
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(sample_user: User, token_provider: JWTTokenProvider) -> dict[str, str]:
    """Authorization header carrying a valid token for sample_user."""
    token = token_provider.issue(str(sample_user.id))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_book(db_session: Session) -> Book:
    """Create a sample book for testing."""
    book = Book(title="1984", author="George Orwell", price=12, stock=3)
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def multiple_books(db_session: Session) -> list[Book]:
    """Create several books for list ordering tests."""
    books = [
        Book(title=f"Test Book {i + 1}", author=f"Author {i + 1}", price=10 + i, stock=i)
        for i in range(5)
    ]
    db_session.add_all(books)
    db_session.commit()
    for book in books:
        db_session.refresh(book)
    return books


# =============================================================================
# SERVICE FIXTURES (no database)
# =============================================================================
@pytest.fixture
def user_service(hasher: PasswordHasher, token_provider: JWTTokenProvider) -> UserService:
    """User service over an in-memory repository."""
    return UserService(InMemoryUserRepository(), hasher, token_provider)


@pytest.fixture
def book_service() -> BookService:
    """Book service over an in-memory repository."""
    return BookService(InMemoryBookRepository())
