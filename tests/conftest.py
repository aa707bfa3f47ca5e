"""Pytest configuration for bookshelf tests."""
import os

# Tests run against TEST_DATABASE_URL (in-memory SQLite unless set). Point the
# application settings at it too, before anything from bookshelf is imported,
# so no test can ever reach the DATABASE_URL from .env.
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")
os.environ["DATABASE_URL"] = TEST_DATABASE_URL

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from bookshelf.database import Base, get_db

# Import the models module so every table is registered with Base.metadata
import bookshelf.models  # noqa: F401
from bookshelf.models import Book, User
from bookshelf.schemas.book import BookCreate
from bookshelf.schemas.user import UserCreate
from bookshelf.services.catalog_service import create_book
from bookshelf.services.user_service import create_user


@pytest.fixture(scope="session")
def engine():
    """
    Create a test database engine and all tables.

    In-memory SQLite needs a single shared connection (StaticPool), otherwise
    every new connection would see an empty database.
    """
    if TEST_DATABASE_URL.startswith("sqlite"):
        test_engine = create_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        test_engine = create_engine(TEST_DATABASE_URL, pool_pre_ping=True)

    if not Base.metadata.tables:
        raise RuntimeError(
            "No tables registered in Base.metadata. "
            "Did you import bookshelf.models?"
        )

    Base.metadata.create_all(bind=test_engine)

    yield test_engine

    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture(scope="function")
def db(engine) -> Session:
    """
    Database session for a single test.

    Services commit, so isolation comes from emptying every table afterwards
    (children first) instead of rolling back an outer transaction.
    """
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSessionLocal()

    yield session

    session.rollback()
    session.close()
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def client(db: Session):
    """TestClient whose requests share the test session."""
    from bookshelf.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_book(db: Session):
    """Factory creating valid books through the catalog write path."""
    counter = {"n": 0}

    def _make_book(**overrides) -> Book:
        counter["n"] += 1
        fields = {
            "title": f"Book {counter['n']:02d}",
            "author": f"Author {counter['n']:02d}",
            "number_page": 100 + counter["n"],
        }
        fields.update(overrides)
        return create_book(db, BookCreate(**fields))

    return _make_book


@pytest.fixture
def make_user(db: Session):
    counter = {"n": 0}

    def _make_user(**overrides) -> User:
        counter["n"] += 1
        fields = {"email": f"reader{counter['n']}@example.com", "name": f"Reader {counter['n']}"}
        fields.update(overrides)
        return create_user(db, UserCreate(**fields))

    return _make_user


@pytest.fixture
def user(make_user) -> User:
    return make_user()
