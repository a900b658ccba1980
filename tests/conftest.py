"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient

from gratiday.database import Base, Database, get_db, init_db
from gratiday.entities import Category, User
from gratiday.main import app

# Use test database - PostgreSQL when DATABASE_URL is set, SQLite locally
if os.getenv("DATABASE_URL"):
    TEST_DATABASE_URL = os.getenv("DATABASE_URL").replace("/gratiday", "/gratiday_test")
else:
    TEST_DATABASE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="session")
def database():
    """Create the test schema once at the start of the test session."""
    if "postgresql" in TEST_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(TEST_DATABASE_URL):
            create_database(TEST_DATABASE_URL)

    database = Database(TEST_DATABASE_URL)
    Base.metadata.drop_all(bind=database.engine)
    init_db(database)
    yield database
    Base.metadata.drop_all(bind=database.engine)
    database.disconnect()


@pytest.fixture(scope="function")
def db(database):
    """Hand out the shared handle and empty every table after the test."""
    yield database

    database.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        database.query(table.delete())


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def ana(db):
    """A regular user."""
    return User(nombre="Ana", correo_electronico="ana@x.com", rol="user", db=db).create("secret1")


@pytest.fixture
def hope(db):
    """A category without quotes."""
    return Category(nombre="Hope", descripcion="Looking forward with trust", db=db).create()
