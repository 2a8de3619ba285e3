import os
import sys
import uuid
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

REPO_ROOT = Path(__file__).resolve().parents[2]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

DEFAULT_SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL") or DEFAULT_SQLALCHEMY_DATABASE_URL

# Ensure the application itself uses the test database instead of the production default.
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL

from CondoManager.main import app
from CondoManager.database import Base, get_db
from CondoManager.models import User
from CondoManager.utils import hash_password


def _create_engine(url: str):
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)


engine = _create_engine(SQLALCHEMY_DATABASE_URL)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Points at a directory that does not exist, so every connection attempt fails
unreachable_engine = create_engine("sqlite:////nonexistent-condo-dir/unreachable.db")
UnreachableSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=unreachable_engine)

try:
    with engine.begin() as connection:
        Base.metadata.drop_all(bind=connection)
        Base.metadata.create_all(bind=connection)
except OperationalError as exc:
    raise RuntimeError(
        "Unable to initialize the database schema for tests. "
        "Set TEST_DATABASE_URL to a reachable database URL or ensure SQLite is available."
    ) from exc


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def unreachable_get_db():
    db = UnreachableSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


# Letters only, so generated names never collide with years, months or weekdays
_NAME_LETTERS = str.maketrans("0123456789abcdef", "ghijklmnopqrstuv")


def unique(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8].translate(_NAME_LETTERS)}"


def create_user(db, username: str, password: str = "correct horse", email: str = None) -> User:
    user = User(username=username, password_hash=hash_password(password), email=email)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def login(client: TestClient, username: str, password: str = "correct horse"):
    return client.post(
        "/login",
        data={"username": username, "password": password},
        follow_redirects=False,
    )


@pytest.fixture(scope="module")
def test_client():
    with TestClient(app) as client:
        yield client


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user(db):
    return create_user(db, unique("owner"), email="owner@example.com")


@pytest.fixture
def auth_client(user):
    """A client whose session is logged in as `user`."""
    with TestClient(app) as client:
        response = login(client, user.username)
        assert response.status_code == 302, response.text
        yield client


@pytest.fixture
def store_unreachable():
    """Route every request's database session to a store that cannot be reached."""
    app.dependency_overrides[get_db] = unreachable_get_db
    try:
        yield
    finally:
        app.dependency_overrides[get_db] = override_get_db
