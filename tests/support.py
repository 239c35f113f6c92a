"""Shared helpers: an app wired to an in-memory SQLite database."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from worldapi.core.config import Settings
from worldapi.main import create_app
from worldapi.models import Base

TEST_SESSION_SECRET = "test-session-secret"


def make_settings(**overrides: object) -> Settings:
    """Settings for tests: SQLite in memory and cheap bcrypt rounds."""
    values: dict[str, object] = {
        "APP_ENV": "dev",
        "DATABASE_URL": "sqlite://",
        "SESSION_SECRET": TEST_SESSION_SECRET,
        "BCRYPT_ROUNDS": 4,
    }
    values.update(overrides)
    return Settings(**values)


def make_app(settings: Settings | None = None) -> FastAPI:
    app = create_app(settings or make_settings())
    Base.metadata.create_all(app.state.engine)
    return app


def signup_and_login(client: TestClient, username: str = "alice", password: str = "pw1") -> None:
    """Create a user and leave the session cookie in the client's jar."""
    assert client.post("/signup", json={"username": username, "password": password}).status_code == 201
    assert client.post("/login", json={"username": username, "password": password}).status_code == 200
