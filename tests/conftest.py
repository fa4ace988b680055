"""Shared pytest fixtures for the feedback API test suite."""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from feedback_backend.db.session import build_engine, init_schema
from feedback_backend.main import create_app


@pytest.fixture
def engine():
    """Fresh in-memory SQLite database with all tables created."""
    engine = build_engine("sqlite://")
    init_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def app(engine):
    return create_app(engine)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(app):
    """Session on the application's own engine, for direct assertions."""
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def feedback_payload() -> dict[str, Any]:
    return {
        "title": "Login Issue",
        "platform": "Web",
        "module": "Authentication",
        "description": "Users cannot log in after the last release",
        "attachments": "screenshot.png, console_log.txt",
        "tags": "bug, critical",
    }
