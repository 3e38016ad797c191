"""Pytest configuration and fixtures."""

import json

import pytest
from fastapi.testclient import TestClient

from src.config import get_settings
from src.core.books.store import reset_book_store
from src.main import app


@pytest.fixture
def seed_books():
    """Books written to the seed file before startup."""
    return [
        {"id": 1, "title": "Dune", "author": "Frank Herbert"},
        {"id": 2, "title": "Kindred", "author": "Octavia E. Butler"},
        {"id": 3, "title": "Solaris", "author": "Stanislaw Lem"},
    ]


@pytest.fixture
def db_file(tmp_path, seed_books):
    """Temporary seed file."""
    path = tmp_path / "db.json"
    path.write_text(json.dumps({"books": seed_books}), encoding="utf-8")
    return path


@pytest.fixture
def settings_env(monkeypatch, db_file):
    """Point the settings at the temporary seed file."""
    monkeypatch.setenv("DB_PATH", str(db_file))
    get_settings.cache_clear()
    reset_book_store()
    yield
    get_settings.cache_clear()
    reset_book_store()


@pytest.fixture
def client(settings_env):
    """Create a test client for the FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client
