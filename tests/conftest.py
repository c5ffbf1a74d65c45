"""Shared pytest fixtures."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from corslab import create_app  # noqa: E402


@pytest.fixture(scope="session")
def app() -> Iterator:
    """Session-wide Flask application using the testing configuration."""

    flask_app = create_app("testing")
    yield flask_app


@pytest.fixture()
def client(app):
    """Provide a Flask test client."""

    with app.test_client() as client:
        yield client


@pytest.fixture()
def cli_runner(app):
    """Provide a runner for the app's Flask CLI commands."""

    return app.test_cli_runner()
