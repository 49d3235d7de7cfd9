import os

import pytest
from fastapi.testclient import TestClient

# csrfguard.main builds its module-level app from the environment on import.
os.environ.setdefault("SECRET_KEY", "test-session-secret-key-0123456789abcdef")
os.environ.setdefault("CSRF_SECRET", "test-csrf-secret")
os.environ.setdefault("SESSION_COOKIE_SECURE", "false")

from csrfguard.core.config import Settings  # noqa: E402
from csrfguard.main import create_app  # noqa: E402


@pytest.fixture
def settings():
    return Settings(
        secret_key="test-session-secret-key-0123456789abcdef",
        csrf_secret="test-csrf-secret",
        session_cookie_secure=False,
        log_level="WARNING",
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client
