import os

# Settings are read once at import time, so the test environment must be
# in place before anything from `app` is imported.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///./meetingflow_test.db")
os.environ.setdefault("AGENT_API_KEY", "test-agent-key")
os.environ.setdefault("PRO_USERS", "pro@acme.com")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.main import create_app  # noqa: E402

AGENT_API_KEY = os.environ["AGENT_API_KEY"]


@pytest.fixture(scope="session")
def client() -> TestClient:
    """
    Shared TestClient fixture for all tests.

    Uses the application factory so startup (schema creation) runs
    exactly as in production.
    """
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def agent_headers() -> dict:
    return {"Authorization": f"Api-Key {AGENT_API_KEY}"}
