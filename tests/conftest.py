"""
Test fixtures for workout-logger-api.

The Notion API is replaced by an ``httpx.MockTransport`` so tests run
offline and can inspect every page-creation request.
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make src/ importable so tests can do `import workout_logger_api...`
for p in {ROOT, SRC}:
    p_str = str(p)
    if p_str not in sys.path:
        sys.path.insert(0, p_str)

from workout_logger_api.api.routes import get_notion_service
from workout_logger_api.main import app
from workout_logger_api.services.notion_service import NotionService


TEST_SECRET = "test-webhook-secret"
TEST_TOKEN = "secret_notion_token"
TEST_DB_LOG = "db-log-123"
TEST_DB_SETS = "db-sets-456"


# ---------------------------------------------------------------------------
# Fake Notion
# ---------------------------------------------------------------------------


class FakeNotion:
    """Records page-creation requests and answers with canned responses."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.payloads: List[Dict[str, Any]] = []
        # call index (0-based) -> (status, body text)
        self.failures: Dict[int, tuple] = {}
        self.raise_on: Optional[int] = None

    def fail_call(self, index: int, status: int = 400, text: str = '{"object":"error"}'):
        self.failures[index] = (status, text)

    def handler(self, request: httpx.Request) -> httpx.Response:
        index = len(self.requests)
        self.requests.append(request)
        self.payloads.append(json.loads(request.content))
        if self.raise_on == index:
            raise httpx.ConnectError("connection refused", request=request)
        if index in self.failures:
            status, text = self.failures[index]
            return httpx.Response(status, text=text)
        return httpx.Response(200, json={"object": "page", "id": f"page-{index + 1}"})

    def service(self) -> NotionService:
        return NotionService(
            token=TEST_TOKEN,
            base_url="https://api.notion.test/v1",
            notion_version="2022-06-28",
            transport=httpx.MockTransport(self.handler),
        )


@pytest.fixture
def fake_notion() -> FakeNotion:
    return FakeNotion()


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


ENV_VARS = (
    "NOTION_TOKEN",
    "NOTION_DATABASE_ID_LOG",
    "NOTION_DATABASE_ID_SETS",
    "NOTION_API_BASE_URL",
    "NOTION_VERSION",
    "NOTION_TIMEOUT_SECONDS",
    "WEBHOOK_SECRET",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test from an empty configuration."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def notion_env(monkeypatch):
    """Fully configured environment: token, both databases and a webhook secret."""
    monkeypatch.setenv("NOTION_TOKEN", TEST_TOKEN)
    monkeypatch.setenv("NOTION_DATABASE_ID_LOG", TEST_DB_LOG)
    monkeypatch.setenv("NOTION_DATABASE_ID_SETS", TEST_DB_SETS)
    monkeypatch.setenv("WEBHOOK_SECRET", TEST_SECRET)
    return monkeypatch


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"X-Webhook-Secret": TEST_SECRET}


# ---------------------------------------------------------------------------
# Test Client
# ---------------------------------------------------------------------------


@pytest.fixture
def client(fake_notion) -> Iterator[TestClient]:
    """FastAPI TestClient wired to the fake Notion API."""
    app.dependency_overrides[get_notion_service] = fake_notion.service
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Sample Data Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def strength_payload() -> Dict[str, Any]:
    return {
        "title": "Leg Day",
        "date": "2024-01-01",
        "type": "strength",
        "sets": [{"exercise": "Squat", "weight": 100, "reps": 5, "sets": 3}],
    }


@pytest.fixture
def run_payload() -> Dict[str, Any]:
    return {
        "title": "Morning Run",
        "date": "2024-01-02",
        "type": "Running 5k",
        "bodyPart": "legs",
        "run": {"distance_km": 5.2, "time_min": 28, "start_time": " morning "},
    }
