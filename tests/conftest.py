"""Shared pytest fixtures: in-memory MongoDB, Flask app and workflow stubs."""

from __future__ import annotations

import sys
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List, Optional

import mongomock
import pytest

# Ensure the application package is importable during tests.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_wizard import database  # noqa: E402
from resume_wizard.main import create_app  # noqa: E402
from resume_wizard.services import fixtures  # noqa: E402
from resume_wizard.services.workflow_service import (  # noqa: E402
    FixtureWorkflow,
    WorkflowError,
    WorkflowResult,
    Workflows,
)


@pytest.fixture(autouse=True)
def mongo_db(monkeypatch: pytest.MonkeyPatch):
    """Provide an isolated in-memory MongoDB database for each test."""
    test_db_name = "test_resume_wizard"
    monkeypatch.setenv("MONGODB_DATABASE", test_db_name)

    client = mongomock.MongoClient()
    db = client[test_db_name]

    monkeypatch.setattr(database, "get_mongo_client", lambda: client)
    monkeypatch.setattr(database, "get_database", lambda: db)

    yield db

    client.drop_database(test_db_name)


class RecordingWorkflow:
    """Live-looking workflow that records payloads instead of calling a webhook."""

    is_live = True

    def __init__(self, data: Any = None, fail: bool = False) -> None:
        self.data = data if data is not None else {}
        self.fail = fail
        self.calls: List[Dict[str, Any]] = []

    def run(self, payload: Dict[str, Any]) -> WorkflowResult:
        self.calls.append(payload)
        if self.fail:
            raise WorkflowError("webhook returned status 502")
        return WorkflowResult(data=self.data)


def fixture_workflows() -> Workflows:
    return Workflows(
        scrape=FixtureWorkflow("scrape", fixtures.MOCK_JOB_DESCRIPTION),
        analyze=FixtureWorkflow("analyze", fixtures.MOCK_ANALYSIS),
        optimize=FixtureWorkflow("optimize", fixtures.MOCK_OPTIMIZED_RESUME),
    )


TEST_CONFIG = {
    "TESTING": True,
    "N8N_SCRAPE_WEBHOOK_URL": "",
    "N8N_ANALYZE_WEBHOOK_URL": "",
    "N8N_OPTIMIZE_WEBHOOK_URL": "",
}


@pytest.fixture
def workflows() -> Workflows:
    return fixture_workflows()


@pytest.fixture
def app(workflows):
    return create_app(config=dict(TEST_CONFIG), workflows=workflows)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session_id(client) -> str:
    response = client.post("/api/session")
    assert response.status_code == 200
    return response.get_json()["session"]["id"]


class _TestResponse:
    def __init__(self, response) -> None:
        self._response = response
        self.status_code = response.status_code
        self.ok = response.status_code < 400

    def json(self):
        data = self._response.get_json(silent=True)
        if data is None:
            raise ValueError("response body is not JSON")
        return data


class FlaskTransport:
    """``requests.Session``-shaped adapter that sends calls to a Flask test client."""

    def __init__(self, test_client) -> None:
        self.test_client = test_client

    def request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
        files: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> _TestResponse:
        kwargs: Dict[str, Any] = {}
        if params:
            kwargs["query_string"] = params
        if json is not None:
            kwargs["json"] = json
        if files:
            form: Dict[str, Any] = dict(data or {})
            for field, (name, content, mime_type) in files.items():
                form[field] = (BytesIO(content), name, mime_type)
            kwargs["data"] = form
            kwargs["content_type"] = "multipart/form-data"
        return _TestResponse(self.test_client.open(url, method=method, **kwargs))
