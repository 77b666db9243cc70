"""Tests for webhook and fixture workflow providers."""

from __future__ import annotations

import pytest
import requests

from resume_wizard.services import fixtures, workflow_service
from resume_wizard.services.workflow_service import (
    FixtureWorkflow,
    WebhookWorkflow,
    WorkflowError,
    build_workflows,
)


class _FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self.ok = status_code < 400
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


def test_build_workflows_selects_fixture_when_unconfigured():
    workflows = build_workflows({"N8N_SCRAPE_WEBHOOK_URL": "https://hooks.example.com/scrape"})

    assert isinstance(workflows.scrape, WebhookWorkflow)
    assert workflows.scrape.url == "https://hooks.example.com/scrape"
    assert isinstance(workflows.analyze, FixtureWorkflow)
    assert isinstance(workflows.optimize, FixtureWorkflow)


def test_fixture_workflow_returns_independent_copies():
    workflow = FixtureWorkflow("analyze", fixtures.MOCK_ANALYSIS)

    first = workflow.run({})
    first.data["questions"].clear()
    second = workflow.run({})

    assert first.mock is True
    assert len(second.data["questions"]) == 3


def test_webhook_posts_payload(monkeypatch):
    captured = {}

    def fake_post(url, json=None, headers=None, timeout=None):
        captured.update(url=url, json=json, timeout=timeout)
        return _FakeResponse(payload={"title": "Engineer"})

    monkeypatch.setattr(workflow_service.requests, "post", fake_post)
    workflow = WebhookWorkflow("scrape", "https://hooks.example.com/scrape", timeout=5)

    result = workflow.run({"url": "https://jobs.example.com/1"})

    assert result.data == {"title": "Engineer"}
    assert result.mock is False
    assert captured == {
        "url": "https://hooks.example.com/scrape",
        "json": {"url": "https://jobs.example.com/1"},
        "timeout": 5,
    }


def test_webhook_non_2xx_raises(monkeypatch):
    monkeypatch.setattr(
        workflow_service.requests, "post", lambda *args, **kwargs: _FakeResponse(status_code=502, text="bad")
    )

    with pytest.raises(WorkflowError):
        WebhookWorkflow("analyze", "https://hooks.example.com/analyze").run({})


def test_webhook_invalid_json_raises(monkeypatch):
    monkeypatch.setattr(workflow_service.requests, "post", lambda *args, **kwargs: _FakeResponse(payload=None))

    with pytest.raises(WorkflowError):
        WebhookWorkflow("analyze", "https://hooks.example.com/analyze").run({})


def test_webhook_connection_error_raises(monkeypatch):
    def boom(*args, **kwargs):
        raise requests.exceptions.ConnectionError("refused")

    monkeypatch.setattr(workflow_service.requests, "post", boom)

    with pytest.raises(WorkflowError):
        WebhookWorkflow("optimize", "https://hooks.example.com/optimize").run({})
