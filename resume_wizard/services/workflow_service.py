"""External workflow integrations (scrape, analyze, optimize).

Each integration is a strategy chosen once when the app starts: a live
webhook when its URL is configured, otherwise a fixture that returns a
static payload tagged as mock data.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import requests

from resume_wizard.services import fixtures

_LOGGER = logging.getLogger(__name__)


class WorkflowError(RuntimeError):
    """Raised when an external workflow call does not produce a usable result."""


@dataclass
class WorkflowResult:
    data: Any
    mock: bool = False


class WebhookWorkflow:
    """POST a JSON payload to a workflow webhook and return its JSON reply."""

    is_live = True

    def __init__(self, name: str, url: str, timeout: Optional[float] = None) -> None:
        self.name = name
        self.url = url
        self.timeout = timeout

    def run(self, payload: Dict[str, Any]) -> WorkflowResult:
        try:
            response = requests.post(
                self.url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            _LOGGER.error("Workflow %s request failed: %s", self.name, exc)
            raise WorkflowError(f"{self.name} workflow unreachable") from exc

        if not response.ok:
            _LOGGER.warning(
                "Workflow %s returned status %s: %s",
                self.name,
                response.status_code,
                response.text[:500],
            )
            raise WorkflowError(f"{self.name} workflow returned status {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            _LOGGER.error("Workflow %s returned a non-JSON body", self.name)
            raise WorkflowError(f"{self.name} workflow returned invalid JSON") from exc

        return WorkflowResult(data=data)


class FixtureWorkflow:
    """Stand-in used when no webhook is configured; always returns the same payload."""

    is_live = False

    def __init__(self, name: str, payload: Any) -> None:
        self.name = name
        self.payload = payload

    def run(self, payload: Dict[str, Any]) -> WorkflowResult:
        _LOGGER.debug("Workflow %s not configured, returning fixture data", self.name)
        return WorkflowResult(data=copy.deepcopy(self.payload), mock=True)


@dataclass
class Workflows:
    scrape: Any
    analyze: Any
    optimize: Any


def _select(name: str, url: Optional[str], fixture: Any, timeout: Optional[float]):
    if url:
        _LOGGER.info("Workflow %s uses webhook %s", name, url)
        return WebhookWorkflow(name, url, timeout=timeout)
    _LOGGER.info("Workflow %s has no webhook configured; serving fixture responses", name)
    return FixtureWorkflow(name, fixture)


def build_workflows(config: Mapping[str, Any]) -> Workflows:
    """Pick a live or fixture implementation for every workflow from app config."""
    timeout = config.get("WEBHOOK_TIMEOUT_SECONDS")
    return Workflows(
        scrape=_select("scrape", config.get("N8N_SCRAPE_WEBHOOK_URL"), fixtures.MOCK_JOB_DESCRIPTION, timeout),
        analyze=_select("analyze", config.get("N8N_ANALYZE_WEBHOOK_URL"), fixtures.MOCK_ANALYSIS, timeout),
        optimize=_select(
            "optimize", config.get("N8N_OPTIMIZE_WEBHOOK_URL"), fixtures.MOCK_OPTIMIZED_RESUME, timeout
        ),
    )


def current_workflows() -> Workflows:
    """Return the workflows selected for the running Flask app."""
    from flask import current_app

    return current_app.extensions["workflows"]
