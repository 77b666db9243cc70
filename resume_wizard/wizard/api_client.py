"""HTTP client for the Resume Wizard API used by the wizard's actions."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .state import ResumeFile

_LOGGER = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when the API answers with a non-2xx status or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class WizardApiClient:
    """Thin wrapper over the ``/api`` endpoints.

    ``http`` may be any object with a ``requests.Session``-compatible
    ``request`` method, which lets tests route calls to a Flask test client.
    """

    def __init__(self, base_url: str = "", http: Optional[Any] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.http = http or requests.Session()

    def _call(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self.http.request(method, url, **kwargs)
        except requests.exceptions.RequestException as exc:
            _LOGGER.error("Request to %s failed: %s", url, exc)
            raise ApiError("Unable to reach the server. Please try again.") from exc

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not response.ok:
            message = data.get("error") or f"Request failed with status {response.status_code}"
            raise ApiError(message, status_code=response.status_code)
        return data

    def create_session(self) -> str:
        data = self._call("POST", "/api/session")
        return data["session"]["id"]

    def get_session(self, session_id: str) -> Dict[str, Any]:
        data = self._call("GET", "/api/session", params={"id": session_id})
        return data["session"]

    def update_session(self, session_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        body = dict(updates)
        body["sessionId"] = session_id
        data = self._call("PATCH", "/api/session", json=body)
        return data["session"]

    def scrape_job(self, url: str, session_id: str) -> Dict[str, Any]:
        data = self._call("POST", "/api/scrape", json={"url": url, "sessionId": session_id})
        return data["data"]

    def upload_resume(self, file: ResumeFile, session_id: str) -> Dict[str, Any]:
        return self._call(
            "POST",
            "/api/upload",
            files={"file": (file.name, file.content, file.mime_type)},
            data={"sessionId": session_id},
        )

    def analyze(self, session_id: str) -> Dict[str, Any]:
        data = self._call("POST", "/api/analyze", json={"sessionId": session_id})
        return data["analysis"]

    def optimize(self, session_id: str) -> Dict[str, Any]:
        data = self._call("POST", "/api/optimize", json={"sessionId": session_id})
        return data["optimizedResume"]
