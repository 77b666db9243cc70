"""Time and identifier helpers shared by routes and services."""

from __future__ import annotations

import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict


def now_millis() -> int:
    """Return the current UNIX timestamp in milliseconds."""
    return int(time.time() * 1000)


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime, the form MongoDB hands back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def generate_session_id() -> str:
    """Return a new random session identifier."""
    return str(uuid.uuid4())


def isoformat_dates(document: Dict[str, Any]) -> Dict[str, Any]:
    """Convert top-level datetime values into ISO-8601 strings for JSON responses."""
    converted: Dict[str, Any] = {}
    for key, value in document.items():
        if isinstance(value, datetime):
            converted[key] = value.isoformat()
        else:
            converted[key] = value
    return converted
