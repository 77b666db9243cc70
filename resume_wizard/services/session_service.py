"""Service for creating, reading and updating wizard sessions in MongoDB."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict, Iterable, List, Optional

from pymongo import ReturnDocument

from resume_wizard import database
from resume_wizard.utils.clock import generate_session_id, isoformat_dates, utcnow

DEFAULT_SESSION_TTL_DAYS = 7

FIRST_STEP = 1
LAST_STEP = 5

# Session fields a client is allowed to change through PATCH /api/session.
UPDATABLE_FIELDS = frozenset(
    {
        "job_description",
        "resume_data",
        "analysis_data",
        "optimized_resume",
        "current_step",
        "answers",
    }
)


def _sessions():
    return database.get_collection(database.SESSIONS)


def serialize_session(document: Dict[str, Any]) -> Dict[str, Any]:
    """Return a JSON-friendly copy of a session document."""
    payload = dict(document)
    payload["id"] = str(payload.pop("_id"))
    return isoformat_dates(payload)


def unknown_fields(fields: Iterable[str]) -> List[str]:
    """Return the provided field names that sessions do not accept."""
    return sorted(name for name in fields if name not in UPDATABLE_FIELDS)


def is_valid_step(value: Any) -> bool:
    """True for an integer wizard step from 1 to 5 (booleans excluded)."""
    return isinstance(value, int) and not isinstance(value, bool) and FIRST_STEP <= value <= LAST_STEP


def create_session(ttl_days: int = DEFAULT_SESSION_TTL_DAYS) -> Dict[str, Any]:
    """
    Insert a fresh session record.

    Args:
        ttl_days: Days until the declarative ``expires_at`` timestamp

    Returns:
        The stored session document
    """
    current_time = utcnow()
    document = {
        "_id": generate_session_id(),
        "user_id": None,
        "job_description": None,
        "resume_data": None,
        "analysis_data": None,
        "optimized_resume": None,
        "current_step": 1,
        "answers": {},
        "created_at": current_time,
        "updated_at": current_time,
        "expires_at": current_time + timedelta(days=ttl_days),
    }
    _sessions().insert_one(document)
    return document


def get_session(session_id: str) -> Optional[Dict[str, Any]]:
    """Return the session document, or None when it does not exist."""
    if not session_id:
        return None
    return _sessions().find_one({"_id": session_id})


def update_session(session_id: str, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Merge top-level fields into a session.

    Args:
        session_id: The session identifier
        updates: Field values to set; only ``UPDATABLE_FIELDS`` are accepted

    Returns:
        The updated document, or None when the session does not exist

    Raises:
        ValueError: If ``updates`` names a field sessions do not accept
    """
    rejected = unknown_fields(updates)
    if rejected:
        raise ValueError(f"Unknown session field(s): {', '.join(rejected)}")

    changes = dict(updates)
    changes["updated_at"] = utcnow()

    return _sessions().find_one_and_update(
        {"_id": session_id},
        {"$set": changes},
        return_document=ReturnDocument.AFTER,
    )


def count_sessions() -> int:
    """Return the number of stored sessions."""
    return _sessions().count_documents({})
