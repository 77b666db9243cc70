"""Service recording completed resume optimizations."""

from __future__ import annotations

from typing import Any, Dict, Optional

from resume_wizard import database
from resume_wizard.utils.clock import utcnow


def _optimizations():
    return database.get_collection(database.OPTIMIZATIONS)


def _lookup(payload: Any, *keys: str) -> Optional[Any]:
    """Return the first present key of a JSON object, tolerating non-dict payloads."""
    if not isinstance(payload, dict):
        return None
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return None


def record_optimization(session: Dict[str, Any], optimized_resume: Any) -> str:
    """
    Persist a snapshot of a session's inputs next to the optimized resume.

    Args:
        session: The session document the optimization was produced for
        optimized_resume: The optimized resume payload

    Returns:
        The MongoDB document ID as a string
    """
    job_description = session.get("job_description")
    analysis = session.get("analysis_data")

    document = {
        "session_id": str(session["_id"]),
        "user_id": session.get("user_id"),
        "job_description": job_description,
        "original_resume": session.get("resume_data"),
        "analysis": analysis,
        "optimized_resume": optimized_resume,
        "ats_score": _lookup(optimized_resume, "atsScore", "ats_score"),
        "job_title": _lookup(job_description, "title"),
        "company_name": _lookup(job_description, "company"),
        "job_url": _lookup(job_description, "url"),
        "created_at": utcnow(),
    }

    result = _optimizations().insert_one(document)
    return str(result.inserted_id)


def get_optimizations_for_session(session_id: str) -> list:
    """Return the optimization history for a session, newest first."""
    records = list(_optimizations().find({"session_id": session_id}).sort("created_at", -1))
    for record in records:
        record["_id"] = str(record["_id"])
        if "created_at" in record:
            record["created_at"] = record["created_at"].isoformat()
    return records


def count_optimizations() -> int:
    """Return the number of recorded optimizations."""
    return _optimizations().count_documents({})
