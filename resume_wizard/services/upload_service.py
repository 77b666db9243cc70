"""Blob storage for uploaded resume files, kept in MongoDB."""

from __future__ import annotations

import base64
import logging
from typing import Any, Dict, Optional

from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from resume_wizard import database
from resume_wizard.utils.clock import now_millis, utcnow

_LOGGER = logging.getLogger(__name__)


def _get_files_collection() -> Collection:
    """Get the MongoDB collection that holds uploaded file blobs."""
    return database.get_collection(database.RESUME_FILES)


def build_storage_path(session_id: str, filename: str, timestamp_ms: Optional[int] = None) -> str:
    """Return ``<sessionId>/<timestamp>.<ext>`` for a new upload."""
    extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
    return f"{session_id}/{timestamp_ms or now_millis()}.{extension}"


def save_file(
    path: str,
    session_id: str,
    name: str,
    mime_type: str,
    raw_bytes: bytes,
) -> bool:
    """
    Save an uploaded file under ``path``.

    Args:
        path: Storage path, unique per file
        session_id: The session that owns this file
        name: Original filename
        mime_type: MIME type of the file
        raw_bytes: File contents

    Returns:
        True if saved successfully, False otherwise
    """
    collection = _get_files_collection()

    try:
        collection.insert_one(
            {
                "path": path,
                "session_id": session_id,
                "name": name,
                "mime_type": mime_type,
                "size": len(raw_bytes),
                "contents": base64.b64encode(raw_bytes).decode("ascii"),
                "uploaded_at": utcnow(),
            }
        )
        return True
    except PyMongoError:
        _LOGGER.exception("Error saving upload %s to MongoDB", path)
        return False


def get_file(path: str) -> Optional[Dict[str, Any]]:
    """
    Retrieve a stored file with its decoded contents.

    Args:
        path: Storage path returned at upload time

    Returns:
        File document with ``data`` bytes, or None if not found
    """
    collection = _get_files_collection()

    try:
        record = collection.find_one({"path": path})
    except PyMongoError:
        _LOGGER.exception("Error retrieving upload %s from MongoDB", path)
        return None

    if not record:
        return None

    record.pop("_id", None)
    record["data"] = base64.b64decode(record["contents"])
    return record


def count_files() -> int:
    """Return the number of stored files."""
    return _get_files_collection().count_documents({})
