"""MongoDB connection management and collection helpers."""

from __future__ import annotations

import logging
import os
from typing import Optional

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

_LOGGER = logging.getLogger(__name__)

SESSIONS = "sessions"
JOB_CACHE = "job_cache"
RESUME_FILES = "resume_files"
OPTIMIZATIONS = "optimizations"

ALL_COLLECTIONS = (SESSIONS, JOB_CACHE, RESUME_FILES, OPTIMIZATIONS)

# Global MongoDB client instance
_client: Optional[MongoClient] = None
_database: Optional[Database] = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client instance."""
    global _client
    if _client is None:
        mongo_uri = os.getenv("MONGODB_URI", "mongodb://localhost:27017/")
        _client = MongoClient(mongo_uri)
    return _client


def get_database() -> Database:
    """Get the MongoDB database instance."""
    global _database
    if _database is None:
        client = get_mongo_client()
        db_name = os.getenv("MONGODB_DATABASE", "resume_wizard")
        _database = client[db_name]
    return _database


def get_collection(name: str) -> Collection:
    """Return one of the wizard collections from the active database."""
    return get_database()[name]


def close_mongo_connection():
    """Close the MongoDB connection."""
    global _client, _database
    if _client is not None:
        _client.close()
        _client = None
        _database = None


def create_indexes() -> None:
    """Create the indexes the wizard relies on for lookups and cache expiry."""
    db = get_database()

    db[JOB_CACHE].create_index([("url", ASCENDING)], unique=True)
    # Expired cache entries are dropped by MongoDB once expires_at passes.
    db[JOB_CACHE].create_index("expires_at", expireAfterSeconds=0)

    db[RESUME_FILES].create_index([("path", ASCENDING)], unique=True)
    db[RESUME_FILES].create_index([("session_id", ASCENDING), ("uploaded_at", ASCENDING)])

    db[OPTIMIZATIONS].create_index([("session_id", ASCENDING)])
    _LOGGER.debug("Indexes ensured for %s", ", ".join(ALL_COLLECTIONS))
