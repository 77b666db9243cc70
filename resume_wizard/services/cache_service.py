"""Job cache: scraped job postings memoized by URL with an expiry timestamp."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any, Dict, Optional

from resume_wizard import database
from resume_wizard.utils.clock import utcnow

_LOGGER = logging.getLogger(__name__)

DEFAULT_CACHE_TTL_HOURS = 24


def _job_cache():
    return database.get_collection(database.JOB_CACHE)


def get_cached_job(url: str) -> Optional[Dict[str, Any]]:
    """Return the cache entry for ``url`` if it has not expired yet."""
    return _job_cache().find_one({"url": url, "expires_at": {"$gt": utcnow()}})


def cache_job(url: str, parsed_content: Any, ttl_hours: float = DEFAULT_CACHE_TTL_HOURS) -> None:
    """
    Store (or refresh) the scraped content for a URL.

    Args:
        url: The job posting URL used as the cache key
        parsed_content: The JSON payload returned by the scrape workflow
        ttl_hours: Hours until the entry stops being served
    """
    current_time = utcnow()
    _job_cache().update_one(
        {"url": url},
        {
            "$set": {
                "parsed_content": parsed_content,
                "expires_at": current_time + timedelta(hours=ttl_hours),
            },
            "$setOnInsert": {"url": url, "created_at": current_time},
        },
        upsert=True,
    )
    _LOGGER.debug("Cached scraped job for %s (ttl=%sh)", url, ttl_hours)


def count_entries(include_expired: bool = True) -> int:
    """Return how many cache entries exist."""
    query: Dict[str, Any] = {} if include_expired else {"expires_at": {"$gt": utcnow()}}
    return _job_cache().count_documents(query)
