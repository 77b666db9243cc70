"""Service layer modules for the Resume Wizard API."""

from . import cache_service, fixtures, optimization_service, session_service, upload_service, workflow_service

__all__ = [
    "cache_service",
    "fixtures",
    "optimization_service",
    "session_service",
    "upload_service",
    "workflow_service",
]
