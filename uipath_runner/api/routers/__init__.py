"""API router package for endpoint composition."""

from .health import OrchestratorHealthPort, api_create_health_router
from .jobs import JobRunRequest, api_create_jobs_router
from .options import api_create_options_router

__all__ = [
    "JobRunRequest",
    "OrchestratorHealthPort",
    "api_create_health_router",
    "api_create_jobs_router",
    "api_create_options_router",
]
