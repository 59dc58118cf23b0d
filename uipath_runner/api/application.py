"""FastAPI application factory for the job runner service.

This module composes the health, option lookup and job execution routers.
"""

from fastapi import FastAPI

from uipath_runner.config import AppSettings
from uipath_runner.jobs import JobRunnerPort, OptionResolutionPort

from .routers import (
    OrchestratorHealthPort,
    api_create_health_router,
    api_create_jobs_router,
    api_create_options_router,
)


def create_api_application(
    settings: AppSettings,
    health_service: OrchestratorHealthPort,
    resolution_pipeline: OptionResolutionPort,
    job_runner: JobRunnerPort,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        health_service: Orchestrator connectivity health service.
        resolution_pipeline: Cascading option resolution pipeline.
        job_runner: Job orchestrator for start-and-await execution.

    Returns:
        FastAPI: Framework application instance.

    Raises:
        RuntimeError: Raised if application initialization fails.
    """
    application = FastAPI(title="UiPath Job Runner")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return service metadata.

        Returns:
            dict[str, str]: Service name, status, environment and tenant.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        return {
            "service": "uipath-job-runner",
            "status": "ready",
            "environment": settings.environment_name,
            "tenant": f"{settings.uipath_organization}/{settings.uipath_tenant}",
        }

    application.include_router(api_create_health_router(health_service=health_service))
    application.include_router(api_create_options_router(resolution_pipeline=resolution_pipeline))
    application.include_router(api_create_jobs_router(job_runner=job_runner))

    return application
