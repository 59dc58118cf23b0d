"""Liveness and Orchestrator reachability endpoint."""

from typing import Protocol

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from uipath_runner.domain import HealthStatus


class OrchestratorHealthPort(Protocol):
    """Port definition for orchestrator connectivity checks."""

    def health_connection_label(self) -> str:
        """Return a non-secret target label."""

    def health_check(self) -> HealthStatus:
        """Return health status or raise ConnectionError."""


def _api_health_payload(overall: str, orchestrator: str, detail: str, target: str) -> dict[str, str]:
    return {
        "status": overall,
        "app": "up",
        "orchestrator": orchestrator,
        "detail": detail,
        "target": target,
    }


def api_create_health_router(health_service: OrchestratorHealthPort) -> APIRouter:
    """Create router reporting whether the configured tenant answers a folder probe.

    Args:
        health_service: Orchestrator health service.

    Returns:
        APIRouter: Router exposing `/health`.

    Raises:
        ValueError: Raised when health_service is None.
    """

    if health_service is None:
        raise ValueError("health_service must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return 200 when the tenant is reachable and 503 with the failure reason otherwise."""

        target = health_service.health_connection_label()
        try:
            probe_result = health_service.health_check()
        except ConnectionError as error:
            return JSONResponse(
                content=_api_health_payload("degraded", "down", str(error), target),
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        return JSONResponse(
            content=_api_health_payload("ok", probe_result.status, probe_result.detail, target),
            status_code=status.HTTP_200_OK,
        )

    return router
