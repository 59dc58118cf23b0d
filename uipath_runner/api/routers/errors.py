"""Shared mapping from Orchestrator failures to HTTP error responses."""

from fastapi import status
from fastapi.responses import JSONResponse

from uipath_runner.adapters import (
    OrchestratorApiError,
    OrchestratorJobFaultedError,
    OrchestratorJobStatusError,
    OrchestratorJobTimedOutError,
    OrchestratorNotFoundError,
)


def api_build_error_response(error: OrchestratorApiError) -> JSONResponse:
    """Render one Orchestrator failure as a deterministic error payload.

    Args:
        error: Typed Orchestrator failure.

    Returns:
        JSONResponse: Error payload with code and message.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    payload: dict[str, object] = {
        "status": "error",
        "code": error.error_code,
        "message": str(error),
    }
    if isinstance(error, OrchestratorNotFoundError):
        return JSONResponse(content=payload, status_code=status.HTTP_404_NOT_FOUND)
    if isinstance(error, OrchestratorJobFaultedError):
        payload["job_id"] = error.job_id
        payload["job_info"] = error.job_info
        return JSONResponse(content=payload, status_code=status.HTTP_422_UNPROCESSABLE_ENTITY)
    if isinstance(error, OrchestratorJobTimedOutError):
        payload["job_id"] = error.job_id
        payload["attempts"] = error.attempts
        return JSONResponse(content=payload, status_code=status.HTTP_504_GATEWAY_TIMEOUT)
    if isinstance(error, OrchestratorJobStatusError):
        payload["job_id"] = error.job_id
    return JSONResponse(content=payload, status_code=status.HTTP_502_BAD_GATEWAY)


def api_build_bad_request_response(message: str) -> JSONResponse:
    """Render an invalid caller input as a 400 error payload."""

    payload = {"status": "error", "code": "INVALID_REQUEST", "message": message}
    return JSONResponse(content=payload, status_code=status.HTTP_400_BAD_REQUEST)
