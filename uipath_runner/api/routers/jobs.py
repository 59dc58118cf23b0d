"""Job execution router: start one process and wait for its outcome."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from uipath_runner.adapters import OrchestratorApiError
from uipath_runner.domain import domain_decode_process_token
from uipath_runner.jobs import JobRunnerPort

from .errors import api_build_bad_request_response, api_build_error_response


class JobRunRequest(BaseModel):
    """Request body for one job run.

    Attributes:
        folder_id: Selected folder id.
        process: Opaque process token from `/options/processes`.
        input_arguments: Optional arguments object or its JSON text.
    """

    folder_id: int | str
    process: str = Field(min_length=1)
    input_arguments: dict[str, Any] | str | None = None


def api_create_jobs_router(job_runner: JobRunnerPort) -> APIRouter:
    """Create router exposing job execution.

    Args:
        job_runner: Job orchestrator used for start-and-await.

    Returns:
        APIRouter: Router exposing `/jobs/run`.

    Raises:
        ValueError: Raised when job_runner is invalid.
    """

    if job_runner is None:
        raise ValueError("job_runner must not be None")

    router = APIRouter(prefix="/jobs", tags=["jobs"])

    @router.post("/run")
    def api_jobs_run(request: JobRunRequest) -> JSONResponse:
        """Start one job and block until it is Successful, Faulted, or timed out.

        Args:
            request: Folder, process token and optional arguments.

        Returns:
            JSONResponse: Job id, final state and output arguments.

        Raises:
            RuntimeError: Raised when execution fails unexpectedly.
        """

        try:
            process_reference = domain_decode_process_token(request.process)
            execution_result = job_runner.job_execute(
                process_reference=process_reference,
                folder_id=request.folder_id,
                input_arguments=request.input_arguments,
            )
        except OrchestratorApiError as error:
            return api_build_error_response(error)
        except ValueError as error:
            return api_build_bad_request_response(str(error))

        payload = {
            "job_id": execution_result.job_id,
            "state": execution_result.state.value,
            "output_arguments": execution_result.output_arguments,
            "poll_attempts": execution_result.poll_attempts,
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
