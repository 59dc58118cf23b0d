"""Option lookup router backing cascading form fields.

Every selection travels as one scalar form value, so process and entry-point
references are exchanged as opaque tokens on this surface only.
"""

from __future__ import annotations

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from uipath_runner.adapters import OrchestratorApiError
from uipath_runner.domain import (
    domain_decode_entry_point_token,
    domain_decode_process_token,
    domain_encode_entry_point_token,
    domain_encode_process_token,
)
from uipath_runner.jobs import OptionResolutionPort

from .errors import api_build_bad_request_response, api_build_error_response


def api_create_options_router(resolution_pipeline: OptionResolutionPort) -> APIRouter:
    """Create router exposing folder, process, entry-point and argument lookups.

    Args:
        resolution_pipeline: Cascading option resolution pipeline.

    Returns:
        APIRouter: Router exposing `/options/*` endpoints.

    Raises:
        ValueError: Raised when resolution_pipeline is invalid.
    """

    if resolution_pipeline is None:
        raise ValueError("resolution_pipeline must not be None")

    router = APIRouter(prefix="/options", tags=["options"])

    @router.get("/folders")
    def api_options_folders() -> JSONResponse:
        """Return folder options valued by folder id."""

        try:
            folder_options = resolution_pipeline.resolution_list_folders()
        except OrchestratorApiError as error:
            return api_build_error_response(error)
        payload = [option.option_to_payload() for option in folder_options]
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/processes")
    def api_options_processes(
        folder_id: str = Query(...),
        process_key: str | None = Query(default=None),
        top: int | None = Query(default=None, ge=1),
    ) -> JSONResponse:
        """Return process options valued by opaque process tokens.

        Args:
            folder_id: Selected folder id.
            process_key: Optional process key narrowing.
            top: Optional maximum number of releases.

        Returns:
            JSONResponse: Option list payload.

        Raises:
            RuntimeError: Raised when resolution fails unexpectedly.
        """

        try:
            process_options = resolution_pipeline.resolution_list_processes(
                folder_id=folder_id,
                process_key=process_key,
                top=top,
            )
        except OrchestratorApiError as error:
            return api_build_error_response(error)
        except ValueError as error:
            return api_build_bad_request_response(str(error))
        payload = [
            option.option_to_payload(value=domain_encode_process_token(option.value)) for option in process_options
        ]
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/entry-points")
    def api_options_entry_points(
        folder_id: str = Query(...),
        process: str = Query(...),
    ) -> JSONResponse:
        """Return entry-point options valued by opaque entry-point tokens.

        Args:
            folder_id: Selected folder id.
            process: Opaque process token from `/options/processes`.

        Returns:
            JSONResponse: Option list payload.

        Raises:
            RuntimeError: Raised when resolution fails unexpectedly.
        """

        try:
            process_reference = domain_decode_process_token(process)
            entry_point_options = resolution_pipeline.resolution_list_entry_points(
                process_reference=process_reference,
                folder_id=folder_id,
            )
        except OrchestratorApiError as error:
            return api_build_error_response(error)
        except ValueError as error:
            return api_build_bad_request_response(str(error))
        payload = [
            option.option_to_payload(value=domain_encode_entry_point_token(option.value))
            for option in entry_point_options
        ]
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/input-arguments")
    def api_options_input_arguments(
        folder_id: str = Query(...),
        process: str = Query(...),
        entry_point: str = Query(...),
    ) -> JSONResponse:
        """Return default input arguments for the selected entry point.

        Args:
            folder_id: Selected folder id.
            process: Opaque process token.
            entry_point: Opaque entry-point token.

        Returns:
            JSONResponse: `{"input_arguments": {...}}` payload.

        Raises:
            RuntimeError: Raised when resolution fails unexpectedly.
        """

        try:
            process_reference = domain_decode_process_token(process)
            entry_point_reference = domain_decode_entry_point_token(entry_point)
            default_arguments = resolution_pipeline.resolution_resolve_default_arguments(
                process_reference=process_reference,
                folder_id=folder_id,
                entry_point_reference=entry_point_reference,
            )
        except OrchestratorApiError as error:
            return api_build_error_response(error)
        except ValueError as error:
            return api_build_bad_request_response(str(error))
        return JSONResponse(content={"input_arguments": default_arguments}, status_code=status.HTTP_200_OK)

    return router
