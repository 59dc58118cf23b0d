"""Cascading option resolution: folders, processes, entry points, default arguments."""

from __future__ import annotations

from typing import Any, Callable, Final, TypeVar

from uipath_runner.adapters import (
    OrchestratorApiError,
    OrchestratorClientPort,
    OrchestratorFetchError,
    OrchestratorMalformedResponseError,
    OrchestratorNotFoundError,
)
from uipath_runner.domain import (
    EntryPoint,
    EntryPointReference,
    Folder,
    OptionItem,
    ProcessReference,
    ProcessRelease,
    StageTimeline,
    domain_build_default_arguments,
)

from .interfaces import OptionResolutionPort

_ResultT = TypeVar("_ResultT")

STAGE_FOLDERS: Final[str] = "folders"
STAGE_PROCESSES: Final[str] = "processes"
STAGE_ENTRY_POINTS: Final[str] = "entry points"
STAGE_INPUT_ARGUMENTS: Final[str] = "input arguments"


class OptionResolutionPipeline(OptionResolutionPort):
    """Four read-only projections where each stage consumes the previous selection."""

    def __init__(
        self,
        client: OrchestratorClientPort,
        folder_page_size: int = 100,
        logger: Any | None = None,
    ):
        """Initialize resolution pipeline.

        Args:
            client: Orchestrator client for remote listings.
            folder_page_size: Page size for the first folder page.
            logger: Optional structured logger receiving stage events.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies or paging values are invalid.
        """

        if client is None:
            raise ValueError("client must not be None")
        if folder_page_size < 1:
            raise ValueError("folder_page_size must be >= 1")

        self._client = client
        self._folder_page_size = folder_page_size
        self._logger = logger

    def resolution_list_folders(self) -> list[OptionItem[int]]:
        """Return folder options from the first folder page.

        Returns:
            list[OptionItem[int]]: Options named by fully-qualified name, valued by folder id.

        Raises:
            OrchestratorFetchError: Raised on any client, transport, or projection failure.
        """

        folders = self._resolution_run_stage(
            stage=STAGE_FOLDERS,
            details={"take": self._folder_page_size},
            operation=lambda: [
                self._resolution_project_folder(entity)
                for entity in self._client.client_list_folders(skip=0, take=self._folder_page_size)
            ],
        )
        return [OptionItem(name=folder.display_name, value=folder.folder_id) for folder in folders]

    def resolution_list_processes(
        self,
        folder_id: int | str,
        process_key: str | None = None,
        top: int | None = None,
    ) -> list[OptionItem[ProcessReference]]:
        """Return process release options scoped to one folder.

        Args:
            folder_id: Selected folder id.
            process_key: Optional process key narrowing.
            top: Optional maximum number of releases.

        Returns:
            list[OptionItem[ProcessReference]]: Options valued by composite process reference.

        Raises:
            ValueError: Raised when folder id or `top` is invalid.
            OrchestratorFetchError: Raised on any client, transport, or projection failure.
        """

        normalized_folder_id = _resolution_normalize_folder_id(folder_id)

        def _list_releases() -> list[ProcessRelease]:
            releases = [
                self._resolution_project_release(entity, normalized_folder_id)
                for entity in self._client.client_list_releases(
                    folder_id=normalized_folder_id,
                    process_key=process_key,
                    top=top,
                )
            ]
            return [release for release in releases if release.folder_id == normalized_folder_id]

        releases = self._resolution_run_stage(
            stage=STAGE_PROCESSES,
            details={"folder_id": normalized_folder_id},
            operation=_list_releases,
        )
        return [OptionItem(name=release.display_name, value=release.reference) for release in releases]

    def resolution_list_entry_points(
        self,
        process_reference: ProcessReference,
        folder_id: int | str,
    ) -> list[OptionItem[EntryPointReference]]:
        """Return entry-point options for one exact `processKey:version` pair.

        Args:
            process_reference: Selected process reference.
            folder_id: Selected folder id.

        Returns:
            list[OptionItem[EntryPointReference]]: Options named by path, valued by entry-point reference.

        Raises:
            ValueError: Raised when folder id is invalid.
            OrchestratorFetchError: Raised on any client, transport, or projection failure.
        """

        normalized_folder_id = _resolution_normalize_folder_id(folder_id)
        entry_points = self._resolution_run_stage(
            stage=STAGE_ENTRY_POINTS,
            details={"folder_id": normalized_folder_id, "package_key": process_reference.package_key},
            operation=lambda: self._resolution_fetch_entry_points(process_reference, normalized_folder_id),
        )
        return [OptionItem(name=entry_point.path, value=entry_point.reference) for entry_point in entry_points]

    def resolution_resolve_default_arguments(
        self,
        process_reference: ProcessReference,
        folder_id: int | str,
        entry_point_reference: EntryPointReference,
    ) -> dict[str, Any]:
        """Resolve default input arguments for the selected entry point.

        The entry-point listing is re-fetched and the schema is taken from the
        server copy, not from the reference.

        Args:
            process_reference: Selected process reference.
            folder_id: Selected folder id.
            entry_point_reference: Selected entry-point reference.

        Returns:
            dict[str, Any]: Schema properties that declare a default, mapped to that default.

        Raises:
            ValueError: Raised when folder id is invalid.
            OrchestratorFetchError: Raised on any client, transport, or projection failure.
            OrchestratorNotFoundError: Raised when the entry point is absent from the listing.
            OrchestratorMalformedResponseError: Raised when the entry-point schema is not a JSON object.
        """

        normalized_folder_id = _resolution_normalize_folder_id(folder_id)
        timeline = StageTimeline(logger=self._logger)
        stage_details = {
            "folder_id": normalized_folder_id,
            "package_key": process_reference.package_key,
            "entry_point_id": entry_point_reference.unique_id,
        }
        entry_points = self._resolution_run_stage(
            stage=STAGE_INPUT_ARGUMENTS,
            details=stage_details,
            operation=lambda: self._resolution_fetch_entry_points(process_reference, normalized_folder_id),
            timeline=timeline,
        )

        matching_entry_point = next(
            (
                entry_point
                for entry_point in entry_points
                if entry_point.reference.unique_id == entry_point_reference.unique_id
            ),
            None,
        )
        if matching_entry_point is None:
            timeline.timeline_record(stage=STAGE_INPUT_ARGUMENTS, status="failed", details={"reason": "not_found"})
            raise OrchestratorNotFoundError("entry point not found")

        try:
            default_arguments = domain_build_default_arguments(matching_entry_point.reference.input_arguments_schema)
        except ValueError as error:
            timeline.timeline_record(
                stage=STAGE_INPUT_ARGUMENTS,
                status="failed",
                details={"reason": "malformed_schema"},
            )
            raise OrchestratorMalformedResponseError(cause=error) from error

        timeline.timeline_record(
            stage=STAGE_INPUT_ARGUMENTS,
            status="resolved",
            details={"argument_names": sorted(default_arguments)},
        )
        return default_arguments

    def _resolution_fetch_entry_points(self, process_reference: ProcessReference, folder_id: int) -> list[EntryPoint]:
        entry_points: list[EntryPoint] = []
        for entity in self._client.client_list_entry_points(
            process_key=process_reference.process_key,
            process_version=process_reference.process_version,
            folder_id=folder_id,
        ):
            if not _resolution_entity_matches_package(entity, process_reference):
                continue
            entry_points.append(self._resolution_project_entry_point(entity))
        return entry_points

    def _resolution_run_stage(
        self,
        stage: str,
        details: dict[str, Any],
        operation: Callable[[], _ResultT],
        timeline: StageTimeline | None = None,
    ) -> _ResultT:
        """Run one remote stage with stage events and fetch-failure wrapping.

        Args:
            stage: Stage name used in events and error messages.
            details: Structured event details.
            operation: Remote call and projection to execute.
            timeline: Optional existing timeline; a fresh one is used otherwise.

        Returns:
            _ResultT: Operation result.

        Raises:
            OrchestratorFetchError: Raised when the operation raises any Orchestrator error.
        """

        stage_timeline = timeline or StageTimeline(logger=self._logger)
        stage_timeline.timeline_record(stage=stage, status="started", details=details)
        try:
            result = operation()
        except OrchestratorApiError as error:
            stage_timeline.timeline_record(
                stage=stage,
                status="failed",
                details={"error_code": error.error_code},
            )
            raise OrchestratorFetchError(stage=stage, cause=error) from error

        result_count = len(result) if isinstance(result, list) else None
        stage_timeline.timeline_record(stage=stage, status="completed", details={"result_count": result_count})
        return result

    def _resolution_project_folder(self, entity: dict[str, Any]) -> Folder:
        try:
            return Folder(folder_id=int(entity["Id"]), display_name=str(entity["FullyQualifiedName"]))
        except (KeyError, TypeError, ValueError) as error:
            raise OrchestratorMalformedResponseError(cause=error) from error

    def _resolution_project_release(self, entity: dict[str, Any], requested_folder_id: int) -> ProcessRelease:
        """Project one release entity into a typed process release.

        Args:
            entity: Raw release entity.
            requested_folder_id: Folder id used when the entity omits `OrganizationUnitId`.

        Returns:
            ProcessRelease: Typed release with composite reference.

        Raises:
            OrchestratorMalformedResponseError: Raised when required keys are missing or invalid.
        """

        try:
            reference = ProcessReference(
                release_key=_resolution_require_string(entity, "Key"),
                process_key=_resolution_require_string(entity, "ProcessKey"),
                process_version=_resolution_require_string(entity, "ProcessVersion"),
            )
            raw_folder_id = entity.get("OrganizationUnitId")
            folder_id = requested_folder_id if raw_folder_id is None else int(raw_folder_id)
            display_name = str(entity.get("Name") or reference.process_key)
        except (KeyError, TypeError, ValueError) as error:
            raise OrchestratorMalformedResponseError(cause=error) from error
        return ProcessRelease(reference=reference, display_name=display_name, folder_id=folder_id)

    def _resolution_project_entry_point(self, entity: dict[str, Any]) -> EntryPoint:
        try:
            unique_id = _resolution_require_string(entity, "UniqueId")
            path = str(entity.get("Path") or unique_id)
        except (KeyError, TypeError, ValueError) as error:
            raise OrchestratorMalformedResponseError(cause=error) from error

        input_arguments_schema = entity.get("InputArguments", entity.get("inputArguments"))
        if input_arguments_schema is not None and not isinstance(input_arguments_schema, str):
            raise OrchestratorMalformedResponseError()
        return EntryPoint(
            reference=EntryPointReference(unique_id=unique_id, input_arguments_schema=input_arguments_schema),
            path=path,
        )


def _resolution_normalize_folder_id(folder_id: int | str) -> int:
    """Parse a folder selection into an integer id.

    Args:
        folder_id: Folder id from the previous stage or an external edge.

    Returns:
        int: Folder id.

    Raises:
        ValueError: Raised when the folder id is blank or not an integer.
    """

    if isinstance(folder_id, bool):
        raise ValueError("folder_id must be an integer")
    try:
        return int(str(folder_id).strip())
    except ValueError as error:
        raise ValueError(f"folder_id must be an integer, got {folder_id!r}") from error


def _resolution_require_string(entity: dict[str, Any], key: str) -> str:
    value = entity[key]
    if value is None or not str(value).strip():
        raise ValueError(f"{key} must not be blank")
    return str(value).strip()


def _resolution_entity_matches_package(entity: dict[str, Any], process_reference: ProcessReference) -> bool:
    # Only fields the server actually returns take part in the comparison.
    entity_process_key = entity.get("ProcessKey")
    entity_version = entity.get("ProcessVersion")
    if entity_process_key is not None and str(entity_process_key) != process_reference.process_key:
        return False
    if entity_version is not None and str(entity_version) != process_reference.process_version:
        return False
    return True
