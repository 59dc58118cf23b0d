"""Typed interfaces for job-layer orchestration responsibilities."""

from dataclasses import dataclass, field
from typing import Any, Protocol

from uipath_runner.adapters.job_states import JobState
from uipath_runner.domain import EntryPointReference, OptionItem, ProcessReference


@dataclass(frozen=True)
class JobSnapshot:
    """One client-side observation of a remote job.

    Attributes:
        job_id: Server job id.
        state: Parsed job state.
        output_arguments: Output arguments, populated only for Successful jobs.
        info: Server-provided status message.
    """

    job_id: int
    state: JobState
    output_arguments: dict[str, Any] = field(default_factory=dict)
    info: str | None = None


@dataclass(frozen=True)
class JobExecutionResult:
    """Result contract for one job run driven to a terminal state.

    Attributes:
        job_id: Server job id.
        state: Final observed job state.
        output_arguments: Job output arguments.
        poll_attempts: Number of status checks performed.
        stage_timeline: Structured stage events captured during the run.
    """

    job_id: int
    state: JobState
    output_arguments: dict[str, Any]
    poll_attempts: int
    stage_timeline: list[dict[str, object]] = field(default_factory=list)


class OptionResolutionPort(Protocol):
    """Port definition for the cascading folder/process/entry-point lookups."""

    def resolution_list_folders(self) -> list[OptionItem[int]]:
        """Return folder options."""

    def resolution_list_processes(
        self,
        folder_id: int | str,
        process_key: str | None = None,
        top: int | None = None,
    ) -> list[OptionItem[ProcessReference]]:
        """Return process options scoped to one folder."""

    def resolution_list_entry_points(
        self,
        process_reference: ProcessReference,
        folder_id: int | str,
    ) -> list[OptionItem[EntryPointReference]]:
        """Return entry-point options scoped to one process release."""

    def resolution_resolve_default_arguments(
        self,
        process_reference: ProcessReference,
        folder_id: int | str,
        entry_point_reference: EntryPointReference,
    ) -> dict[str, Any]:
        """Return default input arguments for one entry point."""


class JobRunnerPort(Protocol):
    """Port definition for starting one job and awaiting its terminal state."""

    def job_start_and_await(self, folder_id: int | str, start_request_body: dict[str, Any]) -> dict[str, Any]:
        """Start one job and return its output arguments.

        Args:
            folder_id: Folder id scoping the job.
            start_request_body: `{"startInfo": {...}}` request body.

        Returns:
            dict[str, Any]: Output arguments of the Successful job.

        Raises:
            RuntimeError: Raised when the job cannot be started or faults.
            TimeoutError: Raised when the job does not finish in time.
        """

    def job_execute(
        self,
        process_reference: ProcessReference,
        folder_id: int | str,
        input_arguments: dict[str, Any] | str | None = None,
    ) -> JobExecutionResult:
        """Start one release with optional arguments and await its terminal state."""
