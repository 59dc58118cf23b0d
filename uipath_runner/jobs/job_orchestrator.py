"""Job submission and status polling until a terminal outcome."""

from __future__ import annotations

import json
import time
from typing import Any, Callable, Final

from uipath_runner.adapters import (
    JobState,
    OrchestratorApiError,
    OrchestratorClientPort,
    OrchestratorJobFaultedError,
    OrchestratorJobStartError,
    OrchestratorJobStatusError,
    OrchestratorJobTimedOutError,
    OrchestratorMalformedResponseError,
    job_state_is_terminal,
    job_state_parse,
)
from uipath_runner.domain import ProcessReference, StageTimeline, domain_build_start_request

from .interfaces import JobExecutionResult, JobRunnerPort, JobSnapshot

JOB_POLL_INTERVAL_SECONDS: Final[float] = 5.0
JOB_MAX_POLL_ATTEMPTS: Final[int] = 20


class JobOrchestrator(JobRunnerPort):
    """Submits one job and drives it to Successful, Faulted, or client-side timeout.

    State machine as observed by the client:

    * submitting: start request sent, job id extracted from `value[0].Id`
    * polling: job status read; Successful and Faulted are terminal, any other
      state waits `JOB_POLL_INTERVAL_SECONDS` and polls again
    * timed out: `JOB_MAX_POLL_ATTEMPTS` non-terminal checks observed
    """

    def __init__(
        self,
        client: OrchestratorClientPort,
        sleep_function: Callable[[float], None] | None = None,
        logger: Any | None = None,
    ):
        """Initialize job orchestrator.

        Args:
            client: Orchestrator client used for start and status calls.
            sleep_function: Blocking wait primitive, `time.sleep` by default.
            logger: Optional structured logger receiving stage events.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when client is None.
        """

        if client is None:
            raise ValueError("client must not be None")

        self._client = client
        self._sleep_function = sleep_function or time.sleep
        self._logger = logger

    def job_start_and_await(self, folder_id: int | str, start_request_body: dict[str, Any]) -> dict[str, Any]:
        """Start one job and block until it reaches a terminal state.

        Args:
            folder_id: Folder id sent as organizational-unit header on every call.
            start_request_body: `{"startInfo": {...}}` request body.

        Returns:
            dict[str, Any]: Output arguments of the Successful job, possibly empty.

        Raises:
            OrchestratorJobStartError: Raised when submission fails or yields no job id.
            OrchestratorJobFaultedError: Raised when the job reaches Faulted.
            OrchestratorJobTimedOutError: Raised when the attempt ceiling is reached.
            OrchestratorJobStatusError: Raised when a status check of the started job fails.
        """

        timeline = StageTimeline(logger=self._logger)
        return self._job_run(folder_id, start_request_body, timeline).output_arguments

    def job_execute(
        self,
        process_reference: ProcessReference,
        folder_id: int | str,
        input_arguments: dict[str, Any] | str | None = None,
    ) -> JobExecutionResult:
        """Start one release with optional arguments and return the full run result.

        Args:
            process_reference: Resolved process reference; its release key is started.
            folder_id: Folder id scoping the job.
            input_arguments: Optional arguments object or JSON text.

        Returns:
            JobExecutionResult: Job id, final state, output arguments and stage timeline.

        Raises:
            ValueError: Raised when the start request cannot be built.
            OrchestratorApiError: Raised for start, fault, timeout and polling failures.
        """

        start_request_body = domain_build_start_request(
            release_key=process_reference.release_key,
            input_arguments=input_arguments,
        )
        timeline = StageTimeline(logger=self._logger)
        timeline.timeline_record(
            stage="run",
            status="started",
            details={"package_key": process_reference.package_key, "folder_id": str(folder_id)},
        )
        result = self._job_run(folder_id, start_request_body, timeline)
        timeline.timeline_record(stage="run", status="completed", details={"job_id": result.job_id})
        return JobExecutionResult(
            job_id=result.job_id,
            state=result.state,
            output_arguments=result.output_arguments,
            poll_attempts=result.poll_attempts,
            stage_timeline=timeline.timeline_snapshot(),
        )

    def _job_run(
        self,
        folder_id: int | str,
        start_request_body: dict[str, Any],
        timeline: StageTimeline,
    ) -> JobExecutionResult:
        job_id = self._job_submit(folder_id, start_request_body, timeline)
        return self._job_poll_until_terminal(folder_id, job_id, timeline)

    def _job_submit(self, folder_id: int | str, start_request_body: dict[str, Any], timeline: StageTimeline) -> int:
        """Submit the start request and extract the created job id.

        Args:
            folder_id: Folder id scoping the job.
            start_request_body: Start request body.
            timeline: Stage event recorder.

        Returns:
            int: Created job id.

        Raises:
            OrchestratorJobStartError: Raised when submission fails or the response has no job id.
        """

        timeline.timeline_record(stage="submit", status="started")
        try:
            start_response = self._client.client_start_jobs(folder_id=folder_id, start_request_body=start_request_body)
            job_id = self._job_extract_started_job_id(start_response)
        except (OrchestratorApiError, ValueError) as error:
            timeline.timeline_record(stage="submit", status="failed", details={"error": type(error).__name__})
            raise OrchestratorJobStartError(cause=error) from error

        timeline.timeline_record(stage="submit", status="completed", details={"job_id": job_id})
        return job_id

    def _job_poll_until_terminal(self, folder_id: int | str, job_id: int, timeline: StageTimeline) -> JobExecutionResult:
        """Poll job status until Successful, Faulted, or the attempt ceiling.

        Args:
            folder_id: Folder id scoping the job.
            job_id: Job id to poll.
            timeline: Stage event recorder.

        Returns:
            JobExecutionResult: Successful job result.

        Raises:
            OrchestratorJobFaultedError: Raised when the job reaches Faulted.
            OrchestratorJobTimedOutError: Raised after `JOB_MAX_POLL_ATTEMPTS` non-terminal checks.
            OrchestratorJobStatusError: Raised when a status check fails; carries the job id.
        """

        for attempt in range(1, JOB_MAX_POLL_ATTEMPTS + 1):
            try:
                snapshot = self._job_fetch_snapshot(folder_id, job_id)
            except OrchestratorApiError as error:
                timeline.timeline_record(
                    stage="poll",
                    status="failed",
                    details={"job_id": job_id, "poll_attempt": attempt, "error_code": error.error_code},
                )
                raise OrchestratorJobStatusError(job_id=job_id, cause=error) from error

            timeline.timeline_record(
                stage="poll",
                status=snapshot.state.value,
                details={"job_id": job_id, "poll_attempt": attempt},
            )

            if job_state_is_terminal(snapshot.state):
                if snapshot.state is JobState.FAULTED:
                    timeline.timeline_record(
                        stage="poll",
                        status="failed",
                        details={"job_id": job_id, "reason": "faulted"},
                    )
                    raise OrchestratorJobFaultedError(job_id=job_id, job_info=snapshot.info)
                return JobExecutionResult(
                    job_id=job_id,
                    state=snapshot.state,
                    output_arguments=snapshot.output_arguments,
                    poll_attempts=attempt,
                )

            if attempt < JOB_MAX_POLL_ATTEMPTS:
                self._sleep_function(JOB_POLL_INTERVAL_SECONDS)

        timeline.timeline_record(stage="poll", status="failed", details={"job_id": job_id, "reason": "timed_out"})
        raise OrchestratorJobTimedOutError(job_id=job_id, attempts=JOB_MAX_POLL_ATTEMPTS)

    def _job_fetch_snapshot(self, folder_id: int | str, job_id: int) -> JobSnapshot:
        """Read one job status and project it into a snapshot.

        Args:
            folder_id: Folder id scoping the job.
            job_id: Job id.

        Returns:
            JobSnapshot: Parsed state, output arguments and info.

        Raises:
            OrchestratorMalformedResponseError: Raised when output arguments are not a JSON object.
        """

        job_payload = self._client.client_get_job(folder_id=folder_id, job_id=job_id)
        state = job_state_parse(job_payload.get("State"))
        output_arguments: dict[str, Any] = {}
        if state is JobState.SUCCESSFUL:
            output_arguments = self._job_parse_output_arguments(job_payload.get("OutputArguments"))
        info = job_payload.get("Info")
        return JobSnapshot(
            job_id=job_id,
            state=state,
            output_arguments=output_arguments,
            info=info if isinstance(info, str) else None,
        )

    def _job_extract_started_job_id(self, start_response: dict[str, Any]) -> int:
        created_jobs = start_response.get("value")
        if not isinstance(created_jobs, list) or not created_jobs or not isinstance(created_jobs[0], dict):
            raise OrchestratorMalformedResponseError()
        raw_job_id = created_jobs[0].get("Id")
        if raw_job_id is None or isinstance(raw_job_id, bool):
            raise OrchestratorMalformedResponseError()
        try:
            return int(raw_job_id)
        except (TypeError, ValueError) as error:
            raise OrchestratorMalformedResponseError(cause=error) from error

    def _job_parse_output_arguments(self, raw_output_arguments: Any) -> dict[str, Any]:
        """Parse the `OutputArguments` field into an object.

        Args:
            raw_output_arguments: JSON text, object, or None.

        Returns:
            dict[str, Any]: Output arguments, empty when absent.

        Raises:
            OrchestratorMalformedResponseError: Raised when the value is not a JSON object.
        """

        if raw_output_arguments is None:
            return {}
        if isinstance(raw_output_arguments, dict):
            return raw_output_arguments
        if not isinstance(raw_output_arguments, str):
            raise OrchestratorMalformedResponseError()
        if not raw_output_arguments.strip():
            return {}
        try:
            parsed_output_arguments = json.loads(raw_output_arguments)
        except json.JSONDecodeError as error:
            raise OrchestratorMalformedResponseError(cause=error) from error
        if parsed_output_arguments is None:
            return {}
        if not isinstance(parsed_output_arguments, dict):
            raise OrchestratorMalformedResponseError()
        return parsed_output_arguments
