"""Regression tests for job submission and terminal-state polling."""
# pylint: disable=duplicate-code

from __future__ import annotations

import json
from typing import Any

import pytest

from uipath_runner.adapters import (
    JobState,
    OrchestratorClient,
    OrchestratorCredentials,
    OrchestratorJobFaultedError,
    OrchestratorJobStartError,
    OrchestratorJobStatusError,
    OrchestratorJobTimedOutError,
    OrchestratorMalformedResponseError,
    OrchestratorTransportError,
)
from uipath_runner.domain import ProcessReference
from uipath_runner.jobs import JOB_MAX_POLL_ATTEMPTS, JOB_POLL_INTERVAL_SECONDS, JobOrchestrator


class _ScriptedJobClient:
    """Orchestrator client stub replaying a scripted sequence of job states."""

    def __init__(
        self,
        job_payloads: list[dict[str, Any]],
        start_response: dict[str, Any] | None = None,
        start_failure: Exception | None = None,
    ):
        """Initialize scripted client.

        Args:
            job_payloads: Job payloads returned by consecutive status checks; the last repeats.
            start_response: Response returned by job submission.
            start_failure: Optional exception raised by job submission.

        Returns:
            None: Initializer does not return values.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        self._job_payloads = job_payloads
        self._start_response = start_response if start_response is not None else {"value": [{"Id": 7001}]}
        self._start_failure = start_failure
        self.start_calls: list[tuple[int | str, dict[str, Any]]] = []
        self.status_calls: list[tuple[int | str, int]] = []

    def client_start_jobs(self, folder_id: int | str, start_request_body: dict[str, Any]) -> dict[str, Any]:
        """Record submission and return scripted response.

        Args:
            folder_id: Folder id.
            start_request_body: Start request body.

        Returns:
            dict[str, Any]: Scripted start response.

        Raises:
            Exception: Raised when a start failure is configured.
        """

        self.start_calls.append((folder_id, start_request_body))
        if self._start_failure is not None:
            raise self._start_failure
        return self._start_response

    def client_get_job(self, folder_id: int | str, job_id: int) -> dict[str, Any]:
        """Record status check and return next scripted payload.

        Args:
            folder_id: Folder id.
            job_id: Job id.

        Returns:
            dict[str, Any]: Scripted job payload.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        index = min(len(self.status_calls), len(self._job_payloads) - 1)
        self.status_calls.append((folder_id, job_id))
        return self._job_payloads[index]


class _QueuedTransport:
    """HTTP transport stub returning queued payloads and recording headers."""

    def __init__(self, payloads: list[bytes]):
        self._payloads = list(payloads)
        self.requests: list[dict[str, Any]] = []

    def http_send(self, method: str, url: str, headers: dict[str, str], body: Any | None = None) -> bytes:
        self.requests.append({"method": method, "url": url, "headers": headers, "body": body})
        return self._payloads.pop(0)


def _build_orchestrator(client: Any, sleeps: list[float]) -> JobOrchestrator:
    """Create orchestrator recording sleep durations instead of blocking.

    Args:
        client: Client stub.
        sleeps: List receiving sleep durations.

    Returns:
        JobOrchestrator: Orchestrator under test.

    Raises:
        ValueError: This helper does not raise value errors.
    """

    return JobOrchestrator(client=client, sleep_function=sleeps.append)


def test_jobs_orchestrator_returns_output_after_exact_number_of_checks() -> None:
    """Return Successful output arguments after exactly four checks and three waits.

    Returns:
        None: Assertions validate poll count and wait cadence.

    Raises:
        AssertionError: Raised when polling cadence drifts.
    """

    client = _ScriptedJobClient(
        job_payloads=[
            {"State": "Pending"},
            {"State": "Running"},
            {"State": "Running"},
            {"State": "Successful", "OutputArguments": '{"out_Total": 42}'},
        ]
    )
    sleeps: list[float] = []
    orchestrator = _build_orchestrator(client, sleeps)

    output_arguments = orchestrator.job_start_and_await(folder_id=4, start_request_body={"startInfo": {}})

    assert output_arguments == {"out_Total": 42}
    assert len(client.status_calls) == 4
    assert sleeps == [JOB_POLL_INTERVAL_SECONDS] * 3
    assert JOB_POLL_INTERVAL_SECONDS == 5.0
    assert client.status_calls[0] == (4, 7001)


def test_jobs_orchestrator_times_out_after_attempt_ceiling_without_extra_check() -> None:
    """Raise timeout after exactly twenty non-terminal checks and never a twenty-first.

    Returns:
        None: Assertions validate bounded polling.

    Raises:
        AssertionError: Raised when the ceiling is not honored.
    """

    client = _ScriptedJobClient(job_payloads=[{"State": "Running"}])
    sleeps: list[float] = []
    orchestrator = _build_orchestrator(client, sleeps)

    with pytest.raises(OrchestratorJobTimedOutError, match="job timed out") as error_info:
        orchestrator.job_start_and_await(folder_id=4, start_request_body={"startInfo": {}})

    assert JOB_MAX_POLL_ATTEMPTS == 20
    assert len(client.status_calls) == 20
    assert len(sleeps) == 19
    assert error_info.value.job_id == 7001
    assert error_info.value.attempts == 20


@pytest.mark.parametrize("non_terminal_state", ["Stopped", "Suspended", "Resumed", "Stopping", "Mystery"])
def test_jobs_orchestrator_keeps_polling_through_non_terminal_states(non_terminal_state: str) -> None:
    """Treat Stopped, Suspended, and unrecognized states as non-terminal.

    Args:
        non_terminal_state: Server state preceding success.

    Returns:
        None: Assertions validate non-terminal handling.

    Raises:
        AssertionError: Raised when polling stops early.
    """

    client = _ScriptedJobClient(job_payloads=[{"State": non_terminal_state}, {"State": "Successful"}])
    orchestrator = _build_orchestrator(client, [])

    assert orchestrator.job_start_and_await(folder_id=4, start_request_body={"startInfo": {}}) == {}
    assert len(client.status_calls) == 2


def test_jobs_orchestrator_faulted_first_check_stops_immediately() -> None:
    """Raise job-faulted with server info after a single check.

    Returns:
        None: Assertions validate fault handling.

    Raises:
        AssertionError: Raised when faulted jobs are polled further or swallowed.
    """

    client = _ScriptedJobClient(job_payloads=[{"State": "Faulted", "Info": "Selector not found"}])
    sleeps: list[float] = []
    orchestrator = _build_orchestrator(client, sleeps)

    with pytest.raises(OrchestratorJobFaultedError, match="job faulted") as error_info:
        orchestrator.job_start_and_await(folder_id=4, start_request_body={"startInfo": {}})

    assert len(client.status_calls) == 1
    assert sleeps == []
    assert error_info.value.job_id == 7001
    assert error_info.value.job_info == "Selector not found"


@pytest.mark.parametrize(
    "start_response",
    [{"value": []}, {}, {"value": [{"Name": "no id"}]}, {"value": [{"Id": "abc"}]}],
)
def test_jobs_orchestrator_start_response_without_job_id_raises_start_error(start_response: dict[str, Any]) -> None:
    """Raise job-start failure when the start response carries no usable job id.

    Args:
        start_response: Start response variant.

    Returns:
        None: Assertions validate start failure handling.

    Raises:
        AssertionError: Raised when polling begins without a job id.
    """

    client = _ScriptedJobClient(job_payloads=[{"State": "Successful"}], start_response=start_response)
    orchestrator = _build_orchestrator(client, [])

    with pytest.raises(OrchestratorJobStartError, match="job start failed") as error_info:
        orchestrator.job_start_and_await(folder_id=4, start_request_body={"startInfo": {}})

    assert isinstance(error_info.value.cause, OrchestratorMalformedResponseError)
    assert client.status_calls == []


def test_jobs_orchestrator_start_transport_failure_raises_start_error() -> None:
    """Wrap submission transport failures as job-start failures.

    Returns:
        None: Assertions validate start failure wrapping.

    Raises:
        AssertionError: Raised when submission failures are re-thrown raw.
    """

    transport_failure = OrchestratorTransportError(cause=ConnectionError("refused"))
    client = _ScriptedJobClient(job_payloads=[{"State": "Successful"}], start_failure=transport_failure)
    orchestrator = _build_orchestrator(client, [])

    with pytest.raises(OrchestratorJobStartError) as error_info:
        orchestrator.job_start_and_await(folder_id=4, start_request_body={"startInfo": {}})

    assert error_info.value.cause is transport_failure


def test_jobs_orchestrator_status_failure_after_start_carries_job_id() -> None:
    """Wrap a failed status check of a started job with the job id and original cause.

    Returns:
        None: Assertions validate status failure wrapping over the real client.

    Raises:
        AssertionError: Raised when the job id or cause is lost.
    """

    class _StartThenFailTransport(_QueuedTransport):
        def http_send(self, method: str, url: str, headers: dict[str, str], body: Any | None = None) -> bytes:
            if self.requests:
                self.requests.append({"method": method, "url": url, "headers": headers, "body": body})
                raise ConnectionError("connection reset")
            return super().http_send(method, url, headers, body)

    transport = _StartThenFailTransport(payloads=[b'{"value":[{"Id":9001}]}'])
    client = OrchestratorClient(
        credentials=OrchestratorCredentials(organization="acme", tenant="Prod", token="pat"),
        http_client=transport,
        cloud_url="https://cloud.example.test",
    )
    sleeps: list[float] = []
    orchestrator = _build_orchestrator(client, sleeps)

    with pytest.raises(OrchestratorJobStatusError, match="job status failed") as error_info:
        orchestrator.job_start_and_await(folder_id=4, start_request_body={"startInfo": {}})

    assert error_info.value.job_id == 9001
    assert error_info.value.error_code == "JOB_STATUS_FAILED"
    assert isinstance(error_info.value.cause, OrchestratorTransportError)
    assert len(transport.requests) == 2
    assert sleeps == []


@pytest.mark.parametrize(
    ("raw_output_arguments", "expected_output_arguments"),
    [(None, {}), ("", {}), ("null", {}), ({"out_Ok": True}, {"out_Ok": True}), ('{"out_Ok": true}', {"out_Ok": True})],
)
def test_jobs_orchestrator_parses_output_argument_variants(
    raw_output_arguments: Any,
    expected_output_arguments: dict[str, Any],
) -> None:
    """Parse absent, empty, object, and JSON-text output arguments.

    Args:
        raw_output_arguments: Raw `OutputArguments` value.
        expected_output_arguments: Expected parsed object.

    Returns:
        None: Assertions validate output parsing.

    Raises:
        AssertionError: Raised when parsing is incorrect.
    """

    client = _ScriptedJobClient(job_payloads=[{"State": "Successful", "OutputArguments": raw_output_arguments}])
    orchestrator = _build_orchestrator(client, [])

    assert orchestrator.job_start_and_await(folder_id=4, start_request_body={"startInfo": {}}) == expected_output_arguments


def test_jobs_orchestrator_non_object_output_arguments_raise_status_error() -> None:
    """Reject Successful jobs whose output arguments are not a JSON object.

    Returns:
        None: Assertions validate output validation.

    Raises:
        AssertionError: Raised when malformed output is accepted.
    """

    client = _ScriptedJobClient(job_payloads=[{"State": "Successful", "OutputArguments": "[1, 2]"}])
    orchestrator = _build_orchestrator(client, [])

    with pytest.raises(OrchestratorJobStatusError) as error_info:
        orchestrator.job_start_and_await(folder_id=4, start_request_body={"startInfo": {}})

    assert error_info.value.job_id == 7001
    assert isinstance(error_info.value.cause, OrchestratorMalformedResponseError)


def test_jobs_orchestrator_sends_folder_header_on_start_and_every_status_check() -> None:
    """Carry the organizational-unit header on start and status calls through the real client.

    Returns:
        None: Assertions validate folder scoping on the wire.

    Raises:
        AssertionError: Raised when a call omits the folder header.
    """

    transport = _QueuedTransport(
        payloads=[
            b'{"value":[{"Id":55}]}',
            b'{"Id":55,"State":"Running"}',
            b'{"Id":55,"State":"Successful","OutputArguments":"{}"}',
        ]
    )
    client = OrchestratorClient(
        credentials=OrchestratorCredentials(organization="acme", tenant="Prod", token="pat"),
        http_client=transport,
        cloud_url="https://cloud.example.test",
    )
    orchestrator = _build_orchestrator(client, [])

    orchestrator.job_start_and_await(folder_id=9, start_request_body={"startInfo": {"JobsCount": 1}})

    assert [request["method"] for request in transport.requests] == ["POST", "GET", "GET"]
    assert all(request["headers"]["X-UIPATH-OrganizationUnitId"] == "9" for request in transport.requests)
    assert transport.requests[1]["url"].endswith("/odata/Jobs(55)")


def test_jobs_orchestrator_execute_builds_start_body_and_timeline() -> None:
    """Start the referenced release with serialized arguments and capture stage events.

    Returns:
        None: Assertions validate start body and run result.

    Raises:
        AssertionError: Raised when the run result is incomplete.
    """

    client = _ScriptedJobClient(job_payloads=[{"State": "Running"}, {"State": "Successful", "OutputArguments": "{}"}])
    orchestrator = _build_orchestrator(client, [])
    reference = ProcessReference(release_key="rk-1", process_key="Invoice", process_version="1.0.0")

    result = orchestrator.job_execute(reference, folder_id="4", input_arguments={"in_Customer": "ACME"})

    _, start_request_body = client.start_calls[0]
    assert start_request_body["startInfo"]["ReleaseKey"] == "rk-1"
    assert start_request_body["startInfo"]["JobsCount"] == 1
    assert json.loads(start_request_body["startInfo"]["InputArguments"]) == {"in_Customer": "ACME"}
    assert result.job_id == 7001
    assert result.state is JobState.SUCCESSFUL
    assert result.poll_attempts == 2
    assert [(event["stage"], event["status"]) for event in result.stage_timeline] == [
        ("run", "started"),
        ("submit", "started"),
        ("submit", "completed"),
        ("poll", "Running"),
        ("poll", "Successful"),
        ("run", "completed"),
    ]
