"""Regression tests for command-line option lookups and job runs."""
# pylint: disable=duplicate-code

from __future__ import annotations

import json
from typing import Any

import pytest

import uipath_runner.main as main_module
from uipath_runner.adapters import JobState, OrchestratorFetchError
from uipath_runner.domain import (
    EntryPointReference,
    OptionItem,
    ProcessReference,
    domain_encode_entry_point_token,
    domain_encode_process_token,
)
from uipath_runner.jobs import JobExecutionResult

_REFERENCE = ProcessReference(release_key="rk-1", process_key="Invoice", process_version="1.0.0")
_ENTRY_POINT = EntryPointReference(unique_id="ep-1", input_arguments_schema=None)


class _PipelineStub:
    """Resolution pipeline stub with deterministic options."""

    def __init__(self, failure: Exception | None = None):
        self._failure = failure

    def resolution_list_folders(self) -> list[OptionItem[int]]:
        if self._failure is not None:
            raise self._failure
        return [OptionItem(name="Shared", value=1)]

    def resolution_list_processes(self, folder_id, process_key=None, top=None) -> list[OptionItem[ProcessReference]]:
        return [OptionItem(name="Invoice v1", value=_REFERENCE)]

    def resolution_resolve_default_arguments(self, process_reference, folder_id, entry_point_reference) -> dict[str, Any]:
        return {"in_Customer": "ACME"}


class _JobOrchestratorStub:
    """Job orchestrator stub recording execution requests."""

    def __init__(self):
        self.calls: list[dict[str, Any]] = []

    def job_execute(self, process_reference, folder_id, input_arguments=None) -> JobExecutionResult:
        self.calls.append(
            {"process_reference": process_reference, "folder_id": folder_id, "input_arguments": input_arguments}
        )
        return JobExecutionResult(job_id=9, state=JobState.SUCCESSFUL, output_arguments={"out_Ok": True}, poll_attempts=1)


class _TransportStub:
    """Transport stub recording close calls."""

    def __init__(self):
        self.closed = False

    def close(self) -> None:
        self.closed = True


def _build_components(pipeline: _PipelineStub | None = None) -> Any:
    """Create a components-like object for command execution.

    Args:
        pipeline: Optional pipeline stub.

    Returns:
        Any: Object exposing runner component attributes.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return type(
        "Components",
        (),
        {
            "settings": None,
            "transport": _TransportStub(),
            "client": None,
            "resolution_pipeline": pipeline or _PipelineStub(),
            "job_orchestrator": _JobOrchestratorStub(),
        },
    )()


def test_main_processes_command_prints_process_tokens(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Print process options as JSON with token values and close the transport.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        capsys: Pytest output capture fixture.

    Returns:
        None: Assertions validate printed output.

    Raises:
        AssertionError: Raised when output is incorrect.
    """

    components = _build_components()
    monkeypatch.setattr(main_module, "bootstrap_create_components", lambda: components)

    main_module.main(["processes", "--folder-id", "2"])

    printed_options = json.loads(capsys.readouterr().out)
    assert printed_options[0]["name"] == "Invoice v1"
    assert json.loads(printed_options[0]["value"])["key"] == "rk-1"
    assert components.transport.closed is True


def test_main_run_with_defaults_resolves_arguments_before_start() -> None:
    """Start the job with resolved schema defaults when requested.

    Returns:
        None: Assertions validate default-argument runs.

    Raises:
        AssertionError: Raised when defaults are not forwarded.
    """

    components = _build_components()
    arguments = main_module.main_build_argument_parser().parse_args(
        [
            "run",
            "--folder-id",
            "2",
            "--process",
            domain_encode_process_token(_REFERENCE),
            "--use-defaults",
            "--entry-point",
            domain_encode_entry_point_token(_ENTRY_POINT),
        ]
    )

    result_payload = main_module.main_execute_command(components=components, command="run", arguments=arguments)

    assert result_payload == {"job_id": 9, "state": "Successful", "output_arguments": {"out_Ok": True}}
    assert components.job_orchestrator.calls[0]["input_arguments"] == {"in_Customer": "ACME"}
    assert components.job_orchestrator.calls[0]["process_reference"] == _REFERENCE


def test_main_orchestrator_failure_exits_with_error_code(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Exit with status 1 and print the error code when an Orchestrator call fails.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        capsys: Pytest output capture fixture.

    Returns:
        None: Assertions validate failure exit behavior.

    Raises:
        AssertionError: Raised when failures are not surfaced.
    """

    components = _build_components(pipeline=_PipelineStub(failure=OrchestratorFetchError(stage="folders")))
    monkeypatch.setattr(main_module, "bootstrap_create_components", lambda: components)

    with pytest.raises(SystemExit) as exit_info:
        main_module.main(["folders"])

    assert exit_info.value.code == 1
    assert "FETCH_FAILED: fetch failed: folders" in capsys.readouterr().err
    assert components.transport.closed is True


def test_main_malformed_process_token_exits_with_invalid_request(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Exit with status 2 for undecodable process tokens.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        capsys: Pytest output capture fixture.

    Returns:
        None: Assertions validate invalid input exit behavior.

    Raises:
        AssertionError: Raised when invalid tokens are accepted.
    """

    monkeypatch.setattr(main_module, "bootstrap_create_components", _build_components)

    with pytest.raises(SystemExit) as exit_info:
        main_module.main(["entry-points", "--folder-id", "2", "--process", "not-a-token"])

    assert exit_info.value.code == 2
    assert "INVALID_REQUEST" in capsys.readouterr().err


@pytest.mark.parametrize(
    "extra_arguments",
    [
        ["--use-defaults"],
        ["--entry-point", domain_encode_entry_point_token(_ENTRY_POINT)],
        ["--input-arguments", "{}", "--entry-point", domain_encode_entry_point_token(_ENTRY_POINT)],
    ],
)
def test_main_run_rejects_unpaired_entry_point_and_defaults_flags(
    monkeypatch: pytest.MonkeyPatch,
    extra_arguments: list[str],
) -> None:
    """Reject `run` when `--use-defaults` and `--entry-point` are not given together.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        extra_arguments: Flag combination under test.

    Returns:
        None: Assertions validate usage errors.

    Raises:
        AssertionError: Raised when an unpaired flag is silently ignored.
    """

    built_components: list[Any] = []

    def _record_components() -> Any:
        components = _build_components()
        built_components.append(components)
        return components

    monkeypatch.setattr(main_module, "bootstrap_create_components", _record_components)

    with pytest.raises(SystemExit) as exit_info:
        main_module.main(
            ["run", "--folder-id", "2", "--process", domain_encode_process_token(_REFERENCE), *extra_arguments]
        )

    assert exit_info.value.code == 2
    assert built_components == []
