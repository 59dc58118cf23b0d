"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either launches the FastAPI
service or runs one option lookup or job execution from the command line.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Sequence

import uvicorn

from uipath_runner.adapters import OrchestratorApiError
from uipath_runner.bootstrap import RunnerComponents, bootstrap_create_application, bootstrap_create_components
from uipath_runner.domain import (
    domain_decode_entry_point_token,
    domain_decode_process_token,
    domain_encode_entry_point_token,
    domain_encode_process_token,
)


def main_build_argument_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser.

    Returns:
        argparse.ArgumentParser: Parser with one sub-command per operation.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    argument_parser = argparse.ArgumentParser(description="UiPath job runner entrypoint")
    subcommands = argument_parser.add_subparsers(dest="command")
    subcommands.add_parser("api", help="Start the HTTP API server")
    subcommands.add_parser("folders", help="List folder options")

    processes_parser = subcommands.add_parser("processes", help="List process options of one folder")
    processes_parser.add_argument("--folder-id", dest="folder_id", required=True, type=str)
    processes_parser.add_argument("--process-key", dest="process_key", type=str, help="Optional process key filter")
    processes_parser.add_argument("--top", dest="top", type=int, help="Optional maximum number of releases")

    entry_points_parser = subcommands.add_parser("entry-points", help="List entry-point options of one process")
    entry_points_parser.add_argument("--folder-id", dest="folder_id", required=True, type=str)
    entry_points_parser.add_argument("--process", dest="process", required=True, type=str, help="Process token")

    arguments_parser = subcommands.add_parser("input-arguments", help="Resolve default input arguments")
    arguments_parser.add_argument("--folder-id", dest="folder_id", required=True, type=str)
    arguments_parser.add_argument("--process", dest="process", required=True, type=str, help="Process token")
    arguments_parser.add_argument("--entry-point", dest="entry_point", required=True, type=str, help="Entry-point token")

    run_parser = subcommands.add_parser("run", help="Start one job and wait for its outcome")
    run_parser.add_argument("--folder-id", dest="folder_id", required=True, type=str)
    run_parser.add_argument("--process", dest="process", required=True, type=str, help="Process token")
    run_arguments_group = run_parser.add_mutually_exclusive_group()
    run_arguments_group.add_argument(
        "--input-arguments",
        dest="input_arguments",
        type=str,
        help="Input arguments as JSON object text",
    )
    run_arguments_group.add_argument(
        "--use-defaults",
        dest="use_defaults",
        action="store_true",
        help="Start with the entry point's schema defaults (requires --entry-point)",
    )
    run_parser.add_argument("--entry-point", dest="entry_point", type=str, help="Entry-point token")
    return argument_parser


def main(argv: Sequence[str] | None = None) -> None:
    """Run selected runtime command with validated startup configuration.

    Args:
        argv: Optional argument list; `sys.argv[1:]` when omitted.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with code 1 when an Orchestrator operation fails.
    """

    argument_parser = main_build_argument_parser()
    parsed_arguments = argument_parser.parse_args(argv)
    command = parsed_arguments.command or "api"

    if command == "run" and parsed_arguments.use_defaults and not parsed_arguments.entry_point:
        argument_parser.error("--use-defaults requires --entry-point")
    if command == "run" and parsed_arguments.entry_point and not parsed_arguments.use_defaults:
        argument_parser.error("--entry-point is only used with --use-defaults")

    components = bootstrap_create_components()
    try:
        if command == "api":
            application = bootstrap_create_application(components=components)
            uvicorn.run(
                application,
                host=components.settings.application_host,
                port=components.settings.application_port,
            )
            return

        try:
            result_payload = main_execute_command(components=components, command=command, arguments=parsed_arguments)
        except OrchestratorApiError as error:
            print(f"{error.error_code}: {error}", file=sys.stderr)
            raise SystemExit(1) from error
        except ValueError as error:
            print(f"INVALID_REQUEST: {error}", file=sys.stderr)
            raise SystemExit(2) from error
        print(json.dumps(result_payload, indent=2))
    finally:
        components.transport.close()


def main_execute_command(components: RunnerComponents, command: str, arguments: argparse.Namespace) -> Any:
    """Execute one non-server command and return its JSON-serializable result.

    Args:
        components: Wired runtime components.
        command: Sub-command name.
        arguments: Parsed command arguments.

    Returns:
        Any: JSON-serializable command result.

    Raises:
        ValueError: Raised for unknown commands or malformed tokens and arguments.
        OrchestratorApiError: Raised when the Orchestrator operation fails.
    """

    pipeline = components.resolution_pipeline

    if command == "folders":
        return [option.option_to_payload() for option in pipeline.resolution_list_folders()]

    if command == "processes":
        process_options = pipeline.resolution_list_processes(
            folder_id=arguments.folder_id,
            process_key=arguments.process_key,
            top=arguments.top,
        )
        return [option.option_to_payload(value=domain_encode_process_token(option.value)) for option in process_options]

    process_reference = domain_decode_process_token(arguments.process)

    if command == "entry-points":
        entry_point_options = pipeline.resolution_list_entry_points(
            process_reference=process_reference,
            folder_id=arguments.folder_id,
        )
        return [
            option.option_to_payload(value=domain_encode_entry_point_token(option.value))
            for option in entry_point_options
        ]

    if command == "input-arguments":
        return pipeline.resolution_resolve_default_arguments(
            process_reference=process_reference,
            folder_id=arguments.folder_id,
            entry_point_reference=domain_decode_entry_point_token(arguments.entry_point),
        )

    if command == "run":
        input_arguments: dict[str, Any] | str | None = arguments.input_arguments
        if arguments.use_defaults:
            input_arguments = pipeline.resolution_resolve_default_arguments(
                process_reference=process_reference,
                folder_id=arguments.folder_id,
                entry_point_reference=domain_decode_entry_point_token(arguments.entry_point),
            )
        execution_result = components.job_orchestrator.job_execute(
            process_reference=process_reference,
            folder_id=arguments.folder_id,
            input_arguments=input_arguments,
        )
        return {
            "job_id": execution_result.job_id,
            "state": execution_result.state.value,
            "output_arguments": execution_result.output_arguments,
        }

    raise ValueError(f"unsupported command={command}")


if __name__ == "__main__":
    main()
