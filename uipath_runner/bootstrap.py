"""Application bootstrap wiring for startup validation and dependency assembly."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import FastAPI

from uipath_runner.adapters import (
    HttpxTransport,
    OrchestratorClient,
    OrchestratorCredentials,
    OrchestratorHealthService,
)
from uipath_runner.api import create_api_application
from uipath_runner.config import AppSettings, config_load_settings
from uipath_runner.jobs import JobOrchestrator, OptionResolutionPipeline
from uipath_runner.logging_setup import logging_configure


@dataclass(frozen=True)
class RunnerComponents:
    """Fully wired runtime components sharing one transport.

    Attributes:
        settings: Validated runtime settings.
        transport: Pooled HTTP transport; close it when done.
        client: Tenant-scoped Orchestrator client.
        resolution_pipeline: Cascading option resolution pipeline.
        job_orchestrator: Job start-and-await orchestrator.
    """

    settings: AppSettings
    transport: HttpxTransport
    client: OrchestratorClient
    resolution_pipeline: OptionResolutionPipeline
    job_orchestrator: JobOrchestrator


def bootstrap_create_components(settings: AppSettings | None = None) -> RunnerComponents:
    """Build client, pipeline and orchestrator from validated settings.

    Args:
        settings: Optional preloaded settings; loaded from environment when omitted.

    Returns:
        RunnerComponents: Wired runtime components.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    logging_configure(log_level=resolved_settings.log_level, json_output=resolved_settings.log_json)

    credentials = OrchestratorCredentials(
        organization=resolved_settings.uipath_organization,
        tenant=resolved_settings.uipath_tenant,
        token=resolved_settings.uipath_pat_token.get_secret_value(),
    )
    transport = HttpxTransport(request_timeout_seconds=resolved_settings.uipath_request_timeout_seconds)
    client = OrchestratorClient(
        credentials=credentials,
        http_client=transport,
        cloud_url=resolved_settings.uipath_cloud_url,
    )
    return RunnerComponents(
        settings=resolved_settings,
        transport=transport,
        client=client,
        resolution_pipeline=OptionResolutionPipeline(
            client=client,
            folder_page_size=resolved_settings.uipath_folder_page_size,
        ),
        job_orchestrator=JobOrchestrator(client=client),
    )


def bootstrap_create_application(components: RunnerComponents | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        components: Optional prebuilt components; built from environment settings when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    components = components or bootstrap_create_components()
    health_service = OrchestratorHealthService(
        client=components.client,
        connection_label=components.client.base_url,
    )
    return create_api_application(
        settings=components.settings,
        health_service=health_service,
        resolution_pipeline=components.resolution_pipeline,
        job_runner=components.job_orchestrator,
    )
