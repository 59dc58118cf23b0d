"""Adapter layer package for Orchestrator integration boundaries."""

from .orchestrator_errors import (
	OrchestratorApiError,
	OrchestratorFetchError,
	OrchestratorJobFaultedError,
	OrchestratorJobStartError,
	OrchestratorJobStatusError,
	OrchestratorJobTimedOutError,
	OrchestratorMalformedResponseError,
	OrchestratorNotFoundError,
	OrchestratorTransportError,
)
from .http_transport import HttpxTransport
from .interfaces import HttpClientPort, OrchestratorClientPort, OrchestratorCredentials
from .job_states import JOB_TERMINAL_STATES, JobState, job_state_is_terminal, job_state_parse
from .orchestrator_client import ORGANIZATION_UNIT_HEADER, OrchestratorClient
from .orchestrator_health import OrchestratorHealthService

__all__ = [
	"HttpClientPort",
	"HttpxTransport",
	"JOB_TERMINAL_STATES",
	"JobState",
	"ORGANIZATION_UNIT_HEADER",
	"OrchestratorApiError",
	"OrchestratorClient",
	"OrchestratorClientPort",
	"OrchestratorCredentials",
	"OrchestratorFetchError",
	"OrchestratorHealthService",
	"OrchestratorJobFaultedError",
	"OrchestratorJobStartError",
	"OrchestratorJobStatusError",
	"OrchestratorJobTimedOutError",
	"OrchestratorMalformedResponseError",
	"OrchestratorNotFoundError",
	"OrchestratorTransportError",
	"job_state_is_terminal",
	"job_state_parse",
]
