"""Job layer package for option resolution and job orchestration."""

from .interfaces import (
	JobExecutionResult,
	JobRunnerPort,
	JobSnapshot,
	OptionResolutionPort,
)
from .job_orchestrator import JOB_MAX_POLL_ATTEMPTS, JOB_POLL_INTERVAL_SECONDS, JobOrchestrator
from .option_resolution import (
	STAGE_ENTRY_POINTS,
	STAGE_FOLDERS,
	STAGE_INPUT_ARGUMENTS,
	STAGE_PROCESSES,
	OptionResolutionPipeline,
)

__all__ = [
	"JOB_MAX_POLL_ATTEMPTS",
	"JOB_POLL_INTERVAL_SECONDS",
	"JobExecutionResult",
	"JobOrchestrator",
	"JobRunnerPort",
	"JobSnapshot",
	"OptionResolutionPipeline",
	"OptionResolutionPort",
	"STAGE_ENTRY_POINTS",
	"STAGE_FOLDERS",
	"STAGE_INPUT_ARGUMENTS",
	"STAGE_PROCESSES",
]
