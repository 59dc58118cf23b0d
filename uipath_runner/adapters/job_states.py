"""Canonical Orchestrator job-state semantics for polling decisions."""

from __future__ import annotations

from enum import Enum
from typing import Final


class JobState(str, Enum):
    """Job states reported by the Orchestrator `Jobs` entity."""

    PENDING = "Pending"
    RUNNING = "Running"
    STOPPING = "Stopping"
    TERMINATING = "Terminating"
    FAULTED = "Faulted"
    SUCCESSFUL = "Successful"
    STOPPED = "Stopped"
    SUSPENDED = "Suspended"
    RESUMED = "Resumed"
    UNKNOWN = "Unknown"


JOB_TERMINAL_STATES: Final[frozenset[JobState]] = frozenset({JobState.SUCCESSFUL, JobState.FAULTED})

JOB_NON_TERMINAL_STATES: Final[frozenset[JobState]] = frozenset(set(JobState) - set(JOB_TERMINAL_STATES))


def job_state_parse(raw_state: object) -> JobState:
    """Map a raw server state value onto the job-state enum.

    Args:
        raw_state: `State` field value from a job payload.

    Returns:
        JobState: Matching enum member, or `JobState.UNKNOWN` for unrecognized values.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if not isinstance(raw_state, str):
        return JobState.UNKNOWN
    normalized_state = raw_state.strip()
    for member in JobState:
        if member.value.lower() == normalized_state.lower():
            return member
    return JobState.UNKNOWN


def job_state_is_terminal(state: JobState) -> bool:
    """Return whether polling stops once this state is observed.

    Args:
        state: Parsed job state.

    Returns:
        bool: True for Successful and Faulted.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return state in JOB_TERMINAL_STATES
