"""Project-native typed exceptions for Orchestrator API failures."""

from __future__ import annotations


class OrchestratorApiError(Exception):
    """Base exception for all Orchestrator client and job failures.

    Attributes:
        error_code: Stable machine-readable failure code.
        cause: Underlying exception when the failure wraps another error.
    """

    default_error_code = "API_ERROR"

    def __init__(self, message: str, error_code: str | None = None, cause: BaseException | None = None):
        super().__init__(message)
        self.error_code = error_code or self.default_error_code
        self.cause = cause


class OrchestratorTransportError(OrchestratorApiError, ConnectionError):
    """Network, timeout, or non-success HTTP status failure from the transport."""

    default_error_code = "TRANSPORT_FAILURE"

    def __init__(self, message: str = "transport failure", cause: BaseException | None = None):
        super().__init__(message=message, cause=cause)


class OrchestratorMalformedResponseError(OrchestratorApiError, ValueError):
    """Empty, unparseable, or structurally unexpected response body."""

    default_error_code = "MALFORMED_RESPONSE"

    def __init__(self, message: str = "malformed response", cause: BaseException | None = None):
        super().__init__(message=message, cause=cause)


class OrchestratorNotFoundError(OrchestratorApiError, LookupError):
    """Referenced entity is absent from the listing it should belong to."""

    default_error_code = "NOT_FOUND"

    def __init__(self, message: str = "entry point not found"):
        super().__init__(message=message)


class OrchestratorFetchError(OrchestratorApiError, RuntimeError):
    """Option-resolution stage failure wrapping a client or transport error.

    Attributes:
        stage: Resolution stage name that failed.
    """

    default_error_code = "FETCH_FAILED"

    def __init__(self, stage: str, cause: BaseException | None = None):
        super().__init__(message=f"fetch failed: {stage}", cause=cause)
        self.stage = stage


class OrchestratorJobStartError(OrchestratorApiError, RuntimeError):
    """Job submission failed before a job id was obtained."""

    default_error_code = "JOB_START_FAILED"

    def __init__(self, message: str = "job start failed", cause: BaseException | None = None):
        super().__init__(message=message, cause=cause)


class OrchestratorJobStatusError(OrchestratorApiError, RuntimeError):
    """Status check of an already started job failed.

    Attributes:
        job_id: Server job identifier of the started job.
    """

    default_error_code = "JOB_STATUS_FAILED"

    def __init__(self, job_id: int, cause: BaseException | None = None):
        super().__init__(message="job status failed", cause=cause)
        self.job_id = job_id


class OrchestratorJobFaultedError(OrchestratorApiError, RuntimeError):
    """Job reached the Faulted terminal state.

    Attributes:
        job_id: Server job identifier.
        job_info: Server-provided fault description, when present.
    """

    default_error_code = "JOB_FAULTED"

    def __init__(self, job_id: int, job_info: str | None = None):
        super().__init__(message="job faulted")
        self.job_id = job_id
        self.job_info = job_info


class OrchestratorJobTimedOutError(OrchestratorApiError, TimeoutError):
    """Job did not reach a terminal state within the polling attempt ceiling.

    Attributes:
        job_id: Server job identifier.
        attempts: Number of status checks performed.
    """

    default_error_code = "JOB_TIMED_OUT"

    def __init__(self, job_id: int, attempts: int):
        super().__init__(message="job timed out")
        self.job_id = job_id
        self.attempts = attempts
