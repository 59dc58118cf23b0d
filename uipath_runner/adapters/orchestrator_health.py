"""Orchestrator connectivity health service."""

from uipath_runner.domain import HealthStatus

from .interfaces import OrchestratorClientPort
from .orchestrator_errors import OrchestratorApiError


class OrchestratorHealthService:
    """Health service that verifies tenant reachability with a one-item folder page."""

    def __init__(self, client: OrchestratorClientPort, connection_label: str):
        """Initialize orchestrator health service.

        Args:
            client: Orchestrator client used for connectivity checks.
            connection_label: Non-secret target label for diagnostics.

        Raises:
            ValueError: Raised when client is None.
        """

        if client is None:
            raise ValueError("client must not be None")
        self._client = client
        self._connection_label = connection_label

    def health_connection_label(self) -> str:
        """Return the orchestrator target label for diagnostics.

        Returns:
            str: Tenant base URL without credentials.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        return self._connection_label

    def health_check(self) -> HealthStatus:
        """Verify orchestrator connectivity using a minimal folder listing.

        Returns:
            HealthStatus: Health payload with status and diagnostic detail.

        Raises:
            ConnectionError: Raised when the connectivity check fails.
        """

        try:
            self._client.client_list_folders(skip=0, take=1)
            return HealthStatus(status="ok", detail="orchestrator connectivity verified")
        except OrchestratorApiError as error:
            raise ConnectionError(f"orchestrator connectivity check failed: {error.error_code}") from error
