"""Typed interfaces for adapter-layer responsibilities."""

from dataclasses import dataclass
from typing import Any
from typing import Protocol


@dataclass(frozen=True)
class OrchestratorCredentials:
    """Tenant identity for the Orchestrator API.

    Attributes:
        organization: Cloud organization (account) name.
        tenant: Tenant name inside the organization.
        token: Personal access token, treated as an opaque secret.
    """

    organization: str
    tenant: str
    token: str

    def __repr__(self) -> str:
        return f"OrchestratorCredentials(organization={self.organization!r}, tenant={self.tenant!r}, token='***')"


class HttpClientPort(Protocol):
    """Port definition for raw outbound HTTP access."""

    def http_send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: Any | None = None,
    ) -> bytes:
        """Send one HTTP request and return the raw response body.

        Args:
            method: HTTP method name.
            url: Absolute request URL.
            headers: Complete outbound header map.
            body: Optional JSON-serializable request body.

        Returns:
            bytes: Raw response payload, possibly empty.

        Raises:
            ConnectionError: Raised for network failures and non-success HTTP status.
            TimeoutError: Raised when the request exceeds the transport timeout.
        """


class OrchestratorClientPort(Protocol):
    """Port definition for typed Orchestrator API operations."""

    def client_list_folders(self, skip: int = 0, take: int = 100) -> list[dict[str, Any]]:
        """Return one page of raw folder entities."""

    def client_list_releases(
        self,
        folder_id: int | str,
        process_key: str | None = None,
        top: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return raw release entities filtered by organizational unit id."""

    def client_list_entry_points(
        self,
        process_key: str,
        process_version: str,
        folder_id: int | str,
    ) -> list[dict[str, Any]]:
        """Return raw package entry-point entities for one `processKey:version`."""

    def client_start_jobs(self, folder_id: int | str, start_request_body: dict[str, Any]) -> dict[str, Any]:
        """Submit one job-start request and return the raw response."""

    def client_get_job(self, folder_id: int | str, job_id: int) -> dict[str, Any]:
        """Return one raw job entity by id."""
