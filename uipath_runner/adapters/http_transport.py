"""Pooled httpx transport implementing the raw HTTP client port."""

from __future__ import annotations

from typing import Any, Final

import httpx

from .interfaces import HttpClientPort


class HttpxTransport(HttpClientPort):
    """HTTP transport backed by one reusable `httpx.Client` connection pool."""

    _USER_AGENT: Final[str] = "uipath-job-runner/1.0 (Python/httpx)"

    def __init__(self, request_timeout_seconds: float = 30.0, client: httpx.Client | None = None):
        """Initialize transport with a pooled client.

        Args:
            request_timeout_seconds: Per-request timeout in seconds.
            client: Optional preconfigured client, used instead of creating one.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when timeout is not positive.
        """

        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")

        self._client = client or httpx.Client(
            timeout=request_timeout_seconds,
            headers={"User-Agent": self._USER_AGENT, "Accept": "application/json"},
        )

    def http_send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: Any | None = None,
    ) -> bytes:
        """Execute one HTTP request and return response payload bytes.

        Args:
            method: HTTP method name.
            url: Absolute request URL.
            headers: Outbound header map.
            body: Optional JSON-serializable request body.

        Returns:
            bytes: HTTP response payload.

        Raises:
            TimeoutError: Raised when the request timed out.
            ConnectionError: Raised for network failures and non-success HTTP status.
        """

        try:
            response = self._client.request(
                method.upper(),
                url,
                headers=headers,
                json=body,
            )
            response.raise_for_status()
        except httpx.TimeoutException as error:
            raise TimeoutError("Orchestrator transport request timed out") from error
        except httpx.HTTPStatusError as error:
            raise ConnectionError(f"Orchestrator upstream returned HTTP {error.response.status_code}") from error
        except httpx.RequestError as error:
            raise ConnectionError("Orchestrator transport request failed") from error

        return bytes(response.content)

    def close(self) -> None:
        """Close the pooled client and release connections."""

        self._client.close()

    def __enter__(self) -> HttpxTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
