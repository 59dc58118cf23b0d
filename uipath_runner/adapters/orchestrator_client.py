"""Orchestrator REST/OData client with tenant-scoped request shaping."""

from __future__ import annotations

import json
from typing import Any, Final
from urllib.parse import quote, urlencode

from .interfaces import HttpClientPort, OrchestratorClientPort, OrchestratorCredentials
from .orchestrator_errors import (
    OrchestratorApiError,
    OrchestratorMalformedResponseError,
    OrchestratorTransportError,
)

ORGANIZATION_UNIT_HEADER: Final[str] = "X-UIPATH-OrganizationUnitId"


class OrchestratorClient(OrchestratorClientPort):
    """Single point of outbound access to one tenant's Orchestrator API."""

    _ORCHESTRATOR_PATH_SEGMENT: Final[str] = "orchestrator_"
    _FOLDERS_PAGE_PATH: Final[str] = (
        "/odata/Folders/UiPath.Server.Configuration.OData.GetFoldersPage"
        "(skip={skip},take={take},expandedParentIds=[])"
    )
    _RELEASES_PATH: Final[str] = "/odata/Releases"
    _ENTRY_POINTS_PATH: Final[str] = (
        "/odata/Processes/UiPath.Server.Configuration.OData.GetPackageEntryPointsV2(key='{package_key}')"
    )
    _START_JOBS_PATH: Final[str] = "/odata/Jobs/UiPath.Server.Configuration.OData.StartJobs"
    _JOB_PATH: Final[str] = "/odata/Jobs({job_id})"

    def __init__(
        self,
        credentials: OrchestratorCredentials,
        http_client: HttpClientPort,
        cloud_url: str = "https://cloud.uipath.com",
    ):
        """Initialize client with a fixed base URL and header template.

        Args:
            credentials: Tenant identity and bearer token.
            http_client: Raw HTTP transport.
            cloud_url: Cloud host URL preceding organization and tenant.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when credentials or cloud URL are blank.
        """

        if http_client is None:
            raise ValueError("http_client must not be None")

        organization = credentials.organization.strip()
        tenant = credentials.tenant.strip()
        token = credentials.token.strip()
        normalized_cloud_url = cloud_url.strip().rstrip("/")

        if not organization:
            raise ValueError("credentials.organization must not be blank")
        if not tenant:
            raise ValueError("credentials.tenant must not be blank")
        if not token:
            raise ValueError("credentials.token must not be blank")
        if not normalized_cloud_url:
            raise ValueError("cloud_url must not be blank")

        self._http_client = http_client
        self._base_url = f"{normalized_cloud_url}/{organization}/{tenant}/{self._ORCHESTRATOR_PATH_SEGMENT}"
        self._headers: dict[str, str] = {"Authorization": f"Bearer {token}"}

    @property
    def base_url(self) -> str:
        """Return the tenant-scoped base URL."""

        return self._base_url

    def client_request(
        self,
        method: str,
        path: str,
        extra_headers: dict[str, str] | None = None,
        body: Any | None = None,
    ) -> Any:
        """Send one request relative to the tenant base URL and parse the JSON body.

        Args:
            method: HTTP method name.
            path: Path relative to the tenant base URL, starting with `/`.
            extra_headers: Optional headers merged over the bearer header.
            body: Optional JSON-serializable request body.

        Returns:
            Any: Parsed JSON response.

        Raises:
            OrchestratorTransportError: Raised when the transport fails for any reason.
            OrchestratorMalformedResponseError: Raised when the body is empty or not JSON.
        """

        request_headers = dict(self._headers)
        if extra_headers:
            request_headers.update(extra_headers)

        try:
            payload = self._http_client.http_send(
                method=method,
                url=f"{self._base_url}{path}",
                headers=request_headers,
                body=body,
            )
        except OrchestratorApiError:
            raise
        except Exception as error:
            raise OrchestratorTransportError(cause=error) from error

        return self._client_parse_json(payload)

    def client_list_folders(self, skip: int = 0, take: int = 100) -> list[dict[str, Any]]:
        """Return one page of folder entities.

        Args:
            skip: Number of folders to skip.
            take: Page size.

        Returns:
            list[dict[str, Any]]: Raw folder entities.

        Raises:
            ValueError: Raised when paging values are out of range.
            OrchestratorApiError: Raised for transport or response failures.
        """

        if skip < 0:
            raise ValueError("skip must be >= 0")
        if take < 1:
            raise ValueError("take must be >= 1")

        response = self.client_request("GET", self._FOLDERS_PAGE_PATH.format(skip=skip, take=take))
        return self._client_extract_value_list(response)

    def client_list_releases(
        self,
        folder_id: int | str,
        process_key: str | None = None,
        top: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return release entities belonging to one organizational unit.

        Args:
            folder_id: Organizational unit (folder) id.
            process_key: Optional process key narrowing.
            top: Optional maximum number of releases.

        Returns:
            list[dict[str, Any]]: Raw release entities.

        Raises:
            ValueError: Raised when `top` is not positive.
            OrchestratorApiError: Raised for transport or response failures.
        """

        filter_clauses = [f"OrganizationUnitId eq {self._client_normalize_folder_id(folder_id)}"]
        if process_key is not None and process_key.strip():
            escaped_process_key = process_key.strip().replace("'", "''")
            filter_clauses.append(f"ProcessKey eq '{escaped_process_key}'")

        query_parameters: dict[str, str] = {"$filter": " and ".join(filter_clauses)}
        if top is not None:
            if top < 1:
                raise ValueError("top must be >= 1")
            query_parameters["$top"] = str(top)

        query_string = urlencode(query_parameters, quote_via=quote, safe="$'")
        response = self.client_request("GET", f"{self._RELEASES_PATH}?{query_string}")
        return self._client_extract_value_list(response)

    def client_list_entry_points(
        self,
        process_key: str,
        process_version: str,
        folder_id: int | str,
    ) -> list[dict[str, Any]]:
        """Return package entry points for one `processKey:version` pair.

        Args:
            process_key: Package (process) key.
            process_version: Package version.
            folder_id: Folder id sent as organizational-unit header.

        Returns:
            list[dict[str, Any]]: Raw entry-point entities.

        Raises:
            ValueError: Raised when key or version is blank.
            OrchestratorApiError: Raised for transport or response failures.
        """

        normalized_process_key = process_key.strip()
        normalized_version = process_version.strip()
        if not normalized_process_key:
            raise ValueError("process_key must not be blank")
        if not normalized_version:
            raise ValueError("process_version must not be blank")

        package_key = quote(f"{normalized_process_key}:{normalized_version}".replace("'", "''"), safe=":'")
        response = self.client_request(
            "GET",
            self._ENTRY_POINTS_PATH.format(package_key=package_key),
            extra_headers=self._client_folder_headers(folder_id),
        )
        return self._client_extract_value_list(response)

    def client_start_jobs(self, folder_id: int | str, start_request_body: dict[str, Any]) -> dict[str, Any]:
        """Submit a job-start request scoped to one folder.

        Args:
            folder_id: Folder id sent as organizational-unit header.
            start_request_body: `{"startInfo": {...}}` request body.

        Returns:
            dict[str, Any]: Raw start response with created jobs under `value`.

        Raises:
            OrchestratorApiError: Raised for transport or response failures.
        """

        response = self.client_request(
            "POST",
            self._START_JOBS_PATH,
            extra_headers=self._client_folder_headers(folder_id),
            body=start_request_body,
        )
        return self._client_require_object(response)

    def client_get_job(self, folder_id: int | str, job_id: int) -> dict[str, Any]:
        """Return one job entity scoped to one folder.

        Args:
            folder_id: Folder id sent as organizational-unit header.
            job_id: Server job id.

        Returns:
            dict[str, Any]: Raw job entity.

        Raises:
            OrchestratorApiError: Raised for transport or response failures.
        """

        response = self.client_request(
            "GET",
            self._JOB_PATH.format(job_id=int(job_id)),
            extra_headers=self._client_folder_headers(folder_id),
        )
        return self._client_require_object(response)

    def _client_folder_headers(self, folder_id: int | str) -> dict[str, str]:
        return {ORGANIZATION_UNIT_HEADER: self._client_normalize_folder_id(folder_id)}

    def _client_normalize_folder_id(self, folder_id: int | str) -> str:
        """Render folder id as a non-blank scalar string.

        Args:
            folder_id: Folder id value.

        Returns:
            str: Normalized folder id.

        Raises:
            ValueError: Raised when folder id is blank or not an integer.
        """

        normalized_folder_id = str(folder_id).strip()
        if not normalized_folder_id:
            raise ValueError("folder_id must not be blank")
        if not normalized_folder_id.lstrip("-").isdigit():
            raise ValueError(f"folder_id must be an integer, got {normalized_folder_id!r}")
        return normalized_folder_id

    def _client_parse_json(self, payload: bytes) -> Any:
        """Parse a response payload as JSON.

        Args:
            payload: Raw response bytes.

        Returns:
            Any: Parsed JSON value.

        Raises:
            OrchestratorMalformedResponseError: Raised for empty, null, or non-JSON payloads.
        """

        if not payload or not payload.strip():
            raise OrchestratorMalformedResponseError()
        try:
            parsed_payload = json.loads(payload)
        except (UnicodeDecodeError, json.JSONDecodeError) as error:
            raise OrchestratorMalformedResponseError(cause=error) from error
        if parsed_payload is None:
            raise OrchestratorMalformedResponseError()
        return parsed_payload

    def _client_require_object(self, response: Any) -> dict[str, Any]:
        if not isinstance(response, dict):
            raise OrchestratorMalformedResponseError()
        return response

    def _client_extract_value_list(self, response: Any) -> list[dict[str, Any]]:
        """Return the OData `value` collection of a listing response.

        Args:
            response: Parsed listing response.

        Returns:
            list[dict[str, Any]]: Entity objects from `value`.

        Raises:
            OrchestratorMalformedResponseError: Raised when `value` is missing or holds non-objects.
        """

        entities = self._client_require_object(response).get("value")
        if not isinstance(entities, list):
            raise OrchestratorMalformedResponseError()
        if any(not isinstance(entity, dict) for entity in entities):
            raise OrchestratorMalformedResponseError()
        return entities
