"""Typed runtime settings with dotenv support and startup validation."""

from typing import Literal

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for API runtime and Orchestrator access.

    Environment variable names map directly to field names in uppercase.
    Example: `uipath_tenant` reads from `UIPATH_TENANT`.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        log_level: Minimum emitted log level.
        log_json: Render logs as JSON lines instead of console output.
        uipath_cloud_url: Cloud host URL preceding organization and tenant.
        uipath_organization: Cloud organization name.
        uipath_tenant: Tenant name.
        uipath_pat_token: Personal access token.
        uipath_request_timeout_seconds: Per-request HTTP timeout.
        uipath_folder_page_size: Page size of the folder listing.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment_name: str = Field(default="development")
    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=8000, ge=1, le=65535)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_json: bool = Field(default=True)
    uipath_cloud_url: str = Field(default="https://cloud.uipath.com", min_length=1)
    uipath_organization: str = Field(min_length=1)
    uipath_tenant: str = Field(min_length=1)
    uipath_pat_token: SecretStr
    uipath_request_timeout_seconds: float = Field(default=30.0, gt=0)
    uipath_folder_page_size: int = Field(default=100, ge=1, le=1000)

    @field_validator("uipath_cloud_url", "uipath_organization", "uipath_tenant")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("uipath_cloud_url")
    @classmethod
    def _validate_cloud_url_scheme(cls, value: str) -> str:
        if not value.startswith(("https://", "http://")):
            raise ValueError("uipath_cloud_url must start with http:// or https://")
        return value.rstrip("/")

    @field_validator("uipath_pat_token")
    @classmethod
    def _validate_token_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("uipath_pat_token must not be blank")
        return value


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when required settings are missing or invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
