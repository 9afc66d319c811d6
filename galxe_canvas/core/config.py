"""
Configuration management for the Galxe canvas service.

Provides centralized, validated configuration from environment variables
with proper type checking and defaults.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_GRAPHQL_ENDPOINT = "https://graphigo.prd.galaxy.eco/query"


class Settings(BaseSettings):
    """Main application settings."""

    # Environment
    environment: str = Field(default="production", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_json: bool = Field(default=False, alias="LOG_JSON")

    # Galxe query service
    graphql_endpoint: str = Field(default=DEFAULT_GRAPHQL_ENDPOINT, alias="GALXE_GRAPHQL_ENDPOINT")
    request_timeout: float = Field(default=30.0, alias="REQUEST_TIMEOUT")

    # Fan-out; unset means one worker per space campaign
    fanout_max_workers: Optional[int] = Field(default=None, alias="FANOUT_MAX_WORKERS")

    # Service runtime
    service_host: str = Field(default="0.0.0.0", alias="SERVICE_HOST")
    service_port: int = Field(default=8080, alias="PORT")
    cors_allowed_origins: str = Field(default="*", alias="CORS_ALLOWED_ORIGINS")

    # Status of error canvases returned from /submit; 400 matches the first release
    submit_error_status: int = Field(default=200, alias="SUBMIT_ERROR_STATUS")

    @field_validator("debug", "log_json", mode="before")
    @classmethod
    def parse_flag(cls, v):
        if isinstance(v, str):
            return v.lower() in ("1", "true", "yes")
        return bool(v)

    @field_validator("fanout_max_workers", mode="before")
    @classmethod
    def parse_max_workers(cls, v):
        if v in ("", None):
            return None
        return v

    @field_validator("fanout_max_workers")
    @classmethod
    def check_max_workers(cls, v):
        if v is not None and v < 1:
            raise ValueError("FANOUT_MAX_WORKERS must be at least 1")
        return v

    @field_validator("submit_error_status")
    @classmethod
    def check_error_status(cls, v):
        if not 200 <= v <= 599:
            raise ValueError("SUBMIT_ERROR_STATUS must be an HTTP status code")
        return v

    def allowed_origins(self) -> List[str]:
        """Return the comma-separated CORS origins as a list."""
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()] or ["*"]

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )


# Global settings instance
settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def configuration_summary(config: Optional[Settings] = None) -> Dict[str, Any]:
    """Return the effective configuration as display-ready pairs."""
    config = config or get_settings()
    return {
        "Environment": config.environment,
        "Debug Mode": config.debug,
        "JSON Logs": config.log_json,
        "GraphQL Endpoint": config.graphql_endpoint,
        "Request Timeout": f"{config.request_timeout:g}s",
        "Fan-out Workers": config.fanout_max_workers or "one per campaign",
        "Listen": f"{config.service_host}:{config.service_port}",
        "CORS Origins": ", ".join(config.allowed_origins()),
        "Submit Error Status": config.submit_error_status,
    }
