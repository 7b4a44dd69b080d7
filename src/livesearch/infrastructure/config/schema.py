"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from .defaults import DEFAULT_CONFIG

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]
DecoderKind = Literal["rest_json", "padded_json"]


class EndpointConfig(BaseModel):
    """One remote query endpoint and how to read its responses."""

    kind: DecoderKind = Field(
        description="Response decoder: 'rest_json' or 'padded_json'.",
    )
    search_url: str = Field(description="Base URL; the query is sent as 'q'.")
    params: dict[str, str] = Field(
        default_factory=dict,
        description="Fixed query parameters sent before 'q'.",
    )
    error_label: str = Field(
        default="Search",
        description="Prefix of error messages, e.g. 'GitHub search'.",
    )
    results_url_template: str = Field(
        description="Results page URL; '{query}' receives the encoded term.",
    )
    debounce_ms: Optional[int] = Field(
        default=None,
        description="Quiet period for this endpoint. Falls back to search.debounce_ms.",
    )
    padding_prefix: Optional[str] = Field(
        default=None,
        description="Wrapper literal for padded_json feeds (decoder default if unset).",
    )

    @field_validator("results_url_template")
    @classmethod
    def _validate_template(cls, v: str) -> str:
        if "{query}" not in v:
            raise ValueError("results_url_template must contain '{query}'")
        return v

    @field_validator("debounce_ms")
    @classmethod
    def _validate_debounce(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError("debounce_ms must be > 0")
        return v


def _default_endpoints() -> dict[str, EndpointConfig]:
    return {
        name: EndpointConfig.model_validate(raw)
        for name, raw in DEFAULT_CONFIG["endpoints"].items()
    }


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    YAML is expected to be sectioned (http/logging/search/endpoints).
    Environment variables are handled by EnvOverrides(BaseSettings) so that
    load.py controls precedence (defaults < YAML < ENV < CLI).
    """

    # General
    app_name: str = Field(default="livesearch", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=30.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="HTTP timeout in seconds for endpoint requests.",
    )
    http_follow_redirects: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "http_follow_redirects",
            AliasPath("http", "follow_redirects"),
        ),
        description="Whether the HTTP client follows redirects.",
    )
    http_user_agent: str = Field(
        default="livesearch/0.1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="User-Agent for outgoing HTTP requests.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    # Search pipeline (YAML section: search.*)
    debounce_ms: int = Field(
        default=300,
        validation_alias=AliasChoices(
            "debounce_ms",
            AliasPath("search", "debounce_ms"),
        ),
        description="Default quiet period before a typed query is sent.",
    )
    open_with: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "open_with",
            AliasPath("search", "open_with"),
        ),
        description="Browser name for opened URLs (system default if unset).",
    )
    session_ttl_seconds: float = Field(
        default=900.0,
        validation_alias=AliasChoices(
            "session_ttl_seconds",
            AliasPath("search", "session_ttl_seconds"),
        ),
        description="Idle time after which an HTTP API session is closed.",
    )

    endpoints: dict[str, EndpointConfig] = Field(default_factory=_default_endpoints)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @field_validator("debounce_ms")
    @classmethod
    def _validate_debounce(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("debounce_ms must be > 0")
        return v

    @field_validator("session_ttl_seconds")
    @classmethod
    def _validate_session_ttl(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("session_ttl_seconds must be > 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def debounce_seconds_for(self, endpoint: str) -> float:
        """Quiet period for *endpoint*, in seconds."""
        cfg = self.endpoints.get(endpoint)
        ms = cfg.debounce_ms if cfg is not None and cfg.debounce_ms else self.debounce_ms
        return ms / 1000.0

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "follow_redirects": self.http_follow_redirects,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
            "search": {
                "debounce_ms": self.debounce_ms,
                "open_with": self.open_with,
                "session_ttl_seconds": self.session_ttl_seconds,
            },
            "endpoints": {
                name: ep.model_dump(exclude_none=True)
                for name, ep in self.endpoints.items()
            },
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Supported env var examples (flat, explicit):
    - LIVESEARCH_ENVIRONMENT
    - LIVESEARCH_HTTP_TIMEOUT_SECONDS
    - LIVESEARCH_LOG_LEVEL
    - LIVESEARCH_DEBOUNCE_MS
    - LIVESEARCH_OPEN_WITH
    - LIVESEARCH_SESSION_TTL_SECONDS
    """

    model_config = SettingsConfigDict(
        env_prefix="LIVESEARCH_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_follow_redirects: Optional[bool] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    debounce_ms: Optional[int] = None
    open_with: Optional[str] = None
    session_ttl_seconds: Optional[float] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
