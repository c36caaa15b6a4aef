"""Process-wide settings: CLI flags, env vars, and defaults in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``KEEPSAKE_*`` prefix
  3. Code defaults

The settings object is frozen and built once at startup; every handler
reads it by reference, so no locking is needed.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from keepsake_mcp.errors import ConfigurationError

DEFAULT_API_URL = "https://app.keepsake.place/api/v1"
API_KEY_HELP_URL = "https://app.keepsake.place/account"


class KeepsakeSettings(BaseSettings):
    """Unified settings for the keepsake-mcp server.

    Attributes:
        api_url: Base URL every request path is appended to.
        api_key: Bearer token for the Keepsake API. Never logged.
        verbose: Enable DEBUG-level logging for ``keepsake_mcp``.
        log_json: Emit JSON log lines instead of console output.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "KEEPSAKE_",
    }

    api_url: str = DEFAULT_API_URL
    api_key: str = Field(default="", repr=False)

    verbose: bool = False
    log_json: bool = False

    @field_validator("api_url")
    @classmethod
    def _normalize_api_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            return DEFAULT_API_URL
        return value.rstrip("/")

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> KeepsakeSettings:
        """Construct settings from a CLI invocation.

        Flags left at ``None`` are dropped so the env var (or default)
        still applies.
        """
        overrides = {key: value for key, value in cli_flags.items() if value is not None}
        return cls(**overrides)

    def require_api_key(self) -> str:
        """Return the API key, or raise ConfigurationError if it is unset."""
        if not self.api_key:
            msg = (
                "KEEPSAKE_API_KEY environment variable is required.\n"
                f"Generate one at {API_KEY_HELP_URL}"
            )
            raise ConfigurationError(msg)
        return self.api_key
