"""Shared constants and runtime settings.

This module centralizes the base URL, page-size bounds and pacing delays used
by the transport, traversal and session layers, plus a small settings object
loaded from the environment by the CLI.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .core.exceptions import ConfigError

BASE_URL = "https://api.pagerduty.com"
USERS_PATH = "/users"
REQUEST_TIMEOUT = 30.0

# Remote accepts 1..100 records per request
MIN_PAGE_LIMIT = 1
MAX_PAGE_LIMIT = 100
DEFAULT_PAGE_SIZE = 10

# Fixed wait after a 429, before the error is reported
RATE_LIMIT_BACKOFF = 30.0

BULK_PAGE_SIZE = MAX_PAGE_LIMIT
BULK_PACING_DELAY = 0.1

# Wire keys of the collection and single-entity documents
ITEMS_KEY = "users"
ENTITY_KEY = "user"

TOKEN_ENV_VAR = "PAGERDUTY_API_TOKEN"
BASE_URL_ENV_VAR = "ROSTER_BASE_URL"
PAGE_SIZE_ENV_VAR = "ROSTER_PAGE_SIZE"
BACKOFF_ENV_VAR = "ROSTER_BACKOFF_SECONDS"
EXPORT_DIR_ENV_VAR = "ROSTER_EXPORT_DIR"


@dataclass(frozen=True)
class RosterSettings:
    """Runtime settings for a roster client and session.

    Attributes:
        api_token: API token, turned into the Authorization header value
        base_url: REST base URL
        page_size: Initial page size for interactive sessions
        backoff_seconds: Fixed wait after a rate-limited request
        bulk_pacing: Delay between pages during bulk loads
        export_dir: Directory export files are written to
        timeout: Total request timeout in seconds
    """

    api_token: str
    base_url: str = BASE_URL
    page_size: int = DEFAULT_PAGE_SIZE
    backoff_seconds: float = RATE_LIMIT_BACKOFF
    bulk_pacing: float = BULK_PACING_DELAY
    export_dir: Path = Path(".")
    timeout: float = REQUEST_TIMEOUT

    def __post_init__(self) -> None:
        if not self.api_token or not self.api_token.strip():
            raise ConfigError("API token cannot be blank")
        if not MIN_PAGE_LIMIT <= self.page_size <= MAX_PAGE_LIMIT:
            raise ConfigError(
                f"Page size must be between {MIN_PAGE_LIMIT} and {MAX_PAGE_LIMIT}"
            )
        if self.backoff_seconds < 0:
            raise ConfigError("Backoff cannot be negative")
        if self.bulk_pacing < 0:
            raise ConfigError("Bulk pacing cannot be negative")

    @property
    def authorization(self) -> str:
        """Opaque Authorization header value."""
        return f"Token token={self.api_token}"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RosterSettings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)

        Returns:
            RosterSettings instance

        Raises:
            ConfigError: If the token is missing or an override is malformed
        """
        env = os.environ if environ is None else environ

        token = env.get(TOKEN_ENV_VAR, "").strip()
        if not token:
            raise ConfigError(
                f"{TOKEN_ENV_VAR} is not set. "
                f"Set it with: export {TOKEN_ENV_VAR}=your_token_here"
            )

        kwargs: dict[str, object] = {"api_token": token}
        if env.get(BASE_URL_ENV_VAR):
            kwargs["base_url"] = env[BASE_URL_ENV_VAR].rstrip("/")
        if env.get(PAGE_SIZE_ENV_VAR):
            kwargs["page_size"] = _parse_number(env, PAGE_SIZE_ENV_VAR, int)
        if env.get(BACKOFF_ENV_VAR):
            kwargs["backoff_seconds"] = _parse_number(env, BACKOFF_ENV_VAR, float)
        if env.get(EXPORT_DIR_ENV_VAR):
            kwargs["export_dir"] = Path(env[EXPORT_DIR_ENV_VAR])

        return cls(**kwargs)  # type: ignore[arg-type]


def _parse_number(env: Mapping[str, str], key: str, kind: type) -> int | float:
    raw = env[key].strip()
    try:
        return kind(raw)
    except ValueError as e:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from e
