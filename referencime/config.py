# =============================================================================
# referencime/config.py  —  Runtime settings from the environment
# =============================================================================
#
# ENVIRONMENT VARIABLES:
#   REFERENCIME_API_KEY    (required)  Bearer token for the Referencime API
#   REFERENCIME_API_URL    (optional)  Base URL of the easy-links REST API
#   REFERENCIME_TIMEOUT    (optional)  Per-request timeout, in seconds
#   REFERENCIME_LOG_LEVEL  (optional)  Python logging level name
#
# main.py calls load_dotenv() before load_settings(), so any of these can
# also live in a .env file next to the project.
#
# Settings is frozen: it is read once at startup and then shared, read-only,
# by every tool call.
# =============================================================================

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from referencime.errors import ConfigError, MissingCredentialError

API_KEY_ENV = "REFERENCIME_API_KEY"
API_URL_ENV = "REFERENCIME_API_URL"
TIMEOUT_ENV = "REFERENCIME_TIMEOUT"
LOG_LEVEL_ENV = "REFERENCIME_LOG_LEVEL"

DEFAULT_API_URL = "https://referencime.fr/wp-json/easy-links/v1"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    """Everything the server needs to talk to the backend."""

    api_key: str
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL

    def __repr__(self) -> str:
        # Keep the key out of logs and tracebacks.
        return (
            f"Settings(api_key='***', api_url={self.api_url!r}, "
            f"timeout={self.timeout!r}, log_level={self.log_level!r})"
        )


def _parse_timeout(raw: str | None) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{TIMEOUT_ENV} must be a number of seconds, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{TIMEOUT_ENV} must be positive, got {raw!r}")
    return value


def _parse_log_level(raw: str | None) -> str:
    level = (raw or DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"{LOG_LEVEL_ENV} is not a logging level: {raw!r}")
    return level


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        environ: Mapping to read from.  Defaults to ``os.environ``.

    Returns:
        A populated, immutable Settings.

    Raises:
        MissingCredentialError: REFERENCIME_API_KEY is unset or blank.
        ConfigError: another variable holds an unusable value.
    """
    env = os.environ if environ is None else environ

    api_key = (env.get(API_KEY_ENV) or "").strip()
    if not api_key:
        raise MissingCredentialError(API_KEY_ENV)

    api_url = (env.get(API_URL_ENV) or DEFAULT_API_URL).strip().rstrip("/")

    return Settings(
        api_key=api_key,
        api_url=api_url,
        timeout=_parse_timeout(env.get(TIMEOUT_ENV)),
        log_level=_parse_log_level(env.get(LOG_LEVEL_ENV)),
    )
