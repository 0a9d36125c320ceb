"""
AppBot client configuration.

Settings are resolved once from the process environment and passed by
reference into the client and the MCP server. Nothing here reads the
environment after startup.

Environment:
- APPBOT_API_BASE_URL: API root (default: https://api.appbot.example.com)
- APPBOT_API_KEY: bearer token (required)
- APPBOT_API_VERSION: path version segment (default: v1)
- MCP_SERVER_NAME / MCP_SERVER_VERSION: server identity, also sent as User-Agent
- RATE_LIMIT_REQUESTS_PER_MINUTE: parsed for compatibility, not enforced
- LOG_LEVEL: debug | info | warning | error | critical (default: info)
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from appbot_client.errors import ConfigurationError

DEFAULT_API_BASE_URL = "https://api.appbot.example.com"
DEFAULT_API_VERSION = "v1"
DEFAULT_SERVER_NAME = "appbot-mcp-server"
DEFAULT_SERVER_VERSION = "1.0.0"
DEFAULT_RATE_LIMIT = 60
DEFAULT_LOG_LEVEL = "info"

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


@dataclass(frozen=True)
class Settings:
    """Immutable process configuration"""

    api_key: str
    api_base_url: str = DEFAULT_API_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    server_name: str = DEFAULT_SERVER_NAME
    server_version: str = DEFAULT_SERVER_VERSION
    # Kept so existing .env files stay valid; no limiter consults it.
    rate_limit_requests_per_minute: int = DEFAULT_RATE_LIMIT
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def api_url(self) -> str:
        """Versioned API root, e.g. https://api.appbot.example.com/v1"""
        return f"{self.api_base_url}/{self.api_version}"

    @property
    def user_agent(self) -> str:
        return f"{self.server_name}/{self.server_version}"

    @property
    def logging_level(self) -> int:
        return LOG_LEVELS[self.log_level]


def _get(environ: Mapping[str, str], name: str, default: str) -> str:
    """Read an env var, treating empty/blank values as unset"""
    value = environ.get(name, "").strip()
    return value or default


def _parse_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = _get(environ, name, str(default))
    try:
        return int(raw)
    except ValueError:
        msg = f"Invalid {name} value: {raw}"
        raise ConfigurationError(msg) from None


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build Settings from the environment.

    Args:
        environ: Mapping to read from (default: os.environ)

    Raises:
        ConfigurationError: APPBOT_API_KEY missing, or a value fails to parse
    """
    env = os.environ if environ is None else environ

    api_key = _get(env, "APPBOT_API_KEY", "")
    if not api_key:
        msg = "APPBOT_API_KEY environment variable is required"
        raise ConfigurationError(msg)

    log_level = _get(env, "LOG_LEVEL", DEFAULT_LOG_LEVEL).lower()
    if log_level not in LOG_LEVELS:
        msg = f"Invalid LOG_LEVEL value: {log_level} (expected one of {', '.join(LOG_LEVELS)})"
        raise ConfigurationError(msg)

    return Settings(
        api_key=api_key,
        api_base_url=_get(env, "APPBOT_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
        api_version=_get(env, "APPBOT_API_VERSION", DEFAULT_API_VERSION),
        server_name=_get(env, "MCP_SERVER_NAME", DEFAULT_SERVER_NAME),
        server_version=_get(env, "MCP_SERVER_VERSION", DEFAULT_SERVER_VERSION),
        rate_limit_requests_per_minute=_parse_int(
            env, "RATE_LIMIT_REQUESTS_PER_MINUTE", DEFAULT_RATE_LIMIT
        ),
        log_level=log_level,
    )
