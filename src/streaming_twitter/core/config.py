# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Centralized configuration loader for the streaming twitter library.

Configuration is resolved in this order (later overrides earlier):
1. System defaults (from constants.py)
2. Explicit keyword overrides passed to ConfigLoader.load()
3. Environment variables prefixed with STREAMING_TWITTER_ (ALWAYS win)
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any

from .constants import (
    ACCESS_TOKEN_URL,
    AUTHORIZE_URL,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_QUEUE_SIZE,
    DEFAULT_READ_TIMEOUT,
    DEFAULT_TOKEN_FILE,
    DEFAULT_USER_AGENT,
    ENV_PREFIX,
    LIB_LOGGER_NAME,
    REQUEST_TOKEN_URL,
)

lib_logger = logging.getLogger(LIB_LOGGER_NAME)


def env_int(key: str, default: int) -> int:
    """Get integer from environment variable."""
    return int(os.getenv(key, str(default)))


def env_float(key: str, default: float) -> float:
    """Get float from environment variable."""
    return float(os.getenv(key, str(default)))


@dataclass(frozen=True)
class ClientConfig:
    """Settings shared by the token provider and the stream client."""

    token_file: str = DEFAULT_TOKEN_FILE
    request_token_url: str = REQUEST_TOKEN_URL
    authorize_url: str = AUTHORIZE_URL
    access_token_url: str = ACCESS_TOKEN_URL
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = DEFAULT_READ_TIMEOUT
    queue_size: int = DEFAULT_QUEUE_SIZE
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        if self.queue_size < 0:
            raise ValueError("queue_size must be >= 0")


class ConfigLoader:
    """
    Build a ClientConfig from defaults, overrides and the environment.

    Usage:
        config = ConfigLoader().load(token_file="~/.twitter/tokens.json")
    """

    # Field name -> environment variable suffix
    ENV_FIELDS = {
        "token_file": "TOKEN_FILE",
        "request_token_url": "REQUEST_TOKEN_URL",
        "authorize_url": "AUTHORIZE_URL",
        "access_token_url": "ACCESS_TOKEN_URL",
        "connect_timeout": "CONNECT_TIMEOUT",
        "read_timeout": "READ_TIMEOUT",
        "queue_size": "QUEUE_SIZE",
        "user_agent": "USER_AGENT",
    }

    def __init__(self, env_prefix: str = ENV_PREFIX):
        self._prefix = env_prefix

    def load(self, **overrides: Any) -> ClientConfig:
        """
        Load configuration.

        Args:
            **overrides: Field values applied over the defaults. Unknown
                names raise TypeError, None values are ignored.

        Returns:
            Complete ClientConfig
        """
        known = {f.name for f in fields(ClientConfig)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown config fields: {', '.join(sorted(unknown))}")

        config = ClientConfig()
        explicit = {k: v for k, v in overrides.items() if v is not None}
        if explicit:
            config = replace(config, **explicit)

        return self._apply_env_overrides(config)

    def _apply_env_overrides(self, config: ClientConfig) -> ClientConfig:
        for field in fields(ClientConfig):
            env_key = self._prefix + self.ENV_FIELDS[field.name]
            if os.getenv(env_key) is None:
                continue
            default = getattr(config, field.name)
            try:
                if isinstance(default, str):
                    value = os.environ[env_key]
                elif isinstance(default, int):
                    value = env_int(env_key, default)
                else:
                    value = env_float(env_key, default)
                # Runs ClientConfig validation on this field alone
                config = replace(config, **{field.name: value})
            except ValueError:
                lib_logger.warning(
                    f"Invalid {env_key}={os.environ[env_key]!r}, keeping {default!r}"
                )
                continue
            lib_logger.debug(f"Config override from {env_key}")

        return config


def load_config(**overrides: Any) -> ClientConfig:
    """Shortcut for ``ConfigLoader().load(**overrides)``."""
    return ConfigLoader().load(**overrides)


__all__ = [
    "ClientConfig",
    "ConfigLoader",
    "load_config",
    "env_int",
    "env_float",
]
