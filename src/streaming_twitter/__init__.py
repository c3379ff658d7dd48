# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Asynchronous client for the Twitter streaming API.

Authenticates with OAuth 1.0a (persisting the user token between runs),
opens long-lived streaming requests and decodes their bodies into
TwitterStatus records delivered on asyncio queues.
"""

import logging

from .auth import (
    ClientTokens,
    ConsoleVerifier,
    FileTokenStore,
    MemoryTokenStore,
    StaticVerifier,
    TokenStore,
)
from .client import StreamClient, StreamHandle
from .core import (
    AccessMethod,
    APIError,
    AuthorizationError,
    ClientConfig,
    ConfigLoader,
    CredentialError,
    Credentials,
    DecodeError,
    Endpoint,
    Finished,
    StoreError,
    StreamEOFError,
    StreamingTwitterError,
    TokenBundle,
    TransportError,
    UnexpectedEOFError,
    is_terminal,
    load_config,
)
from .core.constants import LIB_LOGGER_NAME
from .models import TwitterStatus, TwitterUser, parse_twitter_time

__version__ = "0.3.0"

# The library never configures handlers; applications decide where logs go
logging.getLogger(LIB_LOGGER_NAME).addHandler(logging.NullHandler())

__all__ = [
    "StreamClient",
    "StreamHandle",
    "ClientTokens",
    "TokenStore",
    "FileTokenStore",
    "MemoryTokenStore",
    "ConsoleVerifier",
    "StaticVerifier",
    "ClientConfig",
    "ConfigLoader",
    "load_config",
    "AccessMethod",
    "Credentials",
    "TokenBundle",
    "Endpoint",
    "Finished",
    "StreamingTwitterError",
    "StoreError",
    "CredentialError",
    "AuthorizationError",
    "TransportError",
    "APIError",
    "DecodeError",
    "StreamEOFError",
    "UnexpectedEOFError",
    "is_terminal",
    "TwitterStatus",
    "TwitterUser",
    "parse_twitter_time",
]
