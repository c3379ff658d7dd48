# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Core package for the streaming twitter library.

Provides shared infrastructure used by the auth and client packages:
- types: Credentials, endpoint descriptors and the completion signal
- errors: All custom exceptions and status classification
- config: ConfigLoader for centralized configuration
- constants: Default values and fixed API URLs
"""

from .types import (
    AccessMethod,
    Credentials,
    CustomTransport,
    Endpoint,
    Finished,
    TokenBundle,
)

from .errors import (
    StreamingTwitterError,
    StoreError,
    CredentialError,
    AuthorizationError,
    TransportError,
    APIError,
    DecodeError,
    StreamEOFError,
    UnexpectedEOFError,
    classify_status,
    is_terminal,
)

from .config import ClientConfig, ConfigLoader, load_config

__all__ = [
    # Types
    "AccessMethod",
    "Credentials",
    "CustomTransport",
    "Endpoint",
    "Finished",
    "TokenBundle",
    # Errors
    "StreamingTwitterError",
    "StoreError",
    "CredentialError",
    "AuthorizationError",
    "TransportError",
    "APIError",
    "DecodeError",
    "StreamEOFError",
    "UnexpectedEOFError",
    "classify_status",
    "is_terminal",
    # Config
    "ClientConfig",
    "ConfigLoader",
    "load_config",
]
