# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Authentication package: token storage, verification codes and the OAuth
1.0a handshake that produces a user access token.
"""

from .store import FileTokenStore, MemoryTokenStore, TokenStore
from .verifier import ConsoleVerifier, StaticVerifier, VerificationCodeProvider
from .tokens import ClientTokens

__all__ = [
    "ClientTokens",
    "TokenStore",
    "FileTokenStore",
    "MemoryTokenStore",
    "VerificationCodeProvider",
    "ConsoleVerifier",
    "StaticVerifier",
]
