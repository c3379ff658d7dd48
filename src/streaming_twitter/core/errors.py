# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Error taxonomy for the streaming twitter library.

Every failure reaches the caller either as a raised exception (setup calls
such as authentication) or as an item on a client's Errors queue (request
and stream calls). Nothing is retried internally; the attributes carried
by each error (status code, underlying cause, terminal flag) are what a
caller needs to decide on reconnection or backoff.
"""

from typing import Optional

from .constants import API_ERROR_MESSAGES


class StreamingTwitterError(Exception):
    """Base class for all errors raised or emitted by this library."""


class StoreError(StreamingTwitterError):
    """The persisted token store could not be read or written."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class CredentialError(StreamingTwitterError):
    """
    Application or user credentials are missing or incomplete.

    Not retried: a request cannot be signed until the token store is fixed.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class AuthorizationError(StreamingTwitterError):
    """The OAuth handshake with the remote authorization endpoints failed."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class TransportError(StreamingTwitterError):
    """
    Network-level failure sending a request or reading a response body.

    Always terminal for the call that produced it. ``str()`` is the message
    of the underlying cause so callers see the original network error text.
    """

    def __init__(self, cause: BaseException, message: Optional[str] = None):
        super().__init__(message or str(cause) or type(cause).__name__)
        self.cause = cause


class APIError(StreamingTwitterError):
    """
    The API answered with one of the documented error statuses.

    Attributes:
        code: Numeric HTTP status
        message: Fixed human-readable explanation for that status
    """

    def __init__(self, code: int, message: str):
        super().__init__(f"{message} ({code})")
        self.code = code
        self.message = message


class DecodeError(StreamingTwitterError):
    """
    A value from a response body could not be decoded.

    ``terminal`` is False for a malformed individual record (the stream
    keeps going) and True when the failure means the body is finished.
    """

    terminal = False

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class StreamEOFError(DecodeError):
    """The body ended cleanly between two values."""

    terminal = True

    def __init__(self, message: str = "EOF"):
        super().__init__(message)


class UnexpectedEOFError(DecodeError):
    """The body ended in the middle of a value (truncated stream)."""

    terminal = True

    def __init__(self, message: str = "unexpected EOF"):
        super().__init__(message)


def classify_status(status_code: int) -> Optional[APIError]:
    """
    Map an HTTP status to an APIError.

    Returns None for every status outside the documented table; those
    responses are handed to the caller unchanged.
    """
    message = API_ERROR_MESSAGES.get(status_code)
    if message is None:
        return None
    return APIError(status_code, message)


def is_terminal(error: BaseException) -> bool:
    """Return True if ``error`` ends the call that emitted it."""
    if isinstance(error, DecodeError):
        return error.terminal
    return True


__all__ = [
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
]
