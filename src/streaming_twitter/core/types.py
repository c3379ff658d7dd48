# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Shared type definitions for the streaming twitter library.

Credentials, endpoint descriptors and the completion signal are used by
the auth, client and CLI packages alike.
"""

from dataclasses import dataclass
from enum import Enum
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Dict,
    Mapping,
    Optional,
)

from .constants import TOKEN_ROLE_APP, TOKEN_ROLE_USER

if TYPE_CHECKING:
    import httpx


# =============================================================================
# CREDENTIALS
# =============================================================================


@dataclass(frozen=True)
class Credentials:
    """An OAuth 1.0a identifier/secret pair (consumer key or access token)."""

    token: str = ""
    secret: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.token) and bool(self.secret)

    def to_dict(self) -> Dict[str, str]:
        return {"Token": self.token, "Secret": self.secret}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional["Credentials"]:
        if data is None:
            return None
        if not isinstance(data, Mapping):
            raise ValueError(f"credential entry must be an object, got {type(data).__name__}")
        return cls(
            token=str(data.get("Token") or ""),
            secret=str(data.get("Secret") or ""),
        )

    def __repr__(self) -> str:
        # Never print secrets in tracebacks or logs
        masked = f"{self.token[:4]}..." if self.token else ""
        return f"Credentials(token={masked!r}, secret='***')"


@dataclass(frozen=True)
class TokenBundle:
    """
    The persisted credential document.

    Serialized as ``{"App": {"Token": ..., "Secret": ...}, "User": {...}}``.
    The application role is required for any request; the user role is
    filled in by the OAuth handshake.
    """

    app: Optional[Credentials] = None
    user: Optional[Credentials] = None

    def with_user(self, user: Credentials) -> "TokenBundle":
        return TokenBundle(app=self.app, user=user)

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        data: Dict[str, Dict[str, str]] = {}
        if self.app is not None:
            data[TOKEN_ROLE_APP] = self.app.to_dict()
        if self.user is not None:
            data[TOKEN_ROLE_USER] = self.user.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TokenBundle":
        if not isinstance(data, Mapping):
            raise ValueError("token document must be a JSON object")
        return cls(
            app=Credentials.from_dict(data.get(TOKEN_ROLE_APP)),
            user=Credentials.from_dict(data.get(TOKEN_ROLE_USER)),
        )


# =============================================================================
# ENDPOINTS
# =============================================================================


class AccessMethod(str, Enum):
    """How an endpoint is reached."""

    GET = "get"
    POST = "post"
    CUSTOM = "custom"  # Caller-supplied transport function


# async (http, user_credentials, url, form) -> httpx.Response
CustomTransport = Callable[
    ["httpx.AsyncClient", Optional[Credentials], str, Mapping[str, Any]],
    Awaitable["httpx.Response"],
]


@dataclass(frozen=True)
class Endpoint:
    """
    Describes one API endpoint.

    A CUSTOM endpoint must carry a transport; for GET and POST the
    transport is always None.
    """

    method: AccessMethod
    url: str = ""
    transport: Optional[CustomTransport] = None

    def __post_init__(self):
        method = AccessMethod(self.method)
        object.__setattr__(self, "method", method)
        if method is AccessMethod.CUSTOM:
            if self.transport is None:
                raise ValueError("a custom endpoint requires a transport function")
        elif self.transport is not None:
            object.__setattr__(self, "transport", None)

    @classmethod
    def get(cls, url: str) -> "Endpoint":
        return cls(AccessMethod.GET, url)

    @classmethod
    def post(cls, url: str) -> "Endpoint":
        return cls(AccessMethod.POST, url)

    @classmethod
    def custom(cls, transport: CustomTransport, url: str = "") -> "Endpoint":
        return cls(AccessMethod.CUSTOM, url, transport)

    @classmethod
    def parse(cls, method: str, url: str) -> "Endpoint":
        """Build from a method name; anything other than "post" is a GET."""
        if method.lower() == AccessMethod.POST.value:
            return cls.post(url)
        return cls.get(url)

    def __str__(self) -> str:
        return f"{self.method.value.upper()} {self.url or '<custom>'}"


# =============================================================================
# SIGNALS
# =============================================================================


@dataclass(frozen=True)
class Finished:
    """
    Completion signal: the call's response has been released and nothing
    more will be emitted for it. Exactly one per call that obtained a
    response, always the last item that call emits.
    """

    endpoint: Optional[Endpoint] = None


__all__ = [
    "Credentials",
    "TokenBundle",
    "AccessMethod",
    "CustomTransport",
    "Endpoint",
    "Finished",
]
