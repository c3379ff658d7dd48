# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Verification code providers for the OAuth handshake.

After the user authorizes the application on twitter.com they are shown a
PIN. A provider receives the authorization URL and returns that PIN. The
console provider blocks on stdin; it must only be used during setup, never
while streams are running.
"""

import sys
from typing import Awaitable, Callable, Optional, TextIO, Union

VerificationCodeProvider = Callable[[str], Union[str, Awaitable[str]]]

CONSOLE_PROMPT = (
    "Before we can continue ...\nGo to:\n\n\t{url}\n\n"
    "Authorize the application and enter in the verification code: "
)


class ConsoleVerifier:
    """Print the authorization URL and read the code from a line of input."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        reader: Callable[[], str] = input,
    ):
        self._stream = stream
        self._reader = reader

    def __call__(self, authorization_url: str) -> str:
        stream = self._stream or sys.stdout
        stream.write(CONSOLE_PROMPT.format(url=authorization_url))
        stream.flush()
        return self._reader().strip()


class StaticVerifier:
    """Return a code obtained out of band (headless deployments)."""

    def __init__(self, code: str):
        self.code = code
        self.seen_url: Optional[str] = None

    def __call__(self, authorization_url: str) -> str:
        self.seen_url = authorization_url
        return self.code


__all__ = [
    "VerificationCodeProvider",
    "ConsoleVerifier",
    "StaticVerifier",
    "CONSOLE_PROMPT",
]
