# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""Fake response bodies and small builders shared by the test modules."""

import asyncio
import json
from typing import Iterable, List, Optional

import httpx

from streaming_twitter.client.sender import RequestSender
from streaming_twitter.core import Credentials

APP = Credentials("consumer-key", "consumer-secret")
USER = Credentials("user-token", "user-secret")


class ChunkStream(httpx.AsyncByteStream):
    """
    Response body yielding fixed chunks.

    After the chunks it either ends, raises ``error``, or (``hang=True``)
    waits until the body is closed and then fails like a dropped socket.
    """

    def __init__(
        self,
        chunks: Iterable[bytes] = (),
        error: Optional[BaseException] = None,
        hang: bool = False,
    ):
        self.chunks: List[bytes] = list(chunks)
        self.error = error
        self.hang = hang
        self.closed = False
        self.close_calls = 0
        self._closed_event = asyncio.Event()

    async def __aiter__(self):
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error
        if self.hang:
            await self._closed_event.wait()
            raise httpx.ReadError("connection closed")

    async def aclose(self) -> None:
        self.closed = True
        self.close_calls += 1
        self._closed_event.set()


def documents(*values) -> bytes:
    """Encode values the way the streaming API sends them."""
    return b"".join(json.dumps(v).encode() + b"\r\n" for v in values)


def status(id_str: str, text: str = "hello", screen_name: str = "someone") -> dict:
    return {
        "id_str": id_str,
        "text": text,
        "created_at": "Sat Sep 04 16:10:54 +0000 2010",
        "user": {"id_str": "99", "screen_name": screen_name, "followers_count": 3},
    }


def drain(queue: asyncio.Queue) -> list:
    items = []
    while not queue.empty():
        items.append(queue.get_nowait())
    return items


def make_sender(handler) -> RequestSender:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RequestSender(http, APP, USER)
