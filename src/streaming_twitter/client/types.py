# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Client-specific type definitions.

Types that are only used within the client package.
Shared types are in core/types.py.
"""

import asyncio
from dataclasses import dataclass
from typing import Any

from ..core.types import Endpoint


@dataclass
class StreamHandle:
    """
    A stream running in its own task.

    Records arrive on ``records``; errors and the Finished signal go to the
    owning client's shared queues.
    """

    endpoint: Endpoint
    records: "asyncio.Queue[Any]"
    task: "asyncio.Task[None]"
    cancel_event: asyncio.Event

    @property
    def done(self) -> bool:
        return self.task.done()

    def cancel(self) -> None:
        """Ask the stream to stop; it still closes the body and emits Finished."""
        self.cancel_event.set()

    async def wait(self) -> None:
        """Wait until the stream task has exited."""
        await self.task

    def __str__(self) -> str:
        state = "done" if self.done else "running"
        return f"{self.endpoint} ({state})"


__all__ = ["StreamHandle"]
