# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Stream decoding loop.

Opens one streaming request and turns its body into records on the
caller's queue, errors on the shared errors queue and, once the response
has been released, a single Finished signal.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

import httpx

from ..core.constants import LIB_LOGGER_NAME
from ..core.errors import DecodeError, StreamingTwitterError, TransportError
from ..core.types import Endpoint, Finished
from ..models.status import TwitterStatus
from .decoder import JSONStreamDecoder
from .sender import FormValues, RequestSender

lib_logger = logging.getLogger(LIB_LOGGER_NAME)

RecordFactory = Callable[[Any], Any]

# Errors raised by httpx while reading an open body
_READ_ERRORS = (httpx.TransportError, httpx.StreamError, OSError)


async def _close_on_cancel(cancel: asyncio.Event, response: httpx.Response) -> None:
    """Release the response as soon as ``cancel`` is set, unblocking a pending read."""
    await cancel.wait()
    await response.aclose()


async def _put(queue: "asyncio.Queue[Any]", item: Any, cancel: Optional[asyncio.Event]) -> bool:
    """Put ``item`` on ``queue``; False if ``cancel`` fires while waiting for room."""
    if cancel is None:
        await queue.put(item)
        return True
    if not queue.full():
        queue.put_nowait(item)
        return True

    put = asyncio.ensure_future(queue.put(item))
    stop = asyncio.ensure_future(cancel.wait())
    try:
        await asyncio.wait({put, stop}, return_when=asyncio.FIRST_COMPLETED)
        return put.done() and not put.cancelled()
    finally:
        for task in (put, stop):
            if not task.done():
                task.cancel()
        await asyncio.gather(put, stop, return_exceptions=True)


async def run_stream(
    sender: RequestSender,
    out: "asyncio.Queue[Any]",
    errors: "asyncio.Queue[BaseException]",
    finished: "asyncio.Queue[Finished]",
    endpoint: Endpoint,
    form: Optional[FormValues] = None,
    *,
    cancel: Optional[asyncio.Event] = None,
    record_factory: RecordFactory = TwitterStatus.from_dict,
) -> None:
    """
    Consume a streaming endpoint until the body ends, fails or is cancelled.

    If no response is obtained the error goes to ``errors`` and nothing is
    put on ``finished``. Once a response exists, exactly one Finished is
    put on ``finished`` after the response has been closed, whatever ends
    the loop (including task cancellation).

    Malformed records are reported as non-terminal DecodeErrors and the loop
    continues. EOF, truncation and network errors are terminal.
    Setting ``cancel`` also ends a loop blocked on a full queue; the record
    or error it was delivering is dropped.
    """
    try:
        response = await sender.send(endpoint, form)
    except StreamingTwitterError as e:
        await errors.put(e)
        return

    lib_logger.debug(f"Stream opened: {endpoint}")

    watcher: Optional[asyncio.Task] = None
    if cancel is not None:
        watcher = asyncio.create_task(_close_on_cancel(cancel, response))

    try:
        decoder = JSONStreamDecoder(response.aiter_bytes())
        while cancel is None or not cancel.is_set():
            try:
                value = await decoder.next_value()
            except DecodeError as e:
                if cancel is not None and cancel.is_set():
                    break
                if not await _put(errors, e, cancel):
                    break
                if e.terminal:
                    lib_logger.debug(f"Stream {endpoint} ended: {e}")
                    break
                lib_logger.debug(f"Skipping malformed value on {endpoint}: {e}")
                continue
            except _READ_ERRORS as e:
                if cancel is not None and cancel.is_set():
                    break
                lib_logger.debug(f"Read failed on {endpoint}: {type(e).__name__}: {e}")
                await _put(errors, TransportError(e), cancel)
                break
            except Exception:
                # Closing a response under a pending read may surface as anything
                if cancel is not None and cancel.is_set():
                    break
                raise

            try:
                record = record_factory(value)
            except (ValueError, TypeError) as e:
                lib_logger.debug(f"Skipping invalid record on {endpoint}: {e}")
                if not await _put(errors, DecodeError(str(e), e), cancel):
                    break
                continue

            if not await _put(out, record, cancel):
                lib_logger.debug(f"Dropping undelivered record on cancelled {endpoint}")
                break
    finally:
        if watcher is not None:
            if not watcher.done():
                watcher.cancel()
            await asyncio.gather(watcher, return_exceptions=True)
        await response.aclose()
        lib_logger.debug(f"Stream closed: {endpoint}")
        await finished.put(Finished(endpoint))


__all__ = ["run_stream", "RecordFactory"]
