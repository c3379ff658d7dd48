# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

# src/streaming_twitter/client/rest.py

import asyncio
import json
import logging
from typing import Any, Callable, Optional

import httpx

from ..core.constants import LIB_LOGGER_NAME
from ..core.errors import DecodeError, StreamingTwitterError, TransportError
from ..core.types import Endpoint, Finished
from .sender import FormValues, RequestSender

lib_logger = logging.getLogger(LIB_LOGGER_NAME)


def _merge(into: Any, data: Any) -> None:
    if isinstance(into, list):
        if isinstance(data, list):
            into.extend(data)
        else:
            into.append(data)
    elif isinstance(into, dict):
        if not isinstance(data, dict):
            raise TypeError(f"cannot merge {type(data).__name__} into a dict")
        into.update(data)
    else:
        raise TypeError(f"cannot merge into {type(into).__name__}")


async def run_rest(
    sender: RequestSender,
    errors: "asyncio.Queue[BaseException]",
    finished: "asyncio.Queue[Finished]",
    endpoint: Endpoint,
    form: Optional[FormValues] = None,
    *,
    into: Any = None,
    model: Optional[Callable[[Any], Any]] = None,
) -> Any:
    """
    Issue one request and decode its whole body as a single JSON document.

    Args:
        into: Optional list or dict the decoded result is merged into
        model: Optional converter applied to the decoded JSON
            (e.g. ``TwitterUser.list_from``)

    Returns:
        The decoded (and converted) value, or None when the request or the
        decoding failed. Failures go to ``errors``; a Finished is emitted
        whenever a response was obtained.
    """
    try:
        response = await sender.send(endpoint, form)
    except StreamingTwitterError as e:
        await errors.put(e)
        return None

    try:
        try:
            body = await response.aread()
        except (httpx.TransportError, httpx.StreamError, OSError) as e:
            await errors.put(TransportError(e))
            return None

        try:
            data = json.loads(body)
            if model is not None:
                data = model(data)
            if into is not None:
                _merge(into, data)
        except (ValueError, TypeError) as e:
            lib_logger.debug(f"Could not decode response from {endpoint}: {e}")
            await errors.put(DecodeError(str(e), e))
            return None

        return data
    finally:
        await response.aclose()
        await finished.put(Finished(endpoint))


__all__ = ["run_rest"]
