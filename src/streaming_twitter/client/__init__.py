# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Client package for the Twitter streaming API.

Public API:
    StreamClient: Facade owning credentials and the shared output queues
    StreamHandle: A stream running in its own task

Components (for advanced usage):
    RequestSender: Signed request sending and status classification
    JSONStreamDecoder: Splits a body of concatenated JSON values
    run_stream: The stream decoding loop
    run_rest: One-shot request decoded as a single JSON document
"""

from .streaming_client import StreamClient
from .types import StreamHandle

from .sender import RequestSender
from .decoder import JSONStreamDecoder
from .stream import run_stream
from .rest import run_rest
from .streams import FILTER, FIREHOSE, SAMPLE, default_streams, validate_filter_form

__all__ = [
    # Main public API
    "StreamClient",
    "StreamHandle",
    # Components
    "RequestSender",
    "JSONStreamDecoder",
    "run_stream",
    "run_rest",
    "default_streams",
    "validate_filter_form",
    "FILTER",
    "FIREHOSE",
    "SAMPLE",
]
