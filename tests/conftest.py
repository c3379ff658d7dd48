# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

import asyncio

import pytest

from helpers import APP, USER
from streaming_twitter.auth import MemoryTokenStore
from streaming_twitter.core import ClientConfig, TokenBundle


@pytest.fixture
def config():
    return ClientConfig(queue_size=0)


@pytest.fixture
def token_store():
    return MemoryTokenStore(TokenBundle(app=APP, user=USER))


@pytest.fixture
def queues():
    """(out, errors, finished), unbounded so tests can inspect them afterwards."""
    return asyncio.Queue(), asyncio.Queue(), asyncio.Queue()
