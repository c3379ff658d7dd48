# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

import asyncio
import json

import httpx
import pytest
import pytest_asyncio

from helpers import APP, USER, ChunkStream, documents, drain, status
from streaming_twitter import ClientTokens, StreamClient
from streaming_twitter.client import FILTER, FIREHOSE, SAMPLE
from streaming_twitter.core import (
    AccessMethod,
    CredentialError,
    Endpoint,
    Finished,
    StreamEOFError,
)
from streaming_twitter.core.constants import (
    FILTER_STREAM_URL,
    FIREHOSE_STREAM_URL,
    SAMPLE_STREAM_URL,
    USERS_LOOKUP_URL,
)
from streaming_twitter.models import TwitterUser


def api(requests=None, hang=False):
    """MockTransport serving two statuses on the stream URLs and a user lookup."""

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        if str(request.url).startswith(USERS_LOOKUP_URL):
            return httpx.Response(
                200, stream=ChunkStream([json.dumps([{"id_str": "12", "screen_name": "a"}]).encode()])
            )
        body = ChunkStream([documents(status("1"), status("2"))], hang=hang)
        return httpx.Response(200, stream=body)

    return httpx.MockTransport(handler)


@pytest_asyncio.fixture
async def client(config, token_store):
    async with StreamClient(config, http=httpx.AsyncClient(transport=api())) as client:
        await client.authenticate(ClientTokens(token_store, config=config))
        yield client


class TestConstruction:
    def test_builtin_streams(self, config):
        client = StreamClient(config, http=httpx.AsyncClient())
        assert client.streams[FILTER] == Endpoint(AccessMethod.POST, FILTER_STREAM_URL)
        assert client.streams[FIREHOSE] == Endpoint(AccessMethod.GET, FIREHOSE_STREAM_URL)
        assert client.streams[SAMPLE] == Endpoint(AccessMethod.GET, SAMPLE_STREAM_URL)

    def test_stream_table_is_read_only_and_per_client(self, config):
        first = StreamClient(config, http=httpx.AsyncClient())
        second = StreamClient(config, http=httpx.AsyncClient())
        with pytest.raises(TypeError):
            first.streams["Custom"] = Endpoint.get("https://example.com")
        assert first.streams is not second.streams

    def test_queues_use_configured_size(self, config):
        client = StreamClient(config, http=httpx.AsyncClient())
        assert client.errors.maxsize == config.queue_size
        assert client.finished.maxsize == config.queue_size

    def test_resolve_unknown_stream(self, config):
        client = StreamClient(config, http=httpx.AsyncClient())
        with pytest.raises(KeyError):
            client.resolve("Nope")

    @pytest.mark.asyncio
    async def test_closes_only_owned_http_client(self, config):
        http = httpx.AsyncClient()
        async with StreamClient(config, http=http):
            pass
        assert not http.is_closed

        owned = StreamClient(config)
        await owned.aclose()
        assert owned.http.is_closed


class TestAuthentication:
    @pytest.mark.asyncio
    async def test_authenticate_keeps_credentials(self, client):
        assert client.is_authenticated
        assert client.app == APP
        assert client.user == USER

    @pytest.mark.asyncio
    async def test_unauthenticated_stream_reports_credential_error(self, config):
        async with StreamClient(config, http=httpx.AsyncClient(transport=api())) as client:
            out = asyncio.Queue()
            await client.run_stream(out, client.resolve(SAMPLE))
            assert isinstance(client.errors.get_nowait(), CredentialError)
            assert client.finished.empty()


class TestStreams:
    @pytest.mark.asyncio
    async def test_run_stream_on_current_task(self, client):
        out = asyncio.Queue()
        await client.run_stream(out, client.resolve(SAMPLE))
        assert [r.id for r in drain(out)] == ["1", "2"]
        assert isinstance(client.errors.get_nowait(), StreamEOFError)
        assert client.finished.get_nowait() == Finished(client.resolve(SAMPLE))

    @pytest.mark.asyncio
    async def test_stream_handle(self, client):
        handle = client.stream(client.resolve(FIREHOSE))
        first = await asyncio.wait_for(handle.records.get(), timeout=1)
        second = await asyncio.wait_for(handle.records.get(), timeout=1)
        await asyncio.wait_for(handle.wait(), timeout=1)
        assert (first.id, second.id) == ("1", "2")
        assert handle.done
        assert client.finished.get_nowait().endpoint == client.resolve(FIREHOSE)

    @pytest.mark.asyncio
    async def test_concurrent_streams_share_errors_and_finished(self, client):
        sample = client.stream(client.resolve(SAMPLE))
        firehose = client.stream(client.resolve(FIREHOSE))
        await asyncio.wait_for(asyncio.gather(sample.wait(), firehose.wait()), timeout=1)

        assert sample.records.qsize() == 2
        assert firehose.records.qsize() == 2
        assert len(drain(client.errors)) == 2
        endpoints = {f.endpoint for f in drain(client.finished)}
        assert endpoints == {client.resolve(SAMPLE), client.resolve(FIREHOSE)}

    @pytest.mark.asyncio
    async def test_handle_cancel(self, config, token_store):
        http = httpx.AsyncClient(transport=api(hang=True))
        async with StreamClient(config, http=http) as client:
            await client.authenticate(ClientTokens(token_store, config=config))
            handle = client.stream(client.resolve(SAMPLE))
            await asyncio.wait_for(handle.records.get(), timeout=1)
            await asyncio.wait_for(handle.records.get(), timeout=1)

            handle.cancel()
            await asyncio.wait_for(handle.wait(), timeout=1)

            assert client.errors.empty()
            assert client.finished.qsize() == 1

    @pytest.mark.asyncio
    async def test_filter_stream_posts_form(self, config, token_store):
        requests = []
        http = httpx.AsyncClient(transport=api(requests))
        async with StreamClient(config, http=http) as client:
            await client.authenticate(ClientTokens(token_store, config=config))
            handle = client.filter_stream({"track": "python"})
            await asyncio.wait_for(handle.wait(), timeout=1)

        assert requests[0].method == "POST"
        assert str(requests[0].url) == FILTER_STREAM_URL
        assert requests[0].content == b"track=python"

    @pytest.mark.asyncio
    async def test_filter_stream_requires_a_predicate(self, client):
        with pytest.raises(ValueError):
            client.filter_stream({"track": "", "stall_warnings": "true"})


class TestRest:
    @pytest.mark.asyncio
    async def test_user_lookup(self, client):
        into = []
        users = await client.rest(
            Endpoint.get(USERS_LOOKUP_URL),
            {"screen_name": "a"},
            into=into,
            model=TwitterUser.list_from,
        )
        assert [u.id for u in users] == ["12"]
        assert into == users
        assert client.finished.qsize() == 1
