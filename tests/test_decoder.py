# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

import httpx
import pytest

from streaming_twitter.client import JSONStreamDecoder
from streaming_twitter.core import DecodeError, StreamEOFError, UnexpectedEOFError


async def chunks(*parts, error=None):
    for part in parts:
        yield part
    if error is not None:
        raise error


async def collect(decoder):
    """Decode until a terminal error; return (values, recoverable errors, terminal error)."""
    values, errors = [], []
    while True:
        try:
            values.append(await decoder.next_value())
        except DecodeError as e:
            if e.terminal:
                return values, errors, e
            errors.append(e)


class TestJSONStreamDecoder:
    @pytest.mark.asyncio
    async def test_concatenated_values(self):
        decoder = JSONStreamDecoder(chunks(b'{"a": 1}\r\n{"b": [1, 2]}{"c": "}"}\r\n'))
        values, errors, end = await collect(decoder)
        assert values == [{"a": 1}, {"b": [1, 2]}, {"c": "}"}]
        assert errors == []
        assert isinstance(end, StreamEOFError)

    @pytest.mark.asyncio
    async def test_values_split_across_chunks(self):
        decoder = JSONStreamDecoder(
            chunks(b'{"te', b'xt": "a \\', b'"quoted\\" ', b'}"}', b"\r\n\r\n", b'{"n"', b": 2}")
        )
        values, _, end = await collect(decoder)
        assert values == [{"text": 'a "quoted" }'}, {"n": 2}]
        assert isinstance(end, StreamEOFError)

    @pytest.mark.asyncio
    async def test_multibyte_character_split_across_chunks(self):
        encoded = '{"text": "café ☃"}'.encode("utf-8")
        decoder = JSONStreamDecoder(chunks(encoded[:14], encoded[14:]))
        assert await decoder.next_value() == {"text": "café ☃"}

    @pytest.mark.asyncio
    async def test_keep_alive_only_body(self):
        decoder = JSONStreamDecoder(chunks(b"\r\n", b"\r\n"))
        with pytest.raises(StreamEOFError):
            await decoder.next_value()

    @pytest.mark.asyncio
    async def test_malformed_value_is_skipped(self):
        decoder = JSONStreamDecoder(chunks(b'{"a": 1}\r\n{"a": }\r\n{"a": 3}\r\n'))
        values, errors, end = await collect(decoder)
        assert values == [{"a": 1}, {"a": 3}]
        assert len(errors) == 1
        assert not errors[0].terminal
        assert isinstance(end, StreamEOFError)

    @pytest.mark.asyncio
    async def test_garbage_between_values(self):
        decoder = JSONStreamDecoder(chunks(b'nonsense{"a": 1} 42 true'))
        values, errors, _ = await collect(decoder)
        assert values == [{"a": 1}, 42, True]
        assert len(errors) == 1

    @pytest.mark.asyncio
    async def test_truncated_value(self):
        decoder = JSONStreamDecoder(chunks(b'{"a": 1}\r\n{"a": [1, 2'))
        values, _, end = await collect(decoder)
        assert values == [{"a": 1}]
        assert isinstance(end, UnexpectedEOFError)
        assert str(end) == "unexpected EOF"

    @pytest.mark.asyncio
    async def test_network_error_propagates(self):
        decoder = JSONStreamDecoder(chunks(b'{"a": 1}', error=httpx.ReadError("reset")))
        assert await decoder.next_value() == {"a": 1}
        with pytest.raises(httpx.ReadError):
            await decoder.next_value()

    @pytest.mark.asyncio
    async def test_line_break_inside_string_ends_the_value(self):
        decoder = JSONStreamDecoder(chunks(b'{"a": 1}\r\n{"a": "trunc\r\n{"a": 3}\r\n'))
        values, errors, end = await collect(decoder)
        assert values == [{"a": 1}, {"a": 3}]
        assert len(errors) == 1
        assert not errors[0].terminal
        assert isinstance(end, StreamEOFError)

    @pytest.mark.asyncio
    async def test_unbalanced_brace_resyncs_at_delimiter(self):
        decoder = JSONStreamDecoder(chunks(b'{"a": {"b": 1}\r\n{"a": 3}\r\n'))
        values, errors, _ = await collect(decoder)
        assert values == [{"a": 3}]
        assert len(errors) == 1

    @pytest.mark.asyncio
    async def test_delimiter_split_across_chunks(self):
        decoder = JSONStreamDecoder(chunks(b'{"a": [1', b"\r", b'\n{"a": 3}'))
        values, errors, _ = await collect(decoder)
        assert values == [{"a": 3}]
        assert len(errors) == 1

    @pytest.mark.asyncio
    async def test_bare_newlines_inside_a_value(self):
        decoder = JSONStreamDecoder(chunks(b'{\n  "a": [1,\n 2]\n}\r\n'))
        assert await decoder.next_value() == {"a": [1, 2]}

    @pytest.mark.asyncio
    async def test_oversized_value_is_dropped_to_next_line(self):
        decoder = JSONStreamDecoder(
            chunks(b'{"text": "' + b"x" * 50, b"x" * 50 + b'"}\r\n{"a": 3}\r\n'),
            max_value_size=32,
        )
        values, errors, end = await collect(decoder)
        assert values == [{"a": 3}]
        assert len(errors) == 1
        assert "exceeds 32 characters" in str(errors[0])
        assert isinstance(end, StreamEOFError)
