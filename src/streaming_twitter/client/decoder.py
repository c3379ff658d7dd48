# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Incremental decoder for a body made of concatenated JSON values.

Streaming responses are not a JSON array: values follow each other,
optionally separated by whitespace (Twitter sends ``\\r\\n`` between
messages and as keep-alives). The decoder finds each value's boundary with
a structural scan (bracket depth, string and escape state) before parsing
it, so a malformed value is consumed as a unit and decoding resumes with
the next one.

A value never spans a message delimiter: a raw line break inside a string,
or ``\\r\\n`` inside an open object or array, ends the pending value there
and it is reported as malformed. A value growing past ``max_value_size``
characters is dropped up to the next line break.
"""

import codecs
import json
import re
from typing import Any, AsyncIterable, AsyncIterator, Optional

from ..core.constants import MAX_VALUE_SIZE
from ..core.errors import DecodeError, StreamEOFError, UnexpectedEOFError

_STRUCTURAL = re.compile(r'[{}\[\]"\r]')
_STRING_SPECIAL = re.compile(r'["\\\r\n]')
# Bare tokens (numbers, literals, garbage) end at whitespace or a new value
_TOKEN_END = re.compile(r'[\s{\["]')


class JSONStreamDecoder:
    """
    Pull JSON values one at a time from an async iterator of byte chunks.

    ``next_value()`` raises:
        DecodeError: the next value is not valid JSON (it has been skipped)
        StreamEOFError: the body ended cleanly between values
        UnexpectedEOFError: the body ended inside a value
    Errors raised by the chunk iterator itself (network errors) propagate
    unchanged.
    """

    def __init__(self, chunks: AsyncIterable[bytes], max_value_size: int = MAX_VALUE_SIZE):
        self._chunks: AsyncIterator[bytes] = chunks.__aiter__()
        self._text = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._max_value_size = max_value_size
        self._buffer = ""
        self._exhausted = False
        self._skipping = False
        self._reset_scan()

    def _reset_scan(self) -> None:
        self._scan_pos = 0
        self._depth = 0
        self._in_string = False

    async def next_value(self) -> Any:
        while True:
            end = self._find_value_end()
            if end is not None:
                text = self._buffer[:end]
                self._buffer = self._buffer[end:]
                self._reset_scan()
                try:
                    return json.loads(text)
                except json.JSONDecodeError as e:
                    raise DecodeError(str(e), e) from e

            if len(self._buffer) > self._max_value_size:
                size = len(self._buffer)
                self._buffer = ""
                self._reset_scan()
                self._skipping = True
                raise DecodeError(
                    f"value exceeds {self._max_value_size} characters ({size} pending)"
                )

            if self._exhausted:
                if self._buffer.strip():
                    self._buffer = ""
                    self._reset_scan()
                    raise UnexpectedEOFError()
                raise StreamEOFError()

            await self._fill()

    async def _fill(self) -> None:
        try:
            chunk = await self._chunks.__anext__()
        except StopAsyncIteration:
            self._exhausted = True
            self._buffer += self._text.decode(b"", final=True)
            return
        self._buffer += self._text.decode(chunk)

    def _skip_line(self) -> bool:
        """Drop the rest of an oversized value; True once its line has ended."""
        newline = self._buffer.find("\n")
        if newline < 0:
            self._buffer = ""
            return False
        self._buffer = self._buffer[newline + 1 :]
        self._skipping = False
        return True

    def _find_value_end(self) -> Optional[int]:
        """Index just past the first complete value in the buffer, or None."""
        if self._skipping and not self._skip_line():
            return None

        if self._scan_pos == 0:
            self._buffer = self._buffer.lstrip()
            if not self._buffer:
                return None

        buf = self._buffer
        if buf[0] not in '{["':
            return self._find_token_end()

        n = len(buf)
        i = self._scan_pos
        depth = self._depth
        in_string = self._in_string
        while i < n:
            if in_string:
                m = _STRING_SPECIAL.search(buf, i)
                if m is None:
                    i = n
                    break
                i = m.start()
                ch = buf[i]
                if ch in "\r\n":
                    # Strings cannot hold raw line breaks: the value was cut short
                    return i
                if ch == "\\":
                    if i + 1 >= n:
                        # Escape split across chunks: rescan from the backslash
                        break
                    i += 2
                    continue
                in_string = False
                i += 1
                if depth == 0:
                    return i
                continue

            m = _STRUCTURAL.search(buf, i)
            if m is None:
                i = n
                break
            ch = m.group()
            if ch == "\r":
                if m.end() >= n:
                    # Possible delimiter split across chunks: rescan from here
                    i = m.start()
                    break
                if buf[m.end()] == "\n":
                    return m.start()
                i = m.end()
                continue
            i = m.end()
            if ch == '"':
                in_string = True
            elif ch in "{[":
                depth += 1
            else:
                depth -= 1
                if depth == 0:
                    return i

        self._scan_pos = i
        self._depth = depth
        self._in_string = in_string
        return None

    def _find_token_end(self) -> Optional[int]:
        m = _TOKEN_END.search(self._buffer, 1)
        if m is not None:
            return m.start()
        if self._exhausted:
            return len(self._buffer)
        return None


__all__ = ["JSONStreamDecoder"]
