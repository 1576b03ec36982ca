# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Reads one complete JSON value at a time from an asyncio StreamReader.

The HEOS session may carry unrelated messages (e.g., change events) right
behind a response, so the reader consumes bytes only up to the closing
brace or bracket of the top-level value. Anything after it stays buffered in
the StreamReader for the next consumer.
"""

from __future__ import annotations

import json
from asyncio import StreamReader

from ..internal_types import *
from ..exceptions import HeosDecodeError
from ..protocol.constants import MAX_JSON_VALUE_LENGTH

_WHITESPACE = frozenset(b' \t\r\n')
_OPENERS = {ord('{'): ord('}'), ord('['): ord(']')}
_CLOSERS = frozenset(_OPENERS.values())
_QUOTE = ord('"')
_BACKSLASH = ord('\\')

class JsonValueScanner:
    """Incremental scanner that finds the end of a top-level JSON object or array.

    Feed bytes one at a time with feed(); it returns True on the byte that
    completes the value. The scanner only tracks nesting and string state; the
    completed bytes are validated by the JSON parser afterwards.
    """

    data: bytearray
    max_length: int
    _stack: List[int]
    _in_string: bool = False
    _escaped: bool = False
    _started: bool = False

    def __init__(self, max_length: int=MAX_JSON_VALUE_LENGTH):
        self.data = bytearray()
        self.max_length = max_length
        self._stack = []

    @property
    def started(self) -> bool:
        return self._started

    def feed(self, byte: int) -> bool:
        if not self._started:
            if byte in _WHITESPACE:
                return False
            if byte not in _OPENERS:
                raise HeosDecodeError(f"Expected a JSON object or array, got byte {bytes([byte])!r}")
            self._started = True

        self.data.append(byte)
        if len(self.data) > self.max_length:
            raise HeosDecodeError(f"JSON value exceeds maximum length of {self.max_length} bytes")

        if self._in_string:
            if self._escaped:
                self._escaped = False
            elif byte == _BACKSLASH:
                self._escaped = True
            elif byte == _QUOTE:
                self._in_string = False
            return False

        if byte == _QUOTE:
            self._in_string = True
        elif byte in _OPENERS:
            self._stack.append(_OPENERS[byte])
        elif byte in _CLOSERS:
            if len(self._stack) == 0 or self._stack.pop() != byte:
                raise HeosDecodeError(f"Mismatched {bytes([byte])!r} in JSON value: {bytes(self.data)!r}")
            return len(self._stack) == 0
        return False

async def read_json_value_bytes(
        reader: StreamReader,
        max_length: int=MAX_JSON_VALUE_LENGTH,
      ) -> bytes:
    """Reads the raw bytes of exactly one top-level JSON object or array.

    Leading whitespace is skipped. Raises asyncio.IncompleteReadError if the
    stream ends before the value is complete, and HeosDecodeError if the
    bytes cannot be a JSON object or array.
    """
    scanner = JsonValueScanner(max_length=max_length)
    while True:
        byte = await reader.readexactly(1)
        if scanner.feed(byte[0]):
            return bytes(scanner.data)

def decode_json_value(raw_data: bytes) -> Jsonable:
    """Parses the bytes returned by read_json_value_bytes()."""
    try:
        return json.loads(raw_data.decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise HeosDecodeError(f"Malformed JSON received from receiver: {raw_data!r}") from e

async def read_json_value(
        reader: StreamReader,
        max_length: int=MAX_JSON_VALUE_LENGTH,
      ) -> Jsonable:
    """Reads and parses exactly one top-level JSON object or array."""
    raw_data = await read_json_value_bytes(reader, max_length=max_length)
    return decode_json_value(raw_data)
