#!/usr/bin/env python3
"""Tests for reading single JSON values from a stream"""

import asyncio

import pytest

from denounce import HeosDecodeError
from denounce.protocol_impl import (
    JsonValueScanner,
    decode_json_value,
    read_json_value,
    read_json_value_bytes,
)


def make_reader(data, eof=True):
    """StreamReader preloaded with data"""
    reader = asyncio.StreamReader()
    reader.feed_data(data)
    if eof:
        reader.feed_eof()
    return reader


@pytest.mark.asyncio
async def test_reads_exactly_one_value():
    """bytes after the value stay in the stream"""
    reader = make_reader(b'{"a": 1}\r\n{"b": 2}\r\n')
    assert await read_json_value(reader) == {"a": 1}
    assert await reader.readexactly(2) == b"\r\n"
    assert await read_json_value(reader) == {"b": 2}


@pytest.mark.asyncio
async def test_value_complete_without_trailing_data():
    """a value is returned as soon as it closes, even if the stream stays open"""
    reader = make_reader(b'{"heos": {"command": "x"}}', eof=False)
    result = await asyncio.wait_for(read_json_value(reader), 1.0)
    assert result == {"heos": {"command": "x"}}


@pytest.mark.asyncio
async def test_skips_leading_whitespace():
    """whitespace before a value is consumed"""
    reader = make_reader(b' \r\n\t[1, [2, 3]] tail')
    assert await read_json_value_bytes(reader) == b"[1, [2, 3]]"
    assert await reader.read() == b" tail"


@pytest.mark.asyncio
async def test_brackets_inside_strings():
    """braces, brackets and escaped quotes inside strings do not end the value"""
    raw = rb'{"message": "text=}] \"quoted\" \\", "x": ["{"]}'
    reader = make_reader(raw + b"{}")
    assert await read_json_value_bytes(reader) == raw
    assert await read_json_value(reader) == {}


@pytest.mark.asyncio
async def test_non_container_rejected():
    """a top-level scalar is not a HEOS response"""
    reader = make_reader(b"42\r\n")
    with pytest.raises(HeosDecodeError):
        await read_json_value(reader)


@pytest.mark.asyncio
async def test_eof_mid_value():
    """stream end before the value closes is an incomplete read"""
    reader = make_reader(b'{"heos": {')
    with pytest.raises(asyncio.IncompleteReadError):
        await read_json_value(reader)


@pytest.mark.asyncio
async def test_max_length():
    """oversized values are rejected"""
    reader = make_reader(b'{"a": "' + b"x" * 100 + b'"}')
    with pytest.raises(HeosDecodeError):
        await read_json_value(reader, max_length=50)


def test_mismatched_closer():
    """a closer that does not match its opener is rejected"""
    scanner = JsonValueScanner()
    with pytest.raises(HeosDecodeError):
        for byte in b'{"a": [1}':
            scanner.feed(byte)


def test_scanner_reports_completion():
    """feed() is True only on the final byte"""
    scanner = JsonValueScanner()
    results = [scanner.feed(byte) for byte in b'  {"a": {}}']
    assert results[-1] is True
    assert not any(results[:-1])
    assert scanner.started
    assert bytes(scanner.data) == b'{"a": {}}'


@pytest.mark.parametrize("raw", [b'{"a": }', b'{"a": 1,}', b"{\xff}"])
def test_decode_malformed(raw):
    """balanced but invalid JSON is a decode error"""
    with pytest.raises(HeosDecodeError):
        decode_json_value(raw)
