# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

"""
A TCP/IP session with one of the receiver's control protocols.

Wraps the asyncio StreamReader/StreamWriter pair of a single connection and
provides line writes, delimiter-framed reads and single JSON value reads.
"""

from __future__ import annotations

import asyncio
from asyncio import StreamReader, StreamWriter

from ..internal_types import *
from ..exceptions import ReceiverConnectionError
from ..pkg_logging import logger
from ..protocol import ReceiverProtocol, LINE_TERMINATOR, MAX_JSON_VALUE_LENGTH
from ..protocol_impl import read_json_value_bytes, decode_json_value

class ReceiverSession:
    """An open connection to one control protocol of the receiver.

    The read side and the write side may be used concurrently by different
    tasks (e.g., a background reader and a foreground writer), since they
    touch disjoint directions of the stream.
    """

    protocol: ReceiverProtocol
    host: str
    port: int
    reader: StreamReader
    writer: StreamWriter
    closed: bool = False

    def __init__(
            self,
            protocol: ReceiverProtocol,
            host: str,
            port: int,
            reader: StreamReader,
            writer: StreamWriter,
          ) -> None:
        self.protocol = protocol
        self.host = host
        self.port = port
        self.reader = reader
        self.writer = writer

    @classmethod
    async def connect(cls, protocol: ReceiverProtocol, host: str, port: int) -> ReceiverSession:
        """Opens a TCP connection to the receiver. No timeout is applied beyond
           the operating system's, and a failed attempt is not retried.

           Raises ReceiverConnectionError if the connection cannot be made.
        """
        logger.info(f"Connecting to receiver {protocol.value} protocol at {host}:{port}")
        try:
            reader, writer = await asyncio.open_connection(host, port)
        except OSError as e:
            raise ReceiverConnectionError(
                f"Unable to connect to receiver {protocol.value} protocol at {host}:{port}: {e}") from e
        result = cls(protocol, host, port, reader, writer)
        logger.debug(f"{result}: Connected")
        return result

    @property
    def delimiter(self) -> bytes:
        """The byte that ends each message the receiver sends on this session."""
        return self.protocol.delimiter

    async def write_line(self, line: str) -> None:
        """Writes a command line, terminated with CR LF, and waits for it to drain."""
        data = line.encode('utf-8') + LINE_TERMINATOR
        logger.debug(f"{self}: Writing {len(data)} bytes: {data!r}")
        try:
            self.writer.write(data)
            await self.writer.drain()
        except OSError as e:
            raise ReceiverConnectionError(f"{self}: Write to receiver failed: {e}") from e

    async def read_until(self, delimiter: Optional[bytes]=None) -> bytes:
        """Reads one message up to and including a delimiter.

        If delimiter is None, the protocol's delimiter is used. A message
        too long for the reader's buffer is returned in pieces, without the
        delimiter.

        Raises ReceiverConnectionError if the receiver closes the connection
        or the read fails.
        """
        if delimiter is None:
            delimiter = self.delimiter
        try:
            data = await self.reader.readuntil(delimiter)
        except asyncio.IncompleteReadError as e:
            raise ReceiverConnectionError(f"{self}: Connection closed by receiver") from e
        except asyncio.LimitOverrunError as e:
            data = await self.reader.readexactly(e.consumed)
        except OSError as e:
            raise ReceiverConnectionError(f"{self}: Read from receiver failed: {e}") from e
        logger.debug(f"{self}: Read {len(data)} bytes: {data!r}")
        return data

    async def read_json_value(self, max_length: int=MAX_JSON_VALUE_LENGTH) -> Jsonable:
        """Reads exactly one top-level JSON value, leaving any bytes that follow
           it unread.

        Raises HeosDecodeError on malformed JSON and ReceiverConnectionError if
        the connection ends before the value is complete.
        """
        try:
            raw_data = await read_json_value_bytes(self.reader, max_length=max_length)
        except asyncio.IncompleteReadError as e:
            raise ReceiverConnectionError(
                f"{self}: Connection closed by receiver while waiting for response: {e.partial!r}") from e
        except OSError as e:
            raise ReceiverConnectionError(f"{self}: Read from receiver failed: {e}") from e
        logger.debug(f"{self}: Read JSON value: {raw_data!r}")
        return decode_json_value(raw_data)

    def close(self) -> None:
        """Closes the connection. Does not wait for it to be completely closed.
           Repeated calls have no effect."""
        if not self.closed:
            self.closed = True
            self.writer.close()

    async def wait_closed(self) -> None:
        try:
            await self.writer.wait_closed()
        except OSError:
            logger.debug(f"{self}: Exception while waiting for connection to close", exc_info=True)

    async def aclose(self) -> None:
        self.close()
        await self.wait_closed()

    async def __aenter__(self) -> ReceiverSession:
        return self

    async def __aexit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc: Optional[BaseException],
            tb: Optional[TracebackType],
          ) -> None:
        await self.aclose()

    def __str__(self) -> str:
        return f"ReceiverSession({self.protocol.value}, {self.host}:{self.port})"

    def __repr__(self) -> str:
        return str(self)
