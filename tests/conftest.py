#!/usr/bin/env python3
"""pytest fixtures"""

# pylint: disable=redefined-outer-name

import asyncio
import json
import socket

import pytest
import pytest_asyncio

from denounce import DenounceClientConfig, DenonReceiverClient

GET_PLAYERS_SUCCESS = {
    "heos": {"command": "player/get_players", "result": "success", "message": ""},
    "payload": [
        {
            "name": "Living Room",
            "pid": 1,
            "model": "X",
            "version": "1",
            "network": "wired",
            "lineout": 1,
            "serial": "S1",
        }
    ],
}


def encode_heos(message):
    """Encode a HEOS message the way the device frames it"""
    return json.dumps(message).encode("utf-8") + b"\r\n"


class FakeReceiver:
    """A TCP server that records every line it receives and answers with a responder"""

    def __init__(self, responder=None):
        self.responder = responder
        self.received = []
        self.raw = bytearray()
        self.connections = 0
        self.writers = []
        self.server = None

    @property
    def port(self):
        """port the server is listening on"""
        return self.server.sockets[0].getsockname()[1]

    async def start(self):
        """start listening on an ephemeral localhost port"""
        self.server = await asyncio.start_server(self._handle, "127.0.0.1", 0)
        return self

    async def _handle(self, reader, writer):
        self.connections += 1
        self.writers.append(writer)
        try:
            while True:
                line = await reader.readline()
                if not line:
                    break
                self.raw.extend(line)
                stripped = line.rstrip(b"\r\n")
                self.received.append(stripped)
                if self.responder is not None:
                    reply = self.responder(stripped)
                    if reply:
                        writer.write(reply)
                        await writer.drain()
        except ConnectionError:
            pass

    async def send(self, data):
        """push unsolicited data to every connected client"""
        for writer in self.writers:
            writer.write(data)
            await writer.drain()

    def disconnect_all(self):
        """drop every client connection"""
        for writer in self.writers:
            writer.close()

    async def wait_for_lines(self, count, timeout=2.0):
        """wait until at least count lines have been received"""

        async def _wait():
            while len(self.received) < count:
                await asyncio.sleep(0.01)

        await asyncio.wait_for(_wait(), timeout)

    async def wait_for_connections(self, count, timeout=2.0):
        """wait until at least count clients have connected"""

        async def _wait():
            while self.connections < count:
                await asyncio.sleep(0.01)

        await asyncio.wait_for(_wait(), timeout)

    async def close(self):
        """stop the server"""
        self.disconnect_all()
        self.server.close()
        await self.server.wait_closed()


def unused_port():
    """a localhost port with nothing listening on it"""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def heos_responder(*replies):
    """Responder that answers successive lines with successive messages"""
    pending = list(replies)

    def _respond(_line):
        if not pending:
            return None
        reply = pending.pop(0)
        if isinstance(reply, bytes):
            return reply
        return encode_heos(reply)

    return _respond


@pytest_asyncio.fixture
async def text_receiver():
    """fake text protocol endpoint"""
    receiver = await FakeReceiver().start()
    yield receiver
    await receiver.close()


@pytest_asyncio.fixture
async def heos_receiver():
    """fake HEOS protocol endpoint; set .responder in the test"""
    receiver = await FakeReceiver().start()
    yield receiver
    await receiver.close()


@pytest.fixture
def receiver_config(text_receiver, heos_receiver):
    """client config pointing at the fake endpoints"""
    return DenounceClientConfig(
        default_host="127.0.0.1",
        text_port=text_receiver.port,
        heos_port=heos_receiver.port,
        use_config_file=False,
    )


@pytest_asyncio.fixture
async def client(receiver_config):
    """client connected lazily to the fake endpoints"""
    result = DenonReceiverClient(config=receiver_config)
    yield result
    await result.aclose()
