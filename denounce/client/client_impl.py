# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Denon receiver client.

Provides one method per receiver operation, framing each command for the
text or HEOS protocol and decoding HEOS responses.
"""

from __future__ import annotations

from ..internal_types import *
from ..exceptions import PlayerNotFoundError
from ..pkg_logging import logger
from ..protocol import (
    InputSource,
    HeosPlayer,
    HeosResponse,
    HEOS_GET_PLAYERS,
    HEOS_PLAY_STREAM,
    HEOS_REGISTER_FOR_CHANGE_EVENTS,
    TEXT_SELECT_INPUT_PREFIX,
    TEXT_VIDEO_SELECT_PREFIX,
  )
from .client_config import DenounceClientConfig
from .session_manager import ReceiverSessionManager

PayloadT = TypeVar('PayloadT')

_HEOS_QUERY_VALUE_ESCAPES = str.maketrans({'%': '%25', '&': '%26', '=': '%3D'})

def escape_heos_query_value(value: str) -> str:
    """Escapes the characters that HEOS treats as query-string syntax.

    Only '%', '&' and '=' are replaced; everything else, including ':' and
    '/', is sent verbatim.
    """
    return value.translate(_HEOS_QUERY_VALUE_ESCAPES)

class DenonReceiverClient:
    """Denon receiver client for the text and HEOS control protocols."""

    sessions: ReceiverSessionManager

    def __init__(
            self,
            sessions: Optional[ReceiverSessionManager]=None,
            *,
            host: Optional[str]=None,
            config: Optional[DenounceClientConfig]=None,
          ):
        if sessions is None:
            sessions = ReceiverSessionManager(host=host, config=config)
        self.sessions = sessions

    @property
    def config(self) -> DenounceClientConfig:
        return self.sessions.config

    async def text_command(self, command: str) -> None:
        """Sends a line verbatim on the text protocol. No response is read."""
        session = await self.sessions.ensure_text()
        await session.write_line(command)

    async def heos_command(self, command: str) -> None:
        """Sends a line verbatim on the HEOS protocol. No response is read, and the
           command is not checked for a heos:// prefix."""
        session = await self.sessions.ensure_heos()
        await session.write_line(command)

    async def select_input(self, input_source: InputSource) -> None:
        """Selects the audio input source."""
        await self.text_command(f"{TEXT_SELECT_INPUT_PREFIX}{input_source.to_protocol_name()}")

    async def video_select(self, input_source: InputSource) -> None:
        """Selects the video input source."""
        await self.text_command(f"{TEXT_VIDEO_SELECT_PREFIX}{input_source.to_protocol_name()}")

    async def transact_heos(
            self,
            command: str,
            payload_decoder: Optional[Callable[[Jsonable], PayloadT]]=None,
          ) -> HeosResponse[PayloadT]:
        """Sends a HEOS command and reads exactly one JSON response.

        Raises HeosProtocolError if the response reports a failure, and
        HeosDecodeError if it is malformed.
        """
        session = await self.sessions.ensure_heos()
        await session.write_line(command)
        data = await session.read_json_value()
        response: HeosResponse[PayloadT] = HeosResponse.from_jsonable(data, payload_decoder)
        logger.debug(f"{self}: {command} -> {response}")
        response.raise_for_result()
        return response

    async def get_players(self) -> List[HeosPlayer]:
        """Returns the players known to the device, in device order."""
        response = await self.transact_heos(HEOS_GET_PLAYERS, HeosPlayer.list_from_jsonable)
        assert response.payload is not None
        return response.payload

    async def get_first_player_id(self) -> int:
        """Returns the pid of the first player the device reports.

        Raises PlayerNotFoundError if the device reports no players.
        """
        players = await self.get_players()
        if len(players) == 0:
            raise PlayerNotFoundError("No players were returned from HEOS")
        return players[0].pid

    async def play_url(self, url: str, pid: Optional[int]=None) -> None:
        """Plays a stream URL on a player.

        If pid is None, the first player reported by get_players() is used.
        """
        if pid is None:
            pid = await self.get_first_player_id()
            logger.debug(f"{self}: Resolved player id {pid}")
        command = f"{HEOS_PLAY_STREAM}?pid={pid}&url={escape_heos_query_value(url)}"
        await self.transact_heos(command)

    async def register_for_change_events(self, enable: bool=True) -> None:
        """Turns unsolicited HEOS change events on or off. The response is not
           read; it arrives along with the events."""
        await self.heos_command(f"{HEOS_REGISTER_FOR_CHANGE_EVENTS}?enable={'on' if enable else 'off'}")

    async def aclose(self) -> None:
        await self.sessions.aclose()

    async def __aenter__(self) -> DenonReceiverClient:
        logger.debug(f"{self}: Entering async context manager")
        return self

    async def __aexit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc_val: Optional[BaseException],
            exc_tb: Optional[TracebackType],
          ) -> None:
        logger.debug(f"{self}: Exiting async context manager, exc={exc_val}")
        await self.aclose()

    def __str__(self) -> str:
        return f"DenonReceiverClient(host='{self.sessions.host}')"

    def __repr__(self) -> str:
        return str(self)
