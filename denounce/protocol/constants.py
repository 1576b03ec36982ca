# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Protocol-specific constants
"""

from __future__ import annotations

from enum import Enum

TEXT_PORT = 23
"""The TCP port of the receiver's telnet-style text control protocol."""

HEOS_PORT = 1255
"""The TCP port of the receiver's HEOS JSON control protocol."""

LINE_TERMINATOR = b'\r\n'
"""Terminator appended to every command line written to either protocol."""

TEXT_DELIMITER = b'\r'
"""Byte that ends each message the receiver sends on the text protocol."""

HEOS_DELIMITER = b'\n'
"""Byte that ends each message the receiver sends on the HEOS protocol."""

MAX_JSON_VALUE_LENGTH = 1024 * 1024
"""The maximum length of a single HEOS JSON response, in bytes."""

HEOS_URL_SCHEME = 'heos://'
"""Prefix of every HEOS command line."""

HEOS_GET_PLAYERS = HEOS_URL_SCHEME + 'player/get_players'
"""HEOS command that lists the players known to the device."""

HEOS_PLAY_STREAM = HEOS_URL_SCHEME + 'browse/play_stream'
"""HEOS command that plays a URL on a player. Takes pid and url query parameters."""

HEOS_REGISTER_FOR_CHANGE_EVENTS = HEOS_URL_SCHEME + 'system/register_for_change_events'
"""HEOS command that turns unsolicited change events on or off for the session."""

TEXT_SELECT_INPUT_PREFIX = 'SI'
"""Text protocol command prefix that selects the audio input source."""

TEXT_VIDEO_SELECT_PREFIX = 'SV'
"""Text protocol command prefix that selects the video input source."""

class ReceiverProtocol(Enum):
    """The two independent control surfaces exposed by the receiver."""

    TEXT = 'text'
    HEOS = 'heos'

    @property
    def default_port(self) -> int:
        """The well-known TCP port for this protocol."""
        return TEXT_PORT if self == ReceiverProtocol.TEXT else HEOS_PORT

    @property
    def delimiter(self) -> bytes:
        """The byte that terminates each message the receiver sends on this protocol."""
        return TEXT_DELIMITER if self == ReceiverProtocol.TEXT else HEOS_DELIMITER
