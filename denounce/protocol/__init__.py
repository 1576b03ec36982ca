# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Low-level protocol definitions for Denon/Marantz receivers.

This module defines the wire-level constants and data model of the receiver's
telnet-style text protocol and its HEOS JSON protocol. It does not contain
protocol implementations.
"""

from .constants import (
    TEXT_PORT,
    HEOS_PORT,
    LINE_TERMINATOR,
    TEXT_DELIMITER,
    HEOS_DELIMITER,
    MAX_JSON_VALUE_LENGTH,
    HEOS_URL_SCHEME,
    HEOS_GET_PLAYERS,
    HEOS_PLAY_STREAM,
    HEOS_REGISTER_FOR_CHANGE_EVENTS,
    TEXT_SELECT_INPUT_PREFIX,
    TEXT_VIDEO_SELECT_PREFIX,
    ReceiverProtocol,
  )

from .input_source import InputSource
from .heos_player import HeosPlayer
from .heos_response import HeosResult, HeosHeader, HeosResponse
