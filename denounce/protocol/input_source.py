# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

"""
InputSource enum: the receiver's selectable input sources
"""

from __future__ import annotations

from enum import Enum

from ..internal_types import *
from ..exceptions import DenounceError

class InputSource(Enum):
    """A physical or logical input source of the receiver.

    The value of each member is the uppercase token the text protocol uses
    for it, as in "SIMPLAY" or "SVBD".
    """

    CBL_SAT = 'CBLSAT'
    MEDIA_PLAYER = 'MPLAY'
    BLU_RAY = 'BD'
    GAME = 'GAME'
    AUX1 = 'AUX1'
    AUX2 = 'AUX2'
    PHONO = 'PHONO'
    TV_AUDIO = 'TV'
    TUNER = 'TUNER'
    USB = 'USB'
    BLUETOOTH = 'BT'
    INTERNET_RADIO = 'IRADIO'
    NET = 'NET'

    def to_protocol_name(self) -> str:
        """Returns the text protocol token for this input."""
        return self.value

    @property
    def cli_name(self) -> str:
        """The primary command-line name, e.g. "media-player"."""
        return self.name.lower().replace('_', '-')

    @property
    def cli_aliases(self) -> List[str]:
        """Additional command-line names accepted for this input."""
        return list(_cli_aliases.get(self, []))

    @classmethod
    def from_cli_name(cls, name: str) -> InputSource:
        """Looks up an input by command-line name or alias (case-insensitive)."""
        result = _cli_name_map.get(name.lower())
        if result is None:
            raise DenounceError(f"Unknown input source: '{name}'")
        return result

    @classmethod
    def all_cli_names(cls) -> List[str]:
        """Returns every accepted command-line name, primary names first."""
        result = [x.cli_name for x in cls]
        for x in cls:
            result.extend(x.cli_aliases)
        return result

_cli_aliases: Dict[InputSource, List[str]] = {
    InputSource.MEDIA_PLAYER: ['mplay'],
    InputSource.BLU_RAY: ['bd'],
    InputSource.TV_AUDIO: ['tv'],
    InputSource.INTERNET_RADIO: ['iradio'],
    InputSource.NET: ['heos'],
  }
"""Short command-line aliases, keyed by input."""

_cli_name_map: Dict[str, InputSource] = {}
"""All command-line names and aliases, mapped to their input."""

for _input in InputSource:
    _cli_name_map[_input.cli_name] = _input
    for _alias in _input.cli_aliases:
        _cli_name_map[_alias] = _input
