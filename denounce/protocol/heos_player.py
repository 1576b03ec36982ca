# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

"""
HeosPlayer class
"""

from __future__ import annotations

from ..internal_types import *
from ..exceptions import HeosDecodeError

class HeosPlayer:
    """A HEOS player, as returned by heos://player/get_players.

    Keys the device sends beyond the ones modeled here (gid, ip, ...) are
    ignored.
    """

    name: str
    pid: int
    """Stable player identifier used to target playback commands."""
    model: str
    version: str
    network: str
    lineout: int
    serial: str

    def __init__(
            self,
            name: str,
            pid: int,
            model: str,
            version: str,
            network: str,
            lineout: int,
            serial: str,
          ):
        self.name = name
        self.pid = pid
        self.model = model
        self.version = version
        self.network = network
        self.lineout = lineout
        self.serial = serial

    @classmethod
    def from_jsonable(cls, data: Jsonable) -> HeosPlayer:
        if not isinstance(data, dict):
            raise HeosDecodeError(f"HEOS player record must be a JSON object: {data!r}")
        str_fields: Dict[str, str] = {}
        for field_name in ('name', 'model', 'version', 'network', 'serial'):
            value = data.get(field_name)
            if not isinstance(value, str):
                raise HeosDecodeError(f"HEOS player field '{field_name}' must be a string: {data!r}")
            str_fields[field_name] = value
        pid = data.get('pid')
        if not isinstance(pid, int) or isinstance(pid, bool) or not -2**63 <= pid < 2**63:
            raise HeosDecodeError(f"HEOS player field 'pid' must be a 64-bit integer: {data!r}")
        lineout = data.get('lineout')
        if not isinstance(lineout, int) or isinstance(lineout, bool) or not 0 <= lineout <= 255:
            raise HeosDecodeError(f"HEOS player field 'lineout' must be an integer in 0..255: {data!r}")
        return cls(pid=pid, lineout=lineout, **str_fields)

    @classmethod
    def list_from_jsonable(cls, data: Jsonable) -> List[HeosPlayer]:
        """Decodes the payload of a get_players response."""
        if not isinstance(data, list):
            raise HeosDecodeError(f"HEOS player list payload must be a JSON array: {data!r}")
        return [cls.from_jsonable(x) for x in data]

    def to_jsonable(self) -> JsonableDict:
        return dict(
            name=self.name,
            pid=self.pid,
            model=self.model,
            version=self.version,
            network=self.network,
            lineout=self.lineout,
            serial=self.serial,
          )

    def __str__(self) -> str:
        return f"HeosPlayer(name='{self.name}', pid={self.pid}, model='{self.model}')"

    def __repr__(self) -> str:
        return str(self)
