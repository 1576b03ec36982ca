#
# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

"""Exceptions defined by this package"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .protocol.heos_response import HeosHeader

class DenounceError(Exception):
    """Base class for all error exceptions defined by this package."""
    pass

class ReceiverConnectionError(DenounceError, ConnectionError):
    """A TCP/IP connection to the receiver could not be established, or
       failed while reading or writing."""
    pass

class HeosDecodeError(DenounceError):
    """A HEOS response was not valid JSON, or did not have the expected shape."""
    pass

class HeosProtocolError(DenounceError):
    """A well-formed HEOS response reported a failed result."""

    header: HeosHeader

    def __init__(self, header: HeosHeader, msg: Optional[str]=None):
        if msg is None:
            msg = f"HEOS command '{header.command}' failed"
            error_text = header.error_text
            if error_text is not None:
                msg += f": {error_text}"
            error_id = header.error_id
            if error_id is not None:
                msg += f" (eid={error_id})"
        super().__init__(msg)
        self.header = header

class PlayerNotFoundError(DenounceError):
    """No HEOS player was available to satisfy a request that needs one."""
    pass
