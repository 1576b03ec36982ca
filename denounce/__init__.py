# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

"""Package denounce provides a command-line tool and API for controlling
Denon/Marantz receivers via their telnet-style text protocol and their
HEOS JSON protocol.
"""

from .version import __version__

from .pkg_logging import logger

from .internal_types import Jsonable, JsonableDict

from .exceptions import (
    DenounceError,
    ReceiverConnectionError,
    HeosDecodeError,
    HeosProtocolError,
    PlayerNotFoundError,
  )

from .constants import DEFAULT_HOST, DEFAULT_TEXT_PORT, DEFAULT_HEOS_PORT

from .protocol import (
    ReceiverProtocol,
    InputSource,
    HeosPlayer,
    HeosResult,
    HeosHeader,
    HeosResponse,
  )

from .client import (
    DenounceClientConfig,
    ReceiverSession,
    ReceiverSessionManager,
    DenonReceiverClient,
    escape_heos_query_value,
  )

from .console import InteractiveShellBridge

from .util import (
    full_class_name,
    full_name_of_class,
    describe_exception,
)
