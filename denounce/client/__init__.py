# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Denon receiver client.

Provides lazily-connected sessions with the receiver's text and HEOS control
protocols, and a client that issues commands over them.
"""

from .client_config import DenounceClientConfig
from .session import ReceiverSession
from .session_manager import ReceiverSessionManager
from .client_impl import DenonReceiverClient, escape_heos_query_value
