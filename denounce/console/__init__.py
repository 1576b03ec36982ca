# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

"""
An interactive pass-through console for the receiver's control protocols"""

from .shell_bridge import InteractiveShellBridge, DEFAULT_PROMPT
