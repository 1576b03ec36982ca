# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

"""Version of the denounce package"""

__version__ = "0.1.0"
