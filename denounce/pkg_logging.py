# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

"""Package-wide logger"""

from __future__ import annotations

import logging

logger = logging.getLogger('denounce')
