# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Stream-level protocol implementation helpers.
"""

from .json_value_reader import (
    JsonValueScanner,
    read_json_value_bytes,
    read_json_value,
    decode_json_value,
  )
