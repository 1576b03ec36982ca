# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

"""Constants used by denounce"""

from .protocol.constants import TEXT_PORT, HEOS_PORT

DEFAULT_HOST = "192.168.0.209"
"""The receiver host used when none is configured."""

DEFAULT_TEXT_PORT = TEXT_PORT
"""The TCP port of the receiver's line-oriented text control protocol."""

DEFAULT_HEOS_PORT = HEOS_PORT
"""The TCP port of the receiver's HEOS JSON control protocol."""

CONFIG_FILE_ENV_VAR = "DENOUNCE_CONFIG_FILE"
"""Environment variable naming an optional JSON config file."""

HOST_ENV_VAR = "DENOUNCE_HOST"
"""Environment variable that overrides the default receiver host."""

TEXT_PORT_ENV_VAR = "DENOUNCE_TEXT_PORT"
"""Environment variable that overrides the text protocol port."""

HEOS_PORT_ENV_VAR = "DENOUNCE_HEOS_PORT"
"""Environment variable that overrides the HEOS protocol port."""
