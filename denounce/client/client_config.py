# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Denon receiver client configuration.

Provides the general config object shared by the session manager and
the client.
"""

from __future__ import annotations

import os
import json

from ..internal_types import *
from ..exceptions import DenounceError
from ..constants import (
    DEFAULT_HOST,
    DEFAULT_TEXT_PORT,
    DEFAULT_HEOS_PORT,
    CONFIG_FILE_ENV_VAR,
    HOST_ENV_VAR,
    TEXT_PORT_ENV_VAR,
    HEOS_PORT_ENV_VAR,
  )
from ..pkg_logging import logger
from ..protocol import ReceiverProtocol

def _parse_port(value: Union[str, int], source: str) -> int:
    try:
        port = int(value)
    except ValueError as e:
        raise DenounceError(f"Invalid port number in {source}: {value!r}") from e
    if not 0 < port < 65536:
        raise DenounceError(f"Port number out of range in {source}: {port}")
    return port

class DenounceClientConfig:
    """Denon receiver client configuration."""
    default_host: str
    text_port: int
    heos_port: int

    def __init__(
            self,
            default_host: Optional[str]=None,
            *,
            text_port: Optional[int]=None,
            heos_port: Optional[int]=None,
            base_config: Optional[DenounceClientConfig]=None,
            use_config_file: bool = True,
          ) -> None:
        """Creates a configuration for a Denon receiver client.

           Args:
             default_host: The hostname or IP address of the receiver.
                   If None, the host will be taken from the base
                   configuration, the DENOUNCE_HOST environment variable,
                   the DENOUNCE_CONFIG_FILE config file, or DEFAULT_HOST,
                   in that order.
             text_port: The TCP port of the text control protocol.
                   If None, DENOUNCE_TEXT_PORT or 23 is used.
             heos_port: The TCP port of the HEOS control protocol.
                   If None, DENOUNCE_HEOS_PORT or 1255 is used.
             base_config:
                   An optional base configuration to use instead of defaults.
             use_config_file:
                   If True and no base configuration is given, the file named
                   by DENOUNCE_CONFIG_FILE is read, if set.
        """
        if base_config is None:
            self.init_from_defaults(use_config_file=use_config_file)
        else:
            self.init_from_base_config(base_config)

        if default_host is not None and default_host != '':
            self.default_host = default_host

        if text_port is not None and text_port > 0:
            self.text_port = text_port

        if heos_port is not None and heos_port > 0:
            self.heos_port = heos_port

    def init_from_defaults(self, use_config_file: bool=True) -> None:
        """Initializes the configuration from defaults."""
        self.default_host = DEFAULT_HOST
        self.text_port = DEFAULT_TEXT_PORT
        self.heos_port = DEFAULT_HEOS_PORT

        if use_config_file:
            config_file = os.environ.get(CONFIG_FILE_ENV_VAR)
            if config_file is not None and config_file != '':
                logger.debug(f"Loading client config from {config_file}")
                with open(config_file, 'r') as f:
                    config_jsonable = json.load(f)
                self.update_from_jsonable(config_jsonable)

        default_host = os.environ.get(HOST_ENV_VAR)
        if default_host is not None and default_host != '':
            self.default_host = default_host
        text_port_str = os.environ.get(TEXT_PORT_ENV_VAR)
        if text_port_str is not None and text_port_str != '':
            self.text_port = _parse_port(text_port_str, TEXT_PORT_ENV_VAR)
        heos_port_str = os.environ.get(HEOS_PORT_ENV_VAR)
        if heos_port_str is not None and heos_port_str != '':
            self.heos_port = _parse_port(heos_port_str, HEOS_PORT_ENV_VAR)

    def init_from_base_config(self, base_config: DenounceClientConfig) -> None:
        """Initializes the configuration from a base configuration."""
        self.default_host = base_config.default_host
        self.text_port = base_config.text_port
        self.heos_port = base_config.heos_port

    def port_for(self, protocol: ReceiverProtocol) -> int:
        """Returns the configured TCP port for a protocol."""
        return self.text_port if protocol == ReceiverProtocol.TEXT else self.heos_port

    def to_jsonable(self) -> JsonableDict:
        """Returns a JSON-serializable representation of the configuration."""
        return dict(
            default_host=self.default_host,
            text_port=self.text_port,
            heos_port=self.heos_port,
          )

    def to_json(self) -> str:
        """Returns a JSON representation of the configuration."""
        return json.dumps(self.to_jsonable())

    def update_from_jsonable(self, jsonable: JsonableDict) -> None:
        """Updates the configuration from a JSON-serializable representation."""
        default_host = jsonable.get('default_host')
        if default_host is not None and default_host != '':
            self.default_host = str(default_host)
        text_port = jsonable.get('text_port')
        if text_port is not None and text_port != '':
            self.text_port = _parse_port(text_port, 'text_port')  # type: ignore[arg-type]
        heos_port = jsonable.get('heos_port')
        if heos_port is not None and heos_port != '':
            self.heos_port = _parse_port(heos_port, 'heos_port')  # type: ignore[arg-type]

    @classmethod
    def from_jsonable(cls, jsonable: JsonableDict, use_config_file: bool=True) -> DenounceClientConfig:
        """Creates a configuration from a JSON-serializable representation."""
        result = cls(use_config_file=use_config_file)
        result.update_from_jsonable(jsonable)
        return result

    @classmethod
    def from_json(cls, json_str: str, use_config_file: bool=True) -> DenounceClientConfig:
        """Creates a configuration from a JSON representation."""
        jsonable = json.loads(json_str)
        return cls.from_jsonable(jsonable, use_config_file=use_config_file)

    @classmethod
    def from_config_file(cls, filename: str) -> DenounceClientConfig:
        """Creates a configuration from a JSON-serialized config file."""
        with open(filename, 'r') as f:
            jsonable: JsonableDict = json.load(f)

        result = cls.from_jsonable(jsonable, use_config_file=False)
        return result

    def __str__(self) -> str:
        return (
            f"DenounceClientConfig("
            f"default_host={self.default_host}, "
            f"text_port={self.text_port}, "
            f"heos_port={self.heos_port})"
          )

    def __repr__(self) -> str:
        return str(self)
