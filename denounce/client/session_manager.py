# Copyright (c) 2026 The denounce developers
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Lazily-connected sessions with the receiver's two control protocols.

The manager owns at most one session per protocol. A session is opened on
first use and reused for the rest of the manager's lifetime; it is never
reopened, so a session that fails mid-process keeps failing.
"""

from __future__ import annotations

from ..internal_types import *
from ..pkg_logging import logger
from ..protocol import ReceiverProtocol
from .client_config import DenounceClientConfig
from .session import ReceiverSession

class ReceiverSessionManager:
    """Owns the text and HEOS sessions with a single receiver."""

    config: DenounceClientConfig
    text_session: Optional[ReceiverSession] = None
    heos_session: Optional[ReceiverSession] = None

    def __init__(
            self,
            host: Optional[str]=None,
            config: Optional[DenounceClientConfig]=None,
          ) -> None:
        self.config = DenounceClientConfig(
            default_host=host,
            base_config=config,
          )

    @property
    def host(self) -> str:
        return self.config.default_host

    def get_session(self, protocol: ReceiverProtocol) -> Optional[ReceiverSession]:
        """Returns the open session for a protocol, or None if it has not been used yet."""
        return self.text_session if protocol == ReceiverProtocol.TEXT else self.heos_session

    async def ensure(self, protocol: ReceiverProtocol) -> ReceiverSession:
        """Returns the session for a protocol, connecting on first use.

        Raises ReceiverConnectionError if the connection cannot be made; the
        attempt is not retried.
        """
        session = self.get_session(protocol)
        if session is None:
            session = await ReceiverSession.connect(
                protocol,
                self.host,
                self.config.port_for(protocol),
              )
            if protocol == ReceiverProtocol.TEXT:
                self.text_session = session
            else:
                self.heos_session = session
        return session

    async def ensure_text(self) -> ReceiverSession:
        return await self.ensure(ReceiverProtocol.TEXT)

    async def ensure_heos(self) -> ReceiverSession:
        return await self.ensure(ReceiverProtocol.HEOS)

    async def aclose(self) -> None:
        """Closes any open sessions."""
        for session in (self.text_session, self.heos_session):
            if session is not None:
                try:
                    await session.aclose()
                except Exception:
                    logger.debug(f"{self}: Exception while closing {session}", exc_info=True)

    async def __aenter__(self) -> ReceiverSessionManager:
        return self

    async def __aexit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc: Optional[BaseException],
            tb: Optional[TracebackType],
          ) -> None:
        await self.aclose()

    def __str__(self) -> str:
        return f"ReceiverSessionManager(host='{self.host}')"

    def __repr__(self) -> str:
        return str(self)
