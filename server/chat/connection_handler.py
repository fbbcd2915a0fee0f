"""
Connection handler module.

Drives one accepted connection through registration, the receive loop and
cleanup.
"""

import asyncio
import enum
from typing import Optional

from server.chat.registry import UserRegistry
from server.chat.router import MessageRouter
from server.chat.session import LineSession
from server.utils.logger import logger


class HandlerState(enum.Enum):
    CONNECTING = 'connecting'
    REGISTERING = 'registering'
    ACTIVE = 'active'
    CLOSING = 'closing'
    CLOSED = 'closed'


class ConnectionHandler:
    """
    Per-connection state machine.

    CONNECTING -> REGISTERING -> ACTIVE -> CLOSING -> CLOSED. The first line
    is the username; an empty line or an immediate EOF skips ACTIVE and goes
    straight to CLOSING. Every exit path runs the closing step exactly once.
    """

    def __init__(self, session: LineSession, registry: UserRegistry, router: Optional[MessageRouter] = None):
        self.session = session
        self.registry = registry
        self.router = router or MessageRouter(registry)
        self.username: Optional[str] = None
        self.state = HandlerState.CONNECTING

    @property
    def registered(self) -> bool:
        return self.username is not None

    async def run(self):
        """Serve the connection until it ends, then clean up."""
        addr = self.session.addr
        try:
            self.state = HandlerState.REGISTERING
            username = await self.session.read_line()
            if not username:
                return

            await self.registry.register(username, self.session.sink)
            self.username = username
            self.state = HandlerState.ACTIVE
            logger.log_registration(username, addr)
            logger.log_online_count(await self.registry.count())

            while True:
                line = await self.session.read_line()
                if line is None:
                    break
                await self.router.dispatch(username, line, self.session.sink)

        except asyncio.CancelledError:
            logger.info(f"Connection cancelled for {self.username or addr}")
            raise
        except Exception as e:
            logger.log_error(f"connection handler for {self.username or addr}", e)
        finally:
            await self.close()

    async def close(self):
        """Unregister (if registered) and release the session; runs once."""
        if self.state in (HandlerState.CLOSING, HandlerState.CLOSED):
            return
        self.state = HandlerState.CLOSING

        try:
            if self.username is not None:
                removed = await self.registry.unregister(self.username, self.session.sink)
                if not removed and await self.registry.contains(self.username):
                    logger.info(f"{self.username} stays registered on a newer connection")
        finally:
            await self.session.close()
            self.state = HandlerState.CLOSED
            logger.log_disconnect(self.username, self.session.addr)
            if self.username is not None:
                logger.log_online_count(await self.registry.count())
