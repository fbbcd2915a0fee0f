#!/usr/bin/env python3
"""
Chat Relay Server - Listener

Accepts connections and runs one connection handler per connection against
the single shared user registry.
"""

import asyncio
from typing import Optional, Set

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from common.constants import DEFAULT_SERVER_HOST, DEFAULT_PORT, MAX_LINE_LENGTH
from server.chat.connection_handler import ConnectionHandler
from server.chat.registry import UserRegistry
from server.chat.router import MessageRouter
from server.chat.session import LineSession
from server.utils.config import ServerConfig
from server.utils.logger import logger


class ChatRelayServer:
    """Main server class: the listening endpoint and its shared state."""

    def __init__(self, host: str = DEFAULT_SERVER_HOST, port: int = DEFAULT_PORT,
                 max_line_length: int = MAX_LINE_LENGTH, config: Optional[ServerConfig] = None):
        self.config = config or ServerConfig(host, port, max_line_length)
        self.registry = UserRegistry()
        self.router = MessageRouter(self.registry)
        self.handlers: Set[ConnectionHandler] = set()
        self._tasks: Set[asyncio.Task] = set()
        self._server: Optional[asyncio.AbstractServer] = None

    @property
    def bound_port(self) -> Optional[int]:
        """Port actually bound (differs from the configured one for port 0)."""
        if not self._server or not self._server.sockets:
            return None
        return self._server.sockets[0].getsockname()[1]

    async def handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        """Handle individual client connection."""
        session = LineSession(
            reader, writer,
            max_line_length=self.config.max_line_length,
            send_timeout=self.config.send_timeout,
            close_timeout=self.config.close_timeout
        )
        handler = ConnectionHandler(session, self.registry, self.router)
        logger.log_connection(session.addr)

        task = asyncio.current_task()
        self.handlers.add(handler)
        self._tasks.add(task)
        try:
            await handler.run()
        finally:
            self.handlers.discard(handler)
            self._tasks.discard(task)

    async def start(self):
        """Bind the listening endpoint; raises OSError if that fails."""
        if self._server is not None:
            return
        info = self.config.get_connection_info()
        self._server = await asyncio.start_server(
            self.handle_client,
            info['host'],
            info['port'],
            limit=self.config.max_line_length
        )

        addr = ', '.join(str(sock.getsockname()) for sock in self._server.sockets)
        logger.info(f"Chat server listening on {addr}")

    async def serve_forever(self):
        """Start the server and accept connections until cancelled."""
        await self.start()
        try:
            await self._server.serve_forever()
        finally:
            await self.stop()

    async def stop(self):
        """Stop accepting, close every open session and wait for cleanup."""
        server = self._server
        self._server = None
        if server is not None:
            server.close()

        await asyncio.gather(*(handler.session.close() for handler in list(self.handlers)))

        tasks = [task for task in self._tasks if task is not asyncio.current_task()]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

        if server is not None:
            await server.wait_closed()
        logger.info("Chat server stopped")
