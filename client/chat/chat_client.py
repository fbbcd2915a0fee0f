"""
Chat client module.

This module handles client-side chat messaging functionality.
"""

import asyncio
from typing import Optional, Callable

from common.protocol_definitions import (
    encode_line, decode_line, create_direct_message, create_online_users_request
)
from client.utils.logger import logger


class ChatClient:
    """Client-side chat functionality."""

    def __init__(self, writer: Optional[asyncio.StreamWriter] = None):
        self.writer = writer
        self.message_handler: Optional[Callable] = None

    def set_writer(self, writer: asyncio.StreamWriter):
        """Set the writer for sending messages."""
        self.writer = writer

    def set_message_handler(self, handler: Callable):
        """Set the handler called with every line received from the server."""
        self.message_handler = handler

    async def send_line(self, line: str) -> bool:
        """Send one raw line to the server."""
        if not self.writer:
            logger.error("Not connected to server")
            return False

        try:
            self.writer.write(encode_line(line))
            await self.writer.drain()
            return True
        except (ConnectionError, OSError) as e:
            logger.error(f"Failed to send message: {e}")
            return False

    async def register(self, username: str) -> bool:
        """Send the username; must be the first line on a new connection."""
        return await self.send_line(username)

    async def send_direct(self, recipient: str, text: str) -> bool:
        """Send a private message to a specific user."""
        return await self.send_line(create_direct_message(recipient, text))

    async def request_online_users(self) -> bool:
        """Ask the server for the other users currently online."""
        return await self.send_line(create_online_users_request())

    async def listen(self, reader: asyncio.StreamReader):
        """Pass every received line to the message handler until the server closes."""
        while True:
            try:
                data = await reader.readline()
            except (ConnectionError, OSError, ValueError) as e:
                logger.error(f"Connection lost: {e}")
                return
            line = decode_line(data)
            if line is None:
                return
            if self.message_handler:
                await self.message_handler(line)
