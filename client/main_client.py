#!/usr/bin/env python3
"""
Chat Relay Client

Terminal client: registers a username, prints every line the server sends
and forwards each line typed by the user.
"""

import asyncio
import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from client.chat.chat_client import ChatClient
from client.utils.config import ClientConfig
from client.utils.logger import logger
from common.constants import CLIENT_QUIT_COMMAND, DEFAULT_HOST, DEFAULT_PORT


class ChatRelayClient:
    """Main client class."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, username: str = None,
                 output=None, input_source=None):
        self.config = ClientConfig(host, port, username)
        self.reader = None
        self.writer = None
        self.running = False
        self.output = output or sys.stdout
        self.input_source = input_source or sys.stdin

        self.chat_client = ChatClient()
        self.chat_client.set_message_handler(self.handle_message)

    async def connect(self, retry_count: int = None, base_delay: float = None) -> bool:
        """Establish connection to the server with retry logic and exponential backoff."""
        retry_count = retry_count or self.config.retry_attempts
        base_delay = self.config.retry_delay_base if base_delay is None else base_delay
        info = self.config.get_connection_info()

        for attempt in range(1, retry_count + 1):
            try:
                self.reader, self.writer = await asyncio.open_connection(info['host'], info['port'])
                logger.log_connection(info['host'], info['port'], True)
                self.chat_client.set_writer(self.writer)
                self.running = True
                return True
            except OSError as e:
                logger.log_connection(info['host'], info['port'], False)
                logger.log_error("connection", e)

                if attempt < retry_count:
                    delay = base_delay * (2 ** (attempt - 1))
                    logger.info(f"Retrying connection in {delay}s (attempt {attempt}/{retry_count})...")
                    await asyncio.sleep(delay)

        logger.error(f"Failed to connect after {retry_count} attempts")
        return False

    async def handle_message(self, line: str):
        """Print a line received from the server."""
        print(line, file=self.output, flush=True)

    async def listen_for_messages(self):
        """Print server lines until the server closes the connection."""
        await self.chat_client.listen(self.reader)
        if self.running:
            logger.info(f"{self.config.username} has left the chat (server closed the connection)")
        self.running = False

    async def read_input(self) -> str:
        return await asyncio.get_running_loop().run_in_executor(None, self.input_source.readline)

    async def interactive_mode(self):
        """Run client with interactive chat input."""
        if not await self.connect():
            return

        await self.chat_client.register(self.config.username)
        logger.show_help()

        listener_task = asyncio.create_task(self.listen_for_messages())

        try:
            while self.running:
                user_input = await self.read_input()
                if not user_input:
                    break  # stdin closed
                text = user_input.rstrip('\r\n')
                if text.lower() == CLIENT_QUIT_COMMAND:
                    break
                if not self.running:
                    break
                await self.chat_client.send_line(text)
        finally:
            self.running = False
            await self.close()
            listener_task.cancel()
            try:
                await listener_task
            except asyncio.CancelledError:
                pass
            logger.info("Disconnected from server")

    async def close(self):
        """Close the connection to the server."""
        if self.writer:
            writer = self.writer
            self.writer = None
            writer.close()
            try:
                await writer.wait_closed()
            except (ConnectionError, OSError) as e:
                logger.debug(f"Error while closing connection: {e}")
