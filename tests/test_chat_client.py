#!/usr/bin/env python3
"""
Unit tests for the terminal client (client/chat/chat_client.py and
client/main_client.py).
"""

import asyncio
import io
import socket
import unittest
from unittest.mock import Mock, AsyncMock, patch

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from client.chat.chat_client import ChatClient
from client.main_client import ChatRelayClient
from server.main_server import ChatRelayServer
from tests.helpers import RawClient, wait_until
import main_client


class TestChatClient(unittest.IsolatedAsyncioTestCase):
    """Test cases for line-level client helpers."""

    async def asyncSetUp(self):
        self.writer = Mock()
        self.writer.drain = AsyncMock()
        self.client = ChatClient(self.writer)

    async def test_send_direct(self):
        self.assertTrue(await self.client.send_direct("bob", "hello"))
        self.writer.write.assert_called_once_with(b"@bob: hello\n")

    async def test_request_online_users(self):
        await self.client.request_online_users()
        self.writer.write.assert_called_once_with(b"online users\n")

    async def test_register(self):
        await self.client.register("alice")
        self.writer.write.assert_called_once_with(b"alice\n")

    async def test_send_without_connection(self):
        self.assertFalse(await ChatClient().send_line("hello"))

    async def test_send_failure(self):
        self.writer.drain.side_effect = BrokenPipeError()
        self.assertFalse(await self.client.send_line("hello"))

    async def test_listen_passes_lines_until_eof(self):
        received = []

        async def handler(line):
            received.append(line)

        reader = asyncio.StreamReader()
        reader.feed_data(b"bob:hi\r\n[Warning]: nope\n")
        reader.feed_eof()

        self.client.set_message_handler(handler)
        await self.client.listen(reader)
        self.assertEqual(received, ["bob:hi", "[Warning]: nope"])


class TestChatRelayClient(unittest.IsolatedAsyncioTestCase):
    """Test cases for the interactive client against a live server."""

    async def asyncSetUp(self):
        self.server = ChatRelayServer(host='127.0.0.1', port=0)
        await self.server.start()

    async def asyncTearDown(self):
        await self.server.stop()

    async def test_connect_failure_returns_false(self):
        with socket.socket() as spare:
            spare.bind(('127.0.0.1', 0))
            unused_port = spare.getsockname()[1]

        client = ChatRelayClient(host='127.0.0.1', port=unused_port, username="alice")
        self.assertFalse(await client.connect(retry_count=2, base_delay=0))

    async def test_receives_direct_message(self):
        output = io.StringIO()
        client = ChatRelayClient(host='127.0.0.1', port=self.server.bound_port,
                                 username="alice", output=output)
        self.assertTrue(await client.connect())
        await client.chat_client.register("alice")
        listener = asyncio.create_task(client.listen_for_messages())

        await wait_until(lambda: self.server.registry.contains("alice"))
        reader, writer = await asyncio.open_connection('127.0.0.1', self.server.bound_port)
        writer.write(b"bob\n@alice: hi alice\n")
        await writer.drain()

        async def printed():
            return "bob: hi alice" in output.getvalue()

        await wait_until(printed)

        writer.close()
        await writer.wait_closed()
        await client.close()
        await asyncio.wait_for(listener, 2.0)

    async def test_interactive_mode_registers_and_quits(self):
        client = ChatRelayClient(host='127.0.0.1', port=self.server.bound_port,
                                 username="alice", output=io.StringIO(),
                                 input_source=io.StringIO("QUIT\n"))
        await asyncio.wait_for(client.interactive_mode(), 5.0)

        async def unregistered():
            return await self.server.registry.count() == 0

        await wait_until(unregistered)
        self.assertIsNone(client.writer)

    async def test_padded_quit_is_sent_as_a_line(self):
        reader, writer = await asyncio.open_connection('127.0.0.1', self.server.bound_port)
        bob = RawClient(reader, writer)
        self.addAsyncCleanup(bob.close)
        await bob.send("bob")
        await wait_until(lambda: self.server.registry.contains("bob"))

        client = ChatRelayClient(host='127.0.0.1', port=self.server.bound_port,
                                 username="alice", output=io.StringIO(),
                                 input_source=io.StringIO(" quit \n@bob:still here\n"))
        await asyncio.wait_for(client.interactive_mode(), 5.0)

        self.assertEqual(await bob.receive(), "alice:still here")


class TestClientEntryPoint(unittest.TestCase):
    """Test cases for main_client.main."""

    def test_eof_at_username_prompt_exits_cleanly(self):
        with patch('builtins.input', side_effect=EOFError), \
                patch('client.main_client.ChatRelayClient') as client_cls:
            self.assertIsNone(main_client.main([]))
        client_cls.assert_not_called()


if __name__ == '__main__':
    unittest.main()
