#!/usr/bin/env python3
"""
Unit tests for server/client configuration and server logging setup.
"""

import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from common.constants import DEFAULT_PORT, SEND_TIMEOUT, CLOSE_TIMEOUT
from server.utils.config import ServerConfig, parse_port
from server.utils.logger import logger
from client.utils.config import ClientConfig, parse_port as parse_client_port
import main_server


class TestParsePort(unittest.TestCase):
    """Test cases for lenient port parsing."""

    def test_missing_uses_default(self):
        self.assertEqual(parse_port(None), DEFAULT_PORT)

    def test_valid_port(self):
        self.assertEqual(parse_port("9000"), 9000)
        self.assertEqual(parse_port(9001), 9001)

    def test_unparsable_uses_default(self):
        with self.assertLogs('chat_relay_server', level='WARNING'):
            self.assertEqual(parse_port("not-a-port"), DEFAULT_PORT)

    def test_out_of_range_uses_default(self):
        with self.assertLogs('chat_relay_server', level='WARNING'):
            self.assertEqual(parse_port("70000", default=1234), 1234)

    def test_zero_allowed_for_server(self):
        self.assertEqual(parse_port("0"), 0)

    def test_client_rejects_zero(self):
        with self.assertLogs('chat_relay_client', level='WARNING'):
            self.assertEqual(parse_client_port("0"), DEFAULT_PORT)
        self.assertEqual(parse_client_port("8080"), 8080)


class TestConfigObjects(unittest.TestCase):
    """Test cases for the configuration classes."""

    def test_server_defaults(self):
        config = ServerConfig()
        self.assertEqual(config.get_connection_info(), {'host': '0.0.0.0', 'port': DEFAULT_PORT})
        self.assertEqual(config.get_log_settings(), {'log_level': 'INFO', 'logs_dir': None})
        self.assertEqual((config.send_timeout, config.close_timeout), (SEND_TIMEOUT, CLOSE_TIMEOUT))

    def test_client_defaults(self):
        config = ClientConfig(username="alice")
        self.assertEqual(config.get_connection_info(),
                         {'host': 'localhost', 'port': DEFAULT_PORT, 'username': 'alice'})

    def test_server_cli_arguments(self):
        args = main_server.build_parser().parse_args(['--port', 'abc', '--log-level', 'debug'])
        self.assertEqual(args.port, 'abc')
        self.assertEqual(args.log_level, 'debug')
        self.assertEqual(args.host, '0.0.0.0')

    def test_server_main_builds_one_config(self):
        argv = ['--port', '9000', '--send-timeout', '1.5', '--close-timeout', '0.5',
                '--log-level', 'debug', '--log-dir', 'logs']
        with patch.object(main_server, 'ChatRelayServer') as server_cls, \
                patch.object(main_server.asyncio, 'run'), \
                patch.object(main_server.logger, 'configure') as configure:
            main_server.main(argv)

        config = server_cls.call_args.kwargs['config']
        self.assertEqual(config.get_connection_info(), {'host': '0.0.0.0', 'port': 9000})
        self.assertEqual((config.send_timeout, config.close_timeout), (1.5, 0.5))
        configure.assert_called_once_with(log_level='debug', logs_dir='logs')


class TestServerLoggerConfigure(unittest.TestCase):
    """Test cases for ServerLogger.configure."""

    def tearDown(self):
        logger.configure(logging.INFO, None)

    def test_level_by_name(self):
        logger.configure('debug')
        self.assertEqual(logger.logger.level, logging.DEBUG)

    def test_unknown_level(self):
        with self.assertRaises(ValueError):
            logger.configure('chatty')

    def test_file_handler(self):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)

        logger.configure(logging.INFO, tmp.name)
        logger.info("written to file")
        logger.file_handler.flush()

        content = (Path(tmp.name) / 'server.log').read_text(encoding='utf-8')
        self.assertIn("written to file", content)


if __name__ == '__main__':
    unittest.main()
