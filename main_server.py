#!/usr/bin/env python3
"""
Chat Relay Server - Main Entry Point

Starts the line-based chat relay: clients register with a username and then
exchange direct messages (`@name: text`) or ask for the `online users`.

Usage:
    python main_server.py

Optional arguments:
    --host HOST              Bind address (default: 0.0.0.0)
    --port PORT              TCP port (default: 8888, also used when PORT is invalid)
    --max-line-length BYTES  Longest accepted line (default: 65536)
    --send-timeout SECONDS   Drop a recipient that stops reading (default: 10)
    --close-timeout SECONDS  Abort a connection that will not flush on close (default: 5)
    --log-level LEVEL        Logging level (default: INFO)
    --log-dir DIR            Also write the server log to DIR/server.log
"""

import argparse
import asyncio
import sys

from common.constants import DEFAULT_SERVER_HOST, DEFAULT_PORT, MAX_LINE_LENGTH, SEND_TIMEOUT, CLOSE_TIMEOUT
from server.main_server import ChatRelayServer
from server.utils.config import ServerConfig, parse_port
from server.utils.logger import logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Chat Relay Server')
    parser.add_argument('--host', type=str, default=DEFAULT_SERVER_HOST,
                        help=f'Host to bind to (default: {DEFAULT_SERVER_HOST})')
    # Parsed leniently: an invalid value falls back to the default port
    parser.add_argument('--port', type=str, default=None,
                        help=f'TCP port for the server (default: {DEFAULT_PORT})')
    parser.add_argument('--max-line-length', type=int, default=MAX_LINE_LENGTH,
                        help=f'Longest accepted line in bytes (default: {MAX_LINE_LENGTH})')
    parser.add_argument('--send-timeout', type=float, default=SEND_TIMEOUT,
                        help=f'Seconds to wait for a slow recipient before dropping it (default: {SEND_TIMEOUT})')
    parser.add_argument('--close-timeout', type=float, default=CLOSE_TIMEOUT,
                        help=f'Seconds to flush output when closing a connection (default: {CLOSE_TIMEOUT})')
    parser.add_argument('--log-level', type=str, default='INFO',
                        help='Logging level (default: INFO)')
    parser.add_argument('--log-dir', type=str, default=None,
                        help='Directory for the server log file (default: console only)')
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    config = ServerConfig(
        host=args.host,
        port=parse_port(args.port, DEFAULT_PORT),
        max_line_length=args.max_line_length,
        send_timeout=args.send_timeout,
        close_timeout=args.close_timeout,
        log_level=args.log_level,
        logs_dir=args.log_dir
    )

    try:
        logger.configure(**config.get_log_settings())
    except ValueError as e:
        logger.log_error("logging setup", e)
        sys.exit(2)

    server = ChatRelayServer(config=config)
    logger.info(f"Server binding to {config.host}:{config.port}")

    try:
        asyncio.run(server.serve_forever())
    except KeyboardInterrupt:
        logger.info("Server shutting down...")
    except OSError as e:
        logger.log_error("server startup", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
