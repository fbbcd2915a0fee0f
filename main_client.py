#!/usr/bin/env python3
"""
Chat Relay Client - Main Entry Point

Usage:
    python main_client.py [--username NAME] [--server-ip HOST] [--port PORT]

Type `online users` to list who is connected, `@name: message` to send a
private message and `quit` to leave.
"""

import argparse
import asyncio

from common.constants import DEFAULT_HOST, DEFAULT_PORT


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Chat Relay Client')
    parser.add_argument('--username', type=str, default=None,
                        help='Username for chat (default: asked interactively)')
    parser.add_argument('--server-ip', type=str, default=DEFAULT_HOST,
                        help=f'Server IP address (default: {DEFAULT_HOST})')
    parser.add_argument('--port', type=str, default=None,
                        help=f'Server port (default: {DEFAULT_PORT})')
    return parser


def main(argv=None):
    """Main entry point."""
    from client.main_client import ChatRelayClient
    from client.utils.logger import logger
    from client.utils.config import parse_port

    args = build_parser().parse_args(argv)
    port = parse_port(args.port, DEFAULT_PORT)

    username = args.username
    try:
        while not username:
            username = input("Enter your username: ").strip()
    except (EOFError, KeyboardInterrupt):
        print("\n[INFO] No username given, exiting")
        return

    client = ChatRelayClient(host=args.server_ip, port=port, username=username)

    try:
        asyncio.run(client.interactive_mode())
    except KeyboardInterrupt:
        print("\n[INFO] Interrupted by user")
    except Exception as e:
        logger.log_error("client", e)


if __name__ == "__main__":
    main()
