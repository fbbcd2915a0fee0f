"""
Client configuration module.

This module handles client-side configuration settings.
"""

from common.constants import (
    DEFAULT_HOST, DEFAULT_PORT, MAX_RETRY_ATTEMPTS, RETRY_DELAY_BASE, MIN_PORT, MAX_PORT
)
from client.utils.logger import logger


def parse_port(value, default: int = DEFAULT_PORT) -> int:
    """Turn a command-line port into a number, falling back to `default`."""
    if value is None:
        return default
    try:
        port = int(value)
    except (TypeError, ValueError):
        logger.warning(f"The entered port {value!r} is invalid. The default port {default} will be used.")
        return default
    if not MIN_PORT < port <= MAX_PORT:
        logger.warning(f"The entered port {port} is out of range. The default port {default} will be used.")
        return default
    return port


class ClientConfig:
    """Client configuration class."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT, username: str = None):
        self.host = host
        self.port = port
        self.username = username

        # Connection settings
        self.retry_attempts = MAX_RETRY_ATTEMPTS
        self.retry_delay_base = RETRY_DELAY_BASE

    def get_connection_info(self):
        """Get connection information."""
        return {
            'host': self.host,
            'port': self.port,
            'username': self.username
        }
