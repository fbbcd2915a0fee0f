"""
Server configuration module.

This module handles server-side configuration settings.
"""

from typing import Optional

from common.constants import (
    DEFAULT_SERVER_HOST, DEFAULT_PORT, MAX_LINE_LENGTH, MIN_PORT, MAX_PORT, SEND_TIMEOUT, CLOSE_TIMEOUT
)
from server.utils.logger import logger


def parse_port(value, default: int = DEFAULT_PORT) -> int:
    """
    Turn an externally supplied port into a number.

    Falls back to `default` when the value is missing, not an integer or out
    of range.
    """
    if value is None:
        return default
    try:
        port = int(value)
    except (TypeError, ValueError):
        logger.warning(f"The entered port {value!r} is invalid. The default port {default} will be used.")
        return default
    if not MIN_PORT <= port <= MAX_PORT:
        logger.warning(f"The entered port {port} is out of range. The default port {default} will be used.")
        return default
    return port


class ServerConfig:
    """Server configuration class."""

    def __init__(self, host: str = DEFAULT_SERVER_HOST, port: int = DEFAULT_PORT,
                 max_line_length: int = MAX_LINE_LENGTH, send_timeout: float = SEND_TIMEOUT,
                 close_timeout: float = CLOSE_TIMEOUT, log_level: str = 'INFO',
                 logs_dir: Optional[str] = None):
        self.host = host
        self.port = port

        # Longest accepted line in bytes; longer lines end the session
        self.max_line_length = max_line_length

        # Seconds before a stalled recipient or an unflushed close is aborted
        self.send_timeout = send_timeout
        self.close_timeout = close_timeout

        # Logging configuration
        self.log_level = log_level
        self.logs_dir = logs_dir

    def get_connection_info(self):
        """Get connection information."""
        return {
            'host': self.host,
            'port': self.port
        }

    def get_log_settings(self):
        """Get logging settings."""
        return {
            'log_level': self.log_level,
            'logs_dir': self.logs_dir
        }
