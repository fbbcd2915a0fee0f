"""
Server logging module.

This module handles server-side logging functionality.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from common.constants import LOG_FILE, LOG_FORMAT, LOG_DATE_FORMAT


class ServerLogger:
    """Server logging class."""

    def __init__(self, log_level: int = logging.INFO):
        # Set up main logger
        self.logger = logging.getLogger('chat_relay_server')
        self.logger.setLevel(log_level)
        self.file_handler: Optional[logging.FileHandler] = None

        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        # Create console handler
        self.console_handler = logging.StreamHandler()
        self.console_handler.setLevel(log_level)
        self.console_handler.setFormatter(self._make_formatter())

        # Add handler to logger
        self.logger.addHandler(self.console_handler)

    @staticmethod
    def _make_formatter() -> logging.Formatter:
        return logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    def configure(self, log_level: Union[int, str] = logging.INFO, logs_dir: Optional[str] = None):
        """Apply the level from the configuration and optionally log to a file."""
        if isinstance(log_level, str):
            log_level = logging.getLevelName(log_level.upper())
            if not isinstance(log_level, int):
                raise ValueError(f"Unknown log level: {log_level}")

        self.logger.setLevel(log_level)
        self.console_handler.setLevel(log_level)

        if self.file_handler is not None:
            self.logger.removeHandler(self.file_handler)
            self.file_handler.close()
            self.file_handler = None

        if logs_dir:
            path = Path(logs_dir)
            path.mkdir(parents=True, exist_ok=True)
            self.file_handler = logging.FileHandler(path / LOG_FILE, encoding='utf-8')
            self.file_handler.setLevel(log_level)
            self.file_handler.setFormatter(self._make_formatter())
            self.logger.addHandler(self.file_handler)

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def log_connection(self, addr):
        """Log client connection."""
        self.info(f"New connection from {addr}")

    def log_registration(self, username: str, addr):
        """Log username registration."""
        self.info(f"{username} ({addr}) is available for chat")

    def log_disconnect(self, username: Optional[str], addr):
        """Log client disconnect."""
        if username is None:
            self.info(f"Connection from {addr} closed before registration")
        else:
            self.info(f"{username} ({addr}) has disconnected")

    def log_online_count(self, count: int):
        """Log how many users are registered."""
        self.info(f"{count} user(s) online")

    def log_direct_message(self, sender: str, recipient: str, body: str, delivered: bool):
        """Log a routed direct message; the body only at debug level."""
        status = "delivered" if delivered else "dropped (recipient gone)"
        self.info(f"Direct message {sender} -> {recipient} {status}")
        self.debug(f"Message body from {sender}: {body!r}")

    def log_routing_miss(self, sender: str, reason: str):
        """Log a command that was answered with a warning."""
        self.info(f"Warning sent to {sender}: {reason}")

    def log_error(self, operation: str, error: Exception):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")


# Global logger instance
logger = ServerLogger()
