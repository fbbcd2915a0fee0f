"""
Client logging module.

This module handles client-side logging functionality.
"""

import logging
import sys

from common.constants import LOG_FORMAT, LOG_DATE_FORMAT, ONLINE_USERS_KEYWORD, CLIENT_QUIT_COMMAND


class ClientLogger:
    """Client logging class."""

    def __init__(self, log_level: int = logging.INFO):
        self.logger = logging.getLogger('chat_relay_client')
        self.logger.setLevel(log_level)

        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        # Create console handler
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)

        # Create formatter
        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        console_handler.setFormatter(formatter)

        # Add handler to logger
        self.logger.addHandler(console_handler)

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

    def log_connection(self, host: str, port: int, success: bool):
        """Log connection attempt."""
        status = "Connected" if success else "Failed to connect"
        self.info(f"{status} to {host}:{port}")

    def show_help(self):
        """Show the accepted commands."""
        print("-" * 50)
        print("Help:")
        print("-" * 50)
        print(f"->Type: '{ONLINE_USERS_KEYWORD}' to check all the active users.")
        print("->Accepted Message Format: [@<recipientUsername>: <Your Message>]")
        print(f"->Type: '{CLIENT_QUIT_COMMAND}' to leave the chat.")

    def log_error(self, operation: str, error: Exception):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")


# Global logger instance
logger = ClientLogger()
