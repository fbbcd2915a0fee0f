"""
Shared constants for the chat relay.

This module contains all constants used across client and server components.
"""

# Network Configuration
DEFAULT_HOST = 'localhost'
DEFAULT_SERVER_HOST = '0.0.0.0'
DEFAULT_PORT = 8888
MIN_PORT = 0
MAX_PORT = 65535

# Wire format
ENCODING = 'utf-8'
LINE_TERMINATOR = '\n'
MAX_LINE_LENGTH = 64 * 1024  # bytes, including the terminator
SEND_TIMEOUT = 10.0  # seconds a delivery may wait for the recipient to drain
CLOSE_TIMEOUT = 5.0  # seconds to flush pending output before the transport is aborted

# Message grammar
DIRECT_MESSAGE_PREFIX = '@'
DIRECT_MESSAGE_SEPARATOR = ':'
ONLINE_USERS_KEYWORD = 'online users'
USER_LIST_SEPARATOR = ', '

# Warnings sent back to the offending sender
USER_NOT_FOUND_WARNING = "[Warning]: User {recipient} not found or offline."
SELF_MESSAGE_WARNING = "[Warning]: You can't send messages to yourself."
INVALID_FORMAT_WARNING = (
    "[Warning]: Invalid message format. Please correct the format"
    "[eg: @recipientUsername: <Your Message>] and resend for delivery."
)

# Client
CLIENT_QUIT_COMMAND = 'quit'
MAX_RETRY_ATTEMPTS = 3
RETRY_DELAY_BASE = 1.0  # seconds, doubled per attempt

# Logging
LOG_FILE = 'server.log'
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class CommandTypes:
    """Kinds of lines a registered client can send."""
    DIRECT_MESSAGE = 'direct_message'
    ONLINE_USERS = 'online_users'
    INVALID = 'invalid'
