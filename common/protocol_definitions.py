"""
Protocol definitions for the chat relay.

This module defines the line format used between client and server:
decoding/encoding of single lines, parsing of client commands and the
builders for every line the server sends back.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from common.constants import (
    ENCODING, LINE_TERMINATOR, CommandTypes,
    DIRECT_MESSAGE_PREFIX, DIRECT_MESSAGE_SEPARATOR, ONLINE_USERS_KEYWORD,
    USER_LIST_SEPARATOR, USER_NOT_FOUND_WARNING, SELF_MESSAGE_WARNING,
    INVALID_FORMAT_WARNING
)


@dataclass(frozen=True)
class DirectMessage:
    """Message addressed to exactly one recipient (`@<recipient>:<body>`)."""
    recipient: str
    body: str
    type: str = CommandTypes.DIRECT_MESSAGE


@dataclass(frozen=True)
class OnlineUsersQuery:
    """Request for the names of the other registered users."""
    type: str = CommandTypes.ONLINE_USERS


@dataclass(frozen=True)
class InvalidCommand:
    """Any line matching neither of the commands above."""
    line: str
    type: str = CommandTypes.INVALID


Command = Union[DirectMessage, OnlineUsersQuery, InvalidCommand]


def encode_line(text: str) -> bytes:
    """Encode one line of text for the wire."""
    return (text + LINE_TERMINATOR).encode(ENCODING)


def decode_line(data: bytes) -> Optional[str]:
    """
    Decode one raw line read from the wire.

    Strips a single trailing "\\n" and then a single "\\r", keeping every
    other character as received. Returns None for an empty read (EOF).
    """
    if not data:
        return None
    text = data.decode(ENCODING, errors='replace')
    if text.endswith('\n'):
        text = text[:-1]
    if text.endswith('\r'):
        text = text[:-1]
    return text


def parse_line(line: str) -> Command:
    """
    Parse a line received from a registered client.

    Direct messages take priority over the online-users query. The split
    point is the first separator anywhere in the line, so `@a:b:c` goes to
    `a` with body `b:c` and `@:x` goes to the empty username.
    """
    if line.startswith(DIRECT_MESSAGE_PREFIX) and DIRECT_MESSAGE_SEPARATOR in line:
        index = line.index(DIRECT_MESSAGE_SEPARATOR)
        return DirectMessage(
            recipient=line[len(DIRECT_MESSAGE_PREFIX):index],
            body=line[index + len(DIRECT_MESSAGE_SEPARATOR):]
        )
    if ONLINE_USERS_KEYWORD in line:
        return OnlineUsersQuery()
    return InvalidCommand(line)


def create_direct_message(recipient: str, text: str) -> str:
    """Create a client line addressed to a single recipient."""
    return f"{DIRECT_MESSAGE_PREFIX}{recipient}{DIRECT_MESSAGE_SEPARATOR} {text}"


def create_online_users_request() -> str:
    """Create a client line asking for the online users."""
    return ONLINE_USERS_KEYWORD


def create_delivered_message(sender: str, body: str) -> str:
    """Create the line delivered to the recipient of a direct message."""
    return f"{sender}{DIRECT_MESSAGE_SEPARATOR}{body}"


def create_online_users_message(usernames: Iterable[str]) -> str:
    """Create the online-users reply (empty string when nobody else is on)."""
    return USER_LIST_SEPARATOR.join(usernames)


def create_user_not_found_warning(recipient: str) -> str:
    """Create the warning for an unknown or offline recipient."""
    return USER_NOT_FOUND_WARNING.format(recipient=recipient)


def create_self_message_warning() -> str:
    """Create the warning for a message addressed to its own sender."""
    return SELF_MESSAGE_WARNING


def create_invalid_format_warning() -> str:
    """Create the warning for a line that is not a known command."""
    return INVALID_FORMAT_WARNING
