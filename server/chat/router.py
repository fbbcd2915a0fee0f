"""
Message router module.

Applies the routing policy to each line received from a registered user.
"""

from common.constants import CommandTypes
from common.protocol_definitions import (
    parse_line, create_delivered_message, create_online_users_message,
    create_user_not_found_warning, create_self_message_warning,
    create_invalid_format_warning
)
from server.chat.registry import UserRegistry
from server.utils.logger import logger


class MessageRouter:
    """Routes direct messages and answers online-users queries."""

    def __init__(self, registry: UserRegistry):
        self.registry = registry

    async def dispatch(self, username: str, line: str, reply_sink):
        """Parse `line` sent by `username` and apply it; replies go to `reply_sink`."""
        command = parse_line(line)

        if command.type == CommandTypes.DIRECT_MESSAGE:
            await self.handle_direct_message(username, command.recipient, command.body, reply_sink)
        elif command.type == CommandTypes.ONLINE_USERS:
            await self.handle_online_users(username, reply_sink)
        else:
            logger.log_routing_miss(username, "invalid message format")
            await reply_sink.send(create_invalid_format_warning())

    async def handle_direct_message(self, username: str, recipient: str, body: str, reply_sink):
        """Deliver `body` to `recipient`; the sender gets no confirmation."""
        recipient_sink = await self.registry.lookup(recipient)

        if recipient_sink is None:
            logger.log_routing_miss(username, f"user '{recipient}' not found")
            await reply_sink.send(create_user_not_found_warning(recipient))
            return

        if recipient == username:
            logger.log_routing_miss(username, "self-message")
            await reply_sink.send(create_self_message_warning())
            return

        delivered = await recipient_sink.send(create_delivered_message(username, body))
        logger.log_direct_message(username, recipient, body, delivered)

    async def handle_online_users(self, username: str, reply_sink):
        """Send the sender a comma-joined list of everyone else online."""
        usernames = await self.registry.list_other_usernames(username)
        logger.debug(f"Online users requested by {username}: {len(usernames)} other(s)")
        await reply_sink.send(create_online_users_message(usernames))
