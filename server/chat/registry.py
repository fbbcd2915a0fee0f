"""
User registry module.

Shared directory of the users currently connected to the server, mapping
each username to the sink that delivers lines to that user.
"""

import asyncio
from typing import Dict, List

from server.utils.logger import logger


class UserRegistry:
    """
    Concurrency-safe username -> sink mapping.

    One instance lives for the whole server lifetime and is shared by every
    connection handler. All access goes through the lock; sinks are handed
    out and used outside of it.
    """

    def __init__(self):
        self._sinks: Dict[str, object] = {}
        self.lock = asyncio.Lock()  # Protect shared state

    async def register(self, username: str, sink) -> None:
        """Insert or overwrite the sink for `username` (last registration wins)."""
        async with self.lock:
            if username in self._sinks:
                logger.warning(f"Username '{username}' is already registered, replacing previous connection")
            self._sinks[username] = sink

    async def unregister(self, username: str, sink=None) -> bool:
        """
        Remove `username` if present; a missing entry is a no-op.

        When `sink` is given the entry is only removed while it still maps
        to that sink, so a superseded connection cannot evict its successor.
        Returns whether an entry was removed.
        """
        async with self.lock:
            if username not in self._sinks:
                return False
            if sink is not None and self._sinks[username] is not sink:
                return False
            del self._sinks[username]
            return True

    async def lookup(self, username: str):
        """Return the sink registered for `username`, or None."""
        async with self.lock:
            return self._sinks.get(username)

    async def list_other_usernames(self, excluding: str) -> List[str]:
        """Snapshot of every registered username except `excluding`."""
        async with self.lock:
            return [name for name in self._sinks if name != excluding]

    async def count(self) -> int:
        """Get the number of registered users."""
        async with self.lock:
            return len(self._sinks)

    async def contains(self, username: str) -> bool:
        async with self.lock:
            return username in self._sinks
