"""
Transport session module.

Wraps one accepted connection as a line-oriented duplex stream and exposes
the sink used by other handlers to deliver lines to this connection.
"""

import asyncio
from typing import Optional

from common.constants import MAX_LINE_LENGTH, SEND_TIMEOUT, CLOSE_TIMEOUT
from common.protocol_definitions import encode_line, decode_line
from server.utils.logger import logger


class LineSink:
    """Delivers one line at a time to a connected user."""

    def __init__(self, writer: asyncio.StreamWriter, label: str = '',
                 send_timeout: float = SEND_TIMEOUT):
        self.writer = writer
        self.label = label
        self.send_timeout = send_timeout

    async def send(self, line: str) -> bool:
        """
        Write one line and wait for the buffer to drain.

        A closed or broken transport is a soft failure: it is logged at
        debug level and reported as False instead of raising. A recipient
        that does not drain within `send_timeout` is treated as stalled and
        its transport is aborted, so later sends fail fast.
        """
        if self.writer.is_closing():
            logger.debug(f"Dropping line for {self.label}: connection is closing")
            return False
        try:
            self.writer.write(encode_line(line))
            await asyncio.wait_for(self.writer.drain(), self.send_timeout)
            return True
        except asyncio.TimeoutError:
            logger.warning(f"Send to {self.label} timed out after {self.send_timeout}s, aborting connection")
            self.writer.transport.abort()
            return False
        except (ConnectionError, OSError) as e:
            logger.debug(f"Failed to send to {self.label}: {e}")
            return False


class LineSession:
    """One live connection, owned by exactly one connection handler."""

    def __init__(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter,
                 max_line_length: int = MAX_LINE_LENGTH, send_timeout: float = SEND_TIMEOUT,
                 close_timeout: float = CLOSE_TIMEOUT):
        self.reader = reader
        self.writer = writer
        self.max_line_length = max_line_length
        self.close_timeout = close_timeout
        self.addr = writer.get_extra_info('peername')
        self.sink = LineSink(writer, label=str(self.addr), send_timeout=send_timeout)
        self._closed = False

    async def read_line(self) -> Optional[str]:
        """
        Wait for the next line.

        Returns the line without its terminator, or None when the stream
        ended, failed, or the line exceeded `max_line_length`.
        """
        try:
            data = await self.reader.readline()
        except (asyncio.LimitOverrunError, ValueError) as e:
            logger.warning(f"Line too long from {self.addr}: {e}")
            return None
        except (ConnectionError, OSError, asyncio.IncompleteReadError) as e:
            logger.info(f"Read error from {self.addr}: {e}")
            return None

        if len(data) > self.max_line_length:
            logger.warning(f"Line too long from {self.addr}: {len(data)} bytes")
            return None
        return decode_line(data)

    async def send_line(self, line: str) -> bool:
        """Send one line to the remote side of this session."""
        return await self.sink.send(line)

    async def close(self):
        """
        Close the transport in both directions; safe to call repeatedly.

        Pending output gets `close_timeout` seconds to flush. A peer that is
        not reading keeps the transport open past that, so it is aborted.
        """
        if self._closed:
            return
        self._closed = True
        try:
            self.writer.close()
            await asyncio.wait_for(self.writer.wait_closed(), self.close_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Connection {self.addr} did not close within {self.close_timeout}s, aborting")
            self.writer.transport.abort()
        except (ConnectionError, OSError) as e:
            logger.warning(f"Error closing connection {self.addr}: {e}")
