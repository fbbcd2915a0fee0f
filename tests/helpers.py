"""Test doubles shared by the server test modules."""

import asyncio


class RecordingSink:
    """Sink that records every delivered line."""

    def __init__(self, name: str = '', alive: bool = True):
        self.name = name
        self.alive = alive
        self.lines = []

    async def send(self, line: str) -> bool:
        if not self.alive:
            return False
        self.lines.append(line)
        return True


class ScriptedSession:
    """Session whose incoming lines are fed by the test; None means EOF."""

    def __init__(self, addr=('127.0.0.1', 50000)):
        self.addr = addr
        self.sink = RecordingSink(str(addr))
        self.incoming = asyncio.Queue()
        self.close_count = 0

    def feed(self, *lines):
        for line in lines:
            self.incoming.put_nowait(line)

    async def read_line(self):
        return await self.incoming.get()

    async def send_line(self, line: str) -> bool:
        return await self.sink.send(line)

    async def close(self):
        self.close_count += 1


async def wait_until(predicate, timeout: float = 2.0, interval: float = 0.01):
    """Poll an async predicate until it holds or the timeout expires."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not await predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met before timeout")
        await asyncio.sleep(interval)


READ_TIMEOUT = 2.0


class RawClient:
    """Minimal line client used to drive a running server."""

    def __init__(self, reader, writer):
        self.reader = reader
        self.writer = writer

    async def send(self, line: str):
        self.writer.write((line + "\n").encode('utf-8'))
        await self.writer.drain()

    async def receive(self, timeout: float = READ_TIMEOUT) -> str:
        data = await asyncio.wait_for(self.reader.readline(), timeout)
        return data.decode('utf-8').rstrip("\n")

    async def close(self):
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except (ConnectionError, OSError):
            pass
