"""Client link to the chat server, bridging the socket and the event bus."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress

import websockets
from websockets.exceptions import ConnectionClosedError

from .event_bus import EventBus

logger = logging.getLogger(__name__)

DEFAULT_URL = "ws://127.0.0.1:8080"
CHANNEL_CAPACITY = 1000

_CLOSE = object()


class WebsocketService:
    """Queue outgoing text for the server and publish incoming text on the bus."""

    def __init__(self, event_bus: EventBus, url: str = DEFAULT_URL) -> None:
        self.event_bus = event_bus
        self.url = url
        self._outgoing: asyncio.Queue = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, text: str) -> None:
        """Queue text for the server without waiting.

        Raises ConnectionError once closed and asyncio.QueueFull when the
        outgoing channel holds its full capacity.
        """
        if self._closed:
            raise ConnectionError("websocket service is closed")
        if self._outgoing.qsize() >= CHANNEL_CAPACITY:
            raise asyncio.QueueFull
        self._outgoing.put_nowait(text)

    def close(self) -> None:
        """Stop accepting text; the connection closes once the queue drains."""
        if not self._closed:
            self._closed = True
            self._outgoing.put_nowait(_CLOSE)

    async def run(self) -> None:
        """Connect and pump messages until the connection ends."""
        async with websockets.connect(self.url) as connection:
            writer = asyncio.create_task(self._write(connection))
            try:
                await self._read(connection)
            finally:
                if not writer.done():
                    writer.cancel()
                    with suppress(asyncio.CancelledError):
                        await writer
                elif not writer.cancelled():
                    writer.result()
        logger.debug("WebSocket Closed")

    async def _write(self, connection) -> None:
        while True:
            item = await self._outgoing.get()
            if item is _CLOSE:
                await connection.close()
                return
            logger.debug("got event from channel! %s", item)
            await connection.send(item)

    async def _read(self, connection) -> None:
        try:
            async for frame in connection:
                if isinstance(frame, str):
                    text = frame
                else:
                    try:
                        text = bytes(frame).decode("utf-8")
                    except UnicodeDecodeError:
                        continue
                logger.debug("from websocket: %s", text)
                self.event_bus.send(text)
        except ConnectionClosedError as exc:
            logger.error("ws: %r", exc)