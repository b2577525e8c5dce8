# cocktailbot/ws/bus.py

from __future__ import annotations

import asyncio
import time
from typing import Any, Dict, Optional

from cocktailbot.ws.manager import ConnectionManager, ws_manager


class WsEventBus:
    """Hands machine events to the WebSocket broadcaster.

    `emit()` may be called from the event loop (the orchestrator) or from
    the MQTT network thread, so it always goes through
    `call_soon_threadsafe`. Before `set_loop()` events are dropped.
    """

    def __init__(self, manager: ConnectionManager) -> None:
        self._manager = manager
        self._queue: Optional[asyncio.Queue] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def set_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop
        self._queue = asyncio.Queue()

    def emit(self, event_type: str, data: Optional[Dict[str, Any]] = None) -> None:
        if self._loop is None or self._queue is None:
            return
        event = {"type": event_type, "ts": int(time.time()), "data": data or {}}
        self._loop.call_soon_threadsafe(self._queue.put_nowait, event)

    def forward(self, event: Dict[str, Any]) -> None:
        """Pass through an already-shaped event (MQTT controller messages)."""
        if self._loop is None or self._queue is None:
            return
        self._loop.call_soon_threadsafe(self._queue.put_nowait, event)

    async def run(self) -> None:
        while True:
            event = await self._queue.get()
            await self._manager.broadcast_json(event)


ws_bus = WsEventBus(ws_manager)
