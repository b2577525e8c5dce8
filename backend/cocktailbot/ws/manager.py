# cocktailbot/ws/manager.py

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Dict, List, Set

from fastapi import WebSocket


class ConnectionManager:
    """Admin WebSocket connections plus a short replay buffer.

    A touchscreen that reconnects mid-pour gets the latest machine events
    instead of an empty log.
    """

    def __init__(self, history_size: int = 50) -> None:
        self._active: Set[WebSocket] = set()
        self._history: Deque[Dict[str, Any]] = deque(maxlen=history_size)

    @property
    def history(self) -> List[Dict[str, Any]]:
        return list(self._history)

    async def connect(self, ws: WebSocket) -> None:
        await ws.accept()
        self._active.add(ws)
        for event in list(self._history):
            await ws.send_json(event)

    def disconnect(self, ws: WebSocket) -> None:
        self._active.discard(ws)

    async def broadcast_json(self, payload: Dict[str, Any]) -> None:
        self._history.append(payload)

        dead = []
        for ws in list(self._active):
            try:
                await ws.send_json(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            self.disconnect(ws)


ws_manager = ConnectionManager()
