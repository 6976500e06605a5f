from __future__ import annotations

import asyncio
import logging
from collections import defaultdict

from fastapi import WebSocket

from wordspy.events import GameEvent

logger = logging.getLogger(__name__)


class GameWebSocketHub:
    """Live push of GameEvents to every socket watching a session.

    Mailbox streams stay the durable copy; a socket that fails a send is
    dropped and has to reconnect and re-read its mailbox.
    """

    def __init__(self) -> None:
        self._sockets: dict[str, set[WebSocket]] = defaultdict(set)
        self._lock = asyncio.Lock()

    async def connect(self, game_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            self._sockets[game_id].add(websocket)

    async def disconnect(self, game_id: str, websocket: WebSocket) -> None:
        async with self._lock:
            watchers = self._sockets.get(game_id)
            if watchers is None:
                return
            watchers.discard(websocket)
            if not watchers:
                del self._sockets[game_id]

    def watcher_count(self, game_id: str) -> int:
        return len(self._sockets.get(game_id, ()))

    async def broadcast_events(self, game_id: str, events: list[GameEvent]) -> None:
        """Send `events` in order; a socket that fails once gets nothing further."""

        async with self._lock:
            watchers = list(self._sockets.get(game_id, ()))

        failed: set[WebSocket] = set()
        for event in events:
            payload = event.to_payload()
            for ws in watchers:
                if ws in failed:
                    continue
                try:
                    await ws.send_json(payload)
                except Exception:
                    logger.debug("game %s: dropping websocket after failed %s", game_id, event.type)
                    failed.add(ws)

        for ws in failed:
            await self.disconnect(game_id, ws)


hub = GameWebSocketHub()
