from __future__ import annotations

import asyncio

from wordspy.events import GameEvent
from wordspy.websocket_hub import GameWebSocketHub

BOARD = (
    [{"word": f"{i}-team1", "kind": "team1"} for i in range(3)]
    + [{"word": f"{i}-team2", "kind": "team2"} for i in range(3)]
    + [{"word": "assassin", "kind": "assassin"}]
)


def test_ws_receives_action_events(client_and_redis) -> None:
    client, _ = client_and_redis

    gid = client.post("/game", json={"name": "n", "room_url": "u", "room_name": "ws", "board": BOARD}).json()["game_id"]

    with client.websocket_connect(f"/ws/game/{gid}") as ws:
        res = client.post(f"/games/{gid}/actions/join-team", json={"player_id": "p1", "team": "team1"})
        assert res.status_code == 200

        joined = ws.receive_json()
        assert joined["type"] == "joined-team"
        assert joined["game_id"] == gid
        assert joined["data"]["session_id"] == "p1"

        dump = ws.receive_json()
        assert dump["type"] == "game-data-dump"
        assert dump["data"]["players"] == [{"id": "p1", "team": "team1", "is_spymaster": False}]


def test_ws_receives_final_dump_on_close(client_and_redis) -> None:
    client, _ = client_and_redis

    gid = client.post("/game", json={"name": "n", "room_url": "u", "room_name": "ws-close", "board": BOARD}).json()["game_id"]

    with client.websocket_connect(f"/ws/game/{gid}") as ws:
        assert client.delete(f"/game/{gid}").status_code == 200

        final = ws.receive_json()
        assert final["type"] == "game-data-dump"
        assert final["data"]["status"] == "ended"


class _RecordingSocket:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[dict] = []

    async def accept(self) -> None:
        return None

    async def send_json(self, payload: dict) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(payload)


def test_hub_drops_failed_socket_and_keeps_order() -> None:
    hub = GameWebSocketHub()
    good = _RecordingSocket()
    bad = _RecordingSocket(fail=True)
    events = [
        GameEvent.now(type="next-turn", game_id="g", data={"current_turn": "team2"}),
        GameEvent.now(type="game-data-dump", game_id="g", data={"players": []}),
    ]

    async def _run() -> None:
        await hub.connect("g", good)  # type: ignore[arg-type]
        await hub.connect("g", bad)  # type: ignore[arg-type]
        await hub.broadcast_events("g", events)

    asyncio.run(_run())

    assert [p["type"] for p in good.sent] == ["next-turn", "game-data-dump"]
    assert hub.watcher_count("g") == 1
