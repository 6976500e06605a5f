from __future__ import annotations

from fastapi.testclient import TestClient

BOARD = (
    [{"word": f"{i}-team1", "kind": "team1"} for i in range(3)]
    + [{"word": f"{i}-team2", "kind": "team2"} for i in range(3)]
    + [{"word": "assassin", "kind": "assassin"}]
    + [{"word": f"{i}-neutral", "kind": "neutral"} for i in range(3)]
)


def _create(client: TestClient, room: str = "room-a") -> dict:
    resp = client.post(
        "/game",
        json={"name": "friday night", "room_url": f"https://rooms.test.example/{room}", "room_name": room, "board": BOARD},
    )
    assert resp.status_code == 201
    return resp.json()


def _action(client: TestClient, gid: str, action: str, **body: object):
    return client.post(f"/games/{gid}/actions/{action}", json=body)


def test_create_and_fetch_game(client_and_redis) -> None:
    client, _ = client_and_redis

    data = _create(client)
    assert data["game_id"] == "test.example-room-a"
    assert data["status"] == "pending"
    assert data["current_turn"] is None
    assert data["revealed_word_vals"] == []
    assert data["scores"]["team2"] == {"team": "team2", "words_left": 3, "is_assassinated": False}

    resp = client.get(f"/game/{data['game_id']}")
    assert resp.status_code == 200
    assert resp.json() == data

    games = client.get("/game").json()["games"]
    assert [g["game_id"] for g in games] == [data["game_id"]]


def test_create_game_deals_board_from_words(client_and_redis) -> None:
    client, _ = client_and_redis

    words = [f"w{i}" for i in range(20)]
    resp = client.post(
        "/game",
        json={"name": "n", "room_url": "u", "room_name": "dealt", "words": words, "seed": 3},
    )
    assert resp.status_code == 201


def test_create_game_validation(client_and_redis) -> None:
    client, _ = client_and_redis

    _create(client, room="dup")
    resp = client.post("/game", json={"name": "n", "room_url": "u", "room_name": "dup", "board": BOARD})
    assert resp.status_code == 422

    too_few = client.post("/game", json={"name": "n", "room_url": "u", "room_name": "short", "words": ["a", "b"]})
    assert too_few.status_code == 422


def test_get_game_404(client_and_redis) -> None:
    client, _ = client_and_redis
    assert client.get("/game/missing").status_code == 404
    assert _action(client, "missing", "join-team", player_id="p1", team="team1").status_code == 404


def test_full_round_over_http(client_and_redis) -> None:
    client, r = client_and_redis
    gid = _create(client)["game_id"]

    assert _action(client, gid, "join-team", player_id="p1", team="team1").status_code == 200
    assert _action(client, gid, "join-team", player_id="p2", team="team2").status_code == 200
    assert _action(client, gid, "become-spymaster", player_id="p1").status_code == 200

    started = _action(client, gid, "become-spymaster", player_id="p2")
    assert started.status_code == 200
    body = started.json()
    assert body["game"]["status"] == "playing"
    assert body["game"]["current_turn"] == "team1"
    assert [e["type"] for e in body["events"]] == ["new-spymaster", "next-turn", "game-data-dump"]

    out_of_turn = _action(client, gid, "word-selected", player_id="p2", word="1-team2")
    assert out_of_turn.status_code == 422
    assert out_of_turn.json()["detail"] == {"code": "invalid_turn", "message": "Not your team's turn"}
    assert client.get(f"/game/{gid}").json()["revealed_word_vals"] == ["1-team2"]

    again = _action(client, gid, "word-selected", player_id="p1", word="1-team2")
    assert again.status_code == 422
    assert again.json()["detail"]["code"] == "word_already_revealed"

    hit = _action(client, gid, "word-selected", player_id="p1", word="assassin")
    assert hit.status_code == 200
    assert hit.json()["game"]["status"] == "ended"

    mailbox = client.get(f"/games/{gid}/players/p2/mailbox", params={"count": 200}).json()
    assert mailbox["stream"] == f"mailbox:{gid}:p2"
    types = [m["fields"]["type"] for m in mailbox["messages"]]
    assert "srv-error" in types
    assert "game-over" in types


def test_action_request_validation(client_and_redis) -> None:
    client, _ = client_and_redis
    gid = _create(client)["game_id"]

    assert _action(client, gid, "dance", player_id="p1").status_code == 422
    assert _action(client, gid, "join-team", team="team1").status_code == 422

    _action(client, gid, "join-team", player_id="p1", team="team1")
    dup = _action(client, gid, "join-team", player_id="p1", team="team2")
    assert dup.status_code == 422
    assert dup.json()["detail"]["code"] == "duplicate_player"


def test_mailbox_count_bounds(client_and_redis) -> None:
    client, _ = client_and_redis
    assert client.get("/games/g/players/p/mailbox", params={"count": 0}).status_code == 422


def test_healthcheck_and_info(client_and_redis) -> None:
    client, _ = client_and_redis
    assert client.get("/healthcheck").json() == {"status": "ok"}
    assert client.get("/info").json()["name"] == "wordspy"


def test_create_game_rejects_board_off_quota(client_and_redis) -> None:
    client, _ = client_and_redis

    short = [w for w in BOARD if w["word"] != "0-team2"]
    resp = client.post("/game", json={"name": "n", "room_url": "u", "room_name": "short", "board": short})

    assert resp.status_code == 422
    assert "team2" in resp.json()["detail"]
    assert client.get("/game").json()["games"] == []


def test_close_game_route(client_and_redis) -> None:
    client, _ = client_and_redis
    gid = _create(client)["game_id"]
    _action(client, gid, "join-team", player_id="p1", team="team1")

    resp = client.delete(f"/game/{gid}")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ended"

    assert client.get(f"/game/{gid}").status_code == 404
    assert client.delete(f"/game/{gid}").status_code == 404

    # The room name is free again.
    assert _create(client)["status"] == "pending"


def test_next_turn_rejected_for_team_without_turn(client_and_redis) -> None:
    client, _ = client_and_redis
    gid = _create(client)["game_id"]
    for pid, team in (("p1", "team1"), ("p2", "team2")):
        _action(client, gid, "join-team", player_id=pid, team=team)
    for pid in ("p1", "p2"):
        _action(client, gid, "become-spymaster", player_id=pid)

    resp = _action(client, gid, "next-turn", player_id="p2")
    assert resp.status_code == 422
    assert resp.json()["detail"]["code"] == "invalid_turn"

    ghost = _action(client, gid, "next-turn", player_id="ghost")
    assert ghost.json()["detail"]["code"] == "player_not_found"

    ok = _action(client, gid, "next-turn", player_id="p1")
    assert ok.json()["game"]["current_turn"] == "team2"
