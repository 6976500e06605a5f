from __future__ import annotations

from typing import Any

import redis
from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect, status
from statemachine.exceptions import TransitionNotAllowed

from wordspy.actions import ACTION_NAMES, close_game, dispatch_action
from wordspy.api.deps import get_app_settings, get_redis, get_session_registry
from wordspy.api.models import ActionResponse, ErrorDetail, GameCreateRequest, GameListResponse
from wordspy.config import Settings
from wordspy.core.errors import GameError
from wordspy.core.types import GameData
from wordspy.session_store import SessionRegistry, create_game
from wordspy.streams import Mailbox, read_mailbox
from wordspy.websocket_hub import hub

router = APIRouter()


@router.websocket("/ws/game/{game_id}")
async def game_updates_ws(websocket: WebSocket, game_id: str) -> None:
    await hub.connect(game_id, websocket)

    try:
        # Keep the socket open; client can optionally send pings.
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await hub.disconnect(game_id, websocket)
    except Exception:
        await hub.disconnect(game_id, websocket)
        raise


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/game", response_model=GameData, status_code=status.HTTP_201_CREATED)
async def create_game_route(
    payload: GameCreateRequest,
    registry: SessionRegistry = Depends(get_session_registry),
    settings: Settings = Depends(get_app_settings),
) -> GameData:
    try:
        game = create_game(
            registry=registry,
            settings=settings,
            name=payload.name,
            room_url=payload.room_url,
            room_name=payload.room_name,
            words=payload.words,
            board=payload.board,
            seed=payload.seed,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    return game.snapshot()


@router.get("/game", response_model=GameListResponse)
async def list_games_route(registry: SessionRegistry = Depends(get_session_registry)) -> GameListResponse:
    return GameListResponse(games=[g.snapshot() for g in registry.list()])


@router.get("/game/{game_id}", response_model=GameData)
async def get_game_route(game_id: str, registry: SessionRegistry = Depends(get_session_registry)) -> GameData:
    game = registry.get(game_id)
    if game is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")
    return game.snapshot()


@router.delete("/game/{game_id}", response_model=GameData)
async def close_game_route(
    game_id: str,
    r: redis.Redis = Depends(get_redis),
    registry: SessionRegistry = Depends(get_session_registry),
    settings: Settings = Depends(get_app_settings),
) -> GameData:
    if registry.get(game_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")

    try:
        result = close_game(r=r, registry=registry, settings=settings, game_id=game_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    await hub.broadcast_events(game_id, result.events)
    return result.game.snapshot()


@router.post("/games/{game_id}/actions/{action}", response_model=ActionResponse)
async def action_route(
    game_id: str,
    action: str,
    body: dict[str, Any],
    r: redis.Redis = Depends(get_redis),
    registry: SessionRegistry = Depends(get_session_registry),
    settings: Settings = Depends(get_app_settings),
) -> ActionResponse:
    if registry.get(game_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")

    try:
        if action not in ACTION_NAMES:
            raise ValueError(f"Unknown action: {action}")
        pid = body.get("player_id")
        if not pid:
            raise ValueError("player_id is required")
        result = dispatch_action(
            r=r,
            registry=registry,
            settings=settings,
            game_id=game_id,
            player_id=str(pid),
            action=action,
            payload=body,
        )
    except GameError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=ErrorDetail(code=e.code, message=str(e)).model_dump(),
        ) from e
    except TransitionNotAllowed as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    await hub.broadcast_events(game_id, result.events)
    return ActionResponse(game=result.game.snapshot(), events=[e.to_payload() for e in result.events])


@router.get("/games/{game_id}/players/{player_id}/mailbox")
async def get_player_mailbox_route(
    game_id: str,
    player_id: str,
    count: int = 20,
    start: str = "-",
    end: str = "+",
    r: redis.Redis = Depends(get_redis),
) -> dict[str, object]:
    """Debug endpoint: read a player's mailbox Redis Stream.

    Intended for local/dev testing when redis-cli isn't available.
    """

    if count < 1 or count > 200:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="count must be between 1 and 200")

    mailbox = Mailbox(game_id=game_id, player_id=player_id)
    try:
        messages = read_mailbox(r=r, mailbox=mailbox, count=count, start=start, end=end)
    except redis.RedisError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    return {"game_id": game_id, "player_id": player_id, "stream": mailbox.key, "messages": messages}
