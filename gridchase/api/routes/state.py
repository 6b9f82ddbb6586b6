"""GET /api/v1/state: entities, run state and events (polled by the UI)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from gridchase.api.dependencies import get_engine_manager, require_snapshot
from gridchase.api.engine_manager import EngineManager
from gridchase.api.schemas import (
    AdversarySchema,
    EventSchema,
    GameStateResponse,
    GameStats,
    PlayerSchema,
    RunSchema,
)
from gridchase.engine.scoring import rank_for_score

router = APIRouter()


def _sprite(manager: EngineManager, slot: int) -> str:
    sprites = manager.config.adversary_sprites
    return sprites[slot % len(sprites)] if sprites else ""


@router.get("/state", response_model=GameStateResponse)
def get_state(
    since_tick: int = Query(0, ge=0, description="Only return events since this tick"),
    manager: EngineManager = Depends(get_engine_manager),
) -> GameStateResponse:
    snapshot = require_snapshot(manager)

    p = snapshot.player
    player = PlayerSchema(
        x=p.pos.x,
        y=p.pos.y,
        facing=p.facing.name,
        pending=p.pending.name if p.pending is not None else None,
    )

    adversaries = [
        AdversarySchema(
            slot=a.slot,
            name=a.name,
            sprite=_sprite(manager, a.slot),
            x=a.pos.x,
            y=a.pos.y,
            facing=a.facing.name,
            mode=a.mode.name,
            vulnerable_until=a.vulnerable_until,
        )
        for a in snapshot.adversaries
    ]

    r = snapshot.run
    run = RunSchema(
        score=r.score, lives=r.lives, max_lives=r.max_lives, level=r.level,
        outcome=r.outcome.name, running=r.running,
        collected=r.collected, captures=r.captures,
        rank=rank_for_score(r.score),
    )

    events = [
        EventSchema(
            tick=ev.tick, category=ev.category, message=ev.message,
            entity_ids=list(ev.entity_ids), metadata=ev.metadata,
        )
        for ev in manager.event_log.since_tick(since_tick)
    ]

    return GameStateResponse(
        tick=snapshot.tick,
        player=player,
        adversaries=adversaries,
        run=run,
        remaining_collectibles=snapshot.remaining_collectibles,
        events=events,
    )


@router.get("/stats", response_model=GameStats)
def get_stats(manager: EngineManager = Depends(get_engine_manager)) -> GameStats:
    snapshot = require_snapshot(manager)
    r = snapshot.run
    return GameStats(
        tick=snapshot.tick,
        score=r.score,
        lives=r.lives,
        level=r.level,
        outcome=r.outcome.name,
        remaining_collectibles=snapshot.remaining_collectibles,
        games_played=manager.games_played,
        running=manager.running,
        paused=manager.paused,
    )
