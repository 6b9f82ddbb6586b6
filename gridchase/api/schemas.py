"""Pydantic response models for the API."""

from __future__ import annotations

from pydantic import BaseModel, Field


# --- Map ---

class MapResponse(BaseModel):
    width: int
    height: int
    level: int = 1
    tunnel_rows: list[int] = Field(default_factory=list)
    grid: list[int] = Field(description="RLE-encoded TileKind values: [value, count, value, count, ...]")


# --- Game State ---

class PlayerSchema(BaseModel):
    x: int
    y: int
    facing: str
    pending: str | None = None


class AdversarySchema(BaseModel):
    slot: int
    name: str
    x: int
    y: int
    facing: str
    mode: str
    sprite: str = ""
    vulnerable_until: int | None = None


class RunSchema(BaseModel):
    score: int
    lives: int
    max_lives: int
    level: int
    outcome: str
    running: bool
    collected: int
    captures: int
    rank: str


class EventSchema(BaseModel):
    tick: int
    category: str
    message: str
    entity_ids: list[int] = Field(default_factory=list)
    metadata: dict | None = None


class GameStateResponse(BaseModel):
    tick: int
    player: PlayerSchema
    adversaries: list[AdversarySchema]
    run: RunSchema
    remaining_collectibles: int
    events: list[EventSchema] = Field(default_factory=list)


# --- Control / Input ---

class ControlResponse(BaseModel):
    status: str
    message: str
    tick: int = 0


class InputResponse(BaseModel):
    accepted: bool
    direction: str
    tick: int = 0


# --- Config ---

class GameConfigResponse(BaseModel):
    variant: str
    world_seed: int
    grid_width: int
    grid_height: int
    tick_interval_ms: float
    performance_mode: bool
    frame_rate_hz: float
    start_lives: int
    max_lives: int
    adversary_count: int
    adversary_policy: str
    wrap_horizontal: bool
    collectible_score: int
    bonus_item_score: int
    capture_bounty: int
    completion_bonus: int
    vulnerable_duration_ms: float
    loop_levels: bool
    tick_rate: float


# --- Stats ---

class GameStats(BaseModel):
    tick: int
    score: int
    lives: int
    level: int
    outcome: str
    remaining_collectibles: int
    games_played: int
    running: bool
    paused: bool
