"""Metadata endpoints: enum definitions so renderers have no hardcoded tables."""

from __future__ import annotations

from pydantic import BaseModel

from fastapi import APIRouter

from gridchase.core.enums import AdversaryMode, Direction, Outcome, TileKind
from gridchase.core.grid import IMPASSABLE_KINDS, ONE_SHOT_KINDS
from gridchase.engine.scoring import RANKS

router = APIRouter(prefix="/metadata", tags=["Metadata"])

AUDIO_CUES: tuple[str, ...] = (
    "collect", "powerup", "heal", "encounter", "capture",
    "damage", "victory", "level_up", "game_start",
)


class EnumEntry(BaseModel):
    id: int
    name: str


class TileKindEntry(BaseModel):
    id: int
    name: str
    passable: bool
    consumable: bool


class RankEntry(BaseModel):
    min_score: int
    title: str


class EnumsResponse(BaseModel):
    tile_kinds: list[TileKindEntry]
    directions: list[EnumEntry]
    adversary_modes: list[EnumEntry]
    outcomes: list[EnumEntry]
    ranks: list[RankEntry]
    audio_cues: list[str]


@router.get("/enums", response_model=EnumsResponse)
def get_enums() -> EnumsResponse:
    """Tile kinds, directions, modes, outcomes, rank ladder and audio cue names."""
    return EnumsResponse(
        tile_kinds=[
            TileKindEntry(
                id=k.value,
                name=k.name.lower(),
                passable=k not in IMPASSABLE_KINDS,
                consumable=k in ONE_SHOT_KINDS,
            )
            for k in TileKind
        ],
        directions=[EnumEntry(id=d.value, name=d.name.lower()) for d in Direction],
        adversary_modes=[EnumEntry(id=m.value, name=m.name.lower()) for m in AdversaryMode],
        outcomes=[EnumEntry(id=o.value, name=o.name.lower()) for o in Outcome],
        ranks=[RankEntry(min_score=s, title=t) for s, t in reversed(RANKS)],
        audio_cues=list(AUDIO_CUES),
    )
