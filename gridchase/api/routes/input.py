"""POST /api/v1/input/{direction}: queue a turn for the player."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends

from gridchase.api.dependencies import get_engine_manager
from gridchase.api.engine_manager import EngineManager
from gridchase.api.schemas import InputResponse

router = APIRouter()


class DirectionName(str, Enum):
    up = "up"
    down = "down"
    left = "left"
    right = "right"


@router.post("/input/{direction}", response_model=InputResponse)
def send_input(
    direction: DirectionName,
    manager: EngineManager = Depends(get_engine_manager),
) -> InputResponse:
    accepted = manager.request_direction(direction.value)
    snapshot = manager.get_snapshot()
    return InputResponse(
        accepted=accepted,
        direction=direction.value,
        tick=snapshot.tick if snapshot else 0,
    )
