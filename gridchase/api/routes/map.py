"""GET /api/v1/map: tile layout of the current level."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from gridchase.api.dependencies import get_engine_manager, require_snapshot
from gridchase.api.engine_manager import EngineManager
from gridchase.api.schemas import MapResponse

router = APIRouter()


def encode_rle(tiles: list[int]) -> list[int]:
    """Run-length encode as [value, count, value, count, ...]."""
    rle: list[int] = []
    if not tiles:
        return rle
    cur_val = int(tiles[0])
    cur_count = 1
    for v in tiles[1:]:
        v = int(v)
        if v == cur_val:
            cur_count += 1
        else:
            rle.append(cur_val)
            rle.append(cur_count)
            cur_val = v
            cur_count = 1
    rle.append(cur_val)
    rle.append(cur_count)
    return rle


@router.get("/map", response_model=MapResponse)
def get_map(manager: EngineManager = Depends(get_engine_manager)) -> MapResponse:
    snapshot = require_snapshot(manager)

    terrain = snapshot.terrain
    return MapResponse(
        width=terrain.width,
        height=terrain.height,
        level=snapshot.run.level,
        tunnel_rows=sorted(terrain.tunnel_rows),
        grid=encode_rle(terrain.raw()),
    )
