"""GET /api/v1/config: expose game configuration."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from gridchase.api.dependencies import get_engine_manager
from gridchase.api.engine_manager import EngineManager
from gridchase.api.schemas import GameConfigResponse

router = APIRouter()


@router.get("/config", response_model=GameConfigResponse)
def get_config(
    manager: EngineManager = Depends(get_engine_manager),
) -> GameConfigResponse:
    cfg = manager.config
    return GameConfigResponse(
        variant=cfg.variant.name.lower(),
        world_seed=cfg.world_seed,
        grid_width=cfg.grid_width,
        grid_height=cfg.grid_height,
        tick_interval_ms=cfg.effective_tick_interval_ms,
        performance_mode=cfg.performance_mode,
        frame_rate_hz=cfg.frame_rate_hz,
        start_lives=cfg.start_lives,
        max_lives=cfg.max_lives,
        adversary_count=cfg.adversary_count,
        adversary_policy=cfg.adversary_policy,
        wrap_horizontal=cfg.wrap_horizontal,
        collectible_score=cfg.collectible_score,
        bonus_item_score=cfg.bonus_item_score,
        capture_bounty=cfg.capture_bounty,
        completion_bonus=cfg.completion_bonus,
        vulnerable_duration_ms=cfg.vulnerable_duration_ms,
        loop_levels=cfg.loop_levels,
        tick_rate=manager.tick_rate,
    )
