"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gridchase import __version__
from gridchase.api.dependencies import set_engine_manager
from gridchase.api.engine_manager import EngineManager
from gridchase.api.routes import api_router
from gridchase.config import GameConfig
from gridchase.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: GameConfig | None = None, autostart: bool = False) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = GameConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = EngineManager(_config)
        set_engine_manager(manager)
        if autostart:
            manager.start()
        logger.info("API server started (%s, seed=%d).", _config.variant.name.lower(), _config.world_seed)
        yield
        manager.stop()
        set_engine_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Grid Chase Engine",
        description=(
            "Deterministic real-time grid chase game core.\n\n"
            "## API Groups\n\n"
            "- **State** - Live game state: player, adversaries, score, lives, events\n"
            "- **Map** - Tile layout of the current level\n"
            "- **Control** - Game lifecycle: start, pause, resume, step, reset\n"
            "- **Input** - Direction requests for the player\n"
            "- **Config** - Read-only game configuration\n"
            "- **Metadata** - Tile kinds, directions, ranks and audio cue names\n"
        ),
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Live game state polled by the renderer."},
            {"name": "Map", "description": "Tile layout. Re-fetch after a level change or reset."},
            {"name": "Control", "description": "Game lifecycle controls: start, pause, resume, single-step and reset."},
            {"name": "Input", "description": "Queue a turn; applied on the next tick where the turn is possible."},
            {"name": "Config", "description": "Read-only game configuration (variant, grid size, tick interval, scoring)."},
            {"name": "Metadata", "description": "Enum tables so renderers carry no hardcoded definitions."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app
