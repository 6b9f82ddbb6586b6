"""FastAPI dependency injection: the EngineManager singleton and its snapshot."""

from __future__ import annotations

from fastapi import HTTPException

from gridchase.api.engine_manager import EngineManager
from gridchase.core.snapshot import Snapshot

_engine_manager: EngineManager | None = None


def set_engine_manager(manager: EngineManager | None) -> None:
    global _engine_manager
    _engine_manager = manager


def get_engine_manager() -> EngineManager:
    if _engine_manager is None:
        raise RuntimeError("EngineManager not initialized; server not started correctly.")
    return _engine_manager


def require_snapshot(manager: EngineManager) -> Snapshot:
    """Latest published snapshot, or HTTP 503 while the game is being built."""
    snapshot = manager.get_snapshot()
    if snapshot is None:
        raise HTTPException(status_code=503, detail="No snapshot available yet.")
    return snapshot
