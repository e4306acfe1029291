# src/git_artifact/api/routers/health_router.py
from __future__ import annotations
from fastapi import APIRouter, Depends

from git_artifact.api.deps import get_config
from git_artifact.config import Config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health(cfg: Config = Depends(get_config)):
    return {"status": "ok", "remote": cfg.remote_name, "work_root": cfg.work_root}
