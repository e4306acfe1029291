# src/git_artifact/api/main.py
from __future__ import annotations

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from git_artifact.api.deps import get_config
from git_artifact.api.middleware import add_error_handlers, install_request_logging
from git_artifact.api.routers import artifact_router, health_router
from git_artifact.util.logging import setup_logging

logger = logging.getLogger("git_artifact.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    cfg = get_config()
    setup_logging(cfg.log_level, cfg.log_format)
    logger.info("Starting git artifact API on %s:%s", cfg.api_host, cfg.api_port)
    yield
    logger.info("Shutdown complete")


app = FastAPI(title="Git Artifact Store", lifespan=lifespan)

install_request_logging(app)
add_error_handlers(app)

app.include_router(health_router)
app.include_router(artifact_router)


@app.get("/")
async def root():
    return {
        "service": "git-artifact-store",
        "status": "ok",
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


def run() -> None:
    import uvicorn

    cfg = get_config()
    reload_flag = os.getenv("RELOAD", "0") in ("1", "true", "True")
    uvicorn.run(
        "git_artifact.api.main:app",
        host=cfg.api_host,
        port=cfg.api_port,
        reload=reload_flag,
        log_level=cfg.log_level if cfg.log_level in ("critical", "error", "warning", "info", "debug") else "info",
    )


if __name__ == "__main__":
    run()
