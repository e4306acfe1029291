# src/git_artifact/api/middleware/logging.py
from __future__ import annotations
import time
import logging
from fastapi import FastAPI, Request

from git_artifact.util.logging import get_logger, log_kv

logger = get_logger("git_artifact.api.requests")


def install_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def _log_requests(request: Request, call_next):
        start = time.perf_counter()
        status = 500  # unless call_next returns
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            log_kv(
                logger, logging.WARNING if status >= 500 else logging.INFO, "http request",
                method=request.method, path=request.url.path, status=status,
                duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
            )
