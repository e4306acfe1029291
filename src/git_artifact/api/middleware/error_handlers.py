# src/git_artifact/api/middleware/error_handlers.py
from __future__ import annotations
import logging
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

from git_artifact.errors import ArtifactReadError, ErrorKind

logger = logging.getLogger("git_artifact.api.errors")

STATUS_BY_KIND = {
    ErrorKind.BRANCH_NOT_FOUND: 404,
    ErrorKind.TAG_NOT_FOUND: 404,
    ErrorKind.FILE_OPEN_FAILED: 404,
    ErrorKind.CLONE_FAILED: 502,
    ErrorKind.PULL_FAILED: 502,
}


def add_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ArtifactReadError)
    async def artifact_error_handler(_, exc: ArtifactReadError):
        status = STATUS_BY_KIND.get(exc.kind, 500)
        return JSONResponse(status_code=status, content=exc.to_dict())

    @app.exception_handler(HTTPException)
    async def http_exception_handler(_, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail, "status_code": exc.status_code},
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(_, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})
