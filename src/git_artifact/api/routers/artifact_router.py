# src/git_artifact/api/routers/artifact_router.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from git_artifact.api.deps import CloneDirectoryLocks, get_config, get_locks, get_reader
from git_artifact.config import Config
from git_artifact.models import GitArtifact
from git_artifact.reader import GitArtifactReader
from git_artifact.tools.common import place_clone_directory
from git_artifact.util.fs import sha256_of_bytes

router = APIRouter(prefix="/artifacts", tags=["artifacts"])


# Sync handler: the reader blocks on git, so FastAPI runs it in the threadpool.
@router.post("/read")
def read_artifact(
    payload: GitArtifact,
    cfg: Config = Depends(get_config),
    reader: GitArtifactReader = Depends(get_reader),
    locks: CloneDirectoryLocks = Depends(get_locks),
):
    try:
        clone_directory = place_clone_directory(cfg, payload.clone_directory)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    spec = payload.model_copy(update={"clone_directory": clone_directory}).to_spec()
    with locks.hold(spec.clone_directory):
        data = reader.read(spec)

    return Response(
        content=data,
        media_type="application/octet-stream",
        headers={"X-Artifact-SHA256": sha256_of_bytes(data), "X-Artifact-Path": spec.file_path},
    )
