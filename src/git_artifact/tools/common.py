# src/git_artifact/tools/common.py
from __future__ import annotations

from typing import Any, Dict, Optional

from ..config import Config
from ..errors import ArtifactReadError
from ..models import GitArtifact
from ..util.fs import ensure_under_root

SECRET_REF_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["name", "key"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "key": {"type": "string", "minLength": 1},
    },
    "additionalProperties": False,
}


def place_clone_directory(cfg: Config, clone_directory: str) -> str:
    """Confine clone directories under REPO_WORK_ROOT when one is configured."""
    if not cfg.work_root:
        return clone_directory
    # Treat absolute dests as relative folders under work_root
    return str(ensure_under_root(cfg.work_root, clone_directory.lstrip("/")))


def artifact_from_args(cfg: Config, args: Dict[str, Any]) -> GitArtifact:
    artifact = GitArtifact.model_validate({k: v for k, v in args.items() if k not in ("encoding",)})
    return artifact.model_copy(update={"clone_directory": place_clone_directory(cfg, artifact.clone_directory)})


def error_result(err: ArtifactReadError, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    payload = {**err.to_dict(), **(extra or {})}
    return {
        "content": [{"type": "text", "text": f"{err.kind.value}: {err}"}],
        "structuredContent": payload,
        "isError": True,
    }
