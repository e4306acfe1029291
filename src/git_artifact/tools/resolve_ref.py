# src/git_artifact/tools/resolve_ref.py
from __future__ import annotations

from typing import Any, Dict

from ..config import Config
from ..errors import ArtifactReadError, RepositoryOpenFailed
from ..refs import resolve_reference
from ..transport import GitTransport, RepositoryNotFoundError
from .common import error_result, place_clone_directory


def make_handler(cfg: Config, transport: GitTransport):
    def handler(args: Dict[str, Any]) -> Dict[str, Any]:
        root = place_clone_directory(cfg, args["cloneDirectory"])
        try:
            try:
                repo = transport.open(root)
            except RepositoryNotFoundError as exc:
                raise RepositoryOpenFailed("no repository to resolve against", exc) from exc
            ref = resolve_reference(repo, args.get("branch") or None, args.get("tag") or None)
        except ArtifactReadError as err:
            return error_result(err)

        commit = repo.head_commit()
        return {
            "content": [{"type": "text", "text": ref or "HEAD"}],
            "structuredContent": {"reference": ref, "commit": commit},
            "isError": False
        }
    return handler


INPUT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["cloneDirectory"],
    "properties": {
        "cloneDirectory": {"type": "string", "minLength": 1},
        "branch": {"type": "string"},
        "tag": {"type": "string"}
    },
    "additionalProperties": False
}

OUTPUT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["reference", "commit"],
    "properties": {
        "reference": {"type": ["string", "null"]},
        "commit": {"type": ["string", "null"]}
    },
    "additionalProperties": False
}
