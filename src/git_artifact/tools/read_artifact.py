# src/git_artifact/tools/read_artifact.py
from __future__ import annotations

import base64
from typing import Any, Dict

from ..config import Config
from ..errors import ArtifactReadError
from ..reader import GitArtifactReader
from ..util.fs import sha256_of_bytes
from .common import SECRET_REF_SCHEMA, artifact_from_args, error_result


def make_handler(cfg: Config, reader: GitArtifactReader):
    def handler(args: Dict[str, Any]) -> Dict[str, Any]:
        encoding = args.get("encoding", "utf-8")
        artifact = artifact_from_args(cfg, args)

        try:
            data = reader.read(artifact.to_spec())
        except ArtifactReadError as err:
            return error_result(err, {"path": artifact.file_path})

        if encoding == "base64":
            text = base64.b64encode(data).decode("ascii")
        else:
            text = data.decode("utf-8", errors="replace")

        return {
            "content": [{"type": "text", "text": text}],
            "structuredContent": {
                "path": artifact.file_path,
                "size_bytes": len(data),
                "sha256": sha256_of_bytes(data),
                "encoding": encoding,
            },
            "isError": False
        }
    return handler


INPUT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["url", "cloneDirectory", "filePath"],
    "properties": {
        "url": {"type": "string", "minLength": 1},
        "cloneDirectory": {"type": "string", "minLength": 1},
        "filePath": {"type": "string", "minLength": 1},
        "branch": {"type": "string"},
        "tag": {"type": "string"},
        "namespace": {"type": "string", "default": "default"},
        "creds": {
            "type": "object",
            "required": ["username", "password"],
            "properties": {"username": SECRET_REF_SCHEMA, "password": SECRET_REF_SCHEMA},
            "additionalProperties": False
        },
        "sshKeyPath": {"type": "string"},
        "encoding": {"type": "string", "enum": ["utf-8", "base64"], "default": "utf-8"}
    },
    "additionalProperties": False
}

OUTPUT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["path", "size_bytes", "sha256", "encoding"],
    "properties": {
        "path": {"type": "string"},
        "size_bytes": {"type": "integer"},
        "sha256": {"type": "string"},
        "encoding": {"type": "string"}
    },
    "additionalProperties": False
}
