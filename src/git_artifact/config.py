# src/git_artifact/config.py
from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class Config:
    log_level: str
    log_format: str
    secrets_root: str
    work_root: Optional[str]                     # clone dirs from MCP/HTTP must live here
    git_executable: Optional[str]
    remote_name: str
    recurse_submodules: bool
    ssh_known_hosts: Optional[str]
    ssh_strict_host_key_checking: str
    api_host: str
    api_port: int

    @staticmethod
    def load() -> "Config":
        return Config(
            log_level=os.getenv("LOG_LEVEL", "info").lower(),
            log_format=os.getenv("LOG_FORMAT", "plain").lower(),
            secrets_root=os.getenv("SECRETS_ROOT", "/var/run/secrets/git-artifact"),
            work_root=os.getenv("REPO_WORK_ROOT") or None,
            git_executable=os.getenv("GIT_PYTHON_GIT_EXECUTABLE") or None,
            remote_name=os.getenv("GIT_REMOTE_NAME", "origin"),
            recurse_submodules=_flag("GIT_RECURSE_SUBMODULES", "true"),
            ssh_known_hosts=os.getenv("GIT_KNOWN_HOSTS") or None,
            ssh_strict_host_key_checking=os.getenv("GIT_SSH_STRICT_HOST_KEY_CHECKING", "yes"),
            api_host=os.getenv("API_HOST", "0.0.0.0"),
            api_port=int(os.getenv("API_PORT", "8015")),
        )
