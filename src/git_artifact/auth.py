# src/git_artifact/auth.py
"""
Authentication resolution.

Maps the credential strategy of an ``ArtifactSpec`` to a concrete auth value
and renders the git process environment that applies it. Credentials travel
through the environment only, never through the remote URL or ``.git/config``.
"""
from __future__ import annotations

import base64
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization

from .config import Config
from .errors import SecretLookupFailed, SSHKeyInvalid
from .models import BasicAuthRef, NoCredentials, SSHKeyPath, SecretKeySelector
from .secrets import SecretProvider

SSH_USER = "git"


@dataclass(frozen=True)
class BasicAuth:
    username: str
    password: str = field(repr=False)

    def git_env(self, cfg: Optional[Config] = None) -> Dict[str, str]:
        token = base64.b64encode(f"{self.username}:{self.password}".encode("utf-8")).decode("ascii")
        return {
            "GIT_CONFIG_COUNT": "1",
            "GIT_CONFIG_KEY_0": "http.extraHeader",
            "GIT_CONFIG_VALUE_0": f"Authorization: Basic {token}",
        }


@dataclass(frozen=True)
class SSHPublicKeys:
    key_path: str
    key_type: str
    user: str = SSH_USER

    def git_env(self, cfg: Optional[Config] = None) -> Dict[str, str]:
        parts = [
            "ssh",
            "-i", shlex.quote(self.key_path),
            "-o", "IdentitiesOnly=yes",
            "-o", f"User={self.user}",
        ]
        if cfg is not None:
            if cfg.ssh_known_hosts:
                parts += ["-o", f"UserKnownHostsFile={shlex.quote(cfg.ssh_known_hosts)}"]
            parts += ["-o", f"StrictHostKeyChecking={cfg.ssh_strict_host_key_checking}"]
        return {"GIT_SSH_COMMAND": " ".join(parts)}


ResolvedAuth = Optional[Union[BasicAuth, SSHPublicKeys]]


def auth_env(auth: ResolvedAuth, cfg: Optional[Config] = None) -> Dict[str, str]:
    return auth.git_env(cfg) if auth is not None else {}


def _lookup(secrets: SecretProvider, namespace: str, ref: SecretKeySelector, what: str) -> str:
    try:
        raw = secrets.get_secret(namespace, ref.name, ref.key)
    except Exception as exc:
        raise SecretLookupFailed(f"failed to retrieve {what}", exc) from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise SecretLookupFailed(f"failed to decode {what}", exc) from exc


def load_ssh_key(path: str) -> SSHPublicKeys:
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise SSHKeyInvalid("failed to read ssh key file", exc) from exc

    try:
        if b"BEGIN OPENSSH PRIVATE KEY" in data:
            key = serialization.load_ssh_private_key(data, password=None)
        else:
            key = serialization.load_pem_private_key(data, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise SSHKeyInvalid("failed to parse ssh key", exc) from exc

    return SSHPublicKeys(key_path=str(path), key_type=type(key).__name__)


def resolve_auth(
    credentials: Union[NoCredentials, BasicAuthRef, SSHKeyPath],
    namespace: str,
    secrets: SecretProvider,
) -> ResolvedAuth:
    if isinstance(credentials, BasicAuthRef):
        username = _lookup(secrets, namespace, credentials.username, "username")
        password = _lookup(secrets, namespace, credentials.password, "password")
        return BasicAuth(username=username, password=password)
    if isinstance(credentials, SSHKeyPath):
        return load_ssh_key(credentials.path)
    return None
