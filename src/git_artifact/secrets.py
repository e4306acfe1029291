# src/git_artifact/secrets.py
"""
Secret provider port.

The reader only needs "give me the bytes stored under (namespace, name, key)".
Any exception raised by a provider is treated as a failed lookup.
"""
from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from .util.fs import ensure_under_root


@runtime_checkable
class SecretProvider(Protocol):
    def get_secret(self, namespace: str, name: str, key: str) -> bytes: ...


class MountedSecretProvider:
    """
    Reads secrets projected onto disk as ``<root>/<namespace>/<name>/<key>``,
    the layout Kubernetes produces for secret volumes mounted per namespace.
    """

    def __init__(self, root: str) -> None:
        self.root = Path(root)

    def get_secret(self, namespace: str, name: str, key: str) -> bytes:
        path = ensure_under_root(str(self.root), str(Path(namespace) / name / key))
        if not path.is_file():
            raise KeyError(f"secret {namespace}/{name} has no key {key!r}")
        return path.read_bytes()
