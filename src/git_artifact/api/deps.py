# src/git_artifact/api/deps.py
from __future__ import annotations

import threading
from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterator, List

from git_artifact.config import Config
from git_artifact.reader import GitArtifactReader
from git_artifact.secrets import MountedSecretProvider


@lru_cache(maxsize=1)
def get_config() -> Config:
    return Config.load()


@lru_cache(maxsize=1)
def get_reader() -> GitArtifactReader:
    cfg = get_config()
    return GitArtifactReader(MountedSecretProvider(cfg.secrets_root), config=cfg)


class CloneDirectoryLocks:
    """
    One lock per clone directory; reads of different directories run in parallel.

    Paths are normalised before keying, and an entry is dropped once no request
    holds or waits on it.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[str, List] = {}   # key -> [lock, holders + waiters]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, clone_directory: str) -> Iterator[None]:
        key = str(Path(clone_directory).resolve())
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._locks[key]


@lru_cache(maxsize=1)
def get_locks() -> CloneDirectoryLocks:
    return CloneDirectoryLocks()
