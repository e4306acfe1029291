# src/git_artifact/util/fs.py
from __future__ import annotations

import hashlib
from pathlib import Path


def ensure_under_root(root: str, target: str) -> Path:
    """
    Resolve `target` so it is guaranteed to be inside `root`.

    - If `target` is relative, interpret it under `root`.
    - If `target` is absolute, it must still live inside `root`.
    - Allows exact match with `root` or any descendant.
    """
    root_p = Path(root).resolve()
    tgt_p = Path(target)

    if not tgt_p.is_absolute():
        tgt_p = root_p / tgt_p

    # Resolve symlinks/.. and normalise
    tgt_p = tgt_p.resolve()

    try:
        tgt_p.relative_to(root_p)
    except ValueError:
        raise ValueError(f"path escapes root: {target}")

    return tgt_p


def sha256_of_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()
