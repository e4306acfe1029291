# src/git_artifact/refs.py
from __future__ import annotations

from typing import Optional, Protocol

from .errors import BranchNotFound, TagNotFound


class RefSource(Protocol):
    """Anything that can answer branch/tag lookups: a local repository or a remote's ref list."""

    def branch_merge_ref(self, name: str) -> Optional[str]: ...

    def tag_ref(self, name: str) -> Optional[str]: ...


def short_ref(ref: str) -> str:
    """refs/heads/main -> main, refs/tags/v1 -> v1 (what `git clone --branch` expects)."""
    for prefix in ("refs/heads/", "refs/tags/"):
        if ref.startswith(prefix):
            return ref[len(prefix):]
    return ref


def resolve_reference(source: RefSource, branch: Optional[str], tag: Optional[str]) -> Optional[str]:
    """
    Return the full reference to fetch, or None to use the remote/tracked default.

    A branch, when given, wins over a tag.
    """
    if branch:
        ref = source.branch_merge_ref(branch)
        if not ref:
            raise BranchNotFound(f"branch {branch} not found", detail=f"no branch named {branch!r}")
        return ref
    if tag:
        ref = source.tag_ref(tag)
        if not ref:
            raise TagNotFound(f"tag {tag} not found", detail=f"no tag named {tag!r}")
        return ref
    return None
