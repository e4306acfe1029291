# src/git_artifact/errors.py
"""
Error taxonomy for artifact reads.

Every failure of ``GitArtifactReader.read`` is one of the classes below. Callers
branch on ``err.kind`` instead of parsing messages; the underlying exception is
kept on ``err.cause`` and chained as ``__cause__``.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    REPOSITORY_OPEN_FAILED = "RepositoryOpenFailed"
    CLONE_FAILED = "CloneFailed"
    SECRET_LOOKUP_FAILED = "SecretLookupFailed"
    SSH_KEY_INVALID = "SSHKeyInvalid"
    BRANCH_NOT_FOUND = "BranchNotFound"
    TAG_NOT_FOUND = "TagNotFound"
    WORKTREE_UNAVAILABLE = "WorktreeUnavailable"
    PULL_FAILED = "PullFailed"
    FILE_OPEN_FAILED = "FileOpenFailed"


class ArtifactReadError(RuntimeError):
    kind: ErrorKind

    def __init__(self, operation: str, cause: Optional[BaseException] = None, *, detail: Optional[str] = None) -> None:
        self.operation = operation
        self.cause = cause
        self.detail = detail if detail is not None else (str(cause) if cause is not None else "")
        super().__init__(f"{operation}: {self.detail}" if self.detail else operation)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "operation": self.operation, "detail": self.detail}


class RepositoryOpenFailed(ArtifactReadError):
    kind = ErrorKind.REPOSITORY_OPEN_FAILED


class CloneFailed(ArtifactReadError):
    kind = ErrorKind.CLONE_FAILED


class SecretLookupFailed(ArtifactReadError):
    kind = ErrorKind.SECRET_LOOKUP_FAILED


class SSHKeyInvalid(ArtifactReadError):
    kind = ErrorKind.SSH_KEY_INVALID


class BranchNotFound(ArtifactReadError):
    kind = ErrorKind.BRANCH_NOT_FOUND


class TagNotFound(ArtifactReadError):
    kind = ErrorKind.TAG_NOT_FOUND


class WorktreeUnavailable(ArtifactReadError):
    kind = ErrorKind.WORKTREE_UNAVAILABLE


class PullFailed(ArtifactReadError):
    kind = ErrorKind.PULL_FAILED


class FileOpenFailed(ArtifactReadError):
    kind = ErrorKind.FILE_OPEN_FAILED


__all__ = [
    "ErrorKind",
    "ArtifactReadError",
    "RepositoryOpenFailed",
    "CloneFailed",
    "SecretLookupFailed",
    "SSHKeyInvalid",
    "BranchNotFound",
    "TagNotFound",
    "WorktreeUnavailable",
    "PullFailed",
    "FileOpenFailed",
]
