# src/git_artifact/__init__.py
from .errors import (
    ArtifactReadError,
    BranchNotFound,
    CloneFailed,
    ErrorKind,
    FileOpenFailed,
    PullFailed,
    RepositoryOpenFailed,
    SSHKeyInvalid,
    SecretLookupFailed,
    TagNotFound,
    WorktreeUnavailable,
)
from .models import ArtifactSpec, BasicAuthRef, GitArtifact, NoCredentials, SSHKeyPath, SecretKeySelector
from .reader import GitArtifactReader
from .secrets import MountedSecretProvider, SecretProvider

__all__ = [
    "ArtifactReadError",
    "ArtifactSpec",
    "BasicAuthRef",
    "BranchNotFound",
    "CloneFailed",
    "ErrorKind",
    "FileOpenFailed",
    "GitArtifact",
    "GitArtifactReader",
    "MountedSecretProvider",
    "NoCredentials",
    "PullFailed",
    "RepositoryOpenFailed",
    "SSHKeyInvalid",
    "SSHKeyPath",
    "SecretKeySelector",
    "SecretLookupFailed",
    "SecretProvider",
    "TagNotFound",
    "WorktreeUnavailable",
]
