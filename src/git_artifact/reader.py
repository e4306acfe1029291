# src/git_artifact/reader.py
"""
GitArtifactReader: resolves an ``ArtifactSpec`` to the bytes of one file.

Each ``read`` call either clones ``clone_directory`` (first use) or reuses the
clone that is already there, then always pulls from the remote and reads the
file from the worktree. Nothing is cached between calls besides the clone on
disk; concurrent reads against the same clone directory must be serialized by
the caller.
"""
from __future__ import annotations

import logging
from typing import Optional

from .auth import ResolvedAuth, resolve_auth
from .config import Config
from .errors import (
    ArtifactReadError,
    CloneFailed,
    FileOpenFailed,
    PullFailed,
    RepositoryOpenFailed,
    WorktreeUnavailable,
)
from .models import ArtifactSpec
from .refs import resolve_reference
from .secrets import SecretProvider
from .transport import (
    CloneOptions,
    GitPythonTransport,
    GitTransport,
    PullOptions,
    Repository,
    RepositoryNotFoundError,
)
from .util.git_env import sanitize_remote
from .util.logging import get_logger, log_kv

logger = get_logger(__name__)


class GitArtifactReader:
    def __init__(
        self,
        secrets: SecretProvider,
        transport: Optional[GitTransport] = None,
        *,
        config: Optional[Config] = None,
    ) -> None:
        self._cfg = config or Config.load()
        self._secrets = secrets
        self._transport = transport if transport is not None else GitPythonTransport(self._cfg)

    def read(self, spec: ArtifactSpec) -> bytes:
        try:
            return self._read(spec)
        except ArtifactReadError as err:
            log_kv(
                logger, logging.WARNING, "artifact read failed",
                kind=err.kind.value, operation=err.operation,
                repo=sanitize_remote(spec.url), clone_directory=spec.clone_directory,
            )
            raise

    # ───────────────────────── Steps ─────────────────────────

    def _read(self, spec: ArtifactSpec) -> bytes:
        try:
            repo = self._transport.open(spec.clone_directory)
        except RepositoryNotFoundError:
            repo = self._clone(spec)
        except Exception as exc:
            raise RepositoryOpenFailed("failed to open repository", exc) from exc
        else:
            log_kv(logger, logging.INFO, "reusing existing clone", clone_directory=spec.clone_directory)
        return self._read_from_repository(repo, spec)

    def _auth(self, spec: ArtifactSpec) -> ResolvedAuth:
        return resolve_auth(spec.credentials, spec.namespace, self._secrets)

    def _clone(self, spec: ArtifactSpec) -> Repository:
        auth = self._auth(spec)

        ref_name = None
        if spec.branch or spec.tag:
            # no local repository yet: look the ref up on the remote
            try:
                remote_refs = self._transport.list_remote(spec.url, auth)
            except Exception as exc:
                raise CloneFailed("failed to list remote references", exc) from exc
            ref_name = resolve_reference(remote_refs, spec.branch, spec.tag)

        log_kv(
            logger, logging.INFO, "cloning repository",
            repo=sanitize_remote(spec.url), clone_directory=spec.clone_directory, ref=ref_name or "default",
        )
        opts = CloneOptions(
            url=spec.url,
            directory=spec.clone_directory,
            reference_name=ref_name,
            auth=auth,
            recurse_submodules=self._cfg.recurse_submodules,
        )
        try:
            return self._transport.clone(opts)
        except Exception as exc:
            raise CloneFailed("failed to clone repository", exc) from exc

    def _read_from_repository(self, repo: Repository, spec: ArtifactSpec) -> bytes:
        try:
            worktree = repo.worktree()
        except Exception as exc:
            raise WorktreeUnavailable("failed to get working tree", exc) from exc

        auth = self._auth(spec)
        ref_name = resolve_reference(repo, spec.branch, spec.tag)
        logger.debug("pulling %s from %s", ref_name or "tracked branch", self._cfg.remote_name)

        opts = PullOptions(
            remote_name=self._cfg.remote_name,
            reference_name=ref_name,
            auth=auth,
            recurse_submodules=self._cfg.recurse_submodules,
        )
        try:
            worktree.pull(opts)
        except Exception as exc:
            raise PullFailed("failed to pull latest updates", exc) from exc

        try:
            data = worktree.read_file(spec.file_path)
        except Exception as exc:
            raise FileOpenFailed("failed to open resource file", exc) from exc

        log_kv(
            logger, logging.INFO, "read artifact",
            path=spec.file_path, size_bytes=len(data), commit=_head_commit(repo),
        )
        return data


def _head_commit(repo: Repository) -> Optional[str]:
    # informational only; the file has already been read
    try:
        return repo.head_commit()
    except Exception as exc:
        logger.debug("could not resolve HEAD commit: %s", exc)
        return None
