# src/git_artifact/transport.py
"""
Git transport engine.

The reader talks to git only through the Protocols below. ``GitPythonTransport``
implements them on top of GitPython (and therefore the git CLI). Tests swap in
an in-memory fake.
"""
from __future__ import annotations

import configparser
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, FrozenSet, Optional, Protocol

import git  # GitPython

from .auth import ResolvedAuth, auth_env
from .config import Config
from .refs import short_ref
from .util.fs import ensure_under_root
from .util.git_env import base_git_env


class RepositoryNotFoundError(Exception):
    """The path holds no git repository (or does not exist yet)."""


@dataclass(frozen=True)
class CloneOptions:
    url: str
    directory: str
    reference_name: Optional[str] = None
    auth: ResolvedAuth = None
    recurse_submodules: bool = True


@dataclass(frozen=True)
class PullOptions:
    remote_name: str = "origin"
    reference_name: Optional[str] = None
    auth: ResolvedAuth = None
    recurse_submodules: bool = True


class Worktree(Protocol):
    root: Path

    def pull(self, opts: PullOptions) -> None: ...

    def read_file(self, path: str) -> bytes: ...


class Repository(Protocol):
    def worktree(self) -> Worktree: ...

    def branch_merge_ref(self, name: str) -> Optional[str]: ...

    def tag_ref(self, name: str) -> Optional[str]: ...

    def head_commit(self) -> Optional[str]: ...


class GitTransport(Protocol):
    def open(self, path: str) -> Repository: ...

    def clone(self, opts: CloneOptions) -> Repository: ...

    def list_remote(self, url: str, auth: ResolvedAuth) -> "RemoteRefs": ...


@dataclass(frozen=True)
class RemoteRefs:
    """Refs advertised by a remote; answers lookups before any local clone exists."""

    names: FrozenSet[str]

    def branch_merge_ref(self, name: str) -> Optional[str]:
        ref = f"refs/heads/{name}"
        return ref if ref in self.names else None

    def tag_ref(self, name: str) -> Optional[str]:
        ref = f"refs/tags/{name}"
        return ref if ref in self.names else None

    @classmethod
    def parse(cls, ls_remote_output: str) -> "RemoteRefs":
        names = set()
        for line in ls_remote_output.splitlines():
            parts = line.split("\t", 1)
            if len(parts) == 2 and parts[1].strip():
                names.add(parts[1].strip())
        return cls(names=frozenset(names))


# ─────────────────────────── GitPython implementation ───────────────────────────

class GitPythonWorktree:
    def __init__(self, repo: git.Repo, root: Path, cfg: Config) -> None:
        self._repo = repo
        self.root = root
        self._cfg = cfg

    def pull(self, opts: PullOptions) -> None:
        args = [opts.remote_name]
        if opts.reference_name:
            args.append(opts.reference_name)
        env = _env_for(opts.auth, self._cfg)
        with self._repo.git.custom_environment(**env):
            # fast-forward only; "Already up to date." exits 0
            self._repo.git.pull(*args, ff_only=True, recurse_submodules=opts.recurse_submodules)

    def read_file(self, path: str) -> bytes:
        return ensure_under_root(str(self.root), path).read_bytes()


class GitPythonRepository:
    def __init__(self, repo: git.Repo, cfg: Config) -> None:
        self._repo = repo
        self._cfg = cfg

    @property
    def repo(self) -> git.Repo:
        return self._repo

    def worktree(self) -> GitPythonWorktree:
        root = self._repo.working_tree_dir
        if root is None:
            raise git.InvalidGitRepositoryError(f"{self._repo.git_dir} is a bare repository")
        return GitPythonWorktree(self._repo, Path(root), self._cfg)

    def branch_merge_ref(self, name: str) -> Optional[str]:
        reader = self._repo.config_reader()
        try:
            return reader.get_value(f'branch "{name}"', "merge")
        except (configparser.NoSectionError, configparser.NoOptionError):
            return None

    def tag_ref(self, name: str) -> Optional[str]:
        for tag in self._repo.tags:
            if tag.name == name:
                return tag.path
        return None

    def head_commit(self) -> Optional[str]:
        try:
            return self._repo.head.commit.hexsha
        except ValueError:
            # unborn HEAD
            return None


class GitPythonTransport:
    def __init__(self, cfg: Optional[Config] = None) -> None:
        self._cfg = cfg or Config.load()
        if self._cfg.git_executable:
            git.refresh(path=self._cfg.git_executable)

    def open(self, path: str) -> GitPythonRepository:
        try:
            repo = git.Repo(path)
        except git.NoSuchPathError as exc:
            raise RepositoryNotFoundError(str(path)) from exc
        except git.InvalidGitRepositoryError as exc:
            # only a directory without .git counts as absent; a broken .git is an open failure
            if (Path(path) / ".git").exists():
                raise
            raise RepositoryNotFoundError(str(path)) from exc
        return GitPythonRepository(repo, self._cfg)

    def clone(self, opts: CloneOptions) -> GitPythonRepository:
        kwargs = {}
        if opts.reference_name:
            kwargs["branch"] = short_ref(opts.reference_name)
        if opts.recurse_submodules:
            kwargs["recurse_submodules"] = True
        repo = git.Repo.clone_from(opts.url, opts.directory, env=_env_for(opts.auth, self._cfg), **kwargs)
        return GitPythonRepository(repo, self._cfg)

    def list_remote(self, url: str, auth: ResolvedAuth) -> RemoteRefs:
        g = git.Git()
        with g.custom_environment(**_env_for(auth, self._cfg)):
            out = g.ls_remote("--refs", url)
        return RemoteRefs.parse(out)


def _env_for(auth: ResolvedAuth, cfg: Config) -> Dict[str, str]:
    env = base_git_env()
    env.update(auth_env(auth, cfg))
    return env
