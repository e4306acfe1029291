"""
Shared pytest fixtures for git artifact tests.

Fixtures provided:
- config: Config with test-friendly defaults (no work root, no submodules)
- fake_remote / fake_transport: in-memory git transport that counts clones and pulls
- secrets: MagicMock secret provider returning b"user" / b"pass"
- origin_repo: real git repository in tmp_path (skipped when git is missing)
"""

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from git_artifact.config import Config
from git_artifact.transport import CloneOptions, PullOptions, RemoteRefs, RepositoryNotFoundError


def make_config(**overrides) -> Config:
    values = dict(
        log_level="debug",
        log_format="plain",
        secrets_root="/nonexistent/secrets",
        work_root=None,
        git_executable=None,
        remote_name="origin",
        recurse_submodules=True,
        ssh_known_hosts=None,
        ssh_strict_host_key_checking="yes",
        api_host="127.0.0.1",
        api_port=8015,
    )
    values.update(overrides)
    return Config(**values)


@dataclass
class FakeRemote:
    """What the remote holds: branch -> files, tag -> files."""

    branches: Dict[str, Dict[str, bytes]] = field(default_factory=lambda: {"main": {"config.yaml": b"key: v1\n"}})
    tags: Dict[str, Dict[str, bytes]] = field(default_factory=dict)
    default_branch: str = "main"

    def refs(self) -> RemoteRefs:
        names = {f"refs/heads/{b}" for b in self.branches} | {f"refs/tags/{t}" for t in self.tags}
        return RemoteRefs(names=frozenset(names))

    def files_for(self, ref: str) -> Dict[str, bytes]:
        if ref.startswith("refs/tags/"):
            return self.tags[ref[len("refs/tags/"):]]
        return self.branches[ref[len("refs/heads/"):]]


class FakeWorktree:
    def __init__(self, repo: "FakeRepository") -> None:
        self._repo = repo
        self.root = Path(repo.path)

    def pull(self, opts: PullOptions) -> None:
        self._repo.transport.pulls.append(opts)
        if self._repo.transport.pull_error is not None:
            raise self._repo.transport.pull_error
        ref = opts.reference_name or self._repo.checked_out
        self._repo.files = dict(self._repo.transport.remote.files_for(ref))

    def read_file(self, path: str) -> bytes:
        if path not in self._repo.files:
            raise FileNotFoundError(path)
        return self._repo.files[path]


class FakeRepository:
    def __init__(self, transport: "FakeTransport", path: str, checked_out: str) -> None:
        self.transport = transport
        self.path = path
        self.checked_out = checked_out
        self.files: Dict[str, bytes] = dict(transport.remote.files_for(checked_out))
        # local branch config, as `git clone --branch` leaves it
        self.branch_config: Dict[str, str] = {}
        if checked_out.startswith("refs/heads/"):
            self.branch_config[checked_out[len("refs/heads/"):]] = checked_out
        self.worktree_error: Optional[Exception] = None

    def worktree(self) -> FakeWorktree:
        if self.worktree_error is not None:
            raise self.worktree_error
        return FakeWorktree(self)

    def branch_merge_ref(self, name: str) -> Optional[str]:
        return self.branch_config.get(name)

    def tag_ref(self, name: str) -> Optional[str]:
        return f"refs/tags/{name}" if name in self.transport.remote.tags else None

    def head_commit(self) -> Optional[str]:
        return "0" * 40


class FakeTransport:
    def __init__(self, remote: FakeRemote) -> None:
        self.remote = remote
        self.repos: Dict[str, FakeRepository] = {}
        self.clones: List[CloneOptions] = []
        self.pulls: List[PullOptions] = []
        self.listed: List[str] = []
        self.open_error: Optional[Exception] = None
        self.clone_error: Optional[Exception] = None
        self.pull_error: Optional[Exception] = None

    def open(self, path: str) -> FakeRepository:
        if self.open_error is not None:
            raise self.open_error
        if path not in self.repos:
            raise RepositoryNotFoundError(path)
        return self.repos[path]

    def clone(self, opts: CloneOptions) -> FakeRepository:
        self.clones.append(opts)
        if self.clone_error is not None:
            raise self.clone_error
        ref = opts.reference_name or f"refs/heads/{self.remote.default_branch}"
        repo = FakeRepository(self, opts.directory, ref)
        self.repos[opts.directory] = repo
        return repo

    def list_remote(self, url: str, auth) -> RemoteRefs:
        self.listed.append(url)
        return self.remote.refs()


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def fake_remote():
    return FakeRemote()


@pytest.fixture
def fake_transport(fake_remote):
    return FakeTransport(fake_remote)


@pytest.fixture
def secrets():
    """Secret provider returning the username/password keys of a 'git-creds' secret."""
    provider = MagicMock()
    values = {("git-creds", "username"): b"user", ("git-creds", "password"): b"pass"}

    def _get(namespace, name, key):
        return values[(name, key)]

    provider.get_secret.side_effect = _get
    return provider


# ───────────────────────── real git repositories ─────────────────────────

@pytest.fixture
def origin_repo(tmp_path):
    """
    Non-bare repository with branch 'main', a 'config.yaml' file and tag 'v1'.
    """
    if shutil.which("git") is None:
        pytest.skip("git binary not available")
    import git

    path = tmp_path / "origin"
    repo = git.Repo.init(path, initial_branch="main")
    with repo.config_writer() as cw:
        cw.set_value("user", "name", "Test")
        cw.set_value("user", "email", "test@example.com")
    commit_file(repo, "config.yaml", b"key: v1\n", "initial")
    repo.create_tag("v1")
    return repo


def commit_file(repo, rel_path: str, data: bytes, message: str):
    import git

    target = Path(repo.working_tree_dir) / rel_path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    repo.index.add([rel_path])
    actor = git.Actor("Test", "test@example.com")
    return repo.index.commit(message, author=actor, committer=actor)


@pytest.fixture
def commit():
    return commit_file


@pytest.fixture
def ssh_key_file(tmp_path):
    """Unencrypted ed25519 private key in OpenSSH format."""
    from cryptography.hazmat.primitives import serialization
    from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

    key = Ed25519PrivateKey.generate()
    path = tmp_path / "id_ed25519"
    path.write_bytes(key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.OpenSSH,
        serialization.NoEncryption(),
    ))
    return str(path)
