"""
Tests for the mounted-volume secret provider
"""

import pytest

from git_artifact.secrets import MountedSecretProvider, SecretProvider


@pytest.fixture
def secret_root(tmp_path):
    d = tmp_path / "argo-events" / "git-creds"
    d.mkdir(parents=True)
    (d / "username").write_bytes(b"user")
    (d / "password").write_bytes(b"s3cr3t")
    return tmp_path


class TestMountedSecretProvider:
    def test_reads_key(self, secret_root):
        provider = MountedSecretProvider(str(secret_root))

        assert provider.get_secret("argo-events", "git-creds", "password") == b"s3cr3t"

    def test_satisfies_protocol(self, secret_root):
        assert isinstance(MountedSecretProvider(str(secret_root)), SecretProvider)

    def test_missing_key(self, secret_root):
        provider = MountedSecretProvider(str(secret_root))

        with pytest.raises(KeyError):
            provider.get_secret("argo-events", "git-creds", "token")

    def test_path_escape_rejected(self, secret_root):
        provider = MountedSecretProvider(str(secret_root / "argo-events"))

        with pytest.raises(ValueError):
            provider.get_secret("..", "..", "passwd")
