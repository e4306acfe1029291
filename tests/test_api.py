"""
Tests for the HTTP surface (FastAPI TestClient, in-memory transport)
"""

import logging

import pytest
from fastapi.testclient import TestClient

from git_artifact.api.deps import get_config, get_reader
from git_artifact.api.main import app
from git_artifact.reader import GitArtifactReader

BODY = {"url": "https://example.com/repo.git", "cloneDirectory": "/tmp/c1", "filePath": "config.yaml", "branch": "main"}


@pytest.fixture
def client(config, secrets, fake_transport):
    app.dependency_overrides[get_config] = lambda: config
    app.dependency_overrides[get_reader] = lambda: GitArtifactReader(secrets, fake_transport, config=config)
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestArtifactRoutes:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok", "remote": "origin", "work_root": None}

    def test_read(self, client):
        resp = client.post("/artifacts/read", json=BODY)

        assert resp.status_code == 200
        assert resp.content == b"key: v1\n"
        assert resp.headers["content-type"] == "application/octet-stream"
        assert len(resp.headers["x-artifact-sha256"]) == 64

    def test_missing_branch_is_404(self, client):
        resp = client.post("/artifacts/read", json={**BODY, "branch": "nope"})

        assert resp.status_code == 404
        assert resp.json()["kind"] == "BranchNotFound"

    def test_clone_failure_is_502(self, client, fake_transport):
        fake_transport.clone_error = RuntimeError("auth rejected")

        resp = client.post("/artifacts/read", json=BODY)

        assert resp.status_code == 502
        assert resp.json()["kind"] == "CloneFailed"
        assert "auth rejected" in resp.json()["detail"]

    def test_secret_failure_is_500(self, client):
        body = {**BODY, "creds": {"username": {"name": "other", "key": "u"}, "password": {"name": "other", "key": "p"}}}

        resp = client.post("/artifacts/read", json=body)

        assert resp.status_code == 500
        assert resp.json()["kind"] == "SecretLookupFailed"

    def test_invalid_body(self, client):
        assert client.post("/artifacts/read", json={"url": "x"}).status_code == 422


class TestRequestLogging:
    """One access-log record per request with its status and timing"""

    def _records(self, caplog):
        return [r for r in caplog.records if r.name == "git_artifact.api.requests"]

    def test_success_logged_at_info(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="git_artifact.api.requests"):
            client.post("/artifacts/read", json=BODY)

        (record,) = self._records(caplog)
        assert record.levelno == logging.INFO
        assert record.kv["method"] == "POST"
        assert record.kv["path"] == "/artifacts/read"
        assert record.kv["status"] == 200
        assert record.kv["duration_ms"] >= 0

    def test_server_error_logged_at_warning(self, client, fake_transport, caplog):
        fake_transport.clone_error = RuntimeError("auth rejected")

        with caplog.at_level(logging.INFO, logger="git_artifact.api.requests"):
            client.post("/artifacts/read", json=BODY)

        (record,) = self._records(caplog)
        assert record.levelno == logging.WARNING
        assert record.kv["status"] == 502
