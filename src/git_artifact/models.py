# src/git_artifact/models.py
from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ─────────────────────────────────────────────────────────────
# Secret references
# ─────────────────────────────────────────────────────────────
class SecretKeySelector(BaseModel):
    """
    Points at one key of a stored secret; the value is fetched at read time.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Secret object name.")
    key: str = Field(..., min_length=1, description="Key within the secret.")


# ─────────────────────────────────────────────────────────────
# Credentials (exactly one strategy is active)
# ─────────────────────────────────────────────────────────────
class NoCredentials(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"


class BasicAuthRef(BaseModel):
    """
    HTTPS basic auth; both halves come from the secret provider.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["basic"] = "basic"
    username: SecretKeySelector
    password: SecretKeySelector


class SSHKeyPath(BaseModel):
    """
    SSH public-key auth with a private key read from local disk.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["ssh"] = "ssh"
    path: str = Field(..., min_length=1)


Credentials = Annotated[Union[NoCredentials, BasicAuthRef, SSHKeyPath], Field(discriminator="kind")]


# ─────────────────────────────────────────────────────────────
# Artifact spec (what the reader consumes)
# ─────────────────────────────────────────────────────────────
class ArtifactSpec(BaseModel):
    """
    Immutable description of one file inside one git repository.

    Empty ``branch``/``tag`` strings are normalised to ``None``; if both are
    set the branch wins when the reference is resolved.
    """
    model_config = ConfigDict(frozen=True)

    url: str = Field(..., min_length=1, description="Remote repository location.")
    clone_directory: str = Field(..., min_length=1, description="Local path holding (or receiving) the clone.")
    file_path: str = Field(..., min_length=1, description="Path of the file, relative to the repository root.")
    branch: Optional[str] = None
    tag: Optional[str] = None
    credentials: Credentials = Field(default_factory=NoCredentials)
    namespace: str = "default"

    @field_validator("branch", "tag", mode="before")
    @classmethod
    def _blank_is_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


# ─────────────────────────────────────────────────────────────
# Manifest shape (what the orchestrator stores)
# ─────────────────────────────────────────────────────────────
class GitCreds(BaseModel):
    username: SecretKeySelector
    password: SecretKeySelector


class GitArtifact(BaseModel):
    """
    Git artifact as written in gateway/sensor manifests. Credentials are a set
    of optional fields here; ``to_spec`` folds them into a single strategy.
    """
    model_config = ConfigDict(populate_by_name=True)

    url: str
    clone_directory: str = Field(..., alias="cloneDirectory")
    file_path: str = Field(..., alias="filePath")
    creds: Optional[GitCreds] = None
    ssh_key_path: Optional[str] = Field(default=None, alias="sshKeyPath")
    branch: Optional[str] = None
    tag: Optional[str] = None
    namespace: str = "default"

    def credentials(self) -> Union[NoCredentials, BasicAuthRef, SSHKeyPath]:
        # basic auth takes precedence over an SSH key
        if self.creds is not None:
            return BasicAuthRef(username=self.creds.username, password=self.creds.password)
        if self.ssh_key_path:
            return SSHKeyPath(path=self.ssh_key_path)
        return NoCredentials()

    def to_spec(self) -> ArtifactSpec:
        return ArtifactSpec(
            url=self.url,
            clone_directory=self.clone_directory,
            file_path=self.file_path,
            branch=self.branch,
            tag=self.tag,
            credentials=self.credentials(),
            namespace=self.namespace,
        )
