# src/git_artifact/server.py
from __future__ import annotations

import argparse
from importlib.metadata import version as pkg_version, PackageNotFoundError
from pathlib import Path
from typing import Optional

from .config import Config
from .mcp import MCPServer, ToolSpec
from .reader import GitArtifactReader
from .secrets import MountedSecretProvider, SecretProvider
from .tools import read_artifact as t_read
from .tools import resolve_ref as t_resolve
from .transport import GitPythonTransport, GitTransport
from .util.logging import setup_logging


def build_server(
    cfg: Config,
    *,
    secrets: Optional[SecretProvider] = None,
    transport: Optional[GitTransport] = None,
) -> MCPServer:
    try:
        ver = pkg_version("git-artifact-store")
    except PackageNotFoundError:
        ver = "0.0.0"

    transport = transport if transport is not None else GitPythonTransport(cfg)
    reader = GitArtifactReader(
        secrets if secrets is not None else MountedSecretProvider(cfg.secrets_root),
        transport,
        config=cfg,
    )

    srv = MCPServer(server_name="git-artifact-mcp", server_version=ver)
    srv.register(ToolSpec(
        name="read_artifact",
        title="Read Artifact",
        description="Clone or pull a repository and return the content of one file at a branch or tag",
        input_schema=t_read.INPUT_SCHEMA,
        output_schema=t_read.OUTPUT_SCHEMA,
        handler=t_read.make_handler(cfg, reader),
    ))
    srv.register(ToolSpec(
        name="resolve_ref",
        title="Resolve Ref",
        description="Resolve a branch or tag of an existing clone to its full reference name and HEAD commit",
        input_schema=t_resolve.INPUT_SCHEMA,
        output_schema=t_resolve.OUTPUT_SCHEMA,
        handler=t_resolve.make_handler(cfg, transport),
    ))
    return srv


def main() -> None:
    parser = argparse.ArgumentParser(description="git-artifact-mcp stdio server")
    parser.add_argument("--stdio", action="store_true", help="Run over stdio (default)")
    parser.parse_args()

    cfg = Config.load()
    setup_logging(cfg.log_level, cfg.log_format)
    if cfg.work_root:
        Path(cfg.work_root).mkdir(parents=True, exist_ok=True)

    server = build_server(cfg)
    server.run_stdio()


if __name__ == "__main__":
    main()
