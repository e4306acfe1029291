# src/git_artifact/util/logging.py
from __future__ import annotations
import json
import logging
import os
import sys
from typing import Any, Mapping, Optional

_LEVELS = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,  # treat as debug
}


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = {
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        if hasattr(record, "kv") and isinstance(record.kv, Mapping):
            base.update(record.kv)  # type: ignore[arg-type]
        return json.dumps(base, ensure_ascii=False, default=str)


class _PlainFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        kv = getattr(record, "kv", None)
        if isinstance(kv, Mapping) and kv:
            line += " " + " ".join(f"{k}={v}" for k, v in kv.items())
        return line


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    # Idempotent: reconfigure only once
    if getattr(setup_logging, "_configured", False):
        return
    setup_logging._configured = True  # type: ignore[attr-defined]
    lvl = (level or os.environ.get("LOG_LEVEL", "info")).strip().lower()
    # stdout is reserved for MCP JSON-RPC
    handler = logging.StreamHandler(sys.stderr)
    if (fmt or os.environ.get("LOG_FORMAT", "plain")).lower() == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(_PlainFormatter(fmt="[{levelname}] {name}: {message}", style="{"))

    root = logging.getLogger()
    root.setLevel(_LEVELS.get(lvl, logging.INFO))
    root.handlers[:] = [handler]

    # GitPython logs every command at DEBUG
    logging.getLogger("git").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_kv(log: logging.Logger, level: int, msg: str, **kv: Any) -> None:
    log.log(level, msg, extra={"kv": kv} if kv else None)
