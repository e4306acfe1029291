# src/git_artifact/api/middleware/__init__.py
from .logging import install_request_logging
from .error_handlers import add_error_handlers

__all__ = ["install_request_logging", "add_error_handlers"]
