# src/git_artifact/api/routers/__init__.py
from .artifact_router import router as artifact_router
from .health_router import router as health_router

__all__ = ["artifact_router", "health_router"]
