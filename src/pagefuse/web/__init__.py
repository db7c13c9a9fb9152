"""HTTP service for PageFuse."""

from __future__ import annotations

from .main import app, create_app, run_web_server

__all__ = ["app", "create_app", "run_web_server"]
