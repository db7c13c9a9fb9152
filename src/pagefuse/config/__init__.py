"""Configuration management for PageFuse."""

from __future__ import annotations

from .config import (
    AssetsConfig,
    Config,
    LazyConfig,
    MonitoringConfig,
    ProviderConfig,
    WebConfig,
    find_config_file,
    settings,
)

__all__ = [
    "AssetsConfig",
    "Config",
    "LazyConfig",
    "MonitoringConfig",
    "ProviderConfig",
    "WebConfig",
    "find_config_file",
    "settings",
]
