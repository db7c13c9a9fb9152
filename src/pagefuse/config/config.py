"""
Configuration management for PageFuse using Pydantic.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Any, ClassVar, List, Optional, cast

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

FIRECRAWL_SCRAPE_ENDPOINT = "https://api.firecrawl.dev/v1/scrape"

# --- Nested Configuration Models ---


class ProviderConfig(BaseModel):
    """Remote scraping provider (Firecrawl) configuration."""

    api_key: str = Field(
        default_factory=lambda: os.getenv("FIRECRAWL_API_KEY", ""),
        description="Bearer credential for the provider. Required for scraping.",
    )
    endpoint: str = Field(default=FIRECRAWL_SCRAPE_ENDPOINT, description="Provider scrape endpoint.")
    formats: List[str] = Field(default=["markdown", "html", "links", "screenshot"])
    wait_for_ms: int = Field(default=5000, ge=0, description="Time the provider waits for dynamic content.")
    timeout_ms: int = Field(default=60000, gt=0, description="Provider-side overall timeout.")
    max_age_ms: int = Field(
        default=3_600_000,
        ge=0,
        description="Accept a cached render younger than this many milliseconds.",
    )
    block_ads: bool = True
    only_main_content: bool = False
    include_tags: List[str] = Field(default=["img", "picture", "svg", "video", "audio", "iframe", "canvas"])
    settle_ms: int = Field(default=3000, ge=0, description="Explicit wait action before the screenshot.")
    full_page_screenshot: bool = True
    request_timeout_margin: float = Field(
        default=15.0,
        ge=0,
        description="Seconds added to the provider timeout for the local HTTP timeout.",
    )

    @property
    def request_timeout(self) -> float:
        """Local HTTP timeout in seconds."""
        return self.timeout_ms / 1000 + self.request_timeout_margin


class AssetsConfig(BaseModel):
    """Configuration for the secondary asset extraction pass."""

    base_url: Optional[str] = Field(
        default=None,
        description="Base URL of a remote extract-assets service. None runs the extractor in-process.",
    )
    timeout: float = Field(default=30.0, gt=0, description="Timeout for the remote extract-assets call in seconds.")

    @field_validator("base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return None
        return str(v).rstrip("/")


class WebConfig(BaseModel):
    """Configuration for the HTTP service."""

    host: str = Field(default="127.0.0.1", description="Host for the web server.")
    port: int = Field(default=8000, description="Port for the web server.")
    cors_origins: List[str] = Field(default=["http://localhost:3000"])


class MonitoringConfig(BaseModel):
    """Configuration for logging."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(default=None, description="Path to log file. If None, logs to console.")
    json_logs: bool = Field(default=False, description="Render console logs as JSON.")

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "PageFuse"
    version: str = "0.1.0"
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    assets: AssetsConfig = Field(default_factory=AssetsConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="PAGEFUSE_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls()
        return cls(**yaml_data)


def find_config_file() -> Path | None:
    env_path = os.getenv("PAGEFUSE_CONFIG")
    if env_path:
        return Path(env_path)

    current_dir = Path.cwd()
    for path in (current_dir / "pagefuse.yaml", current_dir / "pagefuse.yml", current_dir / "config.yaml"):
        if path.exists():
            return path
    return None


# --- Lazy Configuration Loader ---


class LazyConfig:
    """
    A proxy for the Config object that delays its loading and validation
    until an attribute is first accessed.
    """

    _config: ClassVar[Config | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __getattr__(self, name: str) -> Any:
        if self.__class__._config is None:
            with self.__class__._lock:
                if self.__class__._config is None:
                    self.__class__._config = self._load_config_with_fallback()
        return getattr(self.__class__._config, name)

    @classmethod
    def reset(cls) -> None:
        """Drop the cached configuration so the next access reloads it."""
        with cls._lock:
            cls._config = None

    def _load_config_with_fallback(self) -> Config:
        """Load configuration from file or fall back to defaults."""
        config_path = find_config_file()
        if config_path:
            try:
                log.info("Lazy loading configuration from: %s", config_path)
                return Config.from_yaml(config_path)
            except (ValidationError, FileNotFoundError, yaml.YAMLError) as e:
                log.error(
                    "Failed to load or validate configuration from '%s': %s. Falling back to default settings.",
                    config_path,
                    e,
                )
        else:
            log.debug("No config file found. Using default settings for lazy load.")

        try:
            return Config()
        except ValidationError as e:
            log.critical("FATAL: Default configuration is invalid: %s", e, exc_info=True)
            raise RuntimeError(f"Default configuration is invalid, cannot start: {e}") from e


# --- Global Settings Instance ---
settings: "Config" = cast("Config", LazyConfig())
