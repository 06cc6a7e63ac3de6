"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- StrapiConfig: Strapi API connection settings
- OutputConfig: Posts directory and rendering policy
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml

DEFAULT_API_URL = "http://localhost:1337"
FORMAT_ERROR_POLICIES = ("abort", "skip")


@dataclass
class StrapiConfig:
    """Configuration for the Strapi content API.

    Attributes:
        api_url: Strapi server URL (falls back to STRAPI_API_URL, then localhost)
        api_token: Optional API token sent as a Bearer header (or STRAPI_API_TOKEN)
        collection: Plural API id of the article collection type
        timeout_seconds: HTTP request timeout
        page_size: Number of records requested per page
    """

    api_url: str | None = None
    api_token: str | None = None
    collection: str = "articles"
    timeout_seconds: float = 20.0
    page_size: int = 100


@dataclass
class OutputConfig:
    """Configuration for Markdown output.

    Attributes:
        posts_dir: Directory that receives one .md file per article (wiped each run)
        asset_base_url: Prefix for relative image URLs (defaults to the API URL)
        on_format_error: "abort" to stop the run, "skip" to drop the article
    """

    posts_dir: str = os.path.join("source", "_posts")
    asset_base_url: str | None = None
    on_format_error: str = "abort"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Path of the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "sync.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    strapi: StrapiConfig = field(default_factory=StrapiConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "strapi": {
            "api_url": cfg.strapi.api_url,
            "api_token": cfg.strapi.api_token,
            "collection": cfg.strapi.collection,
            "timeout_seconds": cfg.strapi.timeout_seconds,
            "page_size": cfg.strapi.page_size,
        },
        "output": {
            "posts_dir": cfg.output.posts_dir,
            "asset_base_url": cfg.output.asset_base_url,
            "on_format_error": cfg.output.on_format_error,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        strapi=StrapiConfig(**data["strapi"]),
        output=OutputConfig(**data["output"]),
        logging=LoggingConfig(**data["logging"]),
    )


def get_api_url(cfg: StrapiConfig) -> str:
    """Get Strapi API URL from inline config, environment variable or default."""
    url = cfg.api_url or os.getenv("STRAPI_API_URL") or DEFAULT_API_URL
    return url.rstrip("/")


def get_api_token(cfg: StrapiConfig) -> str | None:
    """Get Strapi API token from inline config or environment variable."""
    if cfg.api_token:
        return cfg.api_token
    return os.getenv("STRAPI_API_TOKEN")


def get_asset_base_url(cfg: AppConfig) -> str:
    """Base URL used to resolve relative asset URLs."""
    if cfg.output.asset_base_url:
        return cfg.output.asset_base_url.rstrip("/")
    return get_api_url(cfg.strapi)


def validate_config(cfg: AppConfig) -> None:
    """Reject settings the runner cannot act on.

    Raises:
        ValueError: If on_format_error or page_size is invalid
    """
    if cfg.output.on_format_error not in FORMAT_ERROR_POLICIES:
        raise ValueError(
            "Unsupported on_format_error. Use 'abort' or 'skip'."
        )
    if cfg.strapi.page_size < 1:
        raise ValueError("page_size must be a positive integer")
