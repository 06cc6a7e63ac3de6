"""
Sync orchestration for strapi-sync.

This module coordinates the entire workflow:
1. Fetch articles from the Strapi API (newest first)
2. Wipe and recreate the posts directory
3. Materialize each article into Markdown with front-matter
4. Write one .md file per article

The posts directory is only wiped after the article list has been
fetched, so an unreachable API leaves the previous posts in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)

from .config import AppConfig, get_api_token, get_api_url, get_asset_base_url, validate_config
from .core.materializer import FormatError, materialize
from .core.types import Article
from .fetch.client import StrapiClient
from .output.writer import reset_posts_dir, write_post
from .utils.logging import log_event, setup_logging


@dataclass
class SyncStats:
    """Counters collected during one sync run.

    Attributes:
        total: Number of articles returned by the API
        written: Posts written to disk
        skipped: Articles dropped because of a FormatError (skip policy)
        warnings: Render and slug warnings across all articles
    """
    total: int = 0
    written: int = 0
    skipped: int = 0
    warnings: int = 0


def fetch_articles(cfg: AppConfig) -> list[Article]:
    """List all articles from the configured Strapi collection."""
    with StrapiClient(
        get_api_url(cfg.strapi),
        token=get_api_token(cfg.strapi),
        collection=cfg.strapi.collection,
        timeout=cfg.strapi.timeout_seconds,
        page_size=cfg.strapi.page_size,
    ) as client:
        return client.list_articles()


def run_sync(
    cfg: AppConfig,
    show_progress: bool = True,
    console: Console | None = None,
) -> SyncStats:
    """Run a full sync from Strapi into the posts directory.

    Args:
        cfg: Application configuration
        show_progress: Whether to display a progress bar while writing
        console: Rich console for the progress bar (creates default if None)

    Returns:
        SyncStats for the run

    Raises:
        StrapiError: If the article list cannot be fetched
        FormatError: If an article has an invalid date and the policy is "abort"
        ValueError: If the configuration is invalid
    """
    validate_config(cfg)
    logger = setup_logging(cfg.logging)
    posts_dir = Path(cfg.output.posts_dir)
    base_url = get_asset_base_url(cfg)
    stats = SyncStats()

    log_event(
        logger,
        "Sync start",
        event="sync_start",
        api_url=get_api_url(cfg.strapi),
        posts_dir=str(posts_dir),
    )

    articles = fetch_articles(cfg)
    stats.total = len(articles)

    reset_posts_dir(posts_dir)
    log_event(logger, "Posts directory cleared", event="posts_dir_reset", posts_dir=str(posts_dir))

    if not articles:
        log_event(logger, "No published articles found in Strapi", event="no_articles")
        return stats
    log_event(logger, f"Fetched {len(articles)} articles", event="articles_fetched", count=len(articles))

    if not show_progress:
        for article in articles:
            _sync_article(article, posts_dir, base_url, cfg, stats, logger)
    else:
        progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console or Console(),
        )
        with progress:
            write_task = progress.add_task("Write posts", total=len(articles))
            for article in articles:
                _sync_article(article, posts_dir, base_url, cfg, stats, logger)
                progress.advance(write_task, 1)

    log_event(
        logger,
        "Sync complete",
        event="sync_complete",
        total=stats.total,
        written=stats.written,
        skipped=stats.skipped,
        warnings=stats.warnings,
    )
    return stats


def _sync_article(
    article: Article,
    posts_dir: Path,
    base_url: str,
    cfg: AppConfig,
    stats: SyncStats,
    logger: logging.Logger,
) -> None:
    """Materialize and write one article, applying the FormatError policy."""
    try:
        rendered = materialize(article, base_url)
    except FormatError as exc:
        if cfg.output.on_format_error == "abort":
            raise
        stats.skipped += 1
        log_event(
            logger,
            f"Skipping article {article.id}: {exc}",
            level=logging.WARNING,
            event="article_skipped",
            article_id=article.id,
            title=article.title,
        )
        return

    for warning in rendered.warnings:
        stats.warnings += 1
        log_event(
            logger,
            warning,
            level=logging.WARNING,
            event="render_warning",
            article_id=article.id,
        )

    path = write_post(posts_dir, rendered)
    stats.written += 1
    log_event(logger, f"Created {path.name}", event="post_written", path=str(path))
