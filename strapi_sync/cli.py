"""
Command-line interface for strapi-sync.

Uses Typer to provide a CLI with options for the main configuration
settings. Supports loading .env files for STRAPI_API_URL / STRAPI_API_TOKEN.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from .config import load_config
from .core.materializer import FormatError
from .fetch.client import StrapiAPIError, StrapiConnectionError
from .runner import run_sync

try:
    from dotenv import load_dotenv
except Exception:  # noqa: BLE001
    load_dotenv = None

app = typer.Typer(add_completion=False)
console = Console()


@app.callback()
def main() -> None:
    """Sync Strapi articles into Markdown posts for a static site."""


@app.command()
def sync(
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    api_url: str | None = typer.Option(
        None, "--api-url", envvar="STRAPI_API_URL", help="Strapi server URL."
    ),
    token: str | None = typer.Option(
        None, "--token", envvar="STRAPI_API_TOKEN", help="Strapi API token."
    ),
    posts_dir: Path | None = typer.Option(
        None, "--posts-dir", "-o", help="Posts directory (wiped on every run)."
    ),
    base_url: str | None = typer.Option(
        None, "--base-url", help="Prefix for relative image URLs (defaults to the API URL)."
    ),
    on_format_error: str | None = typer.Option(
        None,
        "--on-format-error",
        help="What to do with an article whose date cannot be parsed: abort or skip.",
    ),
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_format: str | None = typer.Option(
        None, "--log-format", help="Log file format: jsonl or plain."
    ),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
):
    """Rebuild the posts directory from the Strapi article collection.

    Args:
        config: Optional path to YAML config file
        api_url: Override the Strapi server URL
        token: Override the Strapi API token
        posts_dir: Override the posts directory
        base_url: Override the asset base URL
        on_format_error: FormatError policy (abort, skip)
        progress: Whether to show a progress bar
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_format: Log file format (jsonl, plain)
        log_file: Enable/disable file logging
    """
    # Load environment variables from .env if available
    if load_dotenv is not None:
        load_dotenv()

    cfg = load_config(str(config) if config else None)

    # Override with CLI options
    if api_url:
        cfg.strapi.api_url = api_url
    if token:
        cfg.strapi.api_token = token
    if posts_dir is not None:
        cfg.output.posts_dir = str(posts_dir)
    if base_url:
        cfg.output.asset_base_url = base_url
    if on_format_error:
        cfg.output.on_format_error = on_format_error
    if log_level:
        cfg.logging.level = log_level
    if log_format:
        cfg.logging.format = log_format
    if log_file is not None:
        cfg.logging.file = log_file

    try:
        stats = run_sync(cfg, show_progress=progress, console=console)
    except StrapiAPIError as exc:
        console.print(f"[red]API response error:[/red] {exc.status_code} {exc.reason}")
        raise typer.Exit(code=1)
    except StrapiConnectionError as exc:
        console.print(
            "[red]Cannot connect to Strapi.[/red] Make sure it is running and the API URL is correct."
        )
        console.print(f"  {exc}")
        raise typer.Exit(code=1)
    except (FormatError, ValueError) as exc:
        console.print(f"[red]Sync failed:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)
    except Exception as exc:  # noqa: BLE001
        console.print(f"[red]Script error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    console.print(f"Sync complete: {stats.written} posts written to {cfg.output.posts_dir}")


if __name__ == "__main__":
    app()
