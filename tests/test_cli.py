"""Tests for the Typer CLI."""

from pathlib import Path

from typer.testing import CliRunner

from strapi_sync import cli, runner
from strapi_sync.cli import app
from strapi_sync.core.types import Article
from strapi_sync.fetch.client import StrapiAPIError, StrapiConnectionError

cli_runner = CliRunner()


def _invoke(posts_dir: Path, *extra: str):
    return cli_runner.invoke(
        app,
        [
            "sync",
            "--api-url",
            "http://cms.local",
            "--posts-dir",
            str(posts_dir),
            "--no-progress",
            "--log-level",
            "ERROR",
            *extra,
        ],
    )


def test_sync_command_writes_posts(tmp_path, monkeypatch):
    captured = {}

    def fake_fetch(cfg):
        captured["api_url"] = cfg.strapi.api_url
        return [Article(id=1, title="Hello", published_at="2024-01-02T03:04:05Z", slug="hello")]

    monkeypatch.setattr(runner, "fetch_articles", fake_fetch)
    posts_dir = tmp_path / "_posts"

    result = _invoke(posts_dir)

    assert result.exit_code == 0, result.output
    assert captured["api_url"] == "http://cms.local"
    assert (posts_dir / "hello.md").exists()
    assert "1 posts written" in result.output


def test_sync_command_exits_1_on_connection_error(tmp_path, monkeypatch):
    def failing_fetch(cfg):
        raise StrapiConnectionError("refused")

    monkeypatch.setattr(runner, "fetch_articles", failing_fetch)

    result = _invoke(tmp_path / "_posts")

    assert result.exit_code == 1
    assert "Cannot connect to Strapi" in result.output


def test_sync_command_exits_1_on_api_error(tmp_path, monkeypatch):
    def failing_fetch(cfg):
        raise StrapiAPIError(404, "Not Found", "http://cms.local/api/articles")

    monkeypatch.setattr(runner, "fetch_articles", failing_fetch)

    result = _invoke(tmp_path / "_posts")

    assert result.exit_code == 1
    assert "404" in result.output


def test_sync_command_exits_1_on_bad_date(tmp_path, monkeypatch):
    monkeypatch.setattr(
        runner,
        "fetch_articles",
        lambda cfg: [Article(id=1, title="Hello", published_at="??", slug="hello")],
    )

    result = _invoke(tmp_path / "_posts")

    assert result.exit_code == 1
    assert "Sync failed" in result.output


def test_sync_command_skip_policy(tmp_path, monkeypatch):
    monkeypatch.setattr(
        runner,
        "fetch_articles",
        lambda cfg: [
            Article(id=1, title="Bad", published_at="??", slug="bad"),
            Article(id=2, title="Good", published_at="2024-01-02T03:04:05Z", slug="good"),
        ],
    )
    posts_dir = tmp_path / "_posts"

    result = _invoke(posts_dir, "--on-format-error", "skip")

    assert result.exit_code == 0, result.output
    assert [p.name for p in posts_dir.iterdir()] == ["good.md"]


def test_sync_command_exits_1_on_unexpected_error(tmp_path, monkeypatch):
    def failing_sync(cfg, show_progress=True, console=None):
        raise OSError("Permission denied: '_posts'")

    monkeypatch.setattr(cli, "run_sync", failing_sync)

    result = _invoke(tmp_path / "_posts")

    assert result.exit_code == 1
    assert "Script error: Permission denied" in result.output
