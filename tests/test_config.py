"""Tests for YAML configuration loading."""

from pathlib import Path

import pytest

from strapi_sync.config import (
    AppConfig,
    get_api_token,
    get_api_url,
    get_asset_base_url,
    load_config,
    validate_config,
)


def test_load_config_without_path_returns_defaults():
    cfg = load_config(None)
    assert cfg.strapi.collection == "articles"
    assert cfg.output.on_format_error == "abort"
    assert cfg.logging.level == "INFO"


def test_load_config_merges_yaml_over_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "strapi:\n"
        "  api_url: https://cms.example.com/\n"
        "  page_size: 50\n"
        "output:\n"
        "  posts_dir: blog/_posts\n"
        "unknown_section:\n"
        "  value: 1\n",
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.strapi.api_url == "https://cms.example.com/"
    assert cfg.strapi.page_size == 50
    assert cfg.strapi.collection == "articles"
    assert cfg.output.posts_dir == "blog/_posts"
    assert cfg.output.on_format_error == "abort"


def test_load_config_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == AppConfig()


def test_api_url_falls_back_to_env_then_default(monkeypatch):
    cfg = AppConfig()
    monkeypatch.delenv("STRAPI_API_URL", raising=False)
    assert get_api_url(cfg.strapi) == "http://localhost:1337"

    monkeypatch.setenv("STRAPI_API_URL", "http://10.0.0.5:1337/")
    assert get_api_url(cfg.strapi) == "http://10.0.0.5:1337"

    cfg.strapi.api_url = "http://inline:1337"
    assert get_api_url(cfg.strapi) == "http://inline:1337"


def test_api_token_from_env(monkeypatch):
    monkeypatch.setenv("STRAPI_API_TOKEN", "from-env")
    cfg = AppConfig()
    assert get_api_token(cfg.strapi) == "from-env"
    cfg.strapi.api_token = "inline"
    assert get_api_token(cfg.strapi) == "inline"


def test_asset_base_url_defaults_to_api_url(monkeypatch):
    monkeypatch.delenv("STRAPI_API_URL", raising=False)
    cfg = AppConfig()
    cfg.strapi.api_url = "http://cms.local"
    assert get_asset_base_url(cfg) == "http://cms.local"
    cfg.output.asset_base_url = "https://media.example/"
    assert get_asset_base_url(cfg) == "https://media.example"


def test_validate_config_rejects_bad_values():
    cfg = AppConfig()
    cfg.strapi.page_size = 0
    with pytest.raises(ValueError, match="page_size"):
        validate_config(cfg)
