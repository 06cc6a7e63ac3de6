"""Turn one Article into a Markdown post with front-matter.

The materializer derives the output filename (slug), builds the ordered
front-matter mapping and renders the article body. It performs no I/O;
diagnostics are returned on the RenderedArticle instead of being logged.
"""

from __future__ import annotations

from datetime import datetime, timezone
import json
from typing import Any

from pypinyin import Style, lazy_pinyin
from slugify import slugify

from .blocks import render, resolve_asset_url
from .types import Article, RenderedArticle

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class FormatError(ValueError):
    """Raised when an article field cannot be converted for front-matter."""


def transliterate(text: str) -> str:
    """Convert Chinese characters to toneless pinyin, one syllable per word.

    Latin text passes through unchanged as its own word.

    Examples:
        >>> transliterate("你好")
        'ni hao'
    """
    return " ".join(lazy_pinyin(text, style=Style.NORMAL))


def derive_slug(article: Article) -> tuple[str, str | None]:
    """Return the article slug and, when it had to be generated, a warning.

    An editor-provided slug is used verbatim. Otherwise the slug is built from
    the transliterated title plus the article id, so two articles with the
    same title still get distinct filenames.
    """
    if article.slug:
        return article.slug, None
    slug = slugify(f"{transliterate(article.title)} {article.id}", lowercase=True)
    warning = f'Article "{article.title}" has no slug, generated from title and id: {slug}'
    return slug, warning


def format_date(value: Any) -> str:
    """Format an ISO 8601 timestamp as ``YYYY-MM-DD HH:MM:SS`` in UTC.

    Timestamps without an offset are taken as UTC.

    Raises:
        FormatError: If the value is not a parseable timestamp
    """
    if not isinstance(value, str) or not value.strip():
        raise FormatError(f"Invalid publishedAt timestamp: {value!r}")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise FormatError(f"Invalid publishedAt timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).strftime(DATE_FORMAT)


def build_frontmatter(article: Article, base_url: str) -> dict[str, str]:
    """Build the ordered front-matter fields for an article."""
    frontmatter = {
        "title": article.title,
        "date": format_date(article.published_at),
    }
    if article.category:
        frontmatter["categories"] = article.category
    if article.cover_image_url:
        frontmatter["img"] = resolve_asset_url(article.cover_image_url, base_url)
    return frontmatter


def serialize_frontmatter(frontmatter: dict[str, str]) -> str:
    """Serialize front-matter as ``key: "json value"`` lines between ``---``."""
    lines = ["---"]
    for key, value in frontmatter.items():
        lines.append(f"{key}: {json.dumps(value, ensure_ascii=False)}")
    lines.append("---")
    return "\n".join(lines) + "\n\n"


def to_markdown(rendered: RenderedArticle) -> str:
    """Full file payload: front-matter block followed by the body."""
    return serialize_frontmatter(rendered.frontmatter) + rendered.body


def materialize(article: Article, base_url: str) -> RenderedArticle:
    """Build the Markdown post for one article.

    Args:
        article: The article record
        base_url: Prefix for relative image and cover URLs

    Returns:
        RenderedArticle with filename, front-matter, body and warnings

    Raises:
        FormatError: If publishedAt cannot be parsed
    """
    warnings: list[str] = []
    filename, slug_warning = derive_slug(article)
    if slug_warning:
        warnings.append(slug_warning)

    frontmatter = build_frontmatter(article, base_url)
    result = render(article.content, base_url)
    warnings.extend(result.warnings)

    return RenderedArticle(
        filename=filename,
        frontmatter=frontmatter,
        body=result.markdown,
        warnings=warnings,
    )
