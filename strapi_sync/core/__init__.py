"""
Core rendering logic.

This package contains the block renderer and the article materializer.
Both are pure functions independent of HTTP and the filesystem.
"""

from .types import Article, RenderedArticle, RenderResult
from .blocks import blocks_to_markdown, render, resolve_asset_url
from .materializer import (
    FormatError,
    derive_slug,
    format_date,
    materialize,
    serialize_frontmatter,
    to_markdown,
)

__all__ = [
    "Article",
    "RenderedArticle",
    "RenderResult",
    "blocks_to_markdown",
    "render",
    "resolve_asset_url",
    "FormatError",
    "derive_slug",
    "format_date",
    "materialize",
    "serialize_frontmatter",
    "to_markdown",
]
