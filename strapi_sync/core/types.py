"""
Core data types for Strapi sync.

This module defines the data structures passed between pipeline stages:
- Article: One article record as returned by the Strapi content API
- RenderResult: Markdown produced from a block tree plus its diagnostics
- RenderedArticle: Final file payload for one article
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Article:
    """Represents one article record from the CMS.

    Attributes:
        id: Unique record identifier (numeric in Strapi v4, may be a string in v5)
        title: The article headline
        published_at: ISO 8601 publish timestamp
        content: Ordered list of content blocks (Strapi "blocks" JSON)
        slug: Optional URL slug set by the editor
        category: Optional category name
        cover_image_url: Optional cover image URL, absolute or relative
    """
    id: int | str
    title: str
    published_at: str | None
    content: list[dict[str, Any]] = field(default_factory=list)
    slug: str | None = None
    category: str | None = None
    cover_image_url: str | None = None


@dataclass
class RenderResult:
    """Markdown rendered from a block tree.

    Attributes:
        markdown: The rendered Markdown text
        warnings: Diagnostics for blocks that were skipped or degraded
    """
    markdown: str
    warnings: list[str] = field(default_factory=list)


@dataclass
class RenderedArticle:
    """Final Markdown payload for one article.

    Attributes:
        filename: Slug used as the file stem (without the .md suffix)
        frontmatter: Ordered front-matter fields
        body: Markdown body rendered from the article content
        warnings: Diagnostics collected while materializing the article
    """
    filename: str
    frontmatter: dict[str, str]
    body: str
    warnings: list[str] = field(default_factory=list)
