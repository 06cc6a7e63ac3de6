"""Parser for Strapi REST API article responses.

This module turns the JSON returned by ``GET /api/articles?populate=*`` into
Article objects. Both response shapes are accepted:
- Strapi v5: flat records with fields next to ``id``
- Strapi v4: records with fields under ``attributes`` and relations wrapped
  in ``{"data": {"id": ..., "attributes": {...}}}``
"""

from __future__ import annotations

import logging
from typing import Any

from ..core.types import Article

logger = logging.getLogger(__name__)


def parse_articles(payload: dict[str, Any] | list[Any]) -> list[Article]:
    """Parse a Strapi list response into Article objects.

    The flattened (v5) response structure:
        {
            "data": [
                {
                    "id": 7,
                    "documentId": "abc123",
                    "title": "你好",
                    "slug": null,
                    "publishedAt": "2024-01-02T03:04:05.000Z",
                    "content": [{"type": "paragraph", "children": [...]}],
                    "category": {"id": 1, "name": "Notes"},
                    "coverImage": {"url": "/uploads/cover.png"}
                }
            ],
            "meta": {"pagination": {"page": 1, "pageCount": 1}}
        }

    Args:
        payload: The decoded JSON response, or a bare list of records

    Returns:
        Articles in response order. Records without a title are skipped
        with a warning.

    Raises:
        ValueError: If the payload has no ``data`` list
    """
    if isinstance(payload, dict):
        records = payload.get("data")
    else:
        records = payload
    if not isinstance(records, list):
        raise ValueError("Invalid Strapi response: missing 'data' list")

    articles: list[Article] = []
    for record in records:
        article = parse_article(record)
        if article is not None:
            articles.append(article)
    return articles


def parse_article(record: Any) -> Article | None:
    """Parse a single record, returning None when it cannot be used."""
    fields = _unwrap(record)
    if fields is None:
        logger.warning(f"Skipping malformed article record: {record!r}")
        return None

    article_id = fields.get("id")
    title = fields.get("title")
    if not title or not isinstance(title, str):
        logger.warning(f"Skipping article {article_id}: missing title")
        return None

    content = fields.get("content")
    if not isinstance(content, list):
        content = []

    category = _unwrap(fields.get("category"))
    cover = _unwrap(fields.get("coverImage"))

    return Article(
        id=article_id,
        title=title,
        published_at=fields.get("publishedAt"),
        content=content,
        slug=fields.get("slug") or None,
        category=category.get("name") if category else None,
        cover_image_url=cover.get("url") if cover else None,
    )


def _unwrap(value: Any) -> dict[str, Any] | None:
    """Flatten v4 ``data``/``attributes`` wrappers into a plain field dict."""
    if isinstance(value, dict) and "data" in value and set(value) <= {"data", "meta"}:
        # v4 relation: {"data": {...}} or {"data": null}
        value = value["data"]
    if isinstance(value, list):
        # Multi-media fields come back as a list; the first entry is the cover
        value = value[0] if value else None
    if not isinstance(value, dict):
        return None
    attributes = value.get("attributes")
    if isinstance(attributes, dict):
        return {"id": value.get("id"), **attributes}
    return value
