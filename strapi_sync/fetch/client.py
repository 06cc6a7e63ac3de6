"""
Strapi REST API client.

Lists published articles through the Strapi content API using httpx.
Network failures are not retried; the caller decides what to do with the
raised StrapiError.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.types import Article
from ..input.parser import parse_articles

logger = logging.getLogger(__name__)


class StrapiError(Exception):
    """Base class for errors talking to the Strapi API."""


class StrapiAPIError(StrapiError):
    """The API answered with an error status.

    Attributes:
        status_code: HTTP status code of the response
        reason: HTTP reason phrase
    """

    def __init__(self, status_code: int, reason: str, url: str):
        super().__init__(f"{status_code} {reason} ({url})")
        self.status_code = status_code
        self.reason = reason
        self.url = url


class StrapiConnectionError(StrapiError):
    """The API could not be reached."""


class StrapiClient:
    """Client for listing articles from a Strapi collection type."""

    def __init__(
        self,
        api_url: str,
        token: str | None = None,
        collection: str = "articles",
        timeout: float = 20.0,
        page_size: int = 100,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            api_url: Strapi server URL, e.g. http://localhost:1337
            token: Optional API token sent as a Bearer header
            collection: Plural API id of the collection
            timeout: Request timeout in seconds
            page_size: Records requested per page
            transport: Optional httpx transport (used by tests)
        """
        self.api_url = api_url.rstrip("/")
        self.collection = collection
        self.page_size = page_size
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.Client(
            base_url=self.api_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
            trust_env=True,
        )

    def __enter__(self) -> StrapiClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def list_articles(self) -> list[Article]:
        """Fetch every article, newest first, following pagination.

        Returns:
            Articles sorted by publishedAt descending

        Raises:
            StrapiAPIError: If the API responds with an error status
            StrapiConnectionError: If the request fails before a response
        """
        articles: list[Article] = []
        page = 1
        while True:
            payload = self._get_page(page)
            articles.extend(parse_articles(payload))
            page_count = _page_count(payload)
            if page >= page_count:
                break
            page += 1
        return articles

    def _get_page(self, page: int) -> dict[str, Any]:
        path = f"/api/{self.collection}"
        params = {
            "populate": "*",
            "sort": "publishedAt:desc",
            "pagination[page]": page,
            "pagination[pageSize]": self.page_size,
        }
        try:
            resp = self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise StrapiConnectionError(
                f"Cannot reach Strapi at {self.api_url}: {type(exc).__name__}: {exc}"
            ) from exc

        if resp.is_error:
            raise StrapiAPIError(resp.status_code, resp.reason_phrase, str(resp.url))

        logger.debug(f"Fetched page {page} from {resp.url}")
        return resp.json()


def _page_count(payload: Any) -> int:
    """Read meta.pagination.pageCount, defaulting to a single page."""
    if not isinstance(payload, dict):
        return 1
    pagination = (payload.get("meta") or {}).get("pagination") or {}
    page_count = pagination.get("pageCount")
    if isinstance(page_count, int) and page_count > 0:
        return page_count
    return 1
