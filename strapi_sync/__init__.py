"""
strapi-sync - Strapi articles to static-site Markdown.

This package fetches articles from a Strapi content API, renders their
rich-text block content to Markdown and writes one post per article with
front-matter for a static site generator such as Hexo.

Main entry point is the CLI via `strapi-sync sync` command.

Example:
    $ strapi-sync sync --api-url http://localhost:1337 -o source/_posts
"""

__all__ = ["__version__", "blocks_to_markdown", "materialize", "parse_articles", "render"]
__version__ = "0.1.0"

from .core.blocks import blocks_to_markdown, render
from .core.materializer import materialize
from .input.parser import parse_articles
