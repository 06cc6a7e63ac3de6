"""
Input parsing.

This package converts Strapi API responses into core Article objects.
"""

from .parser import parse_article, parse_articles

__all__ = ["parse_article", "parse_articles"]
