"""
Article fetching.

This package talks to the Strapi content API.
"""

from .client import StrapiAPIError, StrapiClient, StrapiConnectionError, StrapiError

__all__ = [
    "StrapiClient",
    "StrapiError",
    "StrapiAPIError",
    "StrapiConnectionError",
]
