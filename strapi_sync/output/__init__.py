"""
Output generation.

This package persists rendered articles as Markdown files.
"""

from .writer import post_path, reset_posts_dir, write_post

__all__ = ["reset_posts_dir", "post_path", "write_post"]
