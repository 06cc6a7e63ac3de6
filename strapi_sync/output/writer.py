"""Write rendered articles into the static site's posts directory."""

from __future__ import annotations

import os
from pathlib import Path
import shutil
import tempfile

from ..core.materializer import to_markdown
from ..core.types import RenderedArticle


def reset_posts_dir(posts_dir: Path) -> None:
    """Remove the posts directory with everything in it and recreate it empty."""
    if posts_dir.exists():
        shutil.rmtree(posts_dir)
    posts_dir.mkdir(parents=True, exist_ok=True)


def post_path(posts_dir: Path, rendered: RenderedArticle) -> Path:
    return posts_dir / f"{rendered.filename}.md"


def write_post(posts_dir: Path, rendered: RenderedArticle) -> Path:
    """Write one article as ``<filename>.md``.

    The file is written to a temporary sibling first and then moved into
    place, so a reader never sees a partially written post.

    Returns:
        Path of the written file
    """
    path = post_path(posts_dir, rendered)
    fd, tmp_name = tempfile.mkstemp(dir=posts_dir, prefix=".tmp-", suffix=".md")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(to_markdown(rendered))
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return path
