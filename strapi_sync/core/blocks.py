"""Render Strapi rich-text blocks into Markdown.

Each block contributes one segment terminated by a blank line, so adjacent
blocks are always separated into Markdown paragraphs. Unknown or malformed
blocks are skipped and reported in ``RenderResult.warnings``.
"""

from __future__ import annotations

from typing import Any, Callable

from .types import RenderResult

BLOCK_END = "\n\n"


def resolve_asset_url(url: str, base_url: str) -> str:
    """Prefix relative upload URLs with the CMS base URL.

    Examples:
        >>> resolve_asset_url("/uploads/a.png", "http://host")
        'http://host/uploads/a.png'
        >>> resolve_asset_url("http://cdn.example/a.png", "http://host")
        'http://cdn.example/a.png'
    """
    if url.startswith("http"):
        return url
    return f"{base_url}{url}"


def inline_text(spans: Any, warnings: list[str] | None = None) -> str:
    """Concatenate the text of inline spans, descending into link nodes.

    Spans whose text is not a string are dropped and reported in ``warnings``.
    """
    if not isinstance(spans, list):
        return ""
    parts = []
    for span in spans:
        if not isinstance(span, dict):
            continue
        text = span.get("text")
        if isinstance(text, str):
            parts.append(text)
        elif "children" in span:
            parts.append(inline_text(span["children"], warnings))
        elif "text" in span and warnings is not None:
            warnings.append(f"Inline span with non-string text dropped: {text!r}")
    return "".join(parts)


def _render_paragraph(block: dict[str, Any], base_url: str, warnings: list[str]) -> str | None:
    return inline_text(block.get("children"), warnings) + BLOCK_END


def _render_heading(block: dict[str, Any], base_url: str, warnings: list[str]) -> str | None:
    level = block.get("level")
    if isinstance(level, bool) or not isinstance(level, int):
        warnings.append(f"Heading block without an integer level skipped: {level!r}")
        return None
    if not 1 <= level <= 6:
        warnings.append(f"Heading level {level} is outside 1-6")
    return "#" * level + " " + inline_text(block.get("children"), warnings) + BLOCK_END


def _render_list(block: dict[str, Any], base_url: str, warnings: list[str]) -> str | None:
    marker = "1. " if block.get("format") == "ordered" else "- "
    items = block.get("children")
    if not isinstance(items, list):
        items = []
    lines = [
        marker + inline_text(item.get("children") if isinstance(item, dict) else None, warnings)
        for item in items
    ]
    return "\n".join(lines) + BLOCK_END


def _render_quote(block: dict[str, Any], base_url: str, warnings: list[str]) -> str | None:
    return "> " + inline_text(block.get("children"), warnings) + BLOCK_END


def _render_image(block: dict[str, Any], base_url: str, warnings: list[str]) -> str | None:
    # Strapi nests the media record under "image"; accept the flat form too
    image = block.get("image") if isinstance(block.get("image"), dict) else block
    url = image.get("url")
    if not isinstance(url, str) or not url:
        warnings.append("Image block without a URL skipped")
        return None
    alt = image.get("alternativeText")
    if not isinstance(alt, str):
        alt = ""
    return f"![{alt}]({resolve_asset_url(url, base_url)})" + BLOCK_END


def _render_code(block: dict[str, Any], base_url: str, warnings: list[str]) -> str | None:
    language = block.get("language")
    if language is None:
        language = ""
    elif not isinstance(language, str):
        warnings.append(f"Code block language ignored: {language!r}")
        language = ""
    children = block.get("children")
    if not isinstance(children, list):
        children = []
    lines = []
    for child in children:
        text = child.get("text") if isinstance(child, dict) else None
        if not isinstance(text, str):
            warnings.append(f"Code line with non-string text dropped: {text!r}")
            continue
        lines.append(text)
    return "```" + language + "\n" + "\n".join(lines) + "\n```" + BLOCK_END


_RENDERERS: dict[str, Callable[[dict[str, Any], str, list[str]], str | None]] = {
    "paragraph": _render_paragraph,
    "heading": _render_heading,
    "list": _render_list,
    "quote": _render_quote,
    "image": _render_image,
    "code": _render_code,
}


def render(blocks: Any, base_url: str = "") -> RenderResult:
    """Render a block sequence to Markdown.

    Never raises on malformed blocks: they are omitted and described in the
    returned warnings. Anything other than a list renders as empty content.

    Args:
        blocks: Ordered list of Strapi blocks
        base_url: Prefix for relative image URLs

    Returns:
        RenderResult with the Markdown text and any warnings
    """
    warnings: list[str] = []
    if not isinstance(blocks, list):
        return RenderResult(markdown="", warnings=warnings)

    segments = []
    for block in blocks:
        if not isinstance(block, dict):
            warnings.append(f"Malformed block skipped: {block!r}")
            continue
        block_type = block.get("type")
        renderer = _RENDERERS.get(block_type) if isinstance(block_type, str) else None
        if renderer is None:
            warnings.append(f"Unknown block type: {block.get('type')}")
            continue
        segment = renderer(block, base_url, warnings)
        if segment is not None:
            segments.append(segment)
    return RenderResult(markdown="".join(segments), warnings=warnings)


def blocks_to_markdown(blocks: Any, base_url: str = "") -> str:
    """Render a block sequence and return only the Markdown text."""
    return render(blocks, base_url).markdown
