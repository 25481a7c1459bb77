"""Front matter parsing for Folio.

A document may open with a YAML block fenced by ``---`` lines. This module
pulls that block out and turns it into a FrontMatter record. Deciding what a
page is called when no title is given belongs to the page assembler, not here.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .errors import ParseError

FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*\r?$\n?", re.DOTALL | re.MULTILINE
)


@dataclass(frozen=True)
class FrontMatter:
    """Metadata declared at the top of a document.

    Attributes:
        title: Declared title, empty string when not provided.
        extra: Every other key, kept as written.
    """

    title: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the record as a plain mapping with ``title`` first."""
        data: dict[str, Any] = {"title": self.title}
        data.update(self.extra)
        return data


def decode_document(raw: bytes | str) -> str:
    """Decode raw document bytes as UTF-8, dropping a leading BOM."""
    if isinstance(raw, str):
        return raw.lstrip("\ufeff")
    return raw.decode("utf-8-sig")


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """Split text into its front matter block and the remaining body.

    Args:
        text: Decoded document content.

    Returns:
        Tuple of (YAML text or None when there is no block, body text).
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return None, text
    return match.group(1), text[match.end() :]


def parse_frontmatter(raw: bytes | str, path: Path | None = None) -> FrontMatter:
    """Parse the front matter of a document.

    Args:
        raw: Raw document content.
        path: Source path, used only for error context.

    Returns:
        FrontMatter record. Documents without a block get an empty record.

    Raises:
        ParseError: If the block is not valid YAML or is not a mapping.
    """
    try:
        text = decode_document(raw)
    except UnicodeDecodeError as exc:
        raise ParseError(path, f"Document is not valid UTF-8: {exc}", exc) from exc

    block, _ = split_frontmatter(text)
    if block is None:
        return FrontMatter()

    try:
        data = yaml.safe_load(block)
    except (yaml.YAMLError, ValueError) as exc:
        # Timestamp-shaped values that are not real dates raise ValueError.
        raise ParseError(path, f"Invalid YAML front matter: {exc}", exc) from exc

    if data is None:
        return FrontMatter()
    if not isinstance(data, dict):
        raise ParseError(
            path,
            f"Front matter must be a mapping, got {type(data).__name__}",
        )

    extra = {str(key): value for key, value in data.items() if key != "title"}
    return FrontMatter(title=_coerce_title(data.get("title"), path), extra=extra)


def _coerce_title(value: Any, path: Path | None) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ParseError(
            path, f"Front matter title must be a string, got {type(value).__name__}"
        )
    return str(value)
