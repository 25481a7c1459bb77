"""Utility functions for Folio.

Key functions:
    is_markdown: Check if a filename selects a document for generation.
    strip_extension: Drop the last extension from a filename.
    html_artifact_name: Output filename of a document's rendered page.
    metadata_artifact_name: Output filename of a document's front matter.
    ensure_dirs: Create directories that do not exist yet.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

MARKDOWN_SUFFIX = ".md"
HTML_SUFFIX = ".html"
METADATA_SUFFIX = ".yaml"


def is_markdown(name: str) -> bool:
    """Check if a filename is a Markdown document.

    Matching is case-sensitive: ``notes.MD`` and ``notes.markdown`` are not
    documents.

    Args:
        name: Filename to check.

    Returns:
        True if the name ends in ``.md``.
    """
    return name.endswith(MARKDOWN_SUFFIX)


def strip_extension(name: str) -> str:
    """Remove the last extension from a filename.

    Examples:
        >>> strip_extension("hello.md")
        'hello'

        >>> strip_extension("release.notes.md")
        'release.notes'
    """
    stem, dot, _ = name.rpartition(".")
    return stem if dot and stem else name


def html_artifact_name(name: str) -> str:
    """Return the rendered page filename for a document, e.g. ``a.md.html``."""
    return f"{name}{HTML_SUFFIX}"


def metadata_artifact_name(name: str) -> str:
    """Return the front matter filename for a document, e.g. ``a.md.yaml``."""
    return f"{name}{METADATA_SUFFIX}"


def ensure_dirs(paths: Iterable[Path]) -> list[Path]:
    """Create any missing directories.

    Args:
        paths: Directories to create, parents included.

    Returns:
        The directories that had to be created.
    """
    created = []
    for path in paths:
        if not path.exists():
            path.mkdir(parents=True, exist_ok=True)
            created.append(path)
    return created
