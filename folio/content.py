"""Content loading and page assembly for Folio.

Key classes:
- Document: Raw source file read from the content directory.
- Page: Title and rendered body handed to the template.
- FileContentLoader: Lists and reads documents from the content directory.

Key functions:
- resolve_title: Pick the page title from front matter or the filename.
- assemble_page: Combine front matter and a rendered fragment into a Page.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from markupsafe import Markup

from .errors import ReadError
from .frontmatter import FrontMatter
from .utils import is_markdown, strip_extension


@dataclass(frozen=True)
class Document:
    """A source document.

    Attributes:
        name: Filename, unique within the content directory.
        path: Location on disk.
        raw: File content as read.
    """

    name: str
    path: Path
    raw: bytes


@dataclass(frozen=True)
class Page:
    """The template's data context.

    Attributes:
        title: Page title.
        body: Rendered HTML fragment, never escaped again by the template.
    """

    title: str
    body: Markup

    def context(self) -> dict[str, object]:
        return {"title": self.title, "body": self.body}


class FileContentLoader:
    """Discovers and reads documents in a flat content directory.

    Only regular entries whose name ends in ``.md`` are picked up.
    Subdirectories are skipped, never traversed.

    Attributes:
        content_dir: Directory containing the documents.
    """

    def __init__(self, content_dir: Path):
        self.content_dir = content_dir

    def iter_files(self) -> list[Path]:
        """List document paths in directory order (sorted by name).

        Raises:
            ReadError: If the content directory cannot be listed.
        """
        try:
            entries = sorted(self.content_dir.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            raise ReadError(
                self.content_dir, f"Cannot read content directory: {exc}", exc
            ) from exc
        return [
            path for path in entries if is_markdown(path.name) and not path.is_dir()
        ]

    def read(self, path: Path) -> Document:
        """Read a document from disk.

        Raises:
            ReadError: If the file cannot be read.
        """
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise ReadError(path, f"Cannot read document: {exc}", exc) from exc
        return Document(name=path.name, path=path, raw=raw)


def resolve_title(frontmatter: FrontMatter, document_name: str) -> str:
    """Return the declared title, or the filename without its extension."""
    if frontmatter.title != "":
        return frontmatter.title
    return strip_extension(document_name)


def assemble_page(document: Document, frontmatter: FrontMatter, fragment: str) -> Page:
    """Build the Page for a document.

    Args:
        document: Source document.
        frontmatter: Its parsed front matter.
        fragment: Its rendered HTML.

    Returns:
        Page whose body is the fragment marked as safe markup.
    """
    return Page(title=resolve_title(frontmatter, document.name), body=Markup(fragment))
