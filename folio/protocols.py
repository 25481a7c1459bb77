"""Protocol definitions for Folio.

The site generator depends on these interfaces rather than on the concrete
mistune and Jinja2 implementations, so either side can be swapped in tests or
by callers.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .content import Page
    from .renderers import RenderResult


@runtime_checkable
class ContentRenderer(Protocol):
    """Converts a raw document into an HTML fragment."""

    @abstractmethod
    def render(self, raw: bytes | str, path: Path | None = None) -> RenderResult:
        """Render a document.

        Args:
            raw: Raw document content.
            path: Source path for diagnostics.

        Returns:
            RenderResult holding the fragment or the failure reason.
        """
        ...


@runtime_checkable
class PageRenderer(Protocol):
    """Turns a Page into a complete HTML document."""

    @abstractmethod
    def render(self, page: Page) -> str:
        """Render a page.

        Raises:
            TemplateError: If the page cannot be rendered.
        """
        ...
