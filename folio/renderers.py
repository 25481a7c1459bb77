"""Markdown rendering for Folio.

This module turns document text into an HTML fragment with mistune. Rendering
never raises: a failed conversion comes back as a RenderResult carrying the
reason, and the generator decides what to do with it.

Key classes:
- RenderResult: Rendered fragment or failure reason.
- MarkdownRenderer: Converts Markdown to HTML with hard wraps.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import mistune
from markupsafe import Markup, escape
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .frontmatter import decode_document, split_frontmatter

logger = logging.getLogger(__name__)

MARKDOWN_PLUGINS = ["strikethrough", "footnotes", "table", "url"]


@dataclass(frozen=True)
class RenderResult:
    """Outcome of rendering one document.

    Attributes:
        html: Rendered fragment, empty when rendering failed.
        error: Failure reason, or None on success.
    """

    html: Markup
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, reason: str) -> RenderResult:
        return cls(html=Markup(""), error=reason)


class _HighlightRenderer(mistune.HTMLRenderer):
    """HTML renderer that highlights fenced code blocks with Pygments."""

    def __init__(self, escape_html: bool = True):
        super().__init__(escape=escape_html)

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block, highlighted when the language is known.

        Args:
            code: The code content.
            info: Language identifier (e.g., 'python', 'go').

        Returns:
            HTML string for the block.
        """
        lang = info.split()[0] if info and info.strip() else ""
        if lang:
            try:
                lexer = get_lexer_by_name(lang, stripall=True)
            except ClassNotFound:
                pass
            else:
                formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
                return highlight(code, lexer, formatter)
        lang_class = f' class="language-{escape(lang)}"' if lang else ""
        return f"<pre><code{lang_class}>{escape(code)}</code></pre>\n"


class MarkdownRenderer:
    """Renders Markdown documents to HTML fragments.

    A single newline inside a paragraph becomes a line break. Raw HTML in the
    source is escaped unless ``unsafe_html`` is set. A leading front matter
    block is dropped before conversion.

    Attributes:
        unsafe_html: Whether raw HTML passes through untouched.
    """

    def __init__(self, unsafe_html: bool = False):
        self.unsafe_html = unsafe_html

    def render(self, raw: bytes | str, path: Path | None = None) -> RenderResult:
        """Render a document to HTML.

        Args:
            raw: Raw document content, front matter included.
            path: Source path, used only in log messages.

        Returns:
            RenderResult with the fragment, or with the failure reason.
        """
        source = path or "<string>"
        try:
            text = decode_document(raw)
            _, body = split_frontmatter(text)
            markdown = mistune.create_markdown(
                renderer=_HighlightRenderer(escape_html=not self.unsafe_html),
                hard_wrap=True,
                plugins=MARKDOWN_PLUGINS,
            )
            html = markdown(body)
        except Exception as exc:
            reason = f"{type(exc).__name__}: {exc}"
            logger.warning("Error rendering markdown for %s: %s", source, reason)
            return RenderResult.failed(reason)
        return RenderResult(html=Markup(html))
