"""Template rendering for Folio.

This module uses Jinja2 to merge a Page into the site's single HTML template
and write the result. The template is read and parsed again for every page;
nothing is cached between documents.

Key class:
- TemplateEmitter: Renders a Page through the template and writes it out.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
    select_autoescape,
)

from .content import Page
from .errors import TemplateError, WriteError


class TemplateEmitter:
    """Renders pages with a single Jinja2 template.

    The template sees exactly two variables, ``title`` and ``body``. Titles
    are autoescaped; the body is already-safe markup and is inserted as is.
    Referencing any other variable is an error.

    Attributes:
        template_path: Path to the HTML template.
        env: Jinja2 environment with caching disabled.
    """

    def __init__(self, template_path: Path):
        self.template_path = template_path
        self.env = Environment(
            loader=FileSystemLoader(str(template_path.parent)),
            autoescape=select_autoescape(["html", "htm", "xml"]),
            undefined=StrictUndefined,
            cache_size=0,
            keep_trailing_newline=True,
        )

    def render(self, page: Page) -> str:
        """Render a page through the template.

        Args:
            page: Page to render.

        Returns:
            Rendered HTML string.

        Raises:
            TemplateError: If the template is missing, malformed, or fails
                while executing.
        """
        try:
            template = self.env.get_template(self.template_path.name)
        except TemplateNotFound as exc:
            raise TemplateError(
                self.template_path, "Template not found", exc
            ) from exc
        except TemplateSyntaxError as exc:
            raise TemplateError(
                self.template_path,
                f"Template syntax error on line {exc.lineno}: {exc.message}",
                exc,
            ) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise TemplateError(
                self.template_path, f"Cannot read template: {exc}", exc
            ) from exc

        try:
            return template.render(**page.context())
        except Exception as exc:
            raise TemplateError(
                self.template_path, _format_error_message(exc), exc
            ) from exc

    def emit(self, page: Page, output_path: Path) -> None:
        """Render a page and write it to ``output_path``."""
        write_artifact(output_path, self.render(page))


def write_artifact(output_path: Path, text: str) -> None:
    """Write text to a file, replacing whatever is there.

    Raises:
        WriteError: If the file cannot be written.
    """
    try:
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as exc:
        raise WriteError(output_path, f"Cannot write output: {exc}", exc) from exc


def _format_error_message(exc: Exception) -> str:
    """Format a template execution error for display."""
    error_type = type(exc).__name__
    error_msg = str(exc)

    if error_type == "UndefinedError":
        return f"Undefined variable: {error_msg}"
    if error_type == "TypeError":
        return f"Type error: {error_msg}"
    return f"{error_type}: {error_msg}"
