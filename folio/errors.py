"""Error types for Folio.

Every failure the generation pipeline surfaces is a GenerationError subclass
carrying the file it concerns, so the CLI can report it uniformly.

Key classes:
- GenerationError: Base class with file context.
- ReadError: Input directory or document could not be read.
- ParseError: Front matter could not be interpreted.
- RenderError: Markdown conversion failed and the run is configured to abort.
- TemplateError: Template missing, malformed, or failed while executing.
- WriteError: An output artifact could not be written.
- ConfigError: folio.yaml is invalid.
"""

from __future__ import annotations

from pathlib import Path


class GenerationError(Exception):
    """Error during site generation with file context.

    Attributes:
        source_path: Path to the file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path | None,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        if source_path is None:
            super().__init__(message)
        else:
            super().__init__(f"{source_path}: {message}")


class ReadError(GenerationError):
    """Input directory or document unreadable."""


class ParseError(GenerationError):
    """Front matter malformed."""


class RenderError(GenerationError):
    """Markdown conversion failed under the abort policy."""


class TemplateError(GenerationError):
    """Template missing, malformed, or failed during execution."""


class WriteError(GenerationError):
    """Output artifact could not be written."""


class ConfigError(Exception):
    """Invalid project configuration."""
