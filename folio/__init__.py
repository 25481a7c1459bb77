"""Folio static site generator.

Folio turns a flat directory of Markdown documents with optional YAML front
matter into standalone HTML pages through a single Jinja2 template, writes a
YAML copy of each document's front matter alongside, and can serve the result
over HTTP.

The main entry point is the CLI module, which provides commands for scaffolding
new projects, generating sites, and serving the output.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
