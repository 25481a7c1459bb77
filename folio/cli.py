"""Command-line interface for Folio.

This module defines the CLI commands using the Click framework.

Commands:
- new: Scaffold a new Folio project.
- build: Generate the site into the output directory.
- serve: Generate the site, then serve the output directory over HTTP.
- md: Create a new Markdown document interactively.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
import questionary
import yaml

from . import __version__
from .build import CONFIG_FILENAME, DEFAULT_CONFIG, GenerationResult, SiteConfig
from .errors import ConfigError, GenerationError
from .utils import MARKDOWN_SUFFIX, ensure_dirs

DEFAULT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{{ title }}</title>
</head>
<body>
  <main>
    <h1>{{ title }}</h1>
    {{ body }}
  </main>
</body>
</html>
"""

SAMPLE_DOCUMENT = """---
title: Home
---
Welcome to your new site.
Edit this file in the content directory and run `folio build`.
"""


@click.group()
@click.version_option(version=__version__, prog_name="folio")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """Folio static site generator."""
    _configure_logging(verbose)


@cli.command()
@click.argument("name")
def new(name: str):
    """Scaffold a new Folio project."""
    target = Path(name).resolve()
    if target.exists() and any(target.iterdir()):
        raise click.ClickException(
            f"Refusing to initialize into non-empty directory: {target}"
        )
    _scaffold(target)
    click.echo(f"New Folio site created at {target}")


@cli.command()
@click.option(
    "--keep-going",
    is_flag=True,
    help="Keep generating the remaining documents after one fails",
)
def build(keep_going: bool):
    """Generate the site into the output directory."""
    project_root = Path.cwd()
    config = _load_config(project_root)
    ensure_dirs([config.output_dir])
    result = _generate(project_root, config, keep_going)
    _report_result(project_root, result)


@cli.command()
@click.option(
    "--port",
    type=int,
    required=False,
    help="Port to serve on (overrides folio.yaml)",
)
@click.option(
    "--no-build", is_flag=True, help="Serve existing output without generating"
)
def serve(port: int | None, no_build: bool):
    """Generate the site and serve the output directory."""
    project_root = Path.cwd()
    config = _load_config(project_root, port=port)
    ensure_dirs([config.content_dir, config.template_path.parent, config.output_dir])
    if not no_build:
        result = _generate(project_root, config, keep_going=False)
        _report_result(project_root, result)

    from .server import SiteServer

    server = SiteServer(config.output_dir, port=config.port)
    click.echo(f"Serving {config.output_dir} at http://localhost:{config.port}")
    server.serve_forever()


@cli.command()
def md():
    """Create a new Markdown document interactively."""
    project_root = Path.cwd()
    config = _load_config(project_root)
    content_dir = config.content_dir

    if not content_dir.is_dir():
        raise click.ClickException(
            f"No content directory at {content_dir}. "
            "Run this command from a Folio project root."
        )

    name = questionary.text(
        "Filename (without .md extension):",
        validate=lambda x: len(x.strip()) > 0 or "Filename cannot be empty",
        style=_questionary_style(),
    ).ask()
    if name is None:
        raise click.Abort()
    name = name.strip()
    if name.endswith(MARKDOWN_SUFFIX):
        name = name[: -len(MARKDOWN_SUFFIX)]

    title = questionary.text(
        "Title (leave empty to use the filename):",
        default=_titleize(name),
        style=_questionary_style(),
    ).ask()
    if title is None:
        raise click.Abort()

    target_path = content_dir / f"{name}{MARKDOWN_SUFFIX}"
    if target_path.exists():
        raise click.ClickException(
            f"File already exists: {_display_path(project_root, target_path)}"
        )

    target_path.write_text(_new_document(title.strip()), encoding="utf-8")
    click.echo(f"Created {_display_path(project_root, target_path)}")


def main():
    """Entry point for the CLI application."""
    cli()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(project_root: Path, **overrides) -> SiteConfig:
    from .build import load_config

    try:
        return load_config(project_root, **overrides)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from None


def _generate(
    project_root: Path, config: SiteConfig, keep_going: bool
) -> GenerationResult:
    from .build import generate_site

    try:
        return generate_site(config, fail_fast=not keep_going)
    except GenerationError as exc:
        _echo_failure(project_root, exc)
        raise SystemExit(1) from None


def _report_result(project_root: Path, result: GenerationResult) -> None:
    for outcome in result.degraded:
        click.echo(
            click.style(
                f"Rendered {outcome.name} with an empty body: {outcome.reason}",
                fg="yellow",
            ),
            err=True,
        )
    for outcome in result.skipped:
        click.echo(
            click.style(f"Skipped {outcome.name}: {outcome.reason}", fg="yellow"),
            err=True,
        )
    for outcome in result.failed:
        _echo_failure(project_root, outcome.error)
    click.echo(f"Generated {len(result.written)} pages into {result.output_dir}")
    if result.failed:
        raise SystemExit(1)


def _echo_failure(project_root: Path, exc: GenerationError) -> None:
    """Display a generation error the way a build failure is reported."""
    click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
    if exc.source_path is not None:
        click.echo(
            click.style(
                f"  File: {_display_path(project_root, exc.source_path)}",
                fg="yellow",
            ),
            err=True,
        )
    click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)


def _display_path(project_root: Path, path: Path) -> Path:
    try:
        return path.relative_to(project_root)
    except ValueError:
        return path


def _titleize(name: str) -> str:
    """Convert filename to title case."""
    words = name.replace("-", " ").replace("_", " ").split()
    return " ".join(word.capitalize() for word in words)


def _new_document(title: str) -> str:
    if not title:
        return "\n"
    header = yaml.safe_dump({"title": title}, sort_keys=False, allow_unicode=True)
    return f"---\n{header}---\n\n"


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def _scaffold(root: Path) -> None:
    """Create the directory structure and files for a new Folio project.

    Args:
        root: Root directory for the new project.
    """
    config = SiteConfig.from_mapping(root, {})
    ensure_dirs(
        [root, config.content_dir, config.template_path.parent, config.output_dir]
    )
    config.template_path.write_text(DEFAULT_TEMPLATE, encoding="utf-8")
    (config.content_dir / f"index{MARKDOWN_SUFFIX}").write_text(
        SAMPLE_DOCUMENT, encoding="utf-8"
    )
    (root / CONFIG_FILENAME).write_text(
        yaml.safe_dump(DEFAULT_CONFIG, sort_keys=False), encoding="utf-8"
    )
