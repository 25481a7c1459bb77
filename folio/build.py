"""Site generation for Folio.

This module holds the configuration and the generation pass itself: list the
content directory, and for every Markdown document parse its front matter,
render its body, assemble a page, and write the metadata and HTML artifacts.

Key functions:
- load_config: Build a SiteConfig from folio.yaml.
- generate_site: Run one full generation pass.

Key classes:
- SiteConfig: Directory layout and generation options.
- SiteGenerator: Orchestrates the pipeline over every document.
- GenerationResult: Per-document outcomes of a pass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .content import FileContentLoader, assemble_page
from .errors import ConfigError, GenerationError, RenderError
from .frontmatter import FrontMatter, parse_frontmatter
from .protocols import ContentRenderer, PageRenderer
from .renderers import MarkdownRenderer
from .templates import TemplateEmitter, write_artifact
from .utils import html_artifact_name, metadata_artifact_name

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "folio.yaml"

RENDER_EMPTY = "empty"
RENDER_ABORT = "abort"
RENDER_SKIP = "skip"
RENDER_POLICIES = (RENDER_EMPTY, RENDER_ABORT, RENDER_SKIP)

DEFAULT_CONFIG = {
    "content_dir": "content",
    "output_dir": "output",
    "template": "templates/template.html",
    "port": 8080,
    "on_render_error": RENDER_EMPTY,
    "unsafe_html": False,
}

STATUS_WRITTEN = "written"
STATUS_DEGRADED = "degraded"
STATUS_SKIPPED = "skipped"
STATUS_FAILED = "failed"


@dataclass(frozen=True)
class SiteConfig:
    """Where a site lives and how it is generated.

    Attributes:
        content_dir: Directory of Markdown documents.
        output_dir: Directory receiving the generated artifacts.
        template_path: The HTML template every page is rendered with.
        port: Port the static server listens on.
        on_render_error: What to do when Markdown rendering fails:
            ``empty`` writes the page with an empty body, ``abort`` stops the
            run, ``skip`` writes nothing for that document.
        unsafe_html: Pass raw HTML in documents through instead of escaping it.
    """

    content_dir: Path
    output_dir: Path
    template_path: Path
    port: int = 8080
    on_render_error: str = RENDER_EMPTY
    unsafe_html: bool = False

    def __post_init__(self):
        if self.on_render_error not in RENDER_POLICIES:
            raise ConfigError(
                f"on_render_error must be one of {', '.join(RENDER_POLICIES)}; "
                f"got {self.on_render_error!r}"
            )

    @classmethod
    def from_mapping(cls, project_root: Path, values: dict[str, Any]) -> SiteConfig:
        """Build a config from raw values, resolving paths against the root."""
        merged = DEFAULT_CONFIG.copy()
        merged.update({k: v for k, v in values.items() if v is not None})
        try:
            port = int(merged["port"])
        except (TypeError, ValueError) as exc:
            raise ConfigError(
                f"port must be an integer; got {merged['port']!r}"
            ) from exc
        unsafe_html = merged["unsafe_html"]
        if not isinstance(unsafe_html, bool):
            raise ConfigError(
                f"unsafe_html must be true or false; got {unsafe_html!r}"
            )
        return cls(
            content_dir=project_root / str(merged["content_dir"]),
            output_dir=project_root / str(merged["output_dir"]),
            template_path=project_root / str(merged["template"]),
            port=port,
            on_render_error=str(merged["on_render_error"]),
            unsafe_html=unsafe_html,
        )


def load_config(project_root: Path, **overrides: Any) -> SiteConfig:
    """Load site configuration from folio.yaml.

    Args:
        project_root: Root directory of the project.
        **overrides: Values taking precedence over the file; ``None`` is
            ignored.

    Returns:
        SiteConfig with defaults applied.

    Raises:
        ConfigError: If folio.yaml is malformed or holds invalid values.
    """
    config_path = project_root / CONFIG_FILENAME
    values: dict[str, Any] = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid {CONFIG_FILENAME}: {exc}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping")
        values.update(loaded)
    values.update({k: v for k, v in overrides.items() if v is not None})
    return SiteConfig.from_mapping(project_root, values)


@dataclass
class DocumentOutcome:
    """What happened to one document during a pass.

    Attributes:
        name: Document filename.
        status: ``written``, ``degraded``, ``skipped`` or ``failed``.
        title: Resolved page title, when a page was assembled.
        html_path: Rendered page artifact, when written.
        metadata_path: Front matter artifact, when written.
        reason: Render failure reason for degraded or skipped documents.
        error: The error that failed the document.
    """

    name: str
    status: str
    title: str = ""
    html_path: Path | None = None
    metadata_path: Path | None = None
    reason: str | None = None
    error: GenerationError | None = None


@dataclass
class GenerationResult:
    """Result of a generation pass.

    Attributes:
        outcomes: One entry per selected document, in processing order.
        output_dir: Directory the artifacts were written to.
    """

    outcomes: list[DocumentOutcome] = field(default_factory=list)
    output_dir: Path | None = None

    @property
    def written(self) -> list[DocumentOutcome]:
        return [
            o for o in self.outcomes if o.status in (STATUS_WRITTEN, STATUS_DEGRADED)
        ]

    @property
    def degraded(self) -> list[DocumentOutcome]:
        return [o for o in self.outcomes if o.status == STATUS_DEGRADED]

    @property
    def skipped(self) -> list[DocumentOutcome]:
        return [o for o in self.outcomes if o.status == STATUS_SKIPPED]

    @property
    def failed(self) -> list[DocumentOutcome]:
        return [o for o in self.outcomes if o.status == STATUS_FAILED]


class SiteGenerator:
    """Runs the generation pipeline over a content directory.

    Documents are processed one at a time in directory order. Output files
    are overwritten; output for documents no longer present is left alone.

    Attributes:
        config: Site configuration.
        renderer: Markdown renderer.
        page_renderer: Template renderer producing the final HTML.
    """

    def __init__(
        self,
        config: SiteConfig,
        renderer: ContentRenderer | None = None,
        page_renderer: PageRenderer | None = None,
    ):
        self.config = config
        self.renderer = renderer or MarkdownRenderer(unsafe_html=config.unsafe_html)
        self.page_renderer = page_renderer or TemplateEmitter(config.template_path)
        self.loader = FileContentLoader(config.content_dir)

    def run(self, fail_fast: bool = True) -> GenerationResult:
        """Generate every document.

        Args:
            fail_fast: Abort on the first document error. When False, errors
                are recorded on the document's outcome and the pass goes on.

        Returns:
            GenerationResult with one outcome per document.

        Raises:
            ReadError: If the content directory cannot be listed.
            GenerationError: With fail_fast, the first per-document error.
        """
        result = GenerationResult(output_dir=self.config.output_dir)
        for path in self.loader.iter_files():
            try:
                outcome = self._generate_document(path)
            except GenerationError as exc:
                if fail_fast:
                    raise
                logger.error("Failed to generate %s: %s", path.name, exc.message)
                outcome = DocumentOutcome(
                    name=path.name, status=STATUS_FAILED, error=exc
                )
            result.outcomes.append(outcome)
        return result

    def _generate_document(self, path: Path) -> DocumentOutcome:
        document = self.loader.read(path)
        frontmatter = parse_frontmatter(document.raw, document.path)
        rendered = self.renderer.render(document.raw, document.path)

        status = STATUS_WRITTEN
        if not rendered.ok:
            policy = self.config.on_render_error
            if policy == RENDER_ABORT:
                raise RenderError(
                    document.path, f"Markdown rendering failed: {rendered.error}"
                )
            if policy == RENDER_SKIP:
                logger.warning("Skipping %s: %s", document.name, rendered.error)
                return DocumentOutcome(
                    name=document.name, status=STATUS_SKIPPED, reason=rendered.error
                )
            status = STATUS_DEGRADED

        page = assemble_page(document, frontmatter, rendered.html)
        html = self.page_renderer.render(page)

        output_dir = self.config.output_dir
        metadata_path = output_dir / metadata_artifact_name(document.name)
        html_path = output_dir / html_artifact_name(document.name)
        _write_metadata(metadata_path, frontmatter)
        write_artifact(html_path, html)
        logger.info("Generated %s", html_path)

        return DocumentOutcome(
            name=document.name,
            status=status,
            title=page.title,
            html_path=html_path,
            metadata_path=metadata_path,
            reason=rendered.error,
        )


def generate_site(
    config: SiteConfig,
    fail_fast: bool = True,
    renderer: ContentRenderer | None = None,
    page_renderer: PageRenderer | None = None,
) -> GenerationResult:
    """Run one full generation pass.

    Args:
        config: Site configuration.
        fail_fast: Abort the whole pass on the first document error.
        renderer: Optional custom Markdown renderer.
        page_renderer: Optional custom template renderer.

    Returns:
        GenerationResult describing every document.
    """
    generator = SiteGenerator(config, renderer=renderer, page_renderer=page_renderer)
    return generator.run(fail_fast=fail_fast)


def dump_frontmatter(frontmatter: FrontMatter) -> str:
    """Serialize front matter as YAML."""
    return yaml.safe_dump(
        frontmatter.to_dict(),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def _write_metadata(path: Path, frontmatter: FrontMatter) -> None:
    """Write a document's front matter next to its rendered page."""
    write_artifact(path, dump_frontmatter(frontmatter))
