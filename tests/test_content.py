from pathlib import Path

import pytest
from markupsafe import Markup

from folio.content import (
    Document,
    FileContentLoader,
    Page,
    assemble_page,
    resolve_title,
)
from folio.errors import ReadError
from folio.frontmatter import FrontMatter


def create_content(tmp_path: Path) -> Path:
    content = tmp_path / "content"
    content.mkdir()
    (content / "b.md").write_text("# B", encoding="utf-8")
    (content / "a.md").write_text("# A", encoding="utf-8")
    (content / "notes.MD").write_text("upper case", encoding="utf-8")
    (content / "long.markdown").write_text("other extension", encoding="utf-8")
    (content / "readme.txt").write_text("ignore", encoding="utf-8")
    (content / "nested").mkdir()
    (content / "nested" / "inner.md").write_text("# Inner", encoding="utf-8")
    (content / "folder.md").mkdir()
    return content


def test_loader_selects_flat_markdown_files_in_order(tmp_path):
    content = create_content(tmp_path)
    files = FileContentLoader(content).iter_files()
    assert [p.name for p in files] == ["a.md", "b.md"]


def test_loader_reads_raw_bytes(tmp_path):
    content = create_content(tmp_path)
    loader = FileContentLoader(content)
    document = loader.read(content / "a.md")
    assert document == Document(name="a.md", path=content / "a.md", raw=b"# A")


def test_loader_missing_directory_raises_read_error(tmp_path):
    with pytest.raises(ReadError) as excinfo:
        FileContentLoader(tmp_path / "missing").iter_files()
    assert excinfo.value.source_path == tmp_path / "missing"


def test_loader_missing_file_raises_read_error(tmp_path):
    with pytest.raises(ReadError, match="Cannot read document"):
        FileContentLoader(tmp_path).read(tmp_path / "gone.md")


def test_resolve_title_prefers_frontmatter():
    assert resolve_title(FrontMatter(title="Hello"), "a.md") == "Hello"


def test_resolve_title_falls_back_to_filename():
    assert resolve_title(FrontMatter(), "b.md") == "b"
    assert resolve_title(FrontMatter(title=""), "release.notes.md") == "release.notes"


def test_whitespace_title_is_kept_verbatim():
    assert resolve_title(FrontMatter(title="   "), "a.md") == "   "
    assert resolve_title(FrontMatter(title=" Hello "), "a.md") == " Hello "


def test_assemble_page_marks_body_safe():
    document = Document(name="b.md", path=Path("b.md"), raw=b"x")
    page = assemble_page(document, FrontMatter(), "<p>x</p>")
    assert page == Page(title="b", body=Markup("<p>x</p>"))
    assert isinstance(page.body, Markup)
    assert page.context() == {"title": "b", "body": Markup("<p>x</p>")}
