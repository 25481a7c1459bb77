import logging

from markupsafe import Markup

from folio.renderers import MarkdownRenderer, RenderResult


def test_single_newline_becomes_line_break():
    result = MarkdownRenderer().render(b"first line\nsecond line\n")
    assert result.ok
    assert "<br />" in result.html
    assert result.html.count("<p>") == 1


def test_blank_line_still_starts_new_paragraph():
    result = MarkdownRenderer().render(b"one\n\ntwo\n")
    assert result.html.count("<p>") == 2
    assert "<br />" not in result.html


def test_frontmatter_is_not_rendered_into_body():
    result = MarkdownRenderer().render(b"---\ntitle: Hello\n---\nBody text\n")
    assert "title" not in result.html
    assert "<hr" not in result.html
    assert "<p>Body text</p>" in result.html


def test_output_is_markup():
    result = MarkdownRenderer().render("# Heading")
    assert isinstance(result.html, Markup)
    assert "<h1>Heading</h1>" in result.html


def test_raw_html_is_escaped_by_default():
    result = MarkdownRenderer().render(b"<script>alert(1)</script>\n")
    assert "<script>" not in result.html
    assert "&lt;script&gt;" in result.html


def test_raw_html_passes_when_unsafe_enabled():
    result = MarkdownRenderer(unsafe_html=True).render(
        b'<div class="hero">Hi</div>\n'
    )
    assert '<div class="hero">Hi</div>' in result.html


def test_code_block_highlighting_and_fallback():
    renderer = MarkdownRenderer()
    highlighted = renderer.render("```python\nprint('hi')\n```\n")
    assert 'class="highlight"' in highlighted.html

    plain = renderer.render("```nosuchlanguage\n<tag>\n```\n")
    assert 'class="language-nosuchlanguage"' in plain.html
    assert "&lt;tag&gt;" in plain.html


def test_tables_and_strikethrough():
    result = MarkdownRenderer().render("| a | b |\n|---|---|\n| 1 | 2 |\n\n~~gone~~\n")
    assert "<table>" in result.html
    assert "<del>gone</del>" in result.html


def test_rendering_is_deterministic():
    source = b"---\ntitle: T\n---\nA *b*\nc\n\n- d\n- e\n"
    renderer = MarkdownRenderer()
    assert renderer.render(source) == renderer.render(source)


def test_conversion_failure_degrades_to_empty(monkeypatch, caplog):
    def broken(**kwargs):
        raise RuntimeError("parser exploded")

    monkeypatch.setattr("folio.renderers.mistune.create_markdown", broken)
    with caplog.at_level(logging.WARNING, logger="folio.renderers"):
        result = MarkdownRenderer().render(b"text")

    assert not result.ok
    assert result.html == Markup("")
    assert "parser exploded" in result.error
    assert "Error rendering markdown" in caplog.text


def test_undecodable_document_degrades():
    result = MarkdownRenderer().render(b"\xff\xfe\xfd")
    assert not result.ok
    assert result.html == ""
    assert "UnicodeDecodeError" in result.error


def test_render_result_failed():
    failed = RenderResult.failed("nope")
    assert failed.error == "nope"
    assert failed.html == ""
    assert not failed.ok
    assert RenderResult(html=Markup("<p>x</p>")).ok


def test_markdown_renderer_satisfies_protocol():
    from folio.protocols import ContentRenderer

    assert isinstance(MarkdownRenderer(), ContentRenderer)
