import fitz  # PyMuPDF
import pytest

from station_export.schemas.document import InlineRun
from station_export.services.exporters import PdfExporter, pdf_exporter
from station_export.services.exporters.pdf_exporter import (
    A4,
    BODY_SIZE,
    FONT_BOLD,
    FONT_BOLD_ITALIC,
    FONT_ITALIC,
    FONT_MONO,
    FONT_REGULAR,
    PageWriter,
    dominant_style,
    select_font,
    text_width_mm,
    wrap_text,
)


def _render(html: str, title: str = "Report"):
    content, filename, content_type = PdfExporter().export(title, html)
    return fitz.open(stream=content, filetype="pdf"), filename, content_type


def _all_text(doc) -> str:
    return "\n".join(page.get_text() for page in doc)


def test_sample_document(sample_html):
    doc, filename, content_type = _render(sample_html)
    assert filename == "report.pdf"
    assert content_type == "application/pdf"
    assert doc.page_count == 1
    assert doc.metadata["title"] == "Report"
    text = _all_text(doc)
    for expected in ("Report", "Title", "Hello world"):
        assert expected in text


def test_empty_markup_renders_title_page():
    doc, _, _ = _render("")
    assert doc.page_count == 1
    assert "Report" in _all_text(doc)


def test_long_paragraph_paginates():
    doc, _, _ = _render("<p>" + "word " * 5000 + "</p>")
    assert doc.page_count > 1


def test_rich_document_renders(rich_html):
    doc, _, _ = _render(rich_html, title="Plan")
    text = _all_text(doc)
    for expected in ("Plan", "One", "Three", "First", "Quoted text", "x = 1", "y = 2", "B", "C"):
        assert expected in text
    assert "[Image: Diagram]" in text


def test_image_without_alt():
    doc, _, _ = _render('<img src="https://example.com/a.png">')
    assert "[Image]" in _all_text(doc)


def test_rules_are_drawn():
    doc, _, _ = _render("<hr>")
    # title rule + horizontal rule
    assert len(doc[0].get_drawings()) >= 2


def test_rendering_is_deterministic(rich_html):
    first, _, _ = PdfExporter().export("Plan", rich_html)
    second, _, _ = PdfExporter().export("Plan", rich_html)
    assert first == second


def test_typographic_characters_survive():
    doc, _, _ = _render("<ul><li>One</li></ul><p>a &mdash; b &ldquo;q&rdquo; &hellip; it&rsquo;s &ndash; x</p>")
    text = _all_text(doc)
    assert "•" in text
    assert "One" in text
    for expected in ("—", "“q”", "…", "it’s", "–"):
        assert expected in text


def test_accented_text_survives():
    doc, _, _ = _render("<p>café naïve über</p>")
    text = _all_text(doc)
    for expected in ("café", "naïve", "über"):
        assert expected in text


def test_document_closed_when_a_block_fails(monkeypatch):
    writers = []

    class TrackingWriter(PageWriter):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            writers.append(self)

    def broken_paragraph(exporter, writer, block):
        raise RuntimeError("layout failed")

    monkeypatch.setattr(pdf_exporter, "PageWriter", TrackingWriter)
    monkeypatch.setitem(PdfExporter._renderers, "paragraph", broken_paragraph)

    with pytest.raises(RuntimeError):
        PdfExporter().export("Report", "<p>x</p>")
    assert writers[0].doc.is_closed


def test_line_crossing_bottom_margin_starts_new_page():
    writer = PageWriter("t")
    line_height = A4.line_height(BODY_SIZE)
    writer.cursor = A4.content_bottom - line_height / 2

    writer.write_inline_block([InlineRun(text="x")], BODY_SIZE)

    assert writer.page_count == 2
    assert writer.cursor == pytest.approx(A4.margin_top + line_height)
    writer.finish()


def test_line_that_fits_stays_on_page():
    writer = PageWriter("t")
    start = writer.cursor
    writer.write_inline_block([InlineRun(text="x")], BODY_SIZE)
    assert writer.page_count == 1
    assert writer.cursor == pytest.approx(start + A4.line_height(BODY_SIZE))
    writer.finish()


def test_text_width_estimate():
    assert text_width_mm("abc", 10, True) == pytest.approx(3 * 10 * 0.60 / 2.8346)
    assert text_width_mm("abc", 10, False) == pytest.approx(3 * 10 * 0.52 / 2.8346)
    assert text_width_mm("", 10, False) == 0


def test_wrap_text_is_greedy():
    text = " ".join(["aaaa"] * 30)
    lines = wrap_text(text, BODY_SIZE, A4.usable_width, False)
    assert " ".join(lines) == text
    assert all(text_width_mm(line, BODY_SIZE, False) <= A4.usable_width for line in lines)
    assert len(lines[0].split()) == 16


def test_wrap_text_edge_cases():
    assert wrap_text("", BODY_SIZE, A4.usable_width, False) == [""]
    assert wrap_text("a\n\nb", BODY_SIZE, A4.usable_width, False) == ["a", "", "b"]
    long_word = "x" * 500
    assert wrap_text(long_word, BODY_SIZE, A4.usable_width, False) == [long_word]


def test_select_font():
    assert select_font(False, False, False) == FONT_REGULAR
    assert select_font(True, False, False) == FONT_BOLD
    assert select_font(False, True, False) == FONT_ITALIC
    assert select_font(True, True, False) == FONT_BOLD_ITALIC
    assert select_font(True, True, True) == FONT_MONO


def test_dominant_style_uses_first_non_empty_run():
    runs = [InlineRun(text=""), InlineRun(text="b", bold=True), InlineRun(text="c", italic=True)]
    assert dominant_style(runs) == (True, False, False)
    assert dominant_style([]) == (False, False, False)
