from io import BytesIO

import docx
import pytest
from docx.document import Document as DocxDocument

from station_export.services.exporters import DocxExporter, ExportBuildError
from station_export.services.exporters.docx_exporter import DIVIDER, IMAGE_WIDTH, MONOSPACE_FONT, decode_data_uri


def _render(html: str, title: str = "Report"):
    content, filename, content_type = DocxExporter().export(title, html)
    return docx.Document(BytesIO(content)), filename, content_type


def _texts(document):
    return [p.text for p in document.paragraphs]


def test_sample_document(sample_html):
    document, filename, content_type = _render(sample_html)
    assert filename == "report.docx"
    assert content_type.endswith("wordprocessingml.document")

    paragraphs = document.paragraphs
    assert _texts(document) == ["Report", "", "Title", "Hello world"]
    assert paragraphs[0].runs[0].bold
    assert paragraphs[2].style.name == "Heading 1"
    body_runs = paragraphs[3].runs
    assert body_runs[0].text == "Hello "
    assert not body_runs[0].bold
    assert body_runs[1].text == "world"
    assert body_runs[1].bold


def test_empty_markup_still_has_title():
    document, _, _ = _render("")
    assert _texts(document) == ["Report", ""]


def test_lists_are_prefixed():
    document, _, _ = _render("<ul><li>One</li><li>Two</li></ul><ol><li>First</li></ol>")
    assert _texts(document)[2:] == ["•  One", "•  Two", "1. First"]


def test_code_block_lines_use_monospace():
    document, _, _ = _render("<pre><code>a = 1\nb = 2</code></pre>")
    code = document.paragraphs[2:]
    assert [p.text for p in code] == ["a = 1", "b = 2"]
    assert all(p.runs[0].font.name == MONOSPACE_FONT for p in code)


def test_horizontal_rule_is_divider():
    document, _, _ = _render("<hr>")
    assert _texts(document)[-1] == DIVIDER


def test_table_pads_short_rows():
    document, _, _ = _render("<table><tr><td>A</td></tr><tr><td>B</td><td>C</td></tr></table>")
    (table,) = document.tables
    assert len(table.rows) == 2
    assert len(table.columns) == 2
    assert [c.text for c in table.rows[0].cells] == ["A", ""]
    assert [c.text for c in table.rows[1].cells] == ["B", "C"]


def test_empty_table_is_skipped():
    document, _, _ = _render("<table></table>")
    assert document.tables == []


def test_data_uri_image_is_embedded(png_data_uri):
    document, _, _ = _render(f'<img src="{png_data_uri}" alt="Logo">')
    assert len(document.inline_shapes) == 1
    assert document.inline_shapes[0].width == IMAGE_WIDTH
    assert "Logo" in _texts(document)


def test_remote_image_becomes_caption_only():
    document, _, _ = _render('<img src="https://example.com/a.png" alt=""><img src="https://x/b.png" alt="Alt">')
    assert len(document.inline_shapes) == 0
    assert _texts(document)[2:] == ["[Image]", "Alt"]


def test_undecodable_image_is_skipped():
    document, _, _ = _render(
        '<img src="data:image/png;base64,@@@" alt="bad">'
        '<img src="data:image/png;base64,aGVsbG8=" alt="not-an-image">'
    )
    assert len(document.inline_shapes) == 0
    assert _texts(document)[2:] == ["bad", "not-an-image"]


def test_decode_data_uri():
    assert decode_data_uri("https://example.com/a.png") is None
    assert decode_data_uri("data:image/gif;base64,R0lGOD") is None
    assert decode_data_uri("data:image/png;base64,aGVsbG8=") == b"hello"


def test_save_failure_raises_build_error(monkeypatch):
    def broken_save(self, stream):
        raise OSError("disk full")

    monkeypatch.setattr(DocxDocument, "save", broken_save)
    with pytest.raises(ExportBuildError):
        DocxExporter().export("Report", "<p>x</p>")


def test_xml_illegal_whitespace_is_replaced():
    document, _, _ = _render("<p>a\x0cb</p><h2>x\x0by</h2><blockquote>q\x0cr</blockquote>", title="T\x0bitle")
    texts = _texts(document)
    assert texts[0] == "T itle"
    assert texts[2:] == ["a b", "x y", "q r"]


def test_table_and_image_text_are_sanitized():
    document, _, _ = _render('<table><tr><td>c\x0cd</td></tr></table><img src="https://x/a.png" alt="al\x0bt">')
    assert document.tables[0].cell(0, 0).text == "c d"
    assert _texts(document)[-1] == "al t"
