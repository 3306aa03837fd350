"""Standalone HTML exporter.

The editor markup is already HTML, so ``build`` wraps it unchanged in a
self-contained page with a reading stylesheet. ``render`` serializes the
parsed model instead, for callers that only hold a ParsedDocument.
"""

from html import escape
from typing import Callable, Dict, List

from station_export.schemas.document import (
    Block,
    Blockquote,
    CodeBlock,
    Heading,
    HorizontalRule,
    Image,
    InlineRun,
    OrderedList,
    Paragraph,
    ParsedDocument,
    Table,
    UnorderedList,
)
from .base_exporter import BaseExporter

STYLESHEET = (
    "body{font-family:system-ui,sans-serif;max-width:680px;margin:2rem auto;padding:0 1rem;"
    "line-height:1.7;color:#1a1a1a}"
    "h1{font-size:2rem;font-weight:700}"
    "h2{font-size:1.5rem;font-weight:600}"
    "h3{font-size:1.25rem;font-weight:600}"
    "img{max-width:100%;border-radius:8px}"
    "code{background:#f4f4f5;padding:2px 6px;border-radius:4px;font-size:0.9em}"
    "pre{background:#f4f4f5;padding:1rem;border-radius:8px;overflow-x:auto}"
    "blockquote{border-left:3px solid #d4d4d8;padding-left:1rem;color:#52525b}"
    "table{border-collapse:collapse;width:100%}"
    "th,td{border:1px solid #e4e4e7;padding:8px 12px;text-align:left}"
    "th{background:#f4f4f5;font-weight:600}"
)


def wrap_page(title: str, body: str) -> str:
    return (
        '<!DOCTYPE html><html><head><meta charset="utf-8">'
        f"<title>{escape(title)}</title><style>{STYLESHEET}</style></head>"
        f"<body>{body}</body></html>"
    )


def render_runs(runs: List[InlineRun]) -> str:
    parts = []
    for run in runs:
        if run.text == "\n":
            parts.append("<br>")
            continue
        text = escape(run.text, quote=False)
        if run.code:
            text = f"<code>{text}</code>"
        if run.underline:
            text = f"<u>{text}</u>"
        if run.italic:
            text = f"<em>{text}</em>"
        if run.bold:
            text = f"<strong>{text}</strong>"
        parts.append(text)
    return "".join(parts)


class HtmlExporter(BaseExporter):
    """Exporter for editor documents to a single styled HTML page (UTF-8)."""

    @property
    def format(self) -> str:
        return "html"

    @property
    def content_type(self) -> str:
        return "text/html"

    def build(self, title: str, html: str) -> bytes:
        return wrap_page(title, html).encode("utf-8")

    def render(self, document: ParsedDocument) -> bytes:
        body = "".join(self._renderers[block.type](self, block) for block in document.blocks)
        return wrap_page(document.title, body).encode("utf-8")

    def _heading(self, block: Heading) -> str:
        return f"<h{block.level}>{render_runs(block.children)}</h{block.level}>"

    def _paragraph(self, block: Paragraph) -> str:
        return f"<p>{render_runs(block.children)}</p>"

    def _unordered_list(self, block: UnorderedList) -> str:
        return "<ul>" + "".join(f"<li>{render_runs(item)}</li>" for item in block.items) + "</ul>"

    def _ordered_list(self, block: OrderedList) -> str:
        return "<ol>" + "".join(f"<li>{render_runs(item)}</li>" for item in block.items) + "</ol>"

    def _blockquote(self, block: Blockquote) -> str:
        return f"<blockquote><p>{render_runs(block.children)}</p></blockquote>"

    def _code_block(self, block: CodeBlock) -> str:
        return f"<pre><code>{escape(block.text, quote=False)}</code></pre>"

    def _horizontal_rule(self, block: HorizontalRule) -> str:
        return "<hr>"

    def _table(self, block: Table) -> str:
        col_count = block.column_count
        if col_count == 0:
            return ""
        rows = []
        for row in block.rows:
            cells = [f"<td>{render_runs(cell)}</td>" for cell in row]
            cells.extend("<td></td>" for _ in range(col_count - len(row)))
            rows.append("<tr>" + "".join(cells) + "</tr>")
        return "<table>" + "".join(rows) + "</table>"

    def _image(self, block: Image) -> str:
        return f'<img src="{escape(block.src)}" alt="{escape(block.alt)}">'

    _renderers: Dict[str, Callable[["HtmlExporter", Block], str]] = {
        "heading": _heading,
        "paragraph": _paragraph,
        "unordered_list": _unordered_list,
        "ordered_list": _ordered_list,
        "blockquote": _blockquote,
        "code_block": _code_block,
        "horizontal_rule": _horizontal_rule,
        "table": _table,
        "image": _image,
    }
