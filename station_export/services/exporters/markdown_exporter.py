"""Markdown exporter: renders the document model as CommonMark-ish text."""

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


def render_runs(runs: List[InlineRun]) -> str:
    """Inline runs -> markdown. Underline has no markdown form and is dropped."""
    parts = []
    for run in runs:
        text = run.text
        if not text.strip() or text == "\n":
            parts.append("  \n" if text == "\n" else text)
            continue
        # Keep surrounding spaces outside the markers so `** bold**` never happens
        stripped = text.strip()
        lead = text[:len(text) - len(text.lstrip())]
        trail = text[len(text.rstrip()):]
        if run.code:
            stripped = f"`{stripped}`"
        if run.italic:
            stripped = f"*{stripped}*"
        if run.bold:
            stripped = f"**{stripped}**"
        parts.append(f"{lead}{stripped}{trail}")
    return "".join(parts)


def _cell(runs: List[InlineRun]) -> str:
    return render_runs(runs).replace("|", "\\|").replace("\n", " ").strip()


class MarkdownExporter(BaseExporter):
    """Exporter for editor documents to Markdown text (UTF-8)."""

    @property
    def format(self) -> str:
        return "md"

    @property
    def content_type(self) -> str:
        return "text/markdown"

    def render(self, document: ParsedDocument) -> bytes:
        sections = [f"# {document.title}"] if document.title else []
        for block in document.blocks:
            rendered = self._renderers[block.type](self, block)
            if rendered:
                sections.append(rendered)
        return ("\n\n".join(sections) + "\n").encode("utf-8")

    def _heading(self, block: Heading) -> str:
        return f"{'#' * block.level} {render_runs(block.children).strip()}"

    def _paragraph(self, block: Paragraph) -> str:
        return render_runs(block.children).strip()

    def _unordered_list(self, block: UnorderedList) -> str:
        return "\n".join(f"- {render_runs(item).strip()}" for item in block.items)

    def _ordered_list(self, block: OrderedList) -> str:
        return "\n".join(
            f"{number}. {render_runs(item).strip()}"
            for number, item in enumerate(block.items, start=1)
        )

    def _blockquote(self, block: Blockquote) -> str:
        lines = render_runs(block.children).strip().split("\n")
        return "\n".join(f"> {line}".rstrip() for line in lines)

    def _code_block(self, block: CodeBlock) -> str:
        return f"```\n{block.text.rstrip()}\n```"

    def _horizontal_rule(self, block: HorizontalRule) -> str:
        return "---"

    def _table(self, block: Table) -> str:
        col_count = block.column_count
        if not block.rows or col_count == 0:
            return ""
        rows = [
            [_cell(cell) for cell in row] + [""] * (col_count - len(row))
            for row in block.rows
        ]
        lines = [
            "| " + " | ".join(rows[0]) + " |",
            "| " + " | ".join(["---"] * col_count) + " |",
        ]
        lines.extend("| " + " | ".join(row) + " |" for row in rows[1:])
        return "\n".join(lines)

    def _image(self, block: Image) -> str:
        return f"![{block.alt}]({block.src})"

    _renderers: Dict[str, Callable[["MarkdownExporter", Block], str]] = {
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
