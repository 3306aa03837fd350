"""Word (DOCX) exporter.

Maps the document model onto python-docx paragraphs, runs and tables. Only
saving the package can fail; bad image payloads are skipped.
"""

import base64
import binascii
import re
from io import BytesIO
from typing import Callable, Dict, List

from docx import Document
from docx.document import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Emu, Inches, Pt

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
from station_export.utils.logging import logger
from .base_exporter import BaseExporter
from .errors import ExportBuildError

MONOSPACE_FONT = "Courier New"
TITLE_SIZE = Pt(24)
HEADING_SIZES = {1: Pt(36), 2: Pt(30), 3: Pt(26)}
DEFAULT_HEADING_SIZE = Pt(24)
LIST_INDENT = Inches(0.5)   # 720 twips
CODE_INDENT = Inches(0.25)  # 360 twips
DIVIDER = "_" * 40

# Embedded pictures are a fixed 400x300 px box
EMU_PER_PIXEL = 9525
IMAGE_WIDTH = Emu(400 * EMU_PER_PIXEL)
IMAGE_HEIGHT = Emu(300 * EMU_PER_PIXEL)
EMBEDDABLE_IMAGE_PREFIXES = ("data:image/png;base64,", "data:image/jpeg;base64,")

# Characters XML 1.0 forbids; form feed and vertical tab are legal HTML whitespace
XML_ILLEGAL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def xml_text(text: str) -> str:
    return XML_ILLEGAL_CHARS.sub(" ", text)


def add_runs(paragraph, runs: List[InlineRun]):
    """Add inline runs to a paragraph, one Word run per styled span."""
    for node in runs:
        run = paragraph.add_run(xml_text(node.text))
        if node.bold:
            run.bold = True
        if node.italic:
            run.italic = True
        if node.underline:
            run.underline = True
        if node.code:
            run.font.name = MONOSPACE_FONT


def decode_data_uri(src: str):
    """Return raw bytes for a base64 PNG/JPEG data URI, or None."""
    if not src.startswith(EMBEDDABLE_IMAGE_PREFIXES):
        return None
    payload = src.split(",", 1)[1]
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        logger.warning("Skipping image with malformed base64 payload", extra={"export_format": "docx"})
        return None


class DocxExporter(BaseExporter):
    """
    Exporter for editor documents to Word.

    Input: ParsedDocument (title + blocks)
    Output: bytes (zipped .docx package)
    """

    @property
    def format(self) -> str:
        return "docx"

    @property
    def content_type(self) -> str:
        return "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

    def render(self, document: ParsedDocument) -> bytes:
        doc = Document()
        self.add_title(doc, document.title)

        for block in document.blocks:
            self._renderers[block.type](self, doc, block)

        return self.save_to_bytes(doc)

    def save_to_bytes(self, doc: DocxDocument) -> bytes:
        """Save document to bytes."""
        buffer = BytesIO()
        try:
            doc.save(buffer)
        except Exception as e:
            raise ExportBuildError(f"Failed to build DOCX: {e}") from e
        return buffer.getvalue()

    def add_title(self, doc: DocxDocument, text: str):
        """Centered bold title followed by an empty spacer paragraph."""
        para = doc.add_paragraph()
        para.alignment = WD_ALIGN_PARAGRAPH.CENTER
        run = para.add_run(xml_text(text))
        run.bold = True
        run.font.size = TITLE_SIZE
        doc.add_paragraph()
        return para

    def add_divider(self, doc: DocxDocument):
        """Add a horizontal divider."""
        return doc.add_paragraph(DIVIDER)

    # ---------- block renderers ----------

    def _heading(self, doc: DocxDocument, block: Heading):
        para = doc.add_heading(level=block.level)
        size = HEADING_SIZES.get(block.level, DEFAULT_HEADING_SIZE)
        for child in block.children:
            run = para.add_run(xml_text(child.text))
            run.bold = True
            run.font.size = size
            if child.italic:
                run.italic = True
            if child.underline:
                run.underline = True

    def _paragraph(self, doc: DocxDocument, block: Paragraph):
        add_runs(doc.add_paragraph(), block.children)

    def _unordered_list(self, doc: DocxDocument, block: UnorderedList):
        for item in block.items:
            para = doc.add_paragraph()
            para.add_run("•  ")
            add_runs(para, item)
            para.paragraph_format.left_indent = LIST_INDENT

    def _ordered_list(self, doc: DocxDocument, block: OrderedList):
        for number, item in enumerate(block.items, start=1):
            para = doc.add_paragraph()
            para.add_run(f"{number}. ")
            add_runs(para, item)
            para.paragraph_format.left_indent = LIST_INDENT

    def _blockquote(self, doc: DocxDocument, block: Blockquote):
        para = doc.add_paragraph()
        para.paragraph_format.left_indent = LIST_INDENT
        for child in block.children:
            run = para.add_run(xml_text(child.text))
            run.italic = True
            if child.bold:
                run.bold = True

    def _code_block(self, doc: DocxDocument, block: CodeBlock):
        for line in block.text.splitlines():
            para = doc.add_paragraph()
            run = para.add_run(xml_text(line))
            run.font.name = MONOSPACE_FONT
            para.paragraph_format.left_indent = CODE_INDENT

    def _horizontal_rule(self, doc: DocxDocument, block: HorizontalRule):
        self.add_divider(doc)

    def _table(self, doc: DocxDocument, block: Table):
        col_count = block.column_count
        if not block.rows or col_count == 0:
            return

        # Short rows keep the trailing cells python-docx creates empty
        table = doc.add_table(rows=len(block.rows), cols=col_count)
        table.style = 'Table Grid'
        for row_idx, row_cells in enumerate(block.rows):
            for col_idx, cell_runs in enumerate(row_cells):
                add_runs(table.cell(row_idx, col_idx).paragraphs[0], cell_runs)

    def _image(self, doc: DocxDocument, block: Image):
        caption = doc.add_paragraph()
        caption.alignment = WD_ALIGN_PARAGRAPH.CENTER
        caption.add_run(xml_text(block.alt) or "[Image]").italic = True

        image_bytes = decode_data_uri(block.src)
        if image_bytes is None:
            return

        para = doc.add_paragraph()
        para.alignment = WD_ALIGN_PARAGRAPH.CENTER
        try:
            para.add_run().add_picture(BytesIO(image_bytes), width=IMAGE_WIDTH, height=IMAGE_HEIGHT)
        except Exception as e:
            logger.warning("Skipping image that could not be embedded", extra={"export_format": "docx", "error": str(e)})
            element = para._element
            element.getparent().remove(element)

    _renderers: Dict[str, Callable[["DocxExporter", DocxDocument, Block], None]] = {
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
