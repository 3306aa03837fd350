"""PDF exporter built on PyMuPDF (fitz) with the base-14 fonts.

Layout is done by hand: text width is estimated from an average character
width, lines are wrapped greedily, and a new page starts whenever the next
line would cross the bottom margin. Everything is measured in millimetres
from the top-left corner of the page and converted to points on output.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

import fitz  # PyMuPDF

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
    runs_text,
)
from station_export.utils.logging import logger
from station_export.utils.metrics import EXPORT_PAGES_TOTAL
from .base_exporter import BaseExporter
from .errors import ExportBuildError


@dataclass(frozen=True)
class PageGeometry:
    """Fixed page and font-metric constants (read-only, safe to share)."""
    width_mm: float = 210.0
    height_mm: float = 297.0
    margin_left: float = 25.0
    margin_right: float = 25.0
    margin_top: float = 25.0
    margin_bottom: float = 25.0
    pt_per_mm: float = 2.8346
    mono_char_ratio: float = 0.60
    proportional_char_ratio: float = 0.52
    line_spacing: float = 1.4

    @property
    def usable_width(self) -> float:
        return self.width_mm - self.margin_left - self.margin_right

    @property
    def content_bottom(self) -> float:
        """Lowest y (mm from top) a line may reach."""
        return self.height_mm - self.margin_bottom

    def to_pt(self, mm: float) -> float:
        return mm * self.pt_per_mm

    def line_height(self, font_size_pt: float, spacing: Optional[float] = None) -> float:
        return font_size_pt / self.pt_per_mm * (spacing or self.line_spacing)


A4 = PageGeometry()

# Base-14 font names understood by fitz.Font
FONT_REGULAR = "helv"
FONT_BOLD = "hebo"
FONT_ITALIC = "heit"
FONT_BOLD_ITALIC = "hebi"
FONT_MONO = "cour"
FONT_NAMES = (FONT_REGULAR, FONT_BOLD, FONT_ITALIC, FONT_BOLD_ITALIC, FONT_MONO)

TITLE_SIZE = 20.0
TITLE_SPACING = 1.5
HEADING_SIZES = {1: 18.0, 2: 15.0, 3: 13.0}
DEFAULT_HEADING_SIZE = 12.0
BODY_SIZE = 11.0
TABLE_SIZE = 10.0
CAPTION_SIZE = 10.0
CODE_SIZE = 9.0

LIST_INDENT = 8.0
QUOTE_INDENT = 10.0
CODE_INDENT = 6.0

RULE_GRAY = 0.75
TITLE_RULE_GRAY = 0.7
QUOTE_BAR_GRAY = 0.6


def text_width_mm(text: str, font_size_pt: float, is_mono: bool, geometry: PageGeometry = A4) -> float:
    """Approximate rendered width of ``text``.

    Uses an average character width instead of real glyph metrics; the
    base-14 fonts are the only ones available.
    """
    ratio = geometry.mono_char_ratio if is_mono else geometry.proportional_char_ratio
    return len(text) * font_size_pt * ratio / geometry.pt_per_mm


def wrap_text(
    text: str,
    font_size_pt: float,
    max_width_mm: float,
    is_mono: bool,
    geometry: PageGeometry = A4,
) -> List[str]:
    """Greedy word wrap. Hard newlines always break; long words are never split."""
    lines: List[str] = []

    for hard_line in text.split("\n"):
        words = hard_line.split()
        if not words:
            lines.append("")
            continue

        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if current and text_width_mm(candidate, font_size_pt, is_mono, geometry) > max_width_mm:
                lines.append(current)
                current = word
            else:
                current = candidate
        if current:
            lines.append(current)

    return lines or [""]


def select_font(bold: bool, italic: bool, code: bool) -> str:
    if code:
        return FONT_MONO
    if bold and italic:
        return FONT_BOLD_ITALIC
    if bold:
        return FONT_BOLD
    if italic:
        return FONT_ITALIC
    return FONT_REGULAR


def dominant_style(runs: List[InlineRun]) -> Tuple[bool, bool, bool]:
    """(bold, italic, code) of the first non-empty run.

    A wrapped block is drawn in a single style, so mixed formatting inside
    one paragraph collapses to whatever the paragraph starts with.
    """
    for run in runs:
        if run.text:
            return run.bold, run.italic, run.code
    return False, False, False


class PageWriter:
    """Page cursor, fonts and output document for a single render call."""

    def __init__(self, title: str, geometry: PageGeometry = A4):
        self.geometry = geometry
        self.doc = fitz.open()
        self.doc.set_metadata({"title": title, "producer": "station-export"})
        # fitz.Font maps unicode to glyphs (bullets, dashes, curly quotes)
        self.fonts = {name: fitz.Font(name) for name in FONT_NAMES}
        self.page = None
        self.page_count = 0
        self.cursor = geometry.margin_top
        self.new_page()

    def new_page(self):
        g = self.geometry
        self.page = self.doc.new_page(width=g.to_pt(g.width_mm), height=g.to_pt(g.height_mm))
        self.page_count += 1
        self.cursor = g.margin_top

    def ensure_space(self, needed_mm: float):
        if self.cursor + needed_mm > self.geometry.content_bottom:
            self.new_page()

    def write_spacer(self, mm: float):
        self.cursor += mm
        if self.cursor > self.geometry.content_bottom:
            self.new_page()

    def write_line(self, text: str, font_size_pt: float, fontname: str, x_offset_mm: float = 0.0):
        """Draw one line with its baseline at the cursor. Does not move the cursor."""
        if not text:
            return
        g = self.geometry
        point = fitz.Point(g.to_pt(g.margin_left + x_offset_mm), g.to_pt(self.cursor))
        writer = fitz.TextWriter(self.page.rect)
        writer.append(point, text, font=self.fonts[fontname], fontsize=font_size_pt)
        writer.write_text(self.page)

    def draw_line(self, x0: float, y0: float, x1: float, y1: float, gray: float, thickness_pt: float):
        g = self.geometry
        self.page.draw_line(
            fitz.Point(g.to_pt(x0), g.to_pt(y0)),
            fitz.Point(g.to_pt(x1), g.to_pt(y1)),
            color=(gray, gray, gray),
            width=thickness_pt,
        )

    def draw_rule(self, gray: float, thickness_pt: float = 0.5):
        """Full-width horizontal line at the cursor."""
        g = self.geometry
        self.draw_line(g.margin_left, self.cursor, g.width_mm - g.margin_right, self.cursor, gray, thickness_pt)

    def write_inline_block(
        self,
        runs: List[InlineRun],
        font_size_pt: float,
        indent_mm: float = 0.0,
        prefix: Optional[str] = None,
    ):
        """Wrap and draw a block of runs, paginating line by line."""
        line_height = self.geometry.line_height(font_size_pt)
        max_width = self.geometry.usable_width - indent_mm

        full_text = (prefix or "") + runs_text(runs)
        is_mono = any(run.code for run in runs)
        lines = wrap_text(full_text, font_size_pt, max_width, is_mono, self.geometry)
        fontname = select_font(*dominant_style(runs))

        for line in lines:
            self.ensure_space(line_height)
            self.write_line(line, font_size_pt, fontname, indent_mm)
            self.cursor += line_height

    def write_title(self, title: str):
        line_height = self.geometry.line_height(TITLE_SIZE, TITLE_SPACING)
        for line in wrap_text(title, TITLE_SIZE, self.geometry.usable_width, False, self.geometry):
            self.ensure_space(line_height)
            self.write_line(line, TITLE_SIZE, FONT_BOLD)
            self.cursor += line_height
        self.write_spacer(6.0)
        self.draw_rule(TITLE_RULE_GRAY)
        self.write_spacer(6.0)

    def finish(self) -> bytes:
        try:
            # no_new_id keeps the trailer /ID stable across identical renders
            return self.doc.tobytes(garbage=3, deflate=True, no_new_id=True)
        except Exception as e:
            raise ExportBuildError(f"Failed to save PDF: {e}") from e
        finally:
            self.close()

    def close(self):
        if not self.doc.is_closed:
            self.doc.close()


class PdfExporter(BaseExporter):
    """
    Exporter for editor documents to PDF.

    Input: ParsedDocument (title + blocks)
    Output: bytes (one or more A4 pages)
    """

    @property
    def format(self) -> str:
        return "pdf"

    @property
    def content_type(self) -> str:
        return "application/pdf"

    def render(self, document: ParsedDocument) -> bytes:
        writer = PageWriter(document.title)
        try:
            writer.write_title(document.title)
            for block in document.blocks:
                self._renderers[block.type](self, writer, block)
            page_count = writer.page_count
            content = writer.finish()
        finally:
            writer.close()
        EXPORT_PAGES_TOTAL.inc(page_count)
        logger.debug("PDF rendered", extra={"export_format": "pdf", "pages": page_count, "blocks": len(document.blocks)})
        return content

    # ---------- block renderers ----------

    def _heading(self, w: PageWriter, block: Heading):
        size = HEADING_SIZES.get(block.level, DEFAULT_HEADING_SIZE)
        w.write_spacer(3.0)
        w.write_inline_block([run.model_copy(update={"bold": True}) for run in block.children], size)
        w.write_spacer(2.0)

    def _paragraph(self, w: PageWriter, block: Paragraph):
        w.write_inline_block(block.children, BODY_SIZE)
        w.write_spacer(3.0)

    def _unordered_list(self, w: PageWriter, block: UnorderedList):
        for item in block.items:
            w.write_inline_block(item, BODY_SIZE, LIST_INDENT, "•  ")
            w.write_spacer(1.5)
        w.write_spacer(2.0)

    def _ordered_list(self, w: PageWriter, block: OrderedList):
        for number, item in enumerate(block.items, start=1):
            w.write_inline_block(item, BODY_SIZE, LIST_INDENT, f"{number}. ")
            w.write_spacer(1.5)
        w.write_spacer(2.0)

    def _blockquote(self, w: PageWriter, block: Blockquote):
        g = w.geometry
        # Bar length is estimated from the run count, not the wrapped line count
        estimated_lines = max(len(block.children), 1)
        bar_x = g.margin_left + 3.0
        bar_top = w.cursor - 2.0
        bar_bottom = w.cursor + estimated_lines * g.line_height(BODY_SIZE) + 2.0
        w.draw_line(bar_x, bar_top, bar_x, min(bar_bottom, g.content_bottom), QUOTE_BAR_GRAY, 1.5)

        w.write_inline_block([run.model_copy(update={"italic": True}) for run in block.children], BODY_SIZE, QUOTE_INDENT)
        w.write_spacer(3.0)

    def _code_block(self, w: PageWriter, block: CodeBlock):
        w.write_spacer(2.0)
        for line in block.text.splitlines():
            w.write_inline_block([InlineRun(text=line, code=True)], CODE_SIZE, CODE_INDENT)
        w.write_spacer(3.0)

    def _horizontal_rule(self, w: PageWriter, block: HorizontalRule):
        w.write_spacer(3.0)
        w.draw_rule(RULE_GRAY)
        w.write_spacer(3.0)

    def _table(self, w: PageWriter, block: Table):
        w.write_spacer(2.0)
        for row in block.rows:
            row_text = "  |  ".join(runs_text(cell) for cell in row)
            w.write_inline_block([InlineRun(text=row_text)], TABLE_SIZE)
            w.write_spacer(1.0)
        w.write_spacer(2.0)

    def _image(self, w: PageWriter, block: Image):
        caption = f"[Image: {block.alt}]" if block.alt else "[Image]"
        w.write_inline_block([InlineRun(text=caption, italic=True)], CAPTION_SIZE)
        w.write_spacer(3.0)

    _renderers: Dict[str, Callable[["PdfExporter", PageWriter, Block], None]] = {
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
