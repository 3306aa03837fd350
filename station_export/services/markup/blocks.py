"""Editor HTML -> ordered list of blocks.

Parsing is tolerant by construction: unknown or unbalanced markup is skipped
or treated as content, and nothing in here raises on bad input. Wrapper tags
are flattened without recursion, so nesting depth is unbounded.
"""
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
    Table,
    UnorderedList,
    runs_text,
)
from .entities import decode_entities
from .inline import parse_inline
from .scanner import TagInfo, read_opening_tag, read_until_closing, strip_tags

# (html, tag, tag_start, blocks) -> position to resume scanning from
BlockHandler = Callable[[str, TagInfo, int, List[Block]], int]

WRAPPER_TAGS = ("div", "section", "article", "main", "header", "footer")

# Never rendered, even though they may carry text
DROPPED_TAGS = frozenset({"script", "style", "head", "title", "template", "noscript"})


def parse_blocks(html: str) -> List[Block]:
    blocks: List[Block] = []
    html = html.strip()
    length = len(html)
    pos = 0

    while pos < length:
        while pos < length and html[pos].isspace():
            pos += 1
        if pos >= length:
            break

        if html[pos] == "<":
            tag = read_opening_tag(html, pos)
            if tag is None:
                # Stray closing tag: resume after its '>'
                end = html.find(">", pos)
                pos = length if end == -1 else end + 1
                continue
            handler = BLOCK_HANDLERS.get(tag.name, _unknown_block)
            pos = handler(html, tag, pos, blocks)
        else:
            end = html.find("<", pos)
            if end == -1:
                end = length
            text = html[pos:end].strip()
            if text:
                blocks.append(Paragraph(children=[InlineRun(text=decode_entities(text))]))
            pos = end

    return blocks


def _heading(html: str, tag: TagInfo, start: int, blocks: List[Block]) -> int:
    inner, end = read_until_closing(html, tag.end, tag.name)
    blocks.append(Heading(level=int(tag.name[1]), children=parse_inline(inner)))
    return end


def _paragraph(html: str, tag: TagInfo, start: int, blocks: List[Block]) -> int:
    inner, end = read_until_closing(html, tag.end, "p")
    blocks.append(Paragraph(children=parse_inline(inner)))
    return end


def parse_list_items(html: str) -> List[List[InlineRun]]:
    items: List[List[InlineRun]] = []
    pos = 0
    while pos < len(html):
        if html[pos] == "<":
            tag = read_opening_tag(html, pos)
            if tag is not None and tag.name == "li":
                inner, pos = read_until_closing(html, tag.end, "li")
                items.append(parse_inline(strip_tags(inner, "p")))
                continue
        pos += 1
    return items


def _unordered_list(html: str, tag: TagInfo, start: int, blocks: List[Block]) -> int:
    inner, end = read_until_closing(html, tag.end, "ul")
    blocks.append(UnorderedList(items=parse_list_items(inner)))
    return end


def _ordered_list(html: str, tag: TagInfo, start: int, blocks: List[Block]) -> int:
    inner, end = read_until_closing(html, tag.end, "ol")
    blocks.append(OrderedList(items=parse_list_items(inner)))
    return end


def _blockquote(html: str, tag: TagInfo, start: int, blocks: List[Block]) -> int:
    inner, end = read_until_closing(html, tag.end, "blockquote")
    blocks.append(Blockquote(children=parse_inline(strip_tags(inner, "p"))))
    return end


def _code_block(html: str, tag: TagInfo, start: int, blocks: List[Block]) -> int:
    inner, end = read_until_closing(html, tag.end, "pre")
    blocks.append(CodeBlock(text=decode_entities(strip_tags(inner, "code"))))
    return end


def _horizontal_rule(html: str, tag: TagInfo, start: int, blocks: List[Block]) -> int:
    blocks.append(HorizontalRule())
    return tag.end


def parse_table_row(html: str) -> List[List[InlineRun]]:
    cells: List[List[InlineRun]] = []
    pos = 0
    while pos < len(html):
        if html[pos] == "<":
            tag = read_opening_tag(html, pos)
            if tag is not None and tag.name in ("td", "th"):
                inner, pos = read_until_closing(html, tag.end, tag.name)
                cells.append(parse_inline(strip_tags(inner, "p")))
                continue
        pos += 1
    return cells


def parse_table(html: str) -> Table:
    for section in ("thead", "tbody", "tfoot"):
        html = strip_tags(html, section)

    rows: List[List[List[InlineRun]]] = []
    pos = 0
    while pos < len(html):
        if html[pos] == "<":
            tag = read_opening_tag(html, pos)
            if tag is not None and tag.name == "tr":
                inner, pos = read_until_closing(html, tag.end, "tr")
                rows.append(parse_table_row(inner))
                continue
        pos += 1
    return Table(rows=rows)


def _table(html: str, tag: TagInfo, start: int, blocks: List[Block]) -> int:
    inner, end = read_until_closing(html, tag.end, "table")
    blocks.append(parse_table(inner))
    return end


def _image(html: str, tag: TagInfo, start: int, blocks: List[Block]) -> int:
    blocks.append(Image(src=tag.attr("src"), alt=tag.attr("alt")))
    return tag.end


def _wrapper(html: str, tag: TagInfo, start: int, blocks: List[Block]) -> int:
    # Children are parsed in place; the closing tag is skipped as a stray one
    return tag.end


def _line_break(html: str, tag: TagInfo, start: int, blocks: List[Block]) -> int:
    return tag.end


def _contains_block_tag(html: str) -> bool:
    pos = html.find("<")
    while pos != -1:
        tag = read_opening_tag(html, pos)
        if tag is not None and tag.name in BLOCK_HANDLERS and tag.name != "br":
            return True
        pos = html.find("<", pos + 1)
    return False


def _unknown_block(html: str, tag: TagInfo, start: int, blocks: List[Block]) -> int:
    """Skip past an unrecognized element while keeping its text.

    Elements holding block markup are transparent like wrappers; anything else
    becomes a paragraph parsed as inline markup (so ``<s>`` or a stray
    ``<strong>`` keep their text and styling).
    """
    inner, end = read_until_closing(html, tag.end, tag.name)
    if tag.name in DROPPED_TAGS:
        return end
    if _contains_block_tag(inner):
        return tag.end
    runs = parse_inline(html[start:end])
    if runs_text(runs).strip():
        blocks.append(Paragraph(children=runs))
    return end


BLOCK_HANDLERS: Dict[str, BlockHandler] = {
    **{f"h{level}": _heading for level in range(1, 7)},
    "p": _paragraph,
    "ul": _unordered_list,
    "ol": _ordered_list,
    "blockquote": _blockquote,
    "pre": _code_block,
    "hr": _horizontal_rule,
    "table": _table,
    "img": _image,
    **{name: _wrapper for name in WRAPPER_TAGS},
    "br": _line_break,
}
