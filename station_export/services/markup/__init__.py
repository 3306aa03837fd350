"""Tolerant parser for block-editor HTML.

Architecture:
- scanner: opening-tag and matching-close scanning
- inline: styled runs inside a block
- blocks: top-level block sequence
"""

from station_export.schemas.document import ParsedDocument
from .blocks import parse_blocks
from .entities import decode_entities
from .inline import InlineStyle, parse_inline
from .scanner import TagInfo, read_opening_tag, read_until_closing, strip_tags


def parse_document(title: str, html: str) -> ParsedDocument:
    """Build the document model for one export call."""
    return ParsedDocument(title=title, blocks=parse_blocks(html))


__all__ = [
    'parse_document',
    'parse_blocks',
    'parse_inline',
    'InlineStyle',
    'decode_entities',
    'TagInfo',
    'read_opening_tag',
    'read_until_closing',
    'strip_tags',
]
