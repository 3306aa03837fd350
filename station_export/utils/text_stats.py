"""Word/character counts for metadata display.

These are computed straight from the HTML and are independent of the export
parser; they are not layout-critical.
"""
import math

from station_export.models import DocumentStats
from station_export.services.markup.entities import decode_entities

WORDS_PER_MINUTE = 238


def strip_html(html: str, tag_replacement: str = " ") -> str:
    """Drop everything between '<' and '>', inserting ``tag_replacement`` per tag."""
    parts = []
    in_tag = False
    for ch in html:
        if ch == "<":
            in_tag = True
            parts.append(tag_replacement)
        elif ch == ">":
            in_tag = False
        elif not in_tag:
            parts.append(ch)
    return "".join(parts)


def count_words(html: str) -> int:
    return len(strip_html(html).split())


def count_characters(html: str) -> int:
    return len(decode_entities(strip_html(html, "")))


def reading_time_minutes(word_count: int) -> int:
    if word_count <= 0:
        return 0
    return max(1, math.ceil(word_count / WORDS_PER_MINUTE))


def document_stats(html: str) -> DocumentStats:
    words = count_words(html)
    return DocumentStats(
        word_count=words,
        character_count=count_characters(html),
        reading_time_minutes=reading_time_minutes(words),
    )
