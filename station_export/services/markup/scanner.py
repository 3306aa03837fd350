"""Low-level tag scanning over editor HTML.

The editor emits well-formed HTML, but nothing here relies on that: an
unterminated element simply runs to the end of the input.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass
class TagInfo:
    """An opening tag found at a scan position."""
    name: str
    end: int  # offset just past the closing '>'
    attrs: List[Tuple[str, str]] = field(default_factory=list)

    def attr(self, name: str, default: str = "") -> str:
        for key, value in self.attrs:
            if key == name:
                return value
        return default


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def read_opening_tag(text: str, start: int) -> Optional[TagInfo]:
    """Parse the opening tag at ``start``.

    Returns None when ``start`` is not on ``<``, when the tag is a closing
    tag, or when the tag name is empty.
    """
    length = len(text)
    if start >= length or text[start] != "<":
        return None

    pos = _skip_whitespace(text, start + 1)
    if pos < length and text[pos] == "/":
        return None

    name_start = pos
    while pos < length and not text[pos].isspace() and text[pos] not in ">/":
        pos += 1
    name = text[name_start:pos]
    if not name:
        return None

    attrs: List[Tuple[str, str]] = []
    while True:
        pos = _skip_whitespace(text, pos)
        if pos >= length:
            break
        if text[pos] == ">":
            pos += 1
            break
        if text[pos] == "/":
            pos += 1
            if pos < length and text[pos] == ">":
                pos += 1
            break

        attr_start = pos
        while pos < length and not text[pos].isspace() and text[pos] not in "=>/":
            pos += 1
        attr_name = text[attr_start:pos].lower()

        pos = _skip_whitespace(text, pos)
        if pos < length and text[pos] == "=":
            pos = _skip_whitespace(text, pos + 1)
            if pos < length and text[pos] in "\"'":
                quote = text[pos]
                pos += 1
                value_start = pos
                while pos < length and text[pos] != quote:
                    pos += 1
                value = text[value_start:pos]
                if pos < length:
                    pos += 1
            else:
                value_start = pos
                while pos < length and not text[pos].isspace() and text[pos] not in ">/":
                    pos += 1
                value = text[value_start:pos]
            attrs.append((attr_name, value))
        elif attr_name:
            attrs.append((attr_name, ""))

    return TagInfo(name=name.lower(), end=pos, attrs=attrs)


def read_until_closing(text: str, start: int, tag: str) -> Tuple[str, int]:
    """Return ``(inner, end)`` for the element whose content starts at ``start``.

    Nested elements with the same name are balanced with a depth counter.
    Without a closing tag the rest of the input is the content.
    """
    close_tag = f"</{tag}>"
    open_pattern = f"<{tag}"
    length = len(text)
    depth = 1
    pos = start

    while pos < length:
        if text[pos] == "<":
            window = text[pos:pos + len(close_tag) + 5].lower()
            if window.startswith(close_tag):
                depth -= 1
                if depth == 0:
                    return text[start:pos], pos + len(close_tag)
            if window.startswith(open_pattern):
                # <pre> must not count <pre-something>
                following = pos + len(open_pattern)
                if following < length and (text[following].isspace() or text[following] in ">/"):
                    depth += 1
        pos += 1

    return text[start:], length


def _find_opening(lowered: str, open_pattern: str, start: int = 0) -> int:
    """Find ``<tag`` as a whole tag name, so ``<p`` never matches ``<pre``."""
    idx = lowered.find(open_pattern, start)
    while idx != -1:
        following = idx + len(open_pattern)
        if following >= len(lowered) or lowered[following].isspace() or lowered[following] in ">/":
            return idx
        idx = lowered.find(open_pattern, idx + 1)
    return -1


def strip_tags(html: str, tag: str) -> str:
    """Remove every opening and closing ``tag`` from ``html``, keeping content."""
    open_pattern = f"<{tag}"
    close_tag = f"</{tag}>"
    result = html

    idx = result.lower().find(close_tag)
    while idx != -1:
        result = result[:idx] + result[idx + len(close_tag):]
        idx = result.lower().find(close_tag, idx)

    idx = _find_opening(result.lower(), open_pattern)
    while idx != -1:
        end = result.find(">", idx)
        if end == -1:
            break
        result = result[:idx] + result[end + 1:]
        idx = _find_opening(result.lower(), open_pattern, idx)

    return result
