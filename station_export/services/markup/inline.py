"""Inline markup -> styled runs.

Style flags are threaded down through nested tags, so ``<strong><em>x</em></strong>``
yields a single run that is both bold and italic.
"""
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Tuple

from station_export.schemas.document import InlineRun
from .entities import decode_entities
from .scanner import read_opening_tag


@dataclass(frozen=True)
class InlineStyle:
    bold: bool = False
    italic: bool = False
    underline: bool = False
    code: bool = False

    def run(self, text: str) -> InlineRun:
        return InlineRun(
            text=text,
            bold=self.bold,
            italic=self.italic,
            underline=self.underline,
            code=self.code,
        )


def _bold(style: InlineStyle) -> InlineStyle:
    return replace(style, bold=True)


def _italic(style: InlineStyle) -> InlineStyle:
    return replace(style, italic=True)


def _underline(style: InlineStyle) -> InlineStyle:
    return replace(style, underline=True)


def _code(style: InlineStyle) -> InlineStyle:
    return replace(style, code=True)


# Links have no entity of their own; they render as underlined text.
# span and unknown tags are absent here and keep the style they inherit.
STYLE_TAGS: Dict[str, Callable[[InlineStyle], InlineStyle]] = {
    "strong": _bold,
    "b": _bold,
    "em": _italic,
    "i": _italic,
    "u": _underline,
    "a": _underline,
    "code": _code,
}


# Never have content or a closing tag
VOID_TAGS = frozenset({"img", "wbr", "hr", "input", "source"})


def _closing_name(html: str, start: int, end: int) -> str:
    """Tag name of the closing tag spanning html[start:end], or "" for anything else."""
    body = html[start + 1:end].strip()
    if not body.startswith("/"):
        return ""
    parts = body[1:].split()
    return parts[0].lower() if parts else ""


def parse_inline(html: str, style: InlineStyle = InlineStyle()) -> List[InlineRun]:
    runs: List[InlineRun] = []
    # (tag name, style in effect inside it); the base entry is never popped
    open_tags: List[Tuple[str, InlineStyle]] = [("", style)]
    length = len(html)
    pos = 0

    while pos < length:
        current = open_tags[-1][1]
        if html[pos] == "<":
            tag = read_opening_tag(html, pos)
            if tag is None:
                # Closing tag (or a bare '<'): close the matching element, if any
                end = html.find(">", pos)
                if end == -1:
                    end = length
                name = _closing_name(html, pos, end)
                for depth in range(len(open_tags) - 1, 0, -1):
                    if open_tags[depth][0] == name:
                        del open_tags[depth:]
                        break
                pos = end + 1
                continue

            if tag.name == "br":
                runs.append(current.run("\n"))
            elif tag.name not in VOID_TAGS and not html.startswith("/>", tag.end - 2):
                apply = STYLE_TAGS.get(tag.name)
                open_tags.append((tag.name, apply(current) if apply else current))
            pos = tag.end
        else:
            end = html.find("<", pos)
            if end == -1:
                end = length
            text = html[pos:end]
            if text:
                runs.append(current.run(decode_entities(text)))
            pos = end

    return runs
