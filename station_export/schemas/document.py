"""Intermediate document model shared by the markup parser and every exporter.

Blocks are structural nodes (heading, list, table...), inline runs are styled
text spans inside a block. The tree is built once per export and never
mutated afterwards.
"""
from __future__ import annotations
from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class InlineRun(BaseModel):
    """A span of text with independent style flags."""
    model_config = ConfigDict(frozen=True)

    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False
    code: bool = False


def runs_text(runs: List[InlineRun]) -> str:
    return "".join(run.text for run in runs)


class Heading(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["heading"] = "heading"
    level: int = Field(1, ge=1, le=6)
    children: List[InlineRun] = Field(default_factory=list)


class Paragraph(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["paragraph"] = "paragraph"
    children: List[InlineRun] = Field(default_factory=list)


class UnorderedList(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["unordered_list"] = "unordered_list"
    items: List[List[InlineRun]] = Field(default_factory=list)


class OrderedList(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["ordered_list"] = "ordered_list"
    items: List[List[InlineRun]] = Field(default_factory=list)


class Blockquote(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["blockquote"] = "blockquote"
    children: List[InlineRun] = Field(default_factory=list)


class CodeBlock(BaseModel):
    """Preformatted text; whitespace is kept verbatim."""
    model_config = ConfigDict(frozen=True)

    type: Literal["code_block"] = "code_block"
    text: str = ""


class HorizontalRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["horizontal_rule"] = "horizontal_rule"


class Table(BaseModel):
    """Rows of cells of runs. Rows may have unequal cell counts."""
    model_config = ConfigDict(frozen=True)

    type: Literal["table"] = "table"
    rows: List[List[List[InlineRun]]] = Field(default_factory=list)

    @property
    def column_count(self) -> int:
        return max((len(row) for row in self.rows), default=0)


class Image(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["image"] = "image"
    src: str = ""
    alt: str = ""


Block = Annotated[
    Union[
        Heading,
        Paragraph,
        UnorderedList,
        OrderedList,
        Blockquote,
        CodeBlock,
        HorizontalRule,
        Table,
        Image,
    ],
    Field(discriminator="type"),
]


def block_text(block: Block) -> str:
    """Plain text of a single block, ignoring styling."""
    if isinstance(block, (Heading, Paragraph, Blockquote)):
        return runs_text(block.children)
    if isinstance(block, (UnorderedList, OrderedList)):
        return "\n".join(runs_text(item) for item in block.items)
    if isinstance(block, CodeBlock):
        return block.text
    if isinstance(block, Table):
        return "\n".join(
            " ".join(runs_text(cell) for cell in row) for row in block.rows
        )
    if isinstance(block, Image):
        return block.alt
    return ""


class ParsedDocument(BaseModel):
    """Root of the model handed to exporters."""
    model_config = ConfigDict(frozen=True)

    title: str = ""
    blocks: List[Block] = Field(default_factory=list)

    def plain_text(self) -> str:
        return "\n".join(block_text(block) for block in self.blocks)
