"""Data models for asciidoc-reflow."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class LineKind(Enum):
    """Labels assigned to input lines by the classifier.

    Members are listed in matching priority order.

    Attributes:
        COMMON_VALID_USAGE: Comment delimiting a block of common Valid Usage
            statements.
        BLOCK_REFLOW: Delimiter of a block whose paragraphs are reflowed.
        PARAGRAPH_END: Markup that ends a paragraph and is emitted unchanged.
        PARAGRAPH_END_CONTINUE: Title-like markup that ends a paragraph and is
            emitted unchanged.
        BLOCK_PASSTHROUGH: Delimiter of a block whose contents are left alone.
        ORDINARY: Paragraph text.
    """

    COMMON_VALID_USAGE = auto()
    BLOCK_REFLOW = auto()
    PARAGRAPH_END = auto()
    PARAGRAPH_END_CONTINUE = auto()
    BLOCK_PASSTHROUGH = auto()
    ORDINARY = auto()


class DiagnosticKind(Enum):
    """Non-fatal problems reported while reflowing a document."""

    STRUCTURAL_MISMATCH = auto()
    AMBIGUOUS_ENTITY_PROMOTION = auto()
    MISSING_TAG_PARAMETER = auto()
    INVALID_NESTED_LIST_ITEM = auto()


@dataclass(frozen=True)
class Diagnostic:
    """A problem found in the input that did not stop processing.

    Attributes:
        kind: Category of the problem.
        line_number: One-based input line the problem was detected on.
        message: Human readable description.
    """

    kind: DiagnosticKind
    line_number: int
    message: str

    def __str__(self) -> str:
        return f"line {self.line_number}: {self.message}"


@dataclass(frozen=True)
class BlockFrame:
    """One level of block nesting.

    Attributes:
        delimiter: Delimiter text that opened the block, without its line
            terminator, or None for the document level.
        reflow: Whether paragraphs inside the block are reflowed.
        is_valid_usage: Whether the block is an explicit Valid Usage list.
    """

    delimiter: str | None = None
    reflow: bool = True
    is_valid_usage: bool = False


@dataclass
class Paragraph:
    """Lines of one logical paragraph and its indentation.

    Attributes:
        lines: Raw lines, including line terminators.
        lead_indent: Indentation of the first line.
        hang_indent: Indentation of the following lines.
    """

    lines: list[str] = field(default_factory=list)
    lead_indent: int = 0
    hang_indent: int = 0


@dataclass
class ReflowResult:
    """Outcome of reflowing a whole document.

    Attributes:
        text: Reflowed document text.
        diagnostics: Problems reported while processing, in input order.
        next_vu: Next free Valid Usage tag number, or None when tagging was
            disabled.
    """

    text: str
    diagnostics: list[Diagnostic]
    next_vu: int | None
