"""Line-by-line reflow state machine."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .blocks import BlockStack
from .classifier import (
    api_names_match,
    classify_line,
    extract_api_include,
    opens_valid_usage,
    strip_terminator,
)
from .config import ReflowConfig
from .constants import COMMON_VU_API_NAME, DOCUMENT_TITLE_PREFIX, OPEN_BLOCK_DELIMITER
from .models import Diagnostic, DiagnosticKind, LineKind, Paragraph
from .paragraph import ParagraphAccumulator
from .tagging import tag_valid_usage
from .wrap import wrap_paragraph

logger = logging.getLogger(__name__)


class ReflowState:
    """Reflows one document, fed a line at a time.

    The state is entirely owned by one instance; use a new instance for each
    document.

    Examples:
        state = ReflowState(ReflowConfig(margin=72))
        for line in lines:
            state.process_line(line)
        state.end_input()
        text = state.emitted_text
    """

    def __init__(self, config: ReflowConfig | None = None):
        self.config = config or ReflowConfig()

        self._blocks = BlockStack()
        self._paragraph = ParagraphAccumulator()
        self._emitted: list[str] = []
        self._diagnostics: list[Diagnostic] = []

        # Incremented before each line is processed.
        self.line_number = self.config.initial_line_number - 1
        self.next_vu = self.config.next_vu

        # API entity that generated Valid Usage tags are scoped to.
        self.api_name = ""

        self._last_line: str | None = None
        self._last_title = False
        self._input_ended = False

    @property
    def emitted_lines(self) -> list[str]:
        return list(self._emitted)

    @property
    def emitted_text(self) -> str:
        return "".join(self._emitted)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return list(self._diagnostics)

    def is_between_paragraphs(self) -> bool:
        """Tell whether no paragraph and no block is open.

        Streaming callers may checkpoint or truncate the output at this point.
        """
        return not self._paragraph.is_open() and self._blocks.at_base()

    def process_line(self, line: str) -> None:
        """Process a single line of input, including its line terminator."""
        self.line_number += 1
        this_title = False
        frame = self._blocks.top

        if not frame.reflow:
            # Inside a passthrough block only its own delimiter is markup.
            if strip_terminator(line) == frame.delimiter:
                self._toggle_block(line, reflow=False)
            else:
                self._emit([line])
            self._remember(line, this_title)
            return

        kind = classify_line(line)

        if kind is LineKind.COMMON_VALID_USAGE:
            # Common statements are scoped to the reference page, not to the
            # most recent API include.
            self.api_name = COMMON_VU_API_NAME
            self._toggle_block(line, reflow=True, is_valid_usage=True)
        elif kind is LineKind.BLOCK_REFLOW:
            is_valid_usage = self.line_number > 1 and opens_valid_usage(self._last_line)
            self._toggle_block(line, reflow=True, is_valid_usage=is_valid_usage)
        elif kind is LineKind.PARAGRAPH_END:
            self._end_paragraph(line)
            self._track_api_include(line)
        elif kind is LineKind.PARAGRAPH_END_CONTINUE:
            self._end_paragraph(line)
            this_title = line.startswith(DOCUMENT_TITLE_PREFIX)
        elif kind is LineKind.BLOCK_PASSTHROUGH:
            self._toggle_block(line, reflow=False)
        elif self._last_title:
            # Author / credits line following the document title.
            self._end_paragraph(line)
        else:
            closed = self._paragraph.add_line(line)
            if closed is not None:
                self._emit_paragraph(closed)

        self._remember(line, this_title)

    def process_lines(self, lines: Iterable[str]) -> None:
        """Process every line of a document, then finish the input."""
        for line in lines:
            self.process_line(line)
        self.end_input()

    def end_input(self) -> None:
        """Flush the open paragraph and check block nesting.

        Calling it again has no further effect.
        """
        if self._input_ended:
            return
        self._input_ended = True

        self._end_paragraph(None)

        if not self._blocks.at_base():
            self._report(
                DiagnosticKind.STRUCTURAL_MISMATCH,
                "mismatched asciidoc block delimiters at EOF: "
                f"{self._blocks.top.delimiter} (depth {self._blocks.depth - 1})",
            )

    def _remember(self, line: str, is_title: bool) -> None:
        self._last_title = is_title
        self._last_line = line

    def _report(self, kind: DiagnosticKind, message: str) -> None:
        diagnostic = Diagnostic(kind, self.line_number, message)
        self._diagnostics.append(diagnostic)
        logger.warning("%s", diagnostic)

    def _emit(self, lines: list[str]) -> None:
        self._emitted.extend(lines)

    def _emit_paragraph(self, paragraph: Paragraph) -> None:
        frame = self._blocks.top
        lines = paragraph.lines

        if frame.is_valid_usage and self.next_vu is not None:
            tagged = tag_valid_usage(lines, self.api_name, self.next_vu, report=self._report)
            if tagged is not None:
                lines = tagged
                self.next_vu += 1

        if frame.reflow:
            lines = wrap_paragraph(
                lines,
                paragraph.lead_indent,
                paragraph.hang_indent,
                margin=self.config.margin,
                break_period=self.config.break_period,
                reflow=self.config.reflow,
            )

        self._emit(lines)

    def _end_paragraph(self, line: str | None) -> None:
        """Emit the open paragraph, then `line` itself unless it is None."""
        logger.debug("line %d: emitting paragraph", self.line_number)
        paragraph = self._paragraph.close()
        if paragraph is not None:
            self._emit_paragraph(paragraph)
        if line is not None:
            self._emit([line])

    def _toggle_block(self, line: str, reflow: bool, is_valid_usage: bool = False) -> None:
        self._end_paragraph(line)
        delimiter = strip_terminator(line)
        closed = self._blocks.toggle(delimiter, reflow, is_valid_usage)
        if closed and delimiter == OPEN_BLOCK_DELIMITER:
            # Open blocks cannot nest, so each scopes exactly one API.
            logger.debug("reset api name at line %d", self.line_number)
            self.api_name = ""

    def _track_api_include(self, line: str) -> None:
        api_name = extract_api_include(line)
        if api_name is None:
            return

        if not self.api_name:
            self.api_name = api_name
            return

        # The promoted API comes first; its aliases usually differ only by a
        # vendor suffix.
        if not api_names_match(self.api_name, api_name):
            self._report(
                DiagnosticKind.AMBIGUOUS_ENTITY_PROMOTION,
                f"Promoted API name mismatch: {api_name} does not match {self.api_name}",
            )
