"""Accumulation of paragraph lines with hanging indentation."""

from __future__ import annotations

import logging

from .classifier import is_bullet
from .models import Paragraph

logger = logging.getLogger(__name__)


def indentation(line: str) -> int:
    """Count the leading spaces and tabs of `line`.

    Examples:
        indentation("  * item\\n")  # 2
        indentation("\\n")  # 0
    """
    stripped = line.rstrip(" \t\r\n")
    return len(stripped) - len(stripped.lstrip(" \t"))


class ParagraphAccumulator:
    """Collects the lines of the paragraph currently being read.

    Paragraphs may have a hanging indent::

        * Bullet point...
          ... continued

    The indentation of the second line becomes the hanging indent. A later
    line indented less than that, or a line starting a new list item, ends the
    paragraph.
    """

    def __init__(self) -> None:
        self._paragraph = Paragraph()

    @property
    def lines(self) -> list[str]:
        return self._paragraph.lines

    @property
    def lead_indent(self) -> int:
        return self._paragraph.lead_indent

    @property
    def hang_indent(self) -> int:
        return self._paragraph.hang_indent

    def is_open(self) -> bool:
        return bool(self._paragraph.lines)

    def add_line(self, line: str) -> Paragraph | None:
        """Add `line` to the open paragraph, opening one if needed.

        Args:
            line: Paragraph text line, including its terminator.

        Returns:
            Paragraph | None: The previous paragraph when `line` had to end it,
            otherwise None.
        """
        indent = indentation(line)
        closed = None

        if self.is_open() and (indent < self.hang_indent or is_bullet(line)):
            logger.debug("line ends the open paragraph: %r", line)
            closed = self.close()

        if not self.is_open():
            self._paragraph = Paragraph([line], lead_indent=indent, hang_indent=indent)
            return closed

        # The hanging indent is set by the second line only.
        if self.hang_indent == self.lead_indent:
            self._paragraph.hang_indent = indent
        self._paragraph.lines.append(line)
        return closed

    def close(self) -> Paragraph | None:
        """End the open paragraph and return it, or None when none is open."""
        if not self.is_open():
            return None
        paragraph = self._paragraph
        self._paragraph = Paragraph()
        return paragraph
