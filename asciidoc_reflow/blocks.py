"""Tracking of nested AsciiDoc block delimiters."""

from __future__ import annotations

import logging

from .models import BlockFrame

logger = logging.getLogger(__name__)


class BlockStack:
    """Stack of open blocks, with the document level always at the bottom.

    Examples:
        stack = BlockStack()
        stack.toggle("****", reflow=True)  # opens, returns False
        stack.toggle("****", reflow=True)  # closes, returns True
    """

    def __init__(self) -> None:
        self._frames: list[BlockFrame] = [BlockFrame()]

    @property
    def top(self) -> BlockFrame:
        return self._frames[-1]

    @property
    def depth(self) -> int:
        return len(self._frames)

    def at_base(self) -> bool:
        return len(self._frames) == 1

    def enter(self, delimiter: str, reflow: bool, is_valid_usage: bool = False) -> None:
        """Open a block delimited by `delimiter`."""
        self._frames.append(BlockFrame(delimiter, reflow, is_valid_usage))
        logger.debug("pushing block start depth %d: %s", len(self._frames), delimiter)

    def exit(self) -> BlockFrame:
        """Close the innermost block and return its frame.

        Raises:
            IndexError: If only the document level is left.
        """
        if len(self._frames) == 1:
            raise IndexError("cannot close the document level")
        logger.debug("popping block end depth %d: %s", len(self._frames), self.top.delimiter)
        return self._frames.pop()

    def toggle(self, delimiter: str, reflow: bool, is_valid_usage: bool = False) -> bool:
        """Close the innermost block if `delimiter` matches it, otherwise open one.

        Args:
            delimiter: Delimiter text without its line terminator.
            reflow: Whether a newly opened block is reflowed.
            is_valid_usage: Whether a newly opened block is a Valid Usage block.

        Returns:
            bool: True when a block was closed, False when one was opened.
        """
        if self.top.delimiter == delimiter:
            self.exit()
            return True

        self.enter(delimiter, reflow, is_valid_usage)
        return False
