"""Greedy re-wrapping of paragraph text."""

from __future__ import annotations

import logging

from .classifier import ends_sentence, is_bullet, is_vuid_anchor
from .constants import DEFAULT_MARGIN, HARD_BREAK_TOKEN, WORD_SEPARATOR_PATTERN

logger = logging.getLogger(__name__)


def wrap_paragraph(
    lines: list[str],
    lead_indent: int,
    hang_indent: int,
    margin: int = DEFAULT_MARGIN,
    break_period: bool = True,
    reflow: bool = True,
) -> list[str]:
    """Reflow a paragraph, respecting its lead and hanging indentation.

    Words, separated by spaces and tabs, are taken across all source lines
    and packed greedily into lines no wider than `margin`. Source line breaks
    are dropped except where a source line ends with a standalone ``+``, which
    stays on its line and forces a break. A Valid Usage anchor also forces a
    break after it, and a long word immediately after a bullet is never moved
    to the next line. Other spaces, such as U+00A0, are part of the word.

    When `break_period` is set, a new line is started after each word that
    ends a sentence. When the first line is a single-line list item, the
    hanging indent is recomputed so continuation lines align with the text
    after the bullet.

    Args:
        lines: Paragraph lines, including line terminators.
        lead_indent: Indentation of the first output line.
        hang_indent: Indentation of the other output lines.
        margin: Maximum line width.
        break_period: Whether to break after the end of a sentence.
        reflow: When False, `lines` are returned unchanged.

    Returns:
        list[str]: Output lines, each ending with a newline.

    Examples:
        wrap_paragraph(["One. Two\\n"], 0, 0)  # ["One.\\n", "Two\\n"]
    """
    if not reflow:
        return list(lines)
    if not lines:
        return []

    logger.debug(
        "wrapping paragraph lead indent = %d hang indent = %d: %r",
        lead_indent,
        hang_indent,
        lines[0],
    )

    bullet_point = is_bullet(lines[0])

    # Counted across the whole paragraph, not per source line.
    word_count = 0
    prev_word = " "
    out_line: str | None = None
    out_line_len = 0
    out_para: list[str] = []

    for raw_line in lines:
        words = [word for word in WORD_SEPARATOR_PATTERN.split(raw_line.strip(" \t\r\n")) if word]
        last_index = len(words) - 1

        for i, word in enumerate(words):
            word_len = len(word)
            word_count += 1

            if word_count == 1:
                out_line = " " * lead_indent + word
                out_line_len = lead_indent + word_len
                if bullet_point and len(lines) == 1:
                    # No second line to take the hanging indent from.
                    hang_indent = out_line_len + 1
                prev_word = word
                continue

            add_word = True
            close_line = False
            start_line = False

            new_len = out_line_len + 1 + word_len
            first_bullet = word_count == 2 and bullet_point

            if i == last_index and word == HARD_BREAK_TOKEN:
                close_line = True
            elif is_vuid_anchor(word):
                close_line = True
            elif new_len > margin:
                if first_bullet:
                    close_line = True
                else:
                    add_word, close_line, start_line = False, True, True
            elif break_period and (i > 1 or not first_bullet) and ends_sentence(prev_word):
                add_word, close_line, start_line = False, True, True

            if add_word:
                if out_line:
                    out_line = f"{out_line} {word}"
                    out_line_len = new_len
                else:
                    # Nothing to append to after a forced break.
                    start_line = True

            if close_line and out_line:
                out_para.append(out_line + "\n")
                out_line = None

            if start_line:
                out_line = " " * hang_indent + word
                out_line_len = hang_indent + word_len

            prev_word = word

    if out_line:
        out_para.append(out_line + "\n")

    return out_para
