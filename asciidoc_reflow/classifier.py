"""Line classification for AsciiDoc markup."""

from __future__ import annotations

from .constants import (
    BEGIN_BULLET_PATTERN,
    BLOCK_PASSTHROUGH_PATTERN,
    BLOCK_REFLOW_PATTERN,
    COMMON_VU_DELIMITER,
    END_ABBREV_PATTERN,
    END_INITIAL_PATTERN,
    END_PARA_CONTINUE_PATTERN,
    END_PARA_PATTERN,
    INCLUDE_API_CATEGORIES,
    INCLUDE_API_TYPE,
    INCLUDE_PATTERN,
    VALID_USAGE_TITLE,
    VENDOR_SUFFIX_PATTERN,
    VUID_ANCHOR_PREFIX,
)
from .models import LineKind

# Evaluated in order; the first matching pattern wins.
_CLASSIFICATION_RULES = (
    (BLOCK_REFLOW_PATTERN, LineKind.BLOCK_REFLOW),
    (END_PARA_PATTERN, LineKind.PARAGRAPH_END),
    (END_PARA_CONTINUE_PATTERN, LineKind.PARAGRAPH_END_CONTINUE),
    (BLOCK_PASSTHROUGH_PATTERN, LineKind.BLOCK_PASSTHROUGH),
)


def strip_terminator(line: str) -> str:
    """Return `line` without its trailing line terminator."""
    return line.rstrip("\r\n")


def classify_line(line: str) -> LineKind:
    """Classify one input line.

    The common Valid Usage comment is tested first so that it is not taken
    for an ordinary comment.

    Args:
        line: Input line, with or without its line terminator.

    Returns:
        LineKind: Label of the first matching rule, or `LineKind.ORDINARY`.

    Examples:
        classify_line("\\n")  # LineKind.PARAGRAPH_END
        classify_line("----\\n")  # LineKind.BLOCK_PASSTHROUGH
    """
    text = strip_terminator(line)
    if text == COMMON_VU_DELIMITER:
        return LineKind.COMMON_VALID_USAGE

    for pattern, kind in _CLASSIFICATION_RULES:
        if pattern.match(text):
            return kind

    return LineKind.ORDINARY


def opens_valid_usage(previous_line: str | None) -> bool:
    """Tell whether a block delimiter after `previous_line` starts a Valid Usage block."""
    if previous_line is None:
        return False
    return strip_terminator(previous_line) == VALID_USAGE_TITLE


def is_bullet(line: str) -> bool:
    """Tell whether `line` introduces a list item."""
    return BEGIN_BULLET_PATTERN.match(line) is not None


def extract_api_include(line: str) -> str | None:
    """Return the API entity named by a generated ``include::`` line.

    Only includes of generated command prototypes and structure definitions
    name an entity; any other line yields None.

    Examples:
        extract_api_include("include::{generated}/api/structs/XrFoo.txt[]")  # "XrFoo"
    """
    match = INCLUDE_PATTERN.search(line)
    if match is None:
        return None
    if match.group("generated_type") != INCLUDE_API_TYPE:
        return None
    if match.group("category") not in INCLUDE_API_CATEGORIES:
        return None
    return match.group("entity_name")


def api_names_match(old_name: str, new_name: str) -> bool:
    """Compare two API names, ignoring a trailing vendor suffix.

    Examples:
        api_names_match("XrFooKHR", "XrFoo")  # True
        api_names_match("XrFoo", "XrBar")  # False
    """
    return VENDOR_SUFFIX_PATTERN.sub("", old_name) == VENDOR_SUFFIX_PATTERN.sub("", new_name)


def ends_sentence(word: str) -> bool:
    """Tell whether `word` ends a sentence.

    A trailing period ends a sentence unless the word is one of the
    abbreviations ``e.g.``, ``i.e.``, ``c.f.`` (any case) or a single capital
    letter such as a name initial.
    """
    if not word.endswith("."):
        return False
    if END_ABBREV_PATTERN.search(word):
        return False
    return END_INITIAL_PATTERN.match(word) is None


def is_vuid_anchor(word: str) -> bool:
    """Tell whether `word` is a Valid Usage ID anchor."""
    return word.startswith(VUID_ANCHOR_PREFIX)
