"""Assignment of Valid Usage ID tags to list items."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .constants import (
    MISSING_PARAM_NAME,
    NESTED_VU_ITEM_PATTERN,
    PNAME_PATTERN,
    VU_ITEM_PATTERN,
    VU_NUMBER_WIDTH,
    VU_PREFIX,
)
from .models import DiagnosticKind

logger = logging.getLogger(__name__)

Reporter = Callable[[DiagnosticKind, str], None]


def find_param_name(lines: list[str]) -> str | None:
    """Return the first ``pname:`` parameter referenced in `lines`, if any."""
    for line in lines:
        match = PNAME_PATTERN.search(line)
        if match is not None:
            return match.group("param")
    return None


def format_vuid(api_name: str, param_name: str, number: int, prefix: str = VU_PREFIX) -> str:
    """Build a Valid Usage ID such as ``VUID-XrFoo-bar-00005``."""
    return f"{prefix}-{api_name}-{param_name}-{number:0{VU_NUMBER_WIDTH}d}"


def tag_valid_usage(
    lines: list[str],
    api_name: str,
    number: int,
    report: Reporter | None = None,
) -> list[str] | None:
    """Insert a Valid Usage ID anchor into an untagged list item.

    The first ``pname:`` reference anywhere in the paragraph names the
    parameter; when there is none, the literal ``None`` is used instead and a
    diagnostic is reported.

    Args:
        lines: Paragraph lines, including line terminators.
        api_name: API entity the statement belongs to.
        number: Sequence number for the new tag.
        report: Optional callback receiving non-fatal diagnostics.

    Returns:
        list[str] | None: New paragraph lines with the anchor inserted after
            the bullet, or None when the paragraph is already tagged, is a
            nested list item, or is not a ``  *`` list item at all.

    Examples:
        tag_valid_usage(["  * pname:bar must be valid\\n"], "XrFoo", 5)
        # ["  * [[VUID-XrFoo-bar-00005]] pname:bar must be valid\\n"]
    """
    if not lines:
        return None

    first_line = lines[0]

    if NESTED_VU_ITEM_PATTERN.match(first_line):
        # Nested items break Valid Usage extraction, so they get no tag.
        if report is not None:
            report(
                DiagnosticKind.INVALID_NESTED_LIST_ITEM,
                f"Invalid nested bullet point in Valid Usage block: {first_line.rstrip()}",
            )
        return None

    if VU_PREFIX in first_line:
        return None

    match = VU_ITEM_PATTERN.match(first_line)
    if match is None:
        return None

    param_name = find_param_name(lines)
    if param_name is None:
        param_name = MISSING_PARAM_NAME
        if report is not None:
            report(
                DiagnosticKind.MISSING_TAG_PARAMETER,
                f"No param name found for {VU_PREFIX} tag on line: {first_line.rstrip()}",
            )

    vuid = format_vuid(api_name, param_name, number)
    new_line = f"{match.group('head')} [[{vuid}]] {match.group('tail')}"
    logger.info("Assigning %s on line: %r -> %r", vuid, first_line, new_line)

    return [new_line, *lines[1:]]
