from __future__ import annotations

from asciidoc_reflow.paragraph import ParagraphAccumulator, indentation


def test_indentation_counts_leading_whitespace():
    assert indentation("  * item\n") == 2
    assert indentation("text\n") == 0
    assert indentation("\n") == 0
    assert indentation("    \n") == 0


def test_first_line_sets_lead_and_hang_indent():
    accumulator = ParagraphAccumulator()

    assert accumulator.add_line("  * item\n") is None

    assert accumulator.is_open() is True
    assert accumulator.lead_indent == 2
    assert accumulator.hang_indent == 2


def test_second_line_sets_hang_indent_once():
    accumulator = ParagraphAccumulator()

    accumulator.add_line("  * item\n")
    accumulator.add_line("    continued\n")
    accumulator.add_line("      deeper\n")

    assert accumulator.lead_indent == 2
    assert accumulator.hang_indent == 4
    assert accumulator.lines == ["  * item\n", "    continued\n", "      deeper\n"]


def test_dedent_below_hang_indent_starts_new_paragraph():
    accumulator = ParagraphAccumulator()
    accumulator.add_line("  * item\n")
    accumulator.add_line("    continued\n")

    closed = accumulator.add_line("  back out\n")

    assert closed is not None
    assert closed.lines == ["  * item\n", "    continued\n"]
    assert closed.lead_indent == 2
    assert closed.hang_indent == 4
    assert accumulator.lines == ["  back out\n"]
    assert accumulator.lead_indent == 2
    assert accumulator.hang_indent == 2


def test_bullet_starts_new_paragraph():
    accumulator = ParagraphAccumulator()
    accumulator.add_line("Introductory text\n")

    closed = accumulator.add_line("* first item\n")

    assert closed is not None
    assert closed.lines == ["Introductory text\n"]
    assert accumulator.lines == ["* first item\n"]


def test_close_resets_the_accumulator():
    accumulator = ParagraphAccumulator()
    accumulator.add_line("  * item\n")
    accumulator.add_line("    continued\n")

    paragraph = accumulator.close()

    assert paragraph is not None
    assert paragraph.lines == ["  * item\n", "    continued\n"]
    assert accumulator.is_open() is False
    assert accumulator.lines == []
    assert accumulator.lead_indent == 0
    assert accumulator.hang_indent == 0
    assert accumulator.close() is None


def test_indentation_ignores_non_ascii_spaces():
    assert indentation("\u00a0text\n") == 0
    assert indentation("\t \u00a0text\n") == 2
