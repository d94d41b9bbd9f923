from __future__ import annotations

from asciidoc_reflow.wrap import wrap_paragraph


def test_short_single_line_is_unchanged():
    lines = ["This is a first line.\n"]

    assert wrap_paragraph(lines, 0, 0) == lines


def test_long_line_wraps_at_margin():
    lines = [
        "In each such use, the API major version number, minor version number, and "
        "patch version number are packed into a 64-bit integer, referred to as\n",
        "basetype:XrVersion, as follows:\n",
    ]

    assert wrap_paragraph(lines, 0, 0) == [
        "In each such use, the API major version number, minor version number, and\n",
        "patch version number are packed into a 64-bit integer, referred to as\n",
        "basetype:XrVersion, as follows:\n",
    ]


def test_short_lines_are_joined():
    lines = ["Several short\n", "lines of text\n", "are joined\n"]

    assert wrap_paragraph(lines, 0, 0) == ["Several short lines of text are joined\n"]


def test_breaks_after_end_of_sentence():
    lines = ["First sentence. Second sentence.\n"]

    assert wrap_paragraph(lines, 0, 0) == ["First sentence.\n", "Second sentence.\n"]


def test_sentence_breaks_can_be_disabled():
    lines = ["First sentence.\n", "Second sentence.\n"]

    assert wrap_paragraph(lines, 0, 0, break_period=False) == [
        "First sentence. Second sentence.\n"
    ]


def test_abbreviations_and_initials_do_not_end_sentences():
    lines = ["Use e.g. this form, as J. Smith wrote in c.f. the guide.\n"]

    assert wrap_paragraph(lines, 0, 0) == lines


def test_trailing_plus_forces_line_break():
    lines = ["first line +\n", "second line\n"]

    assert wrap_paragraph(lines, 0, 0) == ["first line +\n", "second line\n"]


def test_vuid_anchor_forces_line_break():
    lines = ["  * [[VUID-XrFoo-bar-00001]] pname:bar must: be valid\n"]

    assert wrap_paragraph(lines, 2, 2) == [
        "  * [[VUID-XrFoo-bar-00001]]\n",
        "    pname:bar must: be valid\n",
    ]


def test_single_line_bullet_computes_hanging_indent():
    lines = ["  * alpha beta gamma delta epsilon zeta eta theta\n"]

    assert wrap_paragraph(lines, 2, 2, margin=20) == [
        "  * alpha beta gamma\n",
        "    delta epsilon\n",
        "    zeta eta theta\n",
    ]


def test_long_word_after_bullet_stays_on_bullet_line():
    lines = ["* averyveryverylongword tail\n"]

    assert wrap_paragraph(lines, 0, 0, margin=10) == [
        "* averyveryverylongword\n",
        "  tail\n",
    ]


def test_multi_line_bullet_keeps_existing_hanging_indent():
    lines = ["  * foo\n", "    bar baz\n"]

    assert wrap_paragraph(lines, 2, 4) == ["  * foo bar baz\n"]


def test_multi_line_bullet_wraps_to_existing_hanging_indent():
    lines = [
        "  * This is a bullet point that is long enough that it has to be\n",
        "    wrapped onto a second line.\n",
    ]

    assert wrap_paragraph(lines, 2, 4) == [
        "  * This is a bullet point that is long enough that it has to be wrapped\n",
        "    onto a second line.\n",
    ]


def test_period_bullet_does_not_break_after_bullet():
    lines = [". First item. More\n"]

    assert wrap_paragraph(lines, 0, 0) == [". First item.\n", "  More\n"]


def test_lead_indent_is_applied_to_first_line():
    lines = ["   indented text\n", "   continues here\n"]

    assert wrap_paragraph(lines, 3, 3) == ["   indented text continues here\n"]


def test_disabled_reflow_returns_lines_unchanged():
    lines = ["A line. With sentences. " * 10 + "\n", "and more\n"]

    assert wrap_paragraph(lines, 0, 0, reflow=False) == lines


def test_empty_paragraph_yields_no_lines():
    assert wrap_paragraph([], 0, 0) == []


def test_missing_final_terminator_is_added():
    assert wrap_paragraph(["last line"], 0, 0) == ["last line\n"]


def test_non_breaking_space_joins_words():
    lines = ["Version\u00a01.0 and Version\u00a02.0 differ\n"]

    assert wrap_paragraph(lines, 0, 0, margin=16) == [
        "Version\u00a01.0 and\n",
        "Version\u00a02.0\n",
        "differ\n",
    ]


def test_spaces_and_tabs_separate_words():
    lines = ["one\t two   three\n", "\tfour\n"]

    assert wrap_paragraph(lines, 0, 0) == ["one two three four\n"]
