from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from asciidoc_reflow.config import ConfigError, ReflowConfig
from asciidoc_reflow.exceptions import ReflowFileError
from asciidoc_reflow.models import DiagnosticKind
from asciidoc_reflow.reflow import reflow_document, reflow_file, reflow_lines, split_lines

HANGING_INDENT_EXPECTED = textwrap.dedent(
    """\
    .Title
    ****
      * This is a bullet point that is long enough that it has to be wrapped
        onto a second line.
    ****
    """
)


def _write_adoc(tmp_path: Path, content: str) -> Path:
    target = tmp_path / "sample.adoc"
    target.write_text(textwrap.dedent(content), encoding="utf-8")
    return target


def test_split_lines_keeps_terminators():
    assert split_lines("a\nb\n") == ["a\n", "b\n"]
    assert split_lines("a\n\nb") == ["a\n", "\n", "b"]
    assert split_lines("") == []


def test_split_lines_only_breaks_at_newlines():
    assert split_lines("a\x0cb\nc\x0bd\u2028e\n") == ["a\x0cb\n", "c\x0bd\u2028e\n"]
    assert split_lines("crlf\r\nnext") == ["crlf\r\n", "next"]


def test_form_feed_does_not_close_listing_block():
    content = "----\nx\x0c----\n  a   b\n----\n"

    result = reflow_document(content)

    assert result.text == content
    assert result.diagnostics == []


def test_non_breaking_space_is_kept_inside_words():
    content = "See Version\u00a01.0 for details.\n"

    assert reflow_document(content).text == content


def test_non_breaking_space_word_is_not_split_at_margin():
    result = reflow_document("alpha beta\u00a0gamma\n", ReflowConfig(margin=12))

    assert result.text == "alpha\nbeta\u00a0gamma\n"


def test_first_do_no_harm():
    bare_input = "This is a first line.\n"
    lines = split_lines(bare_input)

    assert len(lines) == 1
    assert reflow_lines(lines) == bare_input


def test_first_do_no_harm_two_lines():
    bare_input = "This is a first line.\nThis is a second.\n"

    assert reflow_lines(split_lines(bare_input)) == bare_input


def test_normal_paragraph():
    bare_input = (
        "In each such use, the API major version number, minor version number, and patch "
        "version number are packed into a 64-bit integer, referred to as\n"
        "basetype:XrVersion, as follows:\n"
    )

    assert reflow_lines(split_lines(bare_input)) == (
        "In each such use, the API major version number, minor version number, and\n"
        "patch version number are packed into a 64-bit integer, referred to as\n"
        "basetype:XrVersion, as follows:\n"
    )


def test_box_do_no_harm():
    bare_input = textwrap.dedent(
        """
        .Extension Name Formatting
        ****
        * The prefix "code:XR_" to identify this as an OpenXR extension
        ****
        """
    )

    assert reflow_lines(split_lines(bare_input)) == bare_input


def test_hanging_indent_is_preserved_when_partially_flattened():
    bare_input = textwrap.dedent(
        """\
        .Title
        ****
          * This is a bullet point that is long enough that it has to be
            wrapped onto a second line.
        ****
        """
    )

    assert reflow_lines(split_lines(bare_input)) == HANGING_INDENT_EXPECTED


def test_hanging_indent_is_computed_when_fully_flattened():
    bare_input = textwrap.dedent(
        """\
        .Title
        ****
          * This is a bullet point that is long enough that it has to be wrapped onto a second line.
        ****
        """
    )

    assert reflow_lines(split_lines(bare_input)) == HANGING_INDENT_EXPECTED


def test_unusual_hanging_indent_is_preserved():
    bare_input = textwrap.dedent(
        """\
        * Bullet with text
           and an unusual three column hanging indent that is long enough to wrap
           around.
        """
    )

    assert reflow_lines(split_lines(bare_input)) == textwrap.dedent(
        """\
        * Bullet with text and an unusual three column hanging indent that is long
           enough to wrap around.
        """
    )


def test_missing_final_newline_is_kept_for_markup():
    assert reflow_lines(split_lines("Text\n\n// end")) == "Text\n\n// end"


def test_reflow_document_reports_result():
    content = textwrap.dedent(
        """\
        include::{generated}/api/structs/XrFoo.txt[]

        .Valid Usage
        ****
          * pname:bar must: be a valid pointer
        """
    )

    result = reflow_document(content, ReflowConfig(next_vu=5))

    assert "  * [[VUID-XrFoo-bar-00005]]\n" in result.text
    assert result.next_vu == 6
    assert [d.kind for d in result.diagnostics] == [DiagnosticKind.STRUCTURAL_MISMATCH]


def test_reflow_document_validates_config():
    with pytest.raises(ConfigError):
        reflow_document("text\n", ReflowConfig(margin=0))


def test_reflow_document_respects_margin():
    result = reflow_document("one two three four five six\n", ReflowConfig(margin=10))

    assert result.text == "one two\nthree four\nfive six\n"


def test_reflow_file_reads_utf8(tmp_path: Path):
    target = _write_adoc(
        tmp_path,
        """\
        Ünïcode text is
        joined.
        """,
    )

    result = reflow_file(target)

    assert result.text == "Ünïcode text is joined.\n"
    assert result.diagnostics == []


def test_reflow_file_rejects_invalid_utf8(tmp_path: Path):
    target = tmp_path / "broken.adoc"
    target.write_bytes(b"\xff\xfe invalid\n")

    with pytest.raises(ReflowFileError) as exc_info:
        reflow_file(target)
    assert "Invalid UTF-8" in str(exc_info.value)


def test_reflow_file_rejects_missing_file(tmp_path: Path):
    with pytest.raises(ReflowFileError):
        reflow_file(tmp_path / "missing.adoc")


def test_reflow_file_rejects_invalid_config(tmp_path: Path):
    target = _write_adoc(tmp_path, "text\n")

    with pytest.raises(ReflowFileError):
        reflow_file(target, ReflowConfig(next_vu=-1))
