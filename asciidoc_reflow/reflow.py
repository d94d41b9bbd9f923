"""Reflow entry points for strings, line lists and files."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .config import ConfigError, ReflowConfig, validate_config
from .constants import LINE_END_PATTERN
from .exceptions import ReflowFileError
from .filesystem import safe_read
from .models import ReflowResult
from .state import ReflowState


def split_lines(content: str) -> list[str]:
    """Split text into lines at newlines, keeping each newline.

    Other characters Python treats as line boundaries (form feed, vertical
    tab, Unicode separators) stay inside their line.

    Examples:
        split_lines("a\\nb")  # ["a\\n", "b"]
    """
    lines = LINE_END_PATTERN.split(content)
    if lines[-1] == "":
        lines.pop()
    return lines


def reflow_lines(lines: Iterable[str], config: ReflowConfig | None = None) -> str:
    """Reflow a document given as lines and return the resulting text.

    Examples:
        reflow_lines(["This is a first line.\\n"])  # "This is a first line.\\n"
    """
    state = ReflowState(config)
    state.process_lines(lines)
    return state.emitted_text


def reflow_document(content: str, config: ReflowConfig | None = None) -> ReflowResult:
    """Reflow a whole document.

    Args:
        content: Document text.
        config: Settings for the run. Defaults to a new `ReflowConfig`.

    Returns:
        ReflowResult: Reflowed text, diagnostics, and the next free Valid Usage
            tag number.

    Raises:
        ConfigError: If the configuration fails validation.

    Examples:
        reflow_document("= Title\\nAuthor\\n", ReflowConfig(margin=72)).text
    """
    config = config or ReflowConfig()
    validate_config(config)

    state = ReflowState(config)
    state.process_lines(split_lines(content))

    return ReflowResult(
        text=state.emitted_text,
        diagnostics=state.diagnostics,
        next_vu=state.next_vu,
    )


def reflow_file(filepath: Path, config: ReflowConfig | None = None) -> ReflowResult:
    """Read an AsciiDoc file and reflow it.

    Args:
        filepath: Path to the document.
        config: Settings for the run. Defaults to a new `ReflowConfig`.

    Returns:
        ReflowResult: Result of reflowing the file content.

    Raises:
        ReflowFileError: If the configuration is invalid or the file cannot be
            read or decoded.

    Examples:
        result = reflow_file(Path("chapters/intro.adoc"), ReflowConfig(next_vu=100))
    """
    config = config or ReflowConfig()
    try:
        validate_config(config)
    except ConfigError as error:
        raise ReflowFileError(filepath, str(error)) from error

    try:
        with safe_read(filepath) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        raise ReflowFileError(filepath, f"Invalid UTF-8 sequence: {error}") from error
    except IOError as error:
        raise ReflowFileError(filepath, str(error)) from error

    return reflow_document(content, config)
