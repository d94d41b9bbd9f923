"""Safe reading and writing of AsciiDoc documents."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import TextIO

from .constants import ASCIIDOC_EXTENSIONS, DEFAULT_MAX_FILE_SIZE

MAX_FILE_SIZE_ENV_VAR = "ASCIIDOC_REFLOW_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Return the document size limit in bytes.

    `ASCIIDOC_REFLOW_MAX_FILE_SIZE` takes precedence over `default` when set.

    Raises:
        ValueError: If the variable does not hold a positive integer.
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def contains_symlink(path: Path) -> bool:
    """Tell whether `path` or one of its ancestors is a symbolic link.

    Ancestors that cannot be inspected are skipped.
    """
    for candidate in (path, *path.parents):
        try:
            if candidate.is_symlink():
                return True
        except OSError:
            continue
    return False


def normalize_filepath(raw_path: str, base_dir: Path) -> Path:
    """Resolve and validate an AsciiDoc filepath under a base directory.

    Args:
        raw_path: User-supplied path to an AsciiDoc file (absolute or relative).
        base_dir: Working directory that constrains allowed paths.

    Returns:
        Path: Absolute path to the AsciiDoc file.

    Raises:
        ValueError: If the path does not exist, is outside `base_dir`, uses an
            unsupported extension, or traverses a symlink.

    Examples:
        normalize_filepath("chapters/intro.adoc", Path.cwd())
    """
    path = Path(raw_path).expanduser()

    if contains_symlink(path):
        error_message = f"Symlinks are not supported for security reasons: {path}"
        raise ValueError(error_message)

    try:
        resolved = path.resolve(strict=True)
    except FileNotFoundError as error:
        error_message = f"{path} does not exist."
        raise ValueError(error_message) from error
    except OSError as error:
        error_message = f"Error resolving {path}: {error}"
        raise ValueError(error_message) from error

    if not resolved.is_file():
        error_message = f"{resolved} is not a regular file."
        raise ValueError(error_message)

    _ensure_inside(resolved, base_dir)
    _ensure_asciidoc_suffix(resolved)

    return resolved


def normalize_output_path(raw_path: str, base_dir: Path) -> Path:
    """Resolve and validate the destination of reflowed output.

    The file itself may not exist yet, but its directory must.

    Args:
        raw_path: User-supplied output path.
        base_dir: Working directory that constrains allowed paths.

    Returns:
        Path: Absolute output path.

    Raises:
        ValueError: If the path traverses a symlink, lies outside `base_dir`,
            names a directory, has an unsupported extension, or its parent
            directory is missing.

    Examples:
        normalize_output_path("build/intro.adoc", Path.cwd())
    """
    path = Path(raw_path).expanduser()

    if contains_symlink(path):
        error_message = f"Symlinks are not supported for security reasons: {path}"
        raise ValueError(error_message)

    resolved = path.resolve()

    if not resolved.parent.is_dir():
        error_message = f"{resolved.parent} is not an existing directory."
        raise ValueError(error_message)

    if resolved.exists() and not resolved.is_file():
        error_message = f"{resolved} is not a regular file."
        raise ValueError(error_message)

    _ensure_inside(resolved, base_dir)
    _ensure_asciidoc_suffix(resolved)

    return resolved


def _ensure_inside(resolved: Path, base_dir: Path) -> None:
    try:
        resolved.relative_to(base_dir)
    except ValueError as error:
        error_message = f"{resolved} is outside of the working directory {base_dir}."
        raise ValueError(error_message) from error


def _ensure_asciidoc_suffix(resolved: Path) -> None:
    if resolved.suffix.lower() not in ASCIIDOC_EXTENSIONS:
        error_message = f"{resolved} is not an AsciiDoc file.\n"
        error_message += f"Supported extensions are: {', '.join(ASCIIDOC_EXTENSIONS)}"
        raise ValueError(error_message)


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Stat a document without following links.

    Raises:
        IOError: Unless `filepath` is an accessible regular file.
    """
    try:
        stat_result = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if stat.S_ISLNK(stat_result.st_mode):
        error_message = f"Symlinks are not supported: {filepath}."
        raise IOError(error_message)

    if not stat.S_ISREG(stat_result.st_mode):
        error_message = f"{filepath} is not a regular file."
        raise IOError(error_message)

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Reject documents larger than `max_size` bytes with an `IOError`."""
    if stat_result.st_size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise IOError(error_message)


def _fingerprint(stat_result: os.stat_result) -> tuple[object, ...]:
    return (
        getattr(stat_result, "st_ino", None),
        getattr(stat_result, "st_dev", None),
        stat_result.st_size,
        stat_result.st_mtime_ns,
    )


def ensure_file_unchanged(
    expected_stat: os.stat_result, current_stat: os.stat_result, filepath: Path
):
    """Compare two stats of `filepath` taken around reflowing it.

    Raises:
        IOError: If the inode, device, size or modification time moved, which
            means someone else wrote the document in the meantime.
    """
    if _fingerprint(expected_stat) != _fingerprint(current_stat):
        error_message = f"{filepath} changed during processing; refusing to overwrite."
        raise IOError(error_message)


def safe_read(filepath: Path) -> TextIO:
    """Open a document as UTF-8 text.

    Raises:
        IOError: If the file is missing, unreadable or not a file.

    Examples:
        with safe_read(Path("chapters/intro.adoc")) as handle:
            content = handle.read()
    """
    try:
        return open(filepath, "r", encoding="UTF-8")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error


def _default_file_mode() -> int:
    """Mode `open()` would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _replace_with_text(
    filepath: Path,
    text: str,
    permissions: int,
    owner: tuple[int, int] | None = None,
    warn: Callable[[str], None] | None = None,
):
    """Write `text` to a sibling temporary file and move it over `filepath`."""
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(text)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            # NamedTemporaryFile always creates 0600
            os.chmod(temp_path, permissions)

            if owner is not None and hasattr(os, "chown"):
                try:
                    os.chown(temp_path, *owner)
                except PermissionError:
                    if warn is not None:
                        warn(
                            f"Warning: Could not preserve file ownership for {filepath.name} "
                            "(requires elevated privileges)"
                        )

        os.replace(temp_path, filepath)
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass


def write_text_atomic(filepath: Path, text: str):
    """Write reflowed output to `filepath` in one step.

    An existing file keeps its permission bits; a new one gets the mode the
    umask allows.

    Raises:
        OSError: If the file cannot be written or replaced.

    Examples:
        write_text_atomic(Path("build/intro.adoc"), result.text)
    """
    try:
        permissions = stat.S_IMODE(os.stat(filepath).st_mode)
    except FileNotFoundError:
        permissions = _default_file_mode()

    _replace_with_text(filepath, text, permissions)


def overwrite_file(
    filepath: Path,
    text: str,
    expected_stat: os.stat_result,
    initial_stat: os.stat_result,
    warn: Callable[[str], None] | None = None,
):
    """Replace the document at `filepath` with its reflowed text.

    Permissions and, where allowed, ownership are carried over from
    `expected_stat`. The access time is reset to the one in `initial_stat`,
    taken before the document was read; the modification time is left at the
    time of the rewrite.

    Args:
        filepath: Document to rewrite.
        text: Reflowed document text.
        expected_stat: Stat taken after reading; the file must still match it.
        initial_stat: Stat taken before reading.
        warn: Receives a message when ownership cannot be kept.

    Raises:
        IOError: If the document changed since `expected_stat` or cannot be
            replaced.
    """
    current_stat = collect_file_stat(filepath)
    ensure_file_unchanged(expected_stat, current_stat, filepath)

    uid = getattr(expected_stat, "st_uid", None)
    gid = getattr(expected_stat, "st_gid", None)
    owner = (uid, gid) if uid is not None and gid is not None else None

    _replace_with_text(
        filepath, text, stat.S_IMODE(expected_stat.st_mode), owner=owner, warn=warn
    )

    rewritten_stat = filepath.stat()
    os.utime(filepath, ns=(initial_stat.st_atime_ns, rewritten_stat.st_mtime_ns))
