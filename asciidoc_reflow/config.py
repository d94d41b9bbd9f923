"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib


@dataclass(frozen=True)
class ReflowConfig:
    """Settings for one reflow run.

    Attributes:
        margin: Column width that reflowed lines are wrapped to.
        break_period: Whether to start a new line after the end of a sentence.
        reflow: Whether paragraphs are reflowed at all. When False, paragraphs
            are emitted unchanged (Valid Usage tags are still assigned).
        next_vu: First number used to tag untagged Valid Usage statements, or
            None to disable tagging.
        initial_line_number: Line number of the first input line.
        max_file_size: Maximum file size in bytes that will be processed.

    Examples:
        ReflowConfig(margin=80, break_period=False)
    """

    # Wrapping
    margin: int = 76
    break_period: bool = True
    reflow: bool = True

    # Tagging
    next_vu: int | None = None

    # Input
    initial_line_number: int = 1

    # Limits
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Attributes:
        args: Arguments provided to the underlying `ValueError`.

    Examples:
        raise ConfigError("`margin` must be a positive integer")
    """


def load_config(search_path: Path) -> ReflowConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.asciidoc-reflow]`` table from `pyproject.toml` and the
    ``[asciidoc-reflow]`` or ``[tool.asciidoc-reflow]`` table from
    `.asciidoc-reflow.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ReflowConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("chapters"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "asciidoc-reflow")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".asciidoc-reflow.toml",
            table_paths=[("asciidoc-reflow",), ("tool", "asciidoc-reflow")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ReflowConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> ReflowConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> ReflowConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return ReflowConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return ReflowConfig()

    # TOML keys may use dashes, dataclass fields use underscores.
    settings = {key.replace("-", "_"): value for key, value in raw_config.items()}

    try:
        return ReflowConfig(**settings)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: ReflowConfig) -> None:
    """Validate a `ReflowConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If numeric settings are not positive integers, the tag
            number is negative, or flags are not booleans.

    Examples:
        validate_config(ReflowConfig(margin=80, next_vu=100))
    """
    _ensure_integers(
        {
            "margin": config.margin,
            "initial_line_number": config.initial_line_number,
            "max_file_size": config.max_file_size,
            **({"next_vu": config.next_vu} if config.next_vu is not None else {}),
        }
    )

    _ensure_positive(
        {
            "margin": config.margin,
            "initial_line_number": config.initial_line_number,
            "max_file_size": config.max_file_size,
        }
    )

    if config.next_vu is not None and config.next_vu < 0:
        raise ConfigError("`next_vu` must be >= 0")

    if not isinstance(config.break_period, bool):
        raise ConfigError("`break_period` must be a boolean")
    if not isinstance(config.reflow, bool):
        raise ConfigError("`reflow` must be a boolean")


def apply_overrides(config: ReflowConfig, **overrides: object) -> ReflowConfig:
    """Apply override values to a `ReflowConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        ReflowConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `ReflowConfig`.

    Examples:
        updated = apply_overrides(config, margin=100, next_vu=None)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ReflowConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        ReflowConfig: Validated configuration ready for reflowing.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), margin=80, break_period=False)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
