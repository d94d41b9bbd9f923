"""
Reflows an AsciiDoc file to a fixed margin.
The result is written to stdout, to another file, or back over the input file.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .config import ConfigError, build_config
from .exceptions import ReflowFileError
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    ensure_file_unchanged,
    get_max_file_size,
    normalize_filepath,
    normalize_output_path,
    overwrite_file,
    write_text_atomic,
)
from .reflow import reflow_file

__all__ = ["cli"]


def _configure_logging(verbose: bool) -> None:
    package_logger = logging.getLogger("asciidoc_reflow")
    if not verbose:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(name)s: %(levelname)s: %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


@click.command()
@click.version_option()
@click.option("-O", "--output", "output", help="Output filename")
@click.option(
    "-o", "--overwrite", is_flag=True, help="Overwrite the input file with the processed output"
)
@click.option("--margin", type=int, help="Maximum width for wrapping")
@click.option(
    "--break-period/--no-break-period",
    default=None,
    help="Break to a new line after the end of a sentence",
)
@click.option("--reflow/--no-reflow", default=None, help="Reflow paragraphs to width")
@click.option("--nextvu", type=int, help="Assign Valid Usage tags starting at this number")
@click.option("-v", "--verbose", is_flag=True, help="Log processing details to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    output: str | None = None,
    overwrite: bool = False,
    margin: int | None = None,
    break_period: bool | None = None,
    reflow: bool | None = None,
    nextvu: int | None = None,
    verbose: bool = False,
):
    """
    Entry point for reflowing an AsciiDoc document.

    Args:
        filepath: Path to the AsciiDoc file to process.
        output: Path of a file to write the result to.
        overwrite: Whether to write the result back to `filepath`.
        margin: Override for the wrapping margin.
        break_period: Override for breaking lines after sentences.
        reflow: Override for reflowing paragraphs at all.
        nextvu: First number for new Valid Usage tags.
        verbose: Whether to log processing details.

    Returns:
        None.

    Raises:
        click.BadParameter: If CLI parameters reference invalid paths, conflict
            with each other, or contain invalid configuration values.
        click.ClickException: If reading, reflowing, or writing fails.

    Examples:
        asciidoc-reflow chapters/intro.adoc --margin 80 --overwrite
    """
    _configure_logging(verbose)

    if output is not None and overwrite:
        raise click.BadParameter("--output cannot be combined with --overwrite")

    base_dir = Path.cwd().resolve()
    try:
        filepath = normalize_filepath(filepath, base_dir)
        output_path = normalize_output_path(output, base_dir) if output is not None else None
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = build_config(
            filepath.parent,
            margin=margin,
            break_period=break_period,
            reflow=reflow,
            next_vu=nextvu,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        initial_stat = collect_file_stat(filepath)
        enforce_file_size(initial_stat, max_file_size, filepath)
    except IOError as error:
        raise click.ClickException(str(error)) from error

    try:
        result = reflow_file(filepath, config)
    except ReflowFileError as error:
        raise click.ClickException(str(error)) from error

    for diagnostic in result.diagnostics:
        click.echo(f"Warning: {diagnostic}", err=True)

    # Rewrites the input
    if overwrite:
        try:
            post_read_stat = collect_file_stat(filepath)
            ensure_file_unchanged(initial_stat, post_read_stat, filepath)
            overwrite_file(
                filepath,
                result.text,
                post_read_stat,
                initial_stat,
                warn=lambda message: click.echo(message, err=True),
            )
        except IOError as error:
            raise click.ClickException(str(error)) from error
    # Writes a new file
    elif output_path is not None:
        try:
            write_text_atomic(output_path, result.text)
        except OSError as error:
            raise click.ClickException(f"Error writing {output_path}: {error}") from error
    # Prints the result
    else:
        click.echo(result.text, nl=False)

    if result.next_vu is not None:
        click.echo(f"Next free Valid Usage tag number: {result.next_vu}", err=True)


if __name__ == "__main__":
    cli()
