"""
Main CLI entry point for lock-diff tool.

This module provides the command-line interface for comparing lock files.
"""

import click
import logging
import sys

from .lock_parser import LockParser, LockParseError, is_valid_lock_file
from .lock_differ import compare_locks
from .output import present
from .renderer import render_json, render_report

logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    """Send log records to stderr; only warnings unless debugging."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def load_comparison(old_lock_path, new_lock_path):
    """
    Parse both lock files and compare them.

    Raises:
        LockParseError: If either file cannot be read or parsed
    """
    for path in (old_lock_path, new_lock_path):
        if not is_valid_lock_file(path):
            raise LockParseError(f"{path}: not a readable file")

    parser = LockParser()
    old_lock = parser.load_lock(old_lock_path)
    new_lock = parser.load_lock(new_lock_path)

    return compare_locks(
        old_lock,
        new_lock,
        parser.extract_metadata(old_lock, old_lock_path),
        parser.extract_metadata(new_lock, new_lock_path),
    )


@click.command()
@click.argument('old_lock', metavar='OLD-LOCK', type=click.Path(dir_okay=False))
@click.argument('new_lock', metavar='NEW-LOCK', type=click.Path(dir_okay=False))
@click.option('--verbose', '-v', is_flag=True, envvar='LOCK_DIFF_VERBOSE',
              help='Also list unchanged packages')
@click.option('--no-color', is_flag=True, envvar='LOCK_DIFF_NO_COLOR',
              help='Plain text output with +/-/~/= labels only')
@click.option('--no-pager', is_flag=True, envvar='LOCK_DIFF_NO_PAGER',
              help='Never page long output')
@click.option('--format', 'output_format', type=click.Choice(['text', 'json']),
              default='text', envvar='LOCK_DIFF_FORMAT', show_default=True,
              help='Report format')
@click.option('--tui', is_flag=True, help='Browse the changes interactively')
@click.option('--debug', is_flag=True, help='Enable debug logging')
def main(old_lock, new_lock, verbose, no_color, no_pager, output_format, tui, debug):
    """
    Compare two lock files.

    OLD-LOCK and NEW-LOCK are Cargo-style lock files. Exits 0 when the
    comparison ran, whether or not anything changed.

    Examples:
        lock-diff Cargo.lock.orig Cargo.lock
        lock-diff -v --no-color old/Cargo.lock new/Cargo.lock
        lock-diff --format json old.lock new.lock
    """
    configure_logging(debug)

    try:
        result = load_comparison(old_lock, new_lock)
    except (LockParseError, OSError) as e:
        logger.debug("Comparison failed", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    logger.info(f"Old: {result.old_metadata.get_summary()}")
    logger.info(f"New: {result.new_metadata.get_summary()}")
    logger.info(result.get_summary())

    if tui:
        from .tui import launch
        launch(result, show_unchanged=verbose)
    elif output_format == 'json':
        click.echo(render_json(result, show_unchanged=verbose))
    else:
        use_color = not no_color
        text = render_report(result, show_unchanged=verbose, use_color=use_color)
        present(text, use_color=use_color, use_pager=not no_pager)


if __name__ == "__main__":
    main()
