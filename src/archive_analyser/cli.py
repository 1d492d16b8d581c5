#!/usr/bin/env python3
"""Archive Analyser CLI

Usage:
  archive-analyser my-Twitter-archive/data
  python -m archive_analyser my-Twitter-archive/data --output-dir reports

Writes three HTML tables (mutuals, non-mutual followers replied to, non-mutual
followers never replied to) and prints how many accounts landed in each.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from .classify import classify
from .config import settings
from .errors import AnalyserError, ArgumentError
from .ingest import build_store
from .report import (
    ENGAGED_NON_MUTUALS,
    MUTUALS,
    UNENGAGED_NON_MUTUALS,
    write_report,
)

USAGE = "Usage: archive-analyser my-Twitter-archive/data"


def _configure_logging(verbose: bool) -> logging.Handler:
    """Progress lines go to stdout as plain text, once."""
    package_logger = logging.getLogger("archive_analyser")
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.propagate = False
    package_logger.setLevel(logging.DEBUG if verbose else settings.log_level)
    return handler


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("data_dir", type=click.Path(path_type=Path))
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Where to write the HTML tables (default: current directory).",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug output")
def analyse(data_dir: Path, output_dir: Path | None, verbose: bool) -> None:
    """Analyse the data/ directory of a Twitter archive."""
    if not data_dir.is_dir():
        raise ArgumentError(f"{USAGE} ('{data_dir}' is not a directory)")

    package_logger = logging.getLogger("archive_analyser")
    saved = (package_logger.level, package_logger.propagate)
    handler = _configure_logging(verbose)
    try:
        _run(data_dir, output_dir)
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(saved[0])
        package_logger.propagate = saved[1]


def _run(data_dir: Path, output_dir: Path | None) -> None:
    # Only one archive document is decoded at a time.
    store = build_store(data_dir)

    result = classify(store)
    click.echo(f"Number of mutuals: {len(result.mutuals)}")
    click.echo(f"Number of non-mutual followers you have replied to: {len(result.engaged)}")
    click.echo(f"Number of non-mutual followers you have never replied to: {len(result.unengaged)}")

    # A failed write aborts the remaining reports.
    write_report(MUTUALS, result.mutuals, store, output_dir)
    write_report(ENGAGED_NON_MUTUALS, result.engaged, store, output_dir)
    write_report(UNENGAGED_NON_MUTUALS, result.unengaged, store, output_dir)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit status."""
    try:
        analyse.main(args=argv, prog_name="archive-analyser", standalone_mode=False)
    except click.UsageError as e:
        click.echo(f"{USAGE} ({e.format_message()})", err=True)
        return 1
    except click.ClickException as e:
        e.show()
        return 1
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    except AnalyserError as e:
        click.echo(str(e), err=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
