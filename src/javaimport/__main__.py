"""CLI entry point for javaimport.

Provides commands for scanning classpaths into a JSON-lines
index and for inspecting the compiled package filter.
"""

import asyncio
import sys
from pathlib import Path

import click

from javaimport import __version__


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Java import index generator.

    Scans class directories, jar archives and source trees and
    writes importable types as JSON lines for editor completion.
    """
    pass


@cli.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--classpath",
    "--cp",
    "classpath",
    multiple=True,
    help="Class search path of directories and zip/jar files",
)
@click.option(
    "--sourcepath",
    "--sp",
    "sourcepath",
    multiple=True,
    help="Source search path of directories",
)
@click.option(
    "--exclude",
    "-e",
    multiple=True,
    help="Comma separated packages to exclude",
)
@click.option(
    "--include",
    "-i",
    multiple=True,
    help="Comma separated packages to keep even when excluded",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose mode")
def scan(
    config: Path | None,
    classpath: tuple[str, ...],
    sourcepath: tuple[str, ...],
    exclude: tuple[str, ...],
    include: tuple[str, ...],
    verbose: bool,
) -> None:
    """Scan classpath and sourcepath entries.

    Writes one JSON object per importable type to stdout. Logs go
    to stderr.
    """
    from loguru import logger

    from javaimport.config.loader import load_config
    from javaimport.config.models import FilterConfig, ScanConfig
    from javaimport.emitter import JsonLinesEmitter
    from javaimport.errors import CompilationFailed, ConfigurationError
    from javaimport.services.path_filter import PathFilter
    from javaimport.services.scanner import ClasspathScanner
    from javaimport.utils.logging import configure_logging

    try:
        cfg = load_config(config)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    try:
        configure_logging(cfg.logging, verbose=verbose)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    # an option given on the command line replaces the configured value
    filter_cfg = FilterConfig(
        excludes=list(exclude) or cfg.filter.excludes,
        includes=list(include) or cfg.filter.includes,
    )
    scan_cfg = ScanConfig(
        classpath=list(classpath) or cfg.scan.classpath,
        sourcepath=list(sourcepath) or cfg.scan.sourcepath,
    )

    try:
        path_filter = PathFilter.from_config(filter_cfg)
    except CompilationFailed as e:
        click.echo(f"Error: {e}\n  pattern: {e.pattern}", err=True)
        sys.exit(1)

    if not scan_cfg.classpath and not scan_cfg.sourcepath:
        logger.warning("Nothing to scan: no classpath or sourcepath given")
        return

    emitter = JsonLinesEmitter(sys.stdout)
    scanner = ClasspathScanner(path_filter, emitter)
    try:
        stats = asyncio.run(scanner.scan(scan_cfg.classpath, scan_cfg.sourcepath))
    finally:
        emitter.flush()

    if verbose:
        logger.info(
            "time required: {:.3f}s emitted={} filtered={} failed={} errors={}",
            stats.elapsed_seconds,
            stats.totals.emitted,
            stats.totals.filtered,
            stats.totals.failed,
            len(stats.errors),
        )
    if not stats.ok:
        logger.warning(
            "{} of {} entries could not be walked: {}",
            len(stats.errors),
            len(scan_cfg.classpath) + len(scan_cfg.sourcepath),
            ", ".join(stats.errors),
        )


@cli.command()
@click.option(
    "--exclude",
    "-e",
    multiple=True,
    help="Comma separated packages to exclude",
)
@click.option(
    "--include",
    "-i",
    multiple=True,
    help="Comma separated packages to keep even when excluded",
)
def pattern(exclude: tuple[str, ...], include: tuple[str, ...]) -> None:
    """Show the compiled exclude and include patterns."""
    from javaimport.config.models import FilterConfig
    from javaimport.errors import CompilationFailed
    from javaimport.services.path_filter import PathFilter

    filter_cfg = FilterConfig(excludes=list(exclude), includes=list(include))
    try:
        path_filter = PathFilter.from_config(filter_cfg)
    except CompilationFailed as e:
        click.echo(f"Error: {e}\n  pattern: {e.pattern}", err=True)
        sys.exit(1)

    click.echo(f"exclude: {path_filter.exclude_pattern_text}")
    click.echo(f"include: {path_filter.include_pattern_text}")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
