"""
Prints the text snippet nested deepest inside an HTML document fetched from a URL.
Reports "malformed HTML" for invalid documents and "URL connection error" when
the document cannot be retrieved.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import click
from .analyzer import analyze
from .config import AnalyzerConfig, ConfigError, apply_overrides, build_config
from .constants import URL_CONNECTION_ERROR
from .exceptions import FetchError
from .fetcher import fetch_document

__all__ = ["cli"]


def _finite_timeout(ctx: click.Context, param: click.Parameter, value: float | None):
    if value is not None and not math.isfinite(value):
        raise click.BadParameter("must be a finite number of seconds")
    return value


@click.command()
@click.version_option(package_name="html-analyzer")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    callback=_finite_timeout,
    help="Connect and read timeout in seconds",
)
@click.option("-v", "--verbose", is_flag=True, help="Log diagnostics to stderr")
@click.argument("url")
def cli(url: str, timeout: float | None = None, verbose: bool = False):
    """
    Entry point for analyzing the document at URL.

    Settings from project config files or ``HTML_ANALYZER_TIMEOUT`` that fail
    validation produce a warning on stderr, and the defaults are used instead.

    Args:
        url: Locator of the HTML document.
        timeout: Override for both the connect and read timeouts.
        verbose: Emit debug logging on stderr.

    Returns:
        None.

    Raises:
        click.BadParameter: If `--timeout` is not a positive finite number.

    Examples:
        html-analyzer http://example.com/page.html --timeout 5
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = build_config(Path.cwd(), timeout=timeout)
    except ConfigError as error:
        click.echo(f"Warning: {error}; using default settings", err=True)
        config = apply_overrides(AnalyzerConfig(), connect_timeout=timeout, read_timeout=timeout)

    try:
        document = fetch_document(url, config)
    except FetchError:
        click.echo(URL_CONNECTION_ERROR)
        return

    click.echo(analyze(document))


if __name__ == "__main__":
    cli()
