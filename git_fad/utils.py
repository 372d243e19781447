"""Console output helpers shared by the CLI and the core."""

import click

QUIET = 0
NORMAL = 1
VERBOSE = 2
DEBUG = 3

_verbosity = NORMAL


def set_verbosity(level: int) -> None:
    """Set the process-wide verbosity (clamped to QUIET..DEBUG)."""
    global _verbosity
    _verbosity = max(QUIET, min(DEBUG, level))


def log_info(message: str) -> None:
    if _verbosity >= NORMAL:
        click.echo(message)


def log_verbose(message: str) -> None:
    if _verbosity >= VERBOSE:
        click.echo(message)


def log_debug(message: str) -> None:
    if _verbosity >= DEBUG:
        click.echo(click.style(message, dim=True), err=True)


def highlight(text: str, positions) -> str:
    """Return text with the characters at `positions` styled bold."""
    marked = set(positions)
    return "".join(
        click.style(ch, fg="yellow", bold=True) if i in marked else ch
        for i, ch in enumerate(text)
    )
