"""git-fad command line: stage the file that best matches a fuzzy query."""

from pathlib import Path

import click

from . import __version__
from .completions import complete_query
from .config import get_default_verbosity, get_repo_path, get_scorer_name, load_config
from .errors import RepositoryError, StageError
from .repo import collect_candidates, open_repository, repository_root, stage_path
from .search import Best, get_scorer, rank_tokens
from .utils import (
    NORMAL,
    QUIET,
    highlight,
    log_info,
    log_verbose,
    set_verbosity,
)

EXIT_STAGE_FAILED = 1
EXIT_NO_REPOSITORY = 3
EXIT_NO_CANDIDATES = 4
EXIT_NO_MATCH = 5

EXAMPLES = """\
Examples:
  git-fad cargo
  git-fad src main rs
  git fad integ
"""


class NoRepositoryError(click.ClickException):
    exit_code = EXIT_NO_REPOSITORY


class StageFailedError(click.ClickException):
    exit_code = EXIT_STAGE_FAILED


def _configure_verbosity(config: dict, verbose: int, quiet: bool) -> None:
    if quiet:
        set_verbosity(QUIET)
        return
    base = get_default_verbosity(config)
    set_verbosity((NORMAL if base is None else base) + verbose)


@click.command(epilog=EXAMPLES, context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("query", nargs=-1, shell_complete=complete_query)
@click.option("--verbose", "-v", count=True, help="Show candidates (-vv: also scores)")
@click.option("--quiet", "-q", is_flag=True, help="Only report errors")
@click.option("--explain", "-e", is_flag=True, help="Highlight matched characters of the best match")
@click.version_option(__version__, prog_name="git-fad")
@click.pass_context
def main(ctx, query: tuple, verbose: int, quiet: bool, explain: bool):
    """Stage the unstaged or untracked file whose path best matches QUERY.

    Each QUERY token is matched as a case-insensitive fuzzy subsequence
    of the file path. With several tokens a file must match all of them.
    """
    if not query:
        raise click.UsageError(f"Missing QUERY.\n\n{EXAMPLES}", ctx=ctx)

    config = load_config()
    _configure_verbosity(config, verbose, quiet)

    try:
        scorer = get_scorer(get_scorer_name(config))
    except ValueError as e:
        raise click.UsageError(str(e), ctx=ctx)

    start = get_repo_path()
    try:
        root = repository_root(open_repository(start))
        candidates = collect_candidates(root)
    except RepositoryError as e:
        raise NoRepositoryError(str(e))

    if not candidates:
        log_info(f"No unstaged or untracked files found in repository {root}")
        ctx.exit(EXIT_NO_CANDIDATES)

    log_verbose(click.style(f"{len(candidates)} candidate(s) in {root}:", bold=True))
    for candidate in candidates:
        log_verbose(f"  {candidate.status.value:<12} {candidate.path}")

    result = rank_tokens(list(query), candidates, scorer)
    if not isinstance(result, Best):
        log_info(f"No matches for query: {result.query}")
        ctx.exit(EXIT_NO_MATCH)

    log_info(f"Best match: {result.path} (score={result.score})")
    if explain:
        log_info(f"  {highlight(result.path, result.scored.positions)}")

    try:
        stage_path(root, Path(result.path))
    except StageError as e:
        raise StageFailedError(str(e))
    except RepositoryError as e:
        raise NoRepositoryError(str(e))

    log_info(click.style(f"Staged {result.path}", fg="green"))


if __name__ == "__main__":
    main()
