"""Shell completion functions for git-fad."""

from click.shell_completion import CompletionItem

from .config import get_repo_path, get_scorer_name
from .errors import GitFadError
from .repo import collect_candidates
from .search import get_scorer
from .search.ranking import score_candidates


def complete_query(ctx, param, incomplete: str) -> list:
    """Shell completion for the query: stageable paths, best matches first.

    Completion must never fail loudly, so outside a repository (or with a
    bad scorer name) there are simply no suggestions.
    """
    try:
        candidates = collect_candidates(get_repo_path())
        scorer = get_scorer(get_scorer_name())
    except (GitFadError, ValueError):
        return []

    scored = list(score_candidates(incomplete, candidates, scorer))
    # sorted() is stable, so equal scores keep status order
    scored.sort(key=lambda sc: sc.score, reverse=True)
    return [
        CompletionItem(sc.path, help=sc.candidate.status.value)
        for sc in scored
    ]
