"""Exceptions raised by the git-fad core."""

from pathlib import Path


class GitFadError(Exception):
    """Base class for git-fad failures."""


class RepositoryError(GitFadError):
    """The start path is not inside a usable git working tree."""

    def __init__(self, path: Path, reason: str = "not a git repository"):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{reason}: {self.path}")


class StageError(GitFadError):
    """Adding a path to the index failed.

    The libgit2 or OS error is kept as ``__cause__``.
    """

    def __init__(self, path: Path, repo_root: Path, detail: str):
        self.path = Path(path)
        self.repo_root = Path(repo_root)
        self.detail = detail
        super().__init__(f"staging {self.path} in repo {self.repo_root}: {detail}")
