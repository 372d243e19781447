"""Working-tree status and staging backed by pygit2.

Every call opens the repository afresh; nothing is cached between runs.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import pygit2
from pygit2.enums import FileStatus

from .errors import RepositoryError, StageError
from .utils import log_debug


class Status(str, Enum):
    """Single status tag for a working-tree path."""

    UNTRACKED = "untracked"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"
    TYPE_CHANGED = "type-changed"
    STAGED = "staged"
    IGNORED = "ignored"
    CLEAN = "clean"
    CONFLICTED = "conflicted"


STAGEABLE_STATUSES = frozenset({
    Status.UNTRACKED,
    Status.MODIFIED,
    Status.DELETED,
    Status.RENAMED,
    Status.TYPE_CHANGED,
})

# Checked in order; the first work-tree flag present decides the tag.
_WORKTREE_FLAGS = (
    (FileStatus.WT_NEW, Status.UNTRACKED),
    (FileStatus.WT_DELETED, Status.DELETED),
    (FileStatus.WT_RENAMED, Status.RENAMED),
    (FileStatus.WT_TYPECHANGE, Status.TYPE_CHANGED),
    (FileStatus.WT_MODIFIED, Status.MODIFIED),
)

_INDEX_FLAGS = (
    FileStatus.INDEX_NEW
    | FileStatus.INDEX_MODIFIED
    | FileStatus.INDEX_DELETED
    | FileStatus.INDEX_RENAMED
    | FileStatus.INDEX_TYPECHANGE
)


@dataclass(frozen=True)
class WorkingTreeEntry:
    """A repository-relative path and its status tag."""

    path: str
    status: Status

    @property
    def stageable(self) -> bool:
        return self.status in STAGEABLE_STATUSES


@dataclass(frozen=True)
class Candidate(WorkingTreeEntry):
    """A working-tree entry that can be staged."""

    def __post_init__(self):
        if self.status not in STAGEABLE_STATUSES:
            raise ValueError(f"{self.path} is {self.status.value}, not stageable")

    @classmethod
    def from_entry(cls, entry: WorkingTreeEntry) -> "Candidate":
        return cls(path=entry.path, status=entry.status)


def classify(flags: int) -> Status:
    """Map libgit2 status flags to a single Status tag.

    Work-tree changes take precedence over index changes, so a file that is
    staged and then edited again is still a candidate.
    """
    flags = FileStatus(flags)
    for flag, status in _WORKTREE_FLAGS:
        if flags & flag:
            return status
    if flags & FileStatus.CONFLICTED:
        return Status.CONFLICTED
    if flags & _INDEX_FLAGS:
        return Status.STAGED
    if flags & FileStatus.IGNORED:
        return Status.IGNORED
    return Status.CLEAN


def open_repository(path: Path) -> pygit2.Repository:
    """Open the non-bare repository enclosing `path`.

    Discovery walks up parent directories the way ``git`` itself does.

    Raises:
        RepositoryError: path is missing, not in a repository, or bare
    """
    path = Path(path)
    if not path.is_dir():
        raise RepositoryError(path, "no such directory")

    try:
        git_dir = pygit2.discover_repository(str(path))
    except (KeyError, ValueError, pygit2.GitError) as e:
        raise RepositoryError(path) from e
    if git_dir is None:
        raise RepositoryError(path)

    try:
        repo = pygit2.Repository(git_dir)
    except pygit2.GitError as e:
        raise RepositoryError(path, f"cannot open repository ({e})") from e

    if repo.is_bare or not repo.workdir:
        raise RepositoryError(path, "bare repository has no working tree")
    return repo


def repository_root(repo: pygit2.Repository) -> Path:
    """Work tree root of an opened repository."""
    return Path(repo.workdir).resolve()


def status_entries(repo: pygit2.Repository) -> Iterator[WorkingTreeEntry]:
    """Yield one entry per path in status order.

    Untracked directories are expanded to their files. Ignored paths are
    reported (and later filtered) rather than hidden.
    """
    try:
        statuses = repo.status(untracked_files="all", ignored=True)
    except pygit2.GitError as e:
        raise RepositoryError(Path(repo.workdir), f"cannot read status ({e})") from e

    for path, flags in statuses.items():
        yield WorkingTreeEntry(path=path, status=classify(flags))


def collect_candidates(repo_root: Path) -> list[Candidate]:
    """Return the stageable entries of the repository at `repo_root`.

    An empty list means there is nothing to stage; it is not an error.
    """
    repo = open_repository(repo_root)
    candidates = []
    for entry in status_entries(repo):
        if entry.stageable:
            candidates.append(Candidate.from_entry(entry))
        else:
            log_debug(f"skip {entry.path} ({entry.status.value})")
    return candidates


def _relative_to_repo(path: Path, root: Path) -> Path:
    if not path.is_absolute():
        return path
    try:
        return path.resolve().relative_to(root)
    except ValueError:
        raise ValueError(f"path {path} is not inside repository {root}") from None


def stage_path(repo_root: Path, path: Path) -> Path:
    """Add one path to the index and write the index back.

    A path whose file is gone from the work tree is staged as a removal.
    Returns the repository-relative path that was staged.

    Raises:
        RepositoryError: repo_root is not a usable repository
        StageError: the index could not be updated or written
    """
    repo = open_repository(repo_root)
    root = repository_root(repo)

    try:
        rel = _relative_to_repo(Path(path), root)
    except ValueError as e:
        raise StageError(Path(path), root, str(e)) from e

    index_path = rel.as_posix()
    try:
        index = repo.index
        if (root / rel).exists() or (root / rel).is_symlink():
            index.add(index_path)
        else:
            index.remove(index_path)
        index.write()
    except (pygit2.GitError, OSError, KeyError, ValueError) as e:
        raise StageError(rel, root, str(e)) from e

    log_debug(f"wrote index for {root}")
    return rel
