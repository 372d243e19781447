"""Shared test fixtures for git-fad tests."""

import subprocess
from pathlib import Path

import pytest

from git_fad.utils import NORMAL, set_verbosity


def git(repo: Path, *args: str) -> str:
    """Run a git command in `repo` and return its stdout."""
    result = subprocess.run(
        ["git", "-c", "commit.gpgsign=false", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def write(repo: Path, relpath: str, content: str = "") -> Path:
    """Create a file (and its parent directories) inside the repo."""
    path = repo / relpath
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def stage_files(repo: Path, *files: str):
    """Stage files for commit."""
    for f in files:
        git(repo, "add", "--all", "--", f)


def commit_all(repo: Path, message: str = "commit"):
    git(repo, "add", "--all")
    git(repo, "commit", "-q", "-m", message)


def staged_paths(repo: Path) -> list[str]:
    """Paths that differ between HEAD (or the empty tree) and the index."""
    return git(repo, "diff", "--cached", "--name-only").splitlines()


def index_paths(repo: Path) -> list[str]:
    return git(repo, "ls-files", "--cached").splitlines()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep user config and environment out of every test.

    Sets up:
    - XDG_CONFIG_HOME pointing at an empty directory
    - GIT_FAD_REPO and GIT_FAD_SCORER unset
    - Verbosity reset to normal afterwards
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("GIT_FAD_REPO", raising=False)
    monkeypatch.delenv("GIT_FAD_SCORER", raising=False)
    yield
    set_verbosity(NORMAL)


@pytest.fixture
def temp_repo(tmp_path, monkeypatch):
    """Create an empty git repository and change into it.

    Returns the resolved repository path.
    """
    repo = tmp_path / "repo"
    repo.mkdir()

    git(repo, "init", "-q")
    git(repo, "config", "user.email", "test@test.com")
    git(repo, "config", "user.name", "Test User")

    monkeypatch.chdir(repo)
    return repo.resolve()


@pytest.fixture
def scenario_repo(temp_repo):
    """Repository whose four files are all untracked.

    Creates:
    - Cargo.toml
    - README.md
    - src/main.rs
    - tests/integration_test.rs
    """
    write(temp_repo, "Cargo.toml", "[package]\n")
    write(temp_repo, "README.md", "# demo\n")
    write(temp_repo, "src/main.rs", "fn main() {}\n")
    write(temp_repo, "tests/integration_test.rs", "#[test]\nfn it() {}\n")
    return temp_repo


@pytest.fixture
def mixed_repo(temp_repo):
    """Repository with one path in each interesting status.

    Creates:
    - README.md (clean)
    - src/main.rs (modified)
    - Cargo.toml (deleted)
    - docs/guide.md (staged, new)
    - lib/util.rs (staged, then edited again)
    - tests/integration_test.rs (untracked)
    - build.log (ignored via .gitignore)

    Returns dict with the repo path.
    """
    write(temp_repo, ".gitignore", "*.log\n")
    write(temp_repo, "README.md", "# demo\n")
    write(temp_repo, "src/main.rs", "fn main() {}\n")
    write(temp_repo, "Cargo.toml", "[package]\n")
    write(temp_repo, "lib/util.rs", "pub fn util() {}\n")
    commit_all(temp_repo, "initial")

    write(temp_repo, "src/main.rs", "fn main() { println!(); }\n")
    (temp_repo / "Cargo.toml").unlink()
    write(temp_repo, "docs/guide.md", "# guide\n")
    stage_files(temp_repo, "docs/guide.md")
    write(temp_repo, "lib/util.rs", "pub fn util() { 1; }\n")
    stage_files(temp_repo, "lib/util.rs")
    write(temp_repo, "lib/util.rs", "pub fn util() { 1 + 2; }\n")
    write(temp_repo, "tests/integration_test.rs", "#[test]\nfn it() {}\n")
    write(temp_repo, "build.log", "noise\n")

    return {"repo": temp_repo}
