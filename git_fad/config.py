"""User configuration and repository path resolution."""

import os
from pathlib import Path

import yaml

DEFAULT_SCORER = "subsequence"


def get_config_dir() -> Path:
    """Config directory, honouring XDG_CONFIG_HOME."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "git-fad"


def get_config_file() -> Path:
    return get_config_dir() / "config.yaml"


def load_config() -> dict:
    """Load config from $XDG_CONFIG_HOME/git-fad/config.yaml."""
    config_file = get_config_file()
    if not config_file.exists():
        return {}
    try:
        config = yaml.safe_load(config_file.read_text())
    except yaml.YAMLError:
        return {}
    return config if isinstance(config, dict) else {}


def save_config(config: dict) -> None:
    """Save config to $XDG_CONFIG_HOME/git-fad/config.yaml."""
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    get_config_file().write_text(yaml.dump(config, default_flow_style=False))


def get_repo_path() -> Path:
    """Get the path repository discovery starts from.

    Priority:
    1. GIT_FAD_REPO environment variable
    2. Current directory
    """
    env_repo = os.environ.get("GIT_FAD_REPO")
    if env_repo:
        return Path(env_repo)
    return Path.cwd()


def get_scorer_name(config: dict | None = None) -> str:
    """Get the scoring engine name.

    Priority:
    1. GIT_FAD_SCORER environment variable
    2. ``scorer`` key in the config file
    3. DEFAULT_SCORER
    """
    env_scorer = os.environ.get("GIT_FAD_SCORER")
    if env_scorer:
        return env_scorer.strip().lower()

    config = load_config() if config is None else config
    if config.get("scorer"):
        return str(config["scorer"]).strip().lower()

    return DEFAULT_SCORER


def get_default_verbosity(config: dict | None = None) -> int | None:
    """Verbosity level from the config file, or None when unset or invalid."""
    config = load_config() if config is None else config
    value = config.get("verbosity")
    if isinstance(value, bool):
        return None
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None
