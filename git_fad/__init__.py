"""git-fad: stage one file by fuzzy-matching its path."""

__version__ = "0.1.0"
