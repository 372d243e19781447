"""Allow ``python -m git_fad``."""

from .cli import main

main(prog_name="git-fad")
