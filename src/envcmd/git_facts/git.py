# git.py
# Small, focused wrapper around the Git CLI.
# The context matcher asks this module for branch facts so that nothing
# else in envcmd calls subprocess("git ...") directly.

from __future__ import annotations

import subprocess
from typing import Optional

# `git` exits with 128 for "fatal" errors, including "not a git repository".
NOT_A_REPOSITORY = 128


class NotARepository(Exception):
    """Raised when the working directory is not inside a Git repository."""


def _git(args: list[str], cwd: Optional[str] = None) -> str:
    """
    Execute a git command and return its stdout as a clean string.

    This is the single low-level entry point for all Git operations in this file.

    Args:
        args: List of git arguments (e.g. ["rev-parse", "HEAD"])
        cwd: Optional working directory in which to run the git command.

    Returns:
        Stdout from the git command with surrounding whitespace removed.

    Raises:
        NotARepository: git exited with status 128.
        subprocess.CalledProcessError: any other non-zero exit.
        FileNotFoundError: git is not installed / not on PATH.
    """
    try:
        out = subprocess.check_output(
            ["git", *args],
            cwd=cwd,
            text=True,
            stderr=subprocess.PIPE,  # keep git's "fatal: ..." off the user's terminal
        )
    except subprocess.CalledProcessError as e:
        if e.returncode == NOT_A_REPOSITORY:
            raise NotARepository((e.stderr or "").strip()) from e
        raise

    # Strip trailing newlines so callers can do clean string comparisons
    return out.strip()


def current_branch(cwd: Optional[str] = None) -> str:
    """
    Return the short name of the currently checked out branch.

    `git rev-parse --abbrev-ref HEAD` prints the branch name, or the literal
    "HEAD" when the checkout is detached.
    """
    return _git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=cwd)
