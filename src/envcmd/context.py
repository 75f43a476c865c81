# context.py
from __future__ import annotations

import os
import subprocess
from pathlib import Path

from .errors import ConfigError, ContextError
from .git_facts.git import NotARepository, current_branch
from .model import CommandGroup, ContextKind
from .ui.console import get_console


def directory_match(target: str) -> bool:
    """True iff the base name of the current working directory is `target`."""
    try:
        cwd = os.getcwd()
    except OSError as e:
        raise ContextError(f"reading current directory -> {e}") from e
    return Path(cwd).name == target


def branch_match(target: str) -> bool:
    """
    True iff the checked out git branch is `target`.

    Outside a repository this is a plain non-match (with a warning); any other
    failure to ask git is fatal.
    """
    try:
        branch = current_branch()
    except NotARepository:
        get_console().print_warning("no git in current directory")
        return False
    except FileNotFoundError as e:
        raise ContextError("reading git branch -> git command not found") from e
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise ContextError(
            f"reading git branch -> exit status {e.returncode}" + (f": {stderr}" if stderr else "")
        ) from e
    return branch == target


def _require_targets(group: CommandGroup) -> None:
    if not group.targets:
        raise ConfigError(f"the '{group.context}' context needs at least one target -> {group.name}")


def match(group: CommandGroup) -> bool:
    """Decide whether the current environment activates `group`."""
    kind = group.kind

    if kind is ContextKind.DIRECTORY:
        _require_targets(group)
        return any(directory_match(t) for t in group.targets)

    if kind is ContextKind.BRANCH:
        _require_targets(group)
        return any(branch_match(t) for t in group.targets)

    if kind is ContextKind.BOTH:
        if len(group.targets) != 2:
            raise ConfigError(
                f"the 'both' context should be 2 in length, got {len(group.targets)} -> {group.name}"
            )
        directory, branch = group.targets
        return directory_match(directory) and branch_match(branch)

    get_console().print_warning(f"unknown context '{group.context}' in {group.name}")
    return False
