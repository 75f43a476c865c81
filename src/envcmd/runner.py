# runner.py
from __future__ import annotations

from typing import Iterable, List, Optional

from . import context
from .model import CommandGroup, GroupResult
from .multiplexer import run_async, run_sync
from .ui.console import Console, get_console
from .ui.palette import Palette


# ----------------------------------------------------------------------
# Single group
# ----------------------------------------------------------------------

def run_group(
    group: CommandGroup,
    *,
    console: Console,
    palette: Palette,
    fail_fast: bool = True,
) -> GroupResult:
    """
    Match one group against the environment and, on a match, run it.

    ConfigError / ContextError from the matcher propagate: they end the run.
    """
    if not context.match(group):
        console.print_group_skipped(group)
        return GroupResult(group=group, matched=False)

    console.print_group_matched(group)
    console.print_debug(
        f"{group.name}: {len(group.commands)} command(s), {'async' if group.is_async else 'sync'}"
    )

    if group.is_async:
        outcomes = run_async(group, console=console, palette=palette)
    else:
        outcomes = run_sync(group, console=console, fail_fast=fail_fast)

    result = GroupResult(group=group, matched=True, outcomes=outcomes)
    for outcome in result.failed:
        console.print_job_failure(group, outcome)
    return result


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def run_groups(
    groups: Iterable[CommandGroup],
    *,
    console: Optional[Console] = None,
    palette: Optional[Palette] = None,
    fail_fast: bool = True,
) -> List[GroupResult]:
    """
    Evaluate groups strictly in order, one at a time.

    A non-matching group is skipped and never stops the run. With fail_fast,
    the first group with a failed Job ends the run once all of its Jobs have
    finished; later groups are not evaluated.
    """
    console = console or get_console()
    palette = palette or Palette()
    results: List[GroupResult] = []

    for group in groups:
        result = run_group(group, console=console, palette=palette, fail_fast=fail_fast)
        results.append(result)

        if fail_fast and not result.ok:
            console.print_error(f"stopping after failure in {group.name}")
            break

    return results


def exit_code(results: Iterable[GroupResult]) -> int:
    return 0 if all(r.ok for r in results) else 1
