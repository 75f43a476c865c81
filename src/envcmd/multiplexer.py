# multiplexer.py
from __future__ import annotations

import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from .errors import OutputError
from .model import CommandGroup, Job, JobOutcome
from .process import run_command
from .ui.console import Console, get_console
from .ui.palette import ColourAllocator, Palette

# Put on the channel once every producer is done; ends the consumer loop.
_CLOSED = object()


def run_sync(
    group: CommandGroup,
    *,
    console: Optional[Console] = None,
    fail_fast: bool = True,
) -> List[JobOutcome]:
    """
    Run the group's commands one after another on the calling thread.

    Output is printed unprefixed. With fail_fast, commands after the first
    failing one are not started.
    """
    console = console or get_console()
    outcomes: List[JobOutcome] = []

    for index, command in enumerate(group.commands):
        outcome = run_command(Job(index=index, command=command), console.print_line)
        outcomes.append(outcome)
        if fail_fast and not outcome.ok:
            break

    return outcomes


def run_async(
    group: CommandGroup,
    *,
    console: Optional[Console] = None,
    palette: Optional[Palette] = None,
) -> List[JobOutcome]:
    """
    Run every command of the group at once and merge their output.

    - one producer per command (pool sized to the command count)
    - one consumer thread, the only writer of job lines, draining in arrival order
    - a single-slot channel between them, so at most one line waits at a time

    A failing Job does not stop its siblings. Returns outcomes in command order,
    after every process has exited and every line has been printed. If printing
    fails, the rest of the output is discarded, every Job still runs to
    completion, and OutputError is raised once the group has drained.
    """
    console = console or get_console()
    allocator = ColourAllocator(palette)
    channel: queue.Queue = queue.Queue(maxsize=1)
    failures: List[Exception] = []

    def consume() -> None:
        while True:
            line = channel.get()
            if line is _CLOSED:
                return
            if failures:
                # output is broken; keep draining so producers never block
                continue
            try:
                console.print_line(line)
            except Exception as e:
                failures.append(e)

    consumer = threading.Thread(target=consume, name=f"envcmd-{group.name}-output", daemon=True)
    consumer.start()

    # colours are drawn here, in index order, so Job i always gets colour_for(i)
    jobs = [
        Job(index=index, command=command, colour=allocator.next())
        for index, command in enumerate(group.commands)
    ]

    try:
        with ThreadPoolExecutor(
            max_workers=max(1, len(jobs)),
            thread_name_prefix=f"envcmd-{group.name}",
        ) as pool:
            futures = [pool.submit(run_command, job, channel.put) for job in jobs]
            outcomes = [f.result() for f in futures]
    finally:
        # producers are all finished here; close the channel and let the consumer drain
        channel.put(_CLOSED)
        consumer.join()

    if failures:
        raise OutputError(f"writing output of {group.name} -> {failures[0]!r}") from failures[0]
    return outcomes
