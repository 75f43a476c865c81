"""Console output formatting utilities for envcmd."""

from __future__ import annotations

import threading
from typing import Optional

import click

from ..model import CommandGroup, JobOutcome, OutputLine

DEBUG = "D"
INFO = "I"
WARN = "W"
ERROR = "E"

LEVEL_COLOURS = {
    DEBUG: "blue",
    INFO: "green",
    WARN: "yellow",
    ERROR: "red",
}


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False, color: Optional[bool] = None):
        """
        Initialize console formatter.

        Args:
            debug: If True, show debug messages and stack traces
            color: Force ANSI styling on/off; None lets click decide per stream
        """
        self.debug = debug
        self.color = color
        # job lines and log lines share stdout; one writer at a time
        self._lock = threading.Lock()

    def _write(self, text: str) -> None:
        with self._lock:
            click.echo(text, color=self.color)

    def log(self, level: str, message: str) -> None:
        """Print a message behind a bold, severity-coloured `X.` prefix."""
        prefix = click.style(f"{level}.", fg=LEVEL_COLOURS.get(level), bold=True)
        self._write(f"{prefix} {message}")

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            self.log(DEBUG, message)

    def print_info(self, message: str) -> None:
        self.log(INFO, message)

    def print_warning(self, message: str) -> None:
        self.log(WARN, message)

    def print_error(self, message: str) -> None:
        self.log(ERROR, message)

    def print_exception(self, exc: BaseException) -> None:
        """Print exception, with full traceback only in debug mode."""
        self.print_error(str(exc))
        if self.debug:
            import traceback

            with self._lock:
                traceback.print_exception(type(exc), exc, exc.__traceback__)

    def print_line(self, line: OutputLine) -> None:
        """Print one captured line of command output."""
        self._write(line.render())

    def print_group_matched(self, group: CommandGroup) -> None:
        self.print_info(f"matched with {click.style(group.name, bold=True)}")

    def print_group_skipped(self, group: CommandGroup) -> None:
        self.print_warning(f"no match for {click.style(group.name, bold=True)}")

    def print_job_failure(self, group: CommandGroup, outcome: JobOutcome) -> None:
        """
        Print failure message for one Job.

        Args:
            group: The group the Job belongs to
            outcome: The failed outcome (non-zero exit or spawn error)
        """
        job = outcome.job
        self.print_error(
            f"{group.name}[{job.index}] {click.style(job.command, bold=True)} "
            f"-> {outcome.describe()}"
        )

    def print_group(self, group: CommandGroup) -> None:
        """Print one configured group, as shown by `envcmd show`."""
        self._write("")
        self.print_info(f"Name     {click.style(group.name, bold=True)}")
        self.print_info(f"Context  {click.style(group.context, bold=True)}")
        self.print_info(f"Targets  {click.style(', '.join(group.targets), bold=True)}")
        self.print_info(f"Async    {click.style(str(group.is_async).lower(), bold=True)}")
        self._write("")
        for cmd in group.commands:
            self._write(f">> {click.style(cmd, bold=True)}")


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
