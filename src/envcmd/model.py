# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import click
from pydantic import BaseModel, ConfigDict, Field


class ContextKind(str, Enum):
    """The environment check that gates a command group."""
    DIRECTORY = "directory"
    BRANCH = "branch"
    BOTH = "both"


class CommandGroup(BaseModel):
    """
    A named, context-gated set of shell commands.

    Parsed straight from the config file. The JSON key `async` is a Python
    keyword, so it is exposed as `is_async`.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    context: str
    targets: list[str] = Field(default_factory=list)
    commands: list[str] = Field(default_factory=list)
    is_async: bool = Field(default=False, alias="async")

    @property
    def kind(self) -> Optional[ContextKind]:
        # unknown kinds stay loadable so the matcher can skip them
        try:
            return ContextKind(self.context)
        except ValueError:
            return None


@dataclass(frozen=True)
class Job:
    """One spawned subprocess for a single command string in a group."""
    index: int
    command: str
    colour: str | None = None


@dataclass(frozen=True)
class OutputLine:
    job: Job
    text: str
    stream: str = "stdout"

    def render(self) -> str:
        if self.job.colour is None:
            return self.text
        tag = click.style(str(self.job.index), fg=self.job.colour, bold=True)
        return f"{tag} {self.text}"


@dataclass
class JobOutcome:
    """How a Job ended: an exit code, or the error that stopped it starting."""
    job: Job
    returncode: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.returncode == 0

    def describe(self) -> str:
        if self.error is not None:
            return self.error
        return f"exited with status {self.returncode}"


@dataclass
class GroupResult:
    group: CommandGroup
    matched: bool
    outcomes: list[JobOutcome] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(o.ok for o in self.outcomes)

    @property
    def failed(self) -> list[JobOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def status(self) -> str:
        if not self.matched:
            return "skipped"
        return "ok" if self.ok else "failed"
