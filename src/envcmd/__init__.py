__version__ = "0.1.0"

from .config import ConfigStore
from .context import match
from .model import CommandGroup, ContextKind, GroupResult, Job, JobOutcome, OutputLine
from .runner import run_groups

__all__ = [
    "CommandGroup",
    "ConfigStore",
    "ContextKind",
    "GroupResult",
    "Job",
    "JobOutcome",
    "OutputLine",
    "match",
    "run_groups",
]
