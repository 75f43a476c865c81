# errors.py
from __future__ import annotations


class EnvcmdError(Exception):
    """Base class for errors that end an envcmd run."""


class ConfigError(EnvcmdError):
    """The config file is missing, unreadable, or describes an invalid group."""


class ContextError(EnvcmdError):
    """The current environment (cwd, git branch) could not be read."""


class OutputError(EnvcmdError):
    """Captured command output could not be written (e.g. stdout was closed)."""
