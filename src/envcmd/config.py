# config.py
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from .errors import ConfigError
from .model import CommandGroup

CONFIG_ENV_VAR = "ENVCMD_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.envcmd/config.json")

_GROUPS = TypeAdapter(List[CommandGroup])

SAMPLE_GROUPS = [
    CommandGroup(
        name="foo",
        context="directory",
        targets=["bar"],
        commands=["echo 'Hello, bar!'"],
        is_async=True,
    ),
]


def default_config_path() -> Path:
    """$ENVCMD_CONFIG if set, else ~/.envcmd/config.json."""
    return Path(os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH).expanduser()


class ConfigStore:
    """The JSON file listing every command group, in evaluation order."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path).expanduser() if path is not None else default_config_path()

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> List[CommandGroup]:
        if not self.exists():
            raise ConfigError(f"no config found -> {self.path}")

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(f"decoding JSON -> {self.path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"opening file -> {self.path}: {e}") from e

        try:
            return _GROUPS.validate_python(raw)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ConfigError(f"invalid config -> {self.path}: {problems}") from e

    def write(self, groups: List[CommandGroup]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = _GROUPS.dump_python(groups, by_alias=True, mode="json")
        self.path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")

    def create(self, groups: Optional[List[CommandGroup]] = None) -> Path:
        """Write a sample config. Refuses to overwrite an existing one."""
        if self.exists():
            raise ConfigError(f"already exists -> {self.path}")
        try:
            self.write(groups if groups is not None else SAMPLE_GROUPS)
        except OSError as e:
            raise ConfigError(f"creating file -> {self.path}: {e}") from e
        return self.path

    def delete(self) -> None:
        """Remove the config file, and its .envcmd directory once that is empty."""
        if not self.exists():
            raise ConfigError(f"no config found -> {self.path}")
        try:
            self.path.unlink()
        except OSError as e:
            raise ConfigError(f"removing file -> {self.path}: {e}") from e

        parent = self.path.parent
        if parent.name == DEFAULT_CONFIG_PATH.parent.name and not any(parent.iterdir()):
            parent.rmdir()
