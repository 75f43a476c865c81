"""Shared test fixtures."""

from __future__ import annotations

import shutil
import subprocess

import pytest

from envcmd.ui.console import Console, set_console


@pytest.fixture()
def console():
    """A plain (uncoloured) console installed as the global one."""
    c = Console(debug=True, color=False)
    set_console(c)
    yield c
    set_console(Console())


@pytest.fixture()
def project_dir(tmp_path, monkeypatch):
    """cwd is a fresh directory named `project`, outside any git repository."""
    path = tmp_path / "project"
    path.mkdir()
    monkeypatch.chdir(path)
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    return path


def _git(*args: str, cwd) -> None:
    subprocess.run(
        [
            "git",
            "-c", "user.name=envcmd",
            "-c", "user.email=envcmd@example.invalid",
            "-c", "commit.gpgsign=false",
            *args,
        ],
        cwd=cwd,
        check=True,
        capture_output=True,
    )


@pytest.fixture()
def git_repo(project_dir):
    """`project_dir` turned into a git repository with `feature` checked out."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    _git("init", "-q", cwd=project_dir)
    _git("checkout", "-q", "-b", "feature", cwd=project_dir)
    _git("commit", "-q", "--allow-empty", "-m", "init", cwd=project_dir)
    return project_dir
