from __future__ import annotations

import shutil
import subprocess

import pytest

from envcmd import context
from envcmd.errors import ConfigError, ContextError
from envcmd.git_facts.git import NotARepository
from envcmd.model import CommandGroup


def group(kind: str, *targets: str, name: str = "g") -> CommandGroup:
    return CommandGroup(name=name, context=kind, targets=list(targets), commands=["true"])


def test_directory_match_uses_base_name(project_dir):
    assert context.directory_match("project") is True
    assert context.directory_match("other") is False
    assert context.directory_match(str(project_dir)) is False


def test_directory_group_matches_any_target(project_dir, console):
    assert context.match(group("directory", "project")) is True
    assert context.match(group("directory", "nope", "project")) is True
    assert context.match(group("directory", "nope")) is False


@pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
def test_branch_match_outside_repository_is_false(project_dir, console, capsys):
    assert context.branch_match("main") is False
    assert "no git in current directory" in capsys.readouterr().out


def test_branch_match_not_a_repository_is_a_warning(monkeypatch, console, capsys):
    def not_a_repo():
        raise NotARepository("fatal: not a git repository")

    monkeypatch.setattr(context, "current_branch", not_a_repo)
    assert context.branch_match("main") is False
    assert "W. no git in current directory" in capsys.readouterr().out


def test_branch_match_in_repository(git_repo, console):
    assert context.branch_match("feature") is True
    assert context.branch_match("main") is False


def test_branch_match_other_git_failure_is_fatal(monkeypatch, console):
    def broken():
        raise subprocess.CalledProcessError(1, ["git"], stderr="boom")

    monkeypatch.setattr(context, "current_branch", broken)
    with pytest.raises(ContextError, match="exit status 1: boom"):
        context.branch_match("main")


def test_branch_match_missing_git_is_fatal(monkeypatch, console):
    def missing():
        raise FileNotFoundError("git")

    monkeypatch.setattr(context, "current_branch", missing)
    with pytest.raises(ContextError, match="git command not found"):
        context.branch_match("main")


@pytest.mark.parametrize("targets", [(), ("project",), ("project", "main", "extra")])
def test_both_requires_exactly_two_targets(monkeypatch, targets):
    def must_not_run(_target):
        raise AssertionError("matched before validating targets")

    monkeypatch.setattr(context, "directory_match", must_not_run)
    monkeypatch.setattr(context, "branch_match", must_not_run)

    with pytest.raises(ConfigError, match="'both' context should be 2 in length.*-> web"):
        context.match(group("both", *targets, name="web"))


def test_both_needs_directory_and_branch(monkeypatch):
    monkeypatch.setattr(context, "directory_match", lambda t: t == "project")
    monkeypatch.setattr(context, "branch_match", lambda t: t == "main")

    assert context.match(group("both", "project", "main")) is True
    assert context.match(group("both", "project", "dev")) is False
    assert context.match(group("both", "other", "main")) is False


def test_both_against_real_repository(git_repo, console):
    assert context.match(group("both", "project", "feature")) is True
    assert context.match(group("both", "project", "main")) is False


def test_unknown_kind_is_skipped_with_warning(console, capsys):
    assert context.match(group("hostname", "laptop", name="web")) is False
    assert "unknown context 'hostname' in web" in capsys.readouterr().out


def test_group_without_targets_is_a_config_error():
    with pytest.raises(ConfigError, match="at least one target"):
        context.match(group("directory"))
