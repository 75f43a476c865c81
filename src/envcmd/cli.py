# cli.py
from __future__ import annotations

import sys
from pathlib import Path

import click

from envcmd import __version__
from envcmd.config import CONFIG_ENV_VAR, ConfigStore
from envcmd.errors import EnvcmdError
from envcmd.runner import exit_code, run_groups
from envcmd.ui.console import Console, get_console, set_console


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="envcmd")
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show debug messages and stack traces)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar=CONFIG_ENV_VAR,
    default=None,
    help="Config file path (defaults to ~/.envcmd/config.json)",
)
@click.option("--color/--no-color", default=None, help="Force coloured output on or off")
@click.pass_context
def cli(ctx, debug, config_path, color):
    """envcmd — run shell commands for the directory or git branch you are in.

    Without a subcommand, behaves like `envcmd run`.
    """
    console = Console(debug=debug, color=color)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["store"] = ConfigStore(config_path)

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
@click.option(
    "--fail-fast/--no-fail-fast",
    default=True,
    show_default=True,
    help="Stop evaluating groups after the first group with a failing command",
)
@click.pass_context
def run(ctx, fail_fast):
    """Run every group whose context matches the current environment."""
    console = get_console()
    store: ConfigStore = ctx.obj["store"]

    try:
        groups = store.read()
        console.print_debug(f"loaded {len(groups)} group(s) from {store.path}")
        results = run_groups(groups, console=console, fail_fast=fail_fast)
    except KeyboardInterrupt:
        console.print_info("interrupted by user")
        sys.exit(130)
    except EnvcmdError as e:
        console.print_exception(e)
        sys.exit(1)

    if exit_code(results) != 0:
        sys.exit(1)


@cli.command()
@click.pass_context
def create(ctx):
    """Create a sample configuration file."""
    console = get_console()
    store: ConfigStore = ctx.obj["store"]

    try:
        path = store.create()
        groups = store.read()
    except EnvcmdError as e:
        console.print_exception(e)
        sys.exit(1)

    console.print_info(f"created -> {path}")
    for group in groups:
        console.print_group(group)


@cli.command()
@click.option("--yes", "-y", is_flag=True, default=False, help="Do not ask for confirmation")
@click.pass_context
def delete(ctx, yes):
    """Delete the configuration file."""
    console = get_console()
    store: ConfigStore = ctx.obj["store"]

    if not store.exists():
        console.print_error(f"no config found -> {store.path}")
        sys.exit(1)

    if not yes and not click.confirm(f"delete {store.path}?", default=False):
        console.print_info("kept")
        return

    try:
        store.delete()
    except EnvcmdError as e:
        console.print_exception(e)
        sys.exit(1)

    console.print_info(f"deleted -> {store.path}")


@cli.command()
@click.pass_context
def show(ctx):
    """Show the configured groups."""
    console = get_console()
    store: ConfigStore = ctx.obj["store"]

    try:
        groups = store.read()
    except EnvcmdError as e:
        console.print_exception(e)
        sys.exit(1)

    for group in groups:
        console.print_group(group)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
