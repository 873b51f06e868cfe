#!/usr/bin/env python3

"""
Git Tag Generator

Command line for creating, listing and deleting pattern-based git tags.
All tag computation is in pure functions, all I/O is in the I/O layer.
"""

import logging
import os
from typing import Optional

import typer
from git.exc import GitCommandError

from . import __version__
from .config import DEFAULT_LIST_LIMIT, DEFAULT_TAG_ENV
from .environment import TagEnvironmentConfig
from .exceptions import ExhaustedRetriesError, GentagError
from .git_operations import open_repository
from .io_layer import IOLayer, load_config_file, load_environment
from .models import BumpKind
from .plan_builder import prepare_create_plan, prepare_list_plan, prepare_remove_plan
from .plan_executor import create_tag_with_retry, execute_remove_plan
from .tag_sequencer import bump_tag
from .utils import format_tag_line, setup_logging

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="gentag",
    help="Create, list and delete git tags that follow naming patterns.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"gentag {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Show debug logging"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
) -> None:
    setup_logging(logging.DEBUG if debug else logging.WARNING)


def _fail(error: Exception) -> None:
    typer.echo(f"Error: {error}", err=True)
    if isinstance(error, ExhaustedRetriesError):
        typer.echo(
            "Check the tag pattern and version rules, or remove conflicting tags.", err=True
        )
    raise typer.Exit(1)


def _load_config(**cli_overrides) -> TagEnvironmentConfig:
    file_config, source = load_config_file(".")
    env = load_environment(dict(os.environ), ".")
    config = TagEnvironmentConfig.from_sources(file_config, env, cli_overrides, source)

    errors = config.validate()
    if errors:
        for error in errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(1)
    return config


def _open_io_layer(dry_run: bool = False) -> IOLayer:
    return IOLayer(open_repository("."), dry_run)


@app.command("create", help="Create the next tag of a tag environment")
def create(
    tag_env: str = typer.Argument(DEFAULT_TAG_ENV, help="Tag environment (e.g. default, test)"),
    version_type: Optional[BumpKind] = typer.Argument(
        None, help="Version part to bump; the branch policy decides when omitted"
    ),
    message: Optional[str] = typer.Option(None, "--message", "-m", help="Tag message"),
    push: Optional[bool] = typer.Option(None, "--push/--no-push", help="Push the tag after creating it"),
    remote: Optional[str] = typer.Option(None, "--remote", "-r", help="Remote to push to"),
    pattern: Optional[str] = typer.Option(None, "--pattern", help="Tag pattern overriding the environment's"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be done"),
) -> None:
    try:
        config = _load_config(remote=remote)
        io_layer = _open_io_layer(dry_run)
        plan, result = create_tag_with_retry(
            config,
            io_layer,
            tag_env,
            version_type,
            pattern=pattern,
            message=message,
            push=push,
        )
    except (GentagError, GitCommandError) as e:
        _fail(e)

    if plan.latest_tag:
        typer.echo(f"Current tag: {plan.latest_tag}")
    else:
        typer.echo("No matching tag found")
    typer.echo(f"New tag: {plan.new_tag}")

    for change in result.changes_made:
        typer.echo(change)
    for warning in result.warnings:
        typer.echo(f"Warning: {warning}", err=True)
    if not result.success:
        for error in result.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(1)


@app.command("next", help="Show the tag that create would make, without creating it")
def next_command(
    tag_env: str = typer.Argument(DEFAULT_TAG_ENV, help="Tag environment (e.g. default, test)"),
    version_type: Optional[BumpKind] = typer.Argument(
        None, help="Version part to bump; the branch policy decides when omitted"
    ),
    from_tag: Optional[str] = typer.Option(
        None,
        "--from",
        help="Bump this tag in its own scheme instead of reading the repository; "
        "cannot be combined with TAG_ENV or --pattern",
    ),
    prefix: Optional[str] = typer.Option(None, "--prefix", "-p", help="Prefix of the new tag, used with --from"),
    pattern: Optional[str] = typer.Option(None, "--pattern", help="Tag pattern overriding the environment's"),
) -> None:
    if from_tag and (pattern or tag_env != DEFAULT_TAG_ENV):
        typer.echo("Error: --from cannot be combined with a tag environment or --pattern", err=True)
        raise typer.Exit(1)

    try:
        if from_tag:
            new_tag = bump_tag(from_tag, version_type or BumpKind.PATCH, prefix=prefix)
            if new_tag is None:
                typer.echo(f"Error: '{from_tag}' is not a recognised version tag", err=True)
                raise typer.Exit(1)
        else:
            config = _load_config()
            plan = prepare_create_plan(
                config, _open_io_layer(), tag_env, version_type, pattern=pattern
            )
            new_tag = plan.new_tag
    except (GentagError, GitCommandError) as e:
        _fail(e)

    typer.echo(new_tag)


def list_tags(
    number: int = typer.Option(DEFAULT_LIST_LIMIT, "--number", "-n", help="Number of tags to show"),
    pattern: Optional[str] = typer.Option(None, "--pattern", "-p", help="Regular expression to filter tags"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show dates and messages"),
) -> None:
    try:
        plan = prepare_list_plan(_open_io_layer(), number=number, pattern=pattern, verbose=verbose)
    except (GentagError, GitCommandError) as e:
        _fail(e)

    if not plan.tags:
        typer.echo("No tags found")
        return

    typer.echo(f'Tags matching "{pattern}":' if pattern else "Recent tags:")
    for tag in plan.tags:
        typer.echo(format_tag_line(tag, plan.verbose))
    typer.echo(f"\nShowing {len(plan.tags)} of {plan.total} tags")


app.command("list", help="List tags, most recently created first")(list_tags)
app.command("ls", hidden=True)(list_tags)


@app.command("rm", help="Delete a tag locally and from the remote")
def remove(
    tag_name: Optional[str] = typer.Argument(
        None, help="Tag to delete; the most recently created tag when omitted"
    ),
    remote: Optional[str] = typer.Option(None, "--remote", "-r", help="Remote to delete from"),
    local_only: bool = typer.Option(False, "--local-only", help="Keep the tag on the remote"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be done"),
) -> None:
    try:
        config = _load_config(remote=remote)
        io_layer = _open_io_layer(dry_run)
        plan = prepare_remove_plan(config, io_layer, tag_name, local_only=local_only)
        result = execute_remove_plan(plan, io_layer)
    except (GentagError, GitCommandError) as e:
        _fail(e)

    for change in result.changes_made:
        typer.echo(change)
    for warning in result.warnings:
        typer.echo(f"Warning: {warning}", err=True)
    if not result.success:
        for error in result.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
