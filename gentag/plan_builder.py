"""Plan builder - creates execution plans from configuration and repository state."""

import logging
import re
from datetime import date
from typing import Optional, Union

from .branch_policy import resolve_bump_kind
from .config import DEFAULT_LIST_LIMIT
from .environment import TagEnvironmentConfig
from .exceptions import ConfigError, TagNotFoundError
from .io_layer import IOLayer
from .models import BumpKind, ListPlan, RemovePlan, TagPlan
from .tag_sequencer import latest_matching_tag, next_tag

logger = logging.getLogger(__name__)


def prepare_create_plan(
    config: TagEnvironmentConfig,
    io_layer: IOLayer,
    tag_env: str,
    bump_kind: Optional[Union[BumpKind, str]] = None,
    *,
    pattern: Optional[str] = None,
    message: Optional[str] = None,
    push: Optional[bool] = None,
    today: Optional[date] = None,
) -> TagPlan:
    """
    Prepare the plan for creating the next tag.

    This function reads the existing tags and determines the tag to create,
    but doesn't make any modifications.

    Args:
        config: Tag configuration
        io_layer: IO layer for git operations
        tag_env: Name of the tag environment whose pattern is used
        bump_kind: Explicit bump kind; the branch policy decides when None
        pattern: Pattern overriding the environment's pattern
        message: Message for an annotated tag
        push: Whether to push; defaults to the configured auto push
        today: Date used by date patterns

    Raises:
        UnknownEnvironmentError: If tag_env has no pattern and none is given
        ExhaustedRetriesError: If no unused tag can be found
    """
    pattern = pattern or config.pattern_for(tag_env)
    branch = io_layer.current_branch()
    if bump_kind is None:
        kind = resolve_bump_kind(branch, config.branch_policy)
        logger.info(f"Branch {branch or '(unknown)'} resolves to a {kind.value} bump")
    else:
        kind = BumpKind(bump_kind)

    existing = io_layer.list_tags()
    latest = latest_matching_tag(existing, pattern)
    new_tag = next_tag(
        existing,
        pattern,
        kind,
        config.initial_tag,
        today=today,
        prerelease_id=config.prerelease_id,
    )

    return TagPlan(
        tag_env=tag_env,
        pattern=pattern,
        bump_kind=kind,
        new_tag=new_tag,
        latest_tag=latest,
        branch=branch,
        message=message,
        push=config.auto_push if push is None else push,
        remote=config.remote,
        dry_run=io_layer.dry_run,
    )


def prepare_list_plan(
    io_layer: IOLayer,
    number: int = DEFAULT_LIST_LIMIT,
    pattern: Optional[str] = None,
    verbose: bool = False,
) -> ListPlan:
    """
    Select the tags to display, most recently created first.

    Args:
        io_layer: IO layer for git operations
        number: Maximum number of tags; zero or less shows all
        pattern: Regular expression the tag names must contain a match of
        verbose: Whether dates and messages are displayed

    Raises:
        ConfigError: If pattern is not a valid regular expression
    """
    tags = io_layer.list_tag_details()
    if pattern:
        try:
            regex = re.compile(pattern)
        except re.error as e:
            raise ConfigError(f"Invalid pattern '{pattern}': {e}") from e
        tags = [tag for tag in tags if regex.search(tag.name)]

    total = len(tags)
    if number and number > 0:
        tags = tags[:number]

    return ListPlan(tags=tags, pattern=pattern, verbose=verbose, total=total)


def prepare_remove_plan(
    config: TagEnvironmentConfig,
    io_layer: IOLayer,
    tag_name: Optional[str] = None,
    local_only: bool = False,
) -> RemovePlan:
    """
    Prepare the plan for deleting a tag.

    Without a tag name the most recently created tag is deleted.

    Raises:
        TagNotFoundError: If there is no tag to delete
    """
    if not tag_name:
        tag_name = io_layer.latest_created_tag()
        if not tag_name:
            raise TagNotFoundError("The repository has no tags")
        logger.info(f"No tag given, using most recently created tag {tag_name}")
    elif not io_layer.tag_exists(tag_name):
        raise TagNotFoundError(f"Tag '{tag_name}' does not exist")

    return RemovePlan(
        tag_name=tag_name,
        remote=config.remote,
        delete_remote=not local_only,
        dry_run=io_layer.dry_run,
    )
