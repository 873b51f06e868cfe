"""Plan executor - executes a prepared plan."""

import logging
from datetime import date
from typing import Optional, Tuple, Union

from git.exc import GitCommandError

from .config import MAX_CREATE_ATTEMPTS
from .environment import TagEnvironmentConfig
from .exceptions import RemoteDeleteError, RemotePushError, TagAlreadyExistsError
from .io_layer import IOLayer
from .models import BumpKind, ExecutionResult, RemovePlan, TagPlan
from .plan_builder import prepare_create_plan

logger = logging.getLogger(__name__)


def execute_create_plan(plan: TagPlan, io_layer: IOLayer) -> ExecutionResult:
    """
    Create and optionally push the planned tag.

    A failed push does not fail the result: the tag already exists locally,
    so the failure is reported as a warning with the command to retry it.

    Raises:
        TagAlreadyExistsError: If the tag was created concurrently
    """
    result = ExecutionResult(success=True, tag=plan.new_tag, dry_run=plan.dry_run)

    try:
        created = io_layer.create_tag(plan.new_tag, plan.message)
    except GitCommandError as e:
        result.success = False
        result.errors.append(f"Failed to create tag '{plan.new_tag}': {e.stderr or e}")
        return result
    result.changes_made.append(f"{'Created' if created else 'Would create'} tag {plan.new_tag}")

    if not plan.push:
        result.changes_made.append(
            f"Tag not pushed. Push it with: git push {plan.remote} {plan.new_tag}"
        )
        return result

    try:
        result.pushed = io_layer.push_tag(plan.new_tag, plan.remote)
    except RemotePushError as e:
        logger.warning(str(e))
        result.warnings.append(
            f"{e}. Push it manually with: git push {plan.remote} {plan.new_tag}"
        )
        return result

    if result.pushed:
        result.changes_made.append(f"Pushed tag {plan.new_tag} to {plan.remote}")
    return result


def create_tag_with_retry(
    config: TagEnvironmentConfig,
    io_layer: IOLayer,
    tag_env: str,
    bump_kind: Optional[Union[BumpKind, str]] = None,
    *,
    max_attempts: int = MAX_CREATE_ATTEMPTS,
    pattern: Optional[str] = None,
    message: Optional[str] = None,
    push: Optional[bool] = None,
    today: Optional[date] = None,
) -> Tuple[TagPlan, ExecutionResult]:
    """
    Plan and create the next tag, re-planning when another process creates
    the same tag first.

    Raises:
        TagAlreadyExistsError: If every attempt lost the race
    """
    last_error = None
    for attempt in range(1, max_attempts + 1):
        plan = prepare_create_plan(
            config,
            io_layer,
            tag_env,
            bump_kind,
            pattern=pattern,
            message=message,
            push=push,
            today=today,
        )
        try:
            return plan, execute_create_plan(plan, io_layer)
        except TagAlreadyExistsError as e:
            logger.warning(f"{e}, planning again (attempt {attempt}/{max_attempts})")
            last_error = e

    raise last_error


def execute_remove_plan(plan: RemovePlan, io_layer: IOLayer) -> ExecutionResult:
    """
    Delete the planned tag locally and then from the remote.

    A failed remote deletion is reported as a warning with the command to
    retry it; the local tag is already gone.
    """
    result = ExecutionResult(success=True, tag=plan.tag_name, dry_run=plan.dry_run)

    try:
        deleted = io_layer.delete_local_tag(plan.tag_name)
    except GitCommandError as e:
        result.success = False
        result.errors.append(f"Failed to delete tag '{plan.tag_name}': {e.stderr or e}")
        return result
    result.changes_made.append(f"{'Deleted' if deleted else 'Would delete'} local tag {plan.tag_name}")

    if not plan.delete_remote:
        return result

    try:
        result.deleted_remote = io_layer.delete_remote_tag(plan.tag_name, plan.remote)
    except RemoteDeleteError as e:
        logger.warning(str(e))
        result.warnings.append(
            f"{e}. Delete it manually with: git push {plan.remote} :refs/tags/{plan.tag_name}"
        )
        return result

    if result.deleted_remote:
        result.changes_made.append(f"Deleted tag {plan.tag_name} from {plan.remote}")
    return result
