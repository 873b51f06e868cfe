"""
Branch Policy Module

Pure functions mapping the current branch to a bump kind.
"""

import logging
import re
from typing import Mapping, Optional, Union

from .models import BumpKind

logger = logging.getLogger(__name__)

BranchPolicy = Mapping[str, Union[BumpKind, str]]


def wildcard_to_regex(branch_pattern: str) -> str:
    """Turn ``release/*`` into an anchored regex, escaping everything but ``*``."""
    return "^" + ".*".join(re.escape(part) for part in branch_pattern.split("*")) + "$"


def resolve_bump_kind(branch: Optional[str], policy: Optional[BranchPolicy]) -> BumpKind:
    """
    Determine the bump kind for a branch.

    An exact entry wins; otherwise the first wildcard entry, in declared
    order, that matches the whole branch name. Anything else is a patch.

    Args:
        branch: Current branch name, or None when it cannot be determined
        policy: Ordered mapping of branch pattern to bump kind

    Returns:
        BumpKind enum value
    """
    if not branch or not policy:
        return BumpKind.PATCH

    if branch in policy:
        return BumpKind(policy[branch])

    for branch_pattern, kind in policy.items():
        if "*" not in branch_pattern:
            continue
        if re.fullmatch(wildcard_to_regex(branch_pattern), branch):
            logger.debug(f"Branch {branch} matched policy {branch_pattern}")
            return BumpKind(kind)

    return BumpKind.PATCH
