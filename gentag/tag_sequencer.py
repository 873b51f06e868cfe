"""
Tag Sequencer Module

Pure functions that go from the set of existing tags to the next unique tag
of a pattern. No I/O happens here; the caller supplies the tags and creates
the result.
"""

import logging
import time
from dataclasses import replace
from datetime import date
from functools import cmp_to_key
from typing import Iterable, Optional, Tuple, Union

from .config import DEFAULT_INITIAL_TAG, DEFAULT_PRERELEASE_ID, MAX_TAG_ATTEMPTS
from .exceptions import ExhaustedRetriesError
from .models import (
    BumpKind,
    DateVersion,
    OrdinalVersion,
    PatternCategory,
    Scheme,
    SemanticVersion,
    VersionInfo,
)
from .pattern_matching import CompiledPattern, compile_pattern
from .tag_classification import detect_scheme
from .template_rendering import native_pattern, render_template, render_version
from .version_increment import compare_versions, increment

logger = logging.getLogger(__name__)

CATEGORY_VERSION_TYPES = {
    PatternCategory.SEMANTIC: (SemanticVersion, Scheme.SEMANTIC),
    PatternCategory.DATE: (DateVersion, Scheme.DATE),
    PatternCategory.ORDINAL: (OrdinalVersion, Scheme.ORDINAL),
}


def _decode(tag: str, compiled: Optional[CompiledPattern]) -> Optional[VersionInfo]:
    if compiled is not None:
        info = compiled.decode(tag)
        if info is not None:
            return info
    return detect_scheme(tag)


def compare_tags(left: str, right: str, compiled: Optional[CompiledPattern] = None) -> int:
    """
    Order two tags by recency.

    Tags decoding under the same scheme compare on their version fields.
    Otherwise they compare as plain strings.
    """
    left_info, right_info = _decode(left, compiled), _decode(right, compiled)
    if left_info is not None and right_info is not None and left_info.scheme == right_info.scheme:
        result = compare_versions(left_info, right_info)
        if result:
            return result
    return (left > right) - (left < right)


def select_latest(tags: Iterable[str], pattern: Optional[str] = None) -> Optional[str]:
    """Pick the latest of a collection of tags, or None when it is empty."""
    tags = sorted(tags)
    if not tags:
        return None
    compiled = compile_pattern(pattern) if pattern is not None else None
    return max(tags, key=cmp_to_key(lambda a, b: compare_tags(a, b, compiled)))


def latest_matching_tag(existing_tags: Iterable[str], pattern: str) -> Optional[str]:
    """Return the latest tag written in the pattern."""
    compiled = compile_pattern(pattern)
    return select_latest((tag for tag in existing_tags if compiled.match(tag)), pattern)


def _initial_version(
    initial_tag: str, compiled: CompiledPattern, today: Optional[date]
) -> Optional[VersionInfo]:
    """The version the initial tag stands for under the pattern's scheme."""
    expected = CATEGORY_VERSION_TYPES.get(compiled.category)
    if expected is None:
        return None

    version_type, scheme = expected
    info = detect_scheme(initial_tag)
    if isinstance(info, version_type):
        return info
    if scheme == Scheme.SEMANTIC:
        return None
    # Date and ordinal patterns start from their own baseline
    return increment(None, scheme=scheme, today=today)


def _timestamp_tag(pattern: str) -> str:
    return render_template(pattern, {"timestamp": str(int(time.time() * 1000))})


def next_tag(
    existing_tags: Iterable[str],
    pattern: str,
    bump_kind: Union[BumpKind, str] = BumpKind.PATCH,
    initial_tag: str = DEFAULT_INITIAL_TAG,
    *,
    today: Optional[date] = None,
    prerelease_id: str = DEFAULT_PRERELEASE_ID,
    max_attempts: int = MAX_TAG_ATTEMPTS,
) -> str:
    """
    Compute the next unique tag of a pattern.

    The latest tag written in the pattern is incremented and rendered back
    into it. Candidates that already exist are incremented again, starting
    from the candidate, until a free one is found.

    Args:
        existing_tags: All tags currently in the repository
        pattern: Tag pattern with ``${...}`` placeholders
        bump_kind: Bump kind for semantic patterns
        initial_tag: Tag used when no existing tag matches the pattern
        today: Date used by date patterns (defaults to the system clock)
        prerelease_id: Label of a fresh prerelease
        max_attempts: Number of increments tried before giving up

    Returns:
        A tag that is not in existing_tags

    Raises:
        ExhaustedRetriesError: If every candidate within max_attempts exists
    """
    existing = set(existing_tags)
    compiled = compile_pattern(pattern)
    kind = BumpKind(bump_kind)
    expected = CATEGORY_VERSION_TYPES.get(compiled.category)

    def advance(info: Optional[VersionInfo]) -> Tuple[Optional[VersionInfo], str]:
        if expected is None:
            return None, _timestamp_tag(pattern)
        info = increment(info, kind, today=today, prerelease_id=prerelease_id, scheme=expected[1])
        return info, render_version(pattern, info)

    latest = latest_matching_tag(existing, pattern)
    if latest is None:
        info = _initial_version(initial_tag, compiled, today)
        if expected is None:
            # Literal patterns always render through the pattern
            candidate = _timestamp_tag(pattern)
        elif info is None:
            candidate = initial_tag
        else:
            candidate = render_version(pattern, info)
        logger.debug(f"No tag matches {pattern}, starting from {candidate}")
        if candidate not in existing:
            return candidate
        logger.debug(f"Initial tag {candidate} already exists")
    else:
        info = compiled.decode(latest)
        logger.debug(f"Latest tag for {pattern} is {latest}")

    candidate = None
    for attempt in range(1, max_attempts + 1):
        info, candidate = advance(info)
        if candidate not in existing:
            return candidate
        logger.debug(f"Tag {candidate} already exists (attempt {attempt}/{max_attempts})")

    raise ExhaustedRetriesError(pattern, max_attempts, candidate)


def bump_tag(
    tag: str,
    bump_kind: Union[BumpKind, str] = BumpKind.PATCH,
    *,
    today: Optional[date] = None,
    prefix: Optional[str] = None,
    prerelease_id: str = DEFAULT_PRERELEASE_ID,
) -> Optional[str]:
    """
    Increment a single tag in its own scheme, keeping its prefix.

    Returns:
        The next tag, or None when the tag is unrecognised
    """
    info = detect_scheme(tag)
    if info is None:
        return None
    info = increment(info, bump_kind, today=today, prerelease_id=prerelease_id)
    if prefix is not None:
        info = replace(info, prefix=prefix)
    return render_version(native_pattern(info), info)
