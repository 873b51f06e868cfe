"""
Version Increment Module

Pure functions computing the next version of each scheme and ordering
versions of the same scheme.
"""

import logging
from dataclasses import replace
from datetime import date
from typing import Optional, Tuple, Union

from .config import DEFAULT_INITIAL_VERSION, DEFAULT_PRERELEASE_ID
from .models import (
    BumpKind,
    DateVersion,
    OrdinalVersion,
    Scheme,
    SemanticVersion,
    VersionInfo,
)
from .tag_classification import extract_semver_info

logger = logging.getLogger(__name__)


def format_date(day: date) -> str:
    """Format a date as YYYYMMDD."""
    return f"{day.year:04d}{day.month:02d}{day.day:02d}"


def _bump_prerelease(prerelease: str) -> str:
    """Increment the last numeric identifier, appending ``.0`` if there is none."""
    identifiers = prerelease.split(".")
    for index in range(len(identifiers) - 1, -1, -1):
        if identifiers[index].isdigit():
            identifiers[index] = str(int(identifiers[index]) + 1)
            return ".".join(identifiers)
    return ".".join(identifiers + ["0"])


def increment_semantic(
    info: SemanticVersion,
    kind: BumpKind,
    prerelease_id: str = DEFAULT_PRERELEASE_ID,
) -> SemanticVersion:
    """Bump a semantic version. Release bumps drop prerelease and build metadata."""
    sub_patch = 0 if info.sub_patch is not None else None

    if kind == BumpKind.MAJOR:
        return replace(info, major=info.major + 1, minor=0, patch=0,
                       prerelease=None, build=None, sub_patch=sub_patch)
    if kind == BumpKind.MINOR:
        return replace(info, minor=info.minor + 1, patch=0,
                       prerelease=None, build=None, sub_patch=sub_patch)
    if kind == BumpKind.PRERELEASE:
        if not info.prerelease:
            return replace(info, patch=info.patch + 1, prerelease=f"{prerelease_id}.0",
                           build=None, sub_patch=sub_patch)
        return replace(info, prerelease=_bump_prerelease(info.prerelease), build=None)
    return replace(info, patch=info.patch + 1,
                   prerelease=None, build=None, sub_patch=sub_patch)


def increment_date(info: Optional[DateVersion], today: Optional[date] = None) -> DateVersion:
    """
    Advance a date version to today.

    The previous value is ignored, so two calls on the same day give the same
    date. Only a same-day serial, when the pattern carries one, moves forward.
    """
    date_str = format_date(today or date.today())
    if info is None:
        return DateVersion(date_str=date_str)

    serial = info.serial
    if serial is not None:
        serial = serial + 1 if info.date_str == date_str else 1
    return DateVersion(date_str=date_str, prefix=info.prefix, serial=serial)


def increment_ordinal(info: Optional[OrdinalVersion]) -> OrdinalVersion:
    """Add one to an ordinal version, starting at 1."""
    if info is None:
        return OrdinalVersion(number=1)
    return replace(info, number=info.number + 1)


def increment(
    info: Optional[VersionInfo],
    kind: Union[BumpKind, str] = BumpKind.PATCH,
    *,
    today: Optional[date] = None,
    initial_version: str = DEFAULT_INITIAL_VERSION,
    prerelease_id: str = DEFAULT_PRERELEASE_ID,
    scheme: Optional[Scheme] = None,
) -> VersionInfo:
    """
    Compute the next version in the same scheme.

    Args:
        info: Current version, or None when there is no prior version
        kind: Bump kind, only used by the semantic scheme
        today: Date used by the date scheme (defaults to the system clock)
        initial_version: Baseline bumped when a semantic version has no prior value
        prerelease_id: Label of a fresh prerelease (``alpha`` gives ``alpha.0``)
        scheme: Scheme to start when info is None (defaults to semantic)

    Returns:
        The next version

    Raises:
        ValueError: If initial_version is not a semantic version
    """
    kind = BumpKind(kind)
    if info is None:
        scheme = scheme or Scheme.SEMANTIC
        if scheme == Scheme.DATE:
            return increment_date(None, today)
        if scheme == Scheme.ORDINAL:
            return increment_ordinal(None)
        baseline = extract_semver_info(initial_version)
        if baseline is None:
            raise ValueError(f"Initial version '{initial_version}' is not a semantic version")
        logger.debug(f"No prior version, bumping baseline {initial_version}")
        return increment_semantic(baseline, kind, prerelease_id)

    if isinstance(info, SemanticVersion):
        return increment_semantic(info, kind, prerelease_id)
    if isinstance(info, DateVersion):
        return increment_date(info, today)
    return increment_ordinal(info)


def _prerelease_key(prerelease: Optional[str]) -> Tuple:
    # A release sorts above any of its prereleases; numeric identifiers sort
    # numerically and below alphanumeric ones.
    if not prerelease:
        return (1,)
    identifiers = []
    for identifier in prerelease.split("."):
        if identifier.isdigit():
            identifiers.append((0, int(identifier), ""))
        else:
            identifiers.append((1, 0, identifier))
    return (0, tuple(identifiers))


def version_key(info: VersionInfo) -> Tuple:
    """Ordering key of a version within its scheme."""
    if isinstance(info, SemanticVersion):
        return (info.major, info.minor, info.patch, info.sub_patch or 0,
                _prerelease_key(info.prerelease))
    if isinstance(info, DateVersion):
        return (int(info.date_str), info.serial or 0)
    return (info.number,)


def compare_versions(left: VersionInfo, right: VersionInfo) -> int:
    """
    Compare two versions of the same scheme.

    Returns:
        Negative if left is older, zero if equal, positive if newer

    Raises:
        ValueError: If the versions belong to different schemes
    """
    if left.scheme != right.scheme:
        raise ValueError(f"Cannot compare {left.scheme.value} and {right.scheme.value} versions")
    left_key, right_key = version_key(left), version_key(right)
    return (left_key > right_key) - (left_key < right_key)
