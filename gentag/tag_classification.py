"""
Tag Classification Module

Pure functions for recognising the versioning scheme of a literal tag.
This module contains no side effects - only tag analysis logic.
"""

import re
from typing import Optional, Tuple

from .models import DateVersion, OrdinalVersion, Scheme, SemanticVersion, VersionInfo

PREFIX_RE = re.compile(r"^[^0-9]*")

# Strict MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD], no leading zeros in numbers
SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[A-Za-z-][0-9A-Za-z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[A-Za-z-][0-9A-Za-z-]*))*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)
DATE_RE = re.compile(r"^([^0-9]*)(\d{8})$")
ORDINAL_RE = re.compile(r"^([^0-9]*)(\d+)$")


def split_prefix(tag: str) -> Tuple[str, str]:
    """Split a tag into its leading non-digit prefix and the remainder."""
    prefix = PREFIX_RE.match(tag).group(0)
    return prefix, tag[len(prefix):]


def extract_semver_info(tag: Optional[str]) -> Optional[SemanticVersion]:
    """Parse a tag such as ``v1.2.3-rc.1+build.5``."""
    if not tag:
        return None

    prefix, remainder = split_prefix(tag)
    match = SEMVER_RE.fullmatch(remainder)
    if not match:
        return None

    major, minor, patch, prerelease, build = match.groups()
    return SemanticVersion(
        major=int(major),
        minor=int(minor),
        patch=int(patch),
        prerelease=prerelease,
        build=build,
        prefix=prefix,
    )


def extract_date_info(tag: Optional[str]) -> Optional[DateVersion]:
    """Parse a tag such as ``v20230401``."""
    if not tag:
        return None

    match = DATE_RE.fullmatch(tag)
    if not match:
        return None

    return DateVersion(date_str=match.group(2), prefix=match.group(1))


def extract_ordinal_info(tag: Optional[str]) -> Optional[OrdinalVersion]:
    """Parse a tag such as ``build-42``."""
    if not tag:
        return None

    match = ORDINAL_RE.fullmatch(tag)
    if not match:
        return None

    return OrdinalVersion(number=int(match.group(2)), prefix=match.group(1))


def detect_scheme(tag: Optional[str]) -> Optional[VersionInfo]:
    """
    Recognise the versioning scheme of a tag.

    Pure function that tries the semantic, date and ordinal extractors in
    that order and returns the first success. Every date tag also has the
    shape of an ordinal tag, so the order matters.

    Args:
        tag: The literal tag string

    Returns:
        The decoded version, or None when the tag is unrecognised
    """
    for extractor in (extract_semver_info, extract_date_info, extract_ordinal_info):
        info = extractor(tag)
        if info is not None:
            return info
    return None


def detect_scheme_type(tag: Optional[str]) -> Optional[Scheme]:
    """Return only the scheme of a tag, or None when unrecognised."""
    info = detect_scheme(tag)
    return info.scheme if info is not None else None
