"""
Pattern Matching Module

Pure functions that turn a tag pattern such as ``v${major}.${minor}.${patch}``
into a compiled matcher. The matcher recognises tags written in the pattern
and extracts their version fields.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Optional, Pattern

from .models import (
    DateVersion,
    OrdinalVersion,
    PatternCategory,
    SemanticVersion,
    VersionInfo,
)
from .tag_classification import split_prefix

PLACEHOLDER_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")

# Capturing group for each placeholder of the pattern vocabulary.
# ${n} is capped at 5 digits so it never swallows a date. ${timestamp} only
# appears in literal patterns and carries no version.
PLACEHOLDER_GROUPS = {
    "major": r"\d+",
    "minor": r"\d+",
    "patch": r"\d+",
    "subPatch": r"\d+",
    "YYYYMMDD": r"\d{8}",
    "n": r"\d{1,5}",
    "timestamp": r"\d+",
}

SEMANTIC_PLACEHOLDERS = ("${major}", "${minor}", "${patch}")
DATE_PLACEHOLDER = "${YYYYMMDD}"
ORDINAL_PLACEHOLDER = "${n}"


def classify_pattern(pattern: str) -> PatternCategory:
    """
    Determine the scheme category of a pattern.

    Categories are checked in the fixed order semantic, date, ordinal, so a
    pattern holding both ``${YYYYMMDD}`` and ``${n}`` is a date pattern.

    Args:
        pattern: Tag pattern with ``${...}`` placeholders

    Returns:
        PatternCategory enum value
    """
    if all(placeholder in pattern for placeholder in SEMANTIC_PLACEHOLDERS):
        return PatternCategory.SEMANTIC
    if DATE_PLACEHOLDER in pattern:
        return PatternCategory.DATE
    if ORDINAL_PLACEHOLDER in pattern:
        return PatternCategory.ORDINAL
    return PatternCategory.LITERAL


def pattern_to_regex(pattern: str) -> str:
    """Build an anchored regular expression source for a pattern.

    Literal text is escaped. Placeholders outside the vocabulary are kept
    as literal text, matching what the renderer leaves in place.
    """
    parts = []
    seen = set()
    position = 0
    for match in PLACEHOLDER_RE.finditer(pattern):
        parts.append(re.escape(pattern[position:match.start()]))
        name = match.group(1)
        group = PLACEHOLDER_GROUPS.get(name)
        if group is None:
            parts.append(re.escape(match.group(0)))
        elif name in seen:
            parts.append(f"(?P={name})")
        else:
            parts.append(f"(?P<{name}>{group})")
            seen.add(name)
        position = match.end()
    parts.append(re.escape(pattern[position:]))
    return "^" + "".join(parts) + "$"


@dataclass(frozen=True)
class CompiledPattern:
    """A tag pattern compiled once and reused for every tag it is matched against."""

    pattern: str
    category: PatternCategory
    regex: Pattern

    def match(self, tag: Optional[str]) -> bool:
        """Full-string match; partial matches are rejected."""
        if tag is None:
            return False
        return self.regex.fullmatch(tag) is not None

    def extract(self, tag: Optional[str]) -> Optional[Dict[str, str]]:
        """Return the placeholder values captured from a matching tag."""
        if tag is None:
            return None
        match = self.regex.fullmatch(tag)
        if match is None:
            return None
        return match.groupdict()

    def decode(self, tag: Optional[str]) -> Optional[VersionInfo]:
        """Build the version of this pattern's category from a matching tag."""
        fields = self.extract(tag)
        if fields is None:
            return None

        prefix, _ = split_prefix(tag)
        if self.category == PatternCategory.SEMANTIC:
            sub_patch = fields.get("subPatch")
            return SemanticVersion(
                major=int(fields["major"]),
                minor=int(fields["minor"]),
                patch=int(fields["patch"]),
                prefix=prefix,
                sub_patch=int(sub_patch) if sub_patch is not None else None,
            )
        if self.category == PatternCategory.DATE:
            serial = fields.get("n")
            return DateVersion(
                date_str=fields["YYYYMMDD"],
                prefix=prefix,
                serial=int(serial) if serial is not None else None,
            )
        if self.category == PatternCategory.ORDINAL:
            return OrdinalVersion(number=int(fields["n"]), prefix=prefix)
        return None


@lru_cache(maxsize=128)
def compile_pattern(pattern: str) -> CompiledPattern:
    """
    Compile a tag pattern into a reusable matcher.

    Args:
        pattern: Tag pattern with ``${...}`` placeholders

    Returns:
        CompiledPattern holding the category and the anchored regex
    """
    return CompiledPattern(
        pattern=pattern,
        category=classify_pattern(pattern),
        regex=re.compile(pattern_to_regex(pattern)),
    )


def match_tag(pattern: str, tag: str) -> bool:
    """Check whether a tag is written in the given pattern."""
    return compile_pattern(pattern).match(tag)
