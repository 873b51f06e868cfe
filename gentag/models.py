"""Data models for versions, plans and execution results."""

from dataclasses import dataclass, field
from typing import List, Optional, Union
from enum import Enum


class BumpKind(Enum):
    """Which part of a semantic version to increment."""
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PRERELEASE = "prerelease"


class PatternCategory(Enum):
    """Scheme category of a tag pattern, decided by its placeholders."""
    SEMANTIC = "semantic"
    DATE = "date"
    ORDINAL = "ordinal"
    LITERAL = "literal"    # No version placeholders, degrades to a timestamp


class Scheme(Enum):
    """Versioning scheme a literal tag was recognised as."""
    SEMANTIC = "semantic"
    DATE = "date"
    ORDINAL = "ordinal"


@dataclass(frozen=True)
class SemanticVersion:
    """A MAJOR.MINOR.PATCH[-PRERELEASE][+BUILD] version."""
    major: int
    minor: int
    patch: int
    prerelease: Optional[str] = None
    build: Optional[str] = None
    prefix: str = ""
    sub_patch: Optional[int] = None  # Only set by ${subPatch} patterns

    @property
    def scheme(self) -> Scheme:
        return Scheme.SEMANTIC


@dataclass(frozen=True)
class DateVersion:
    """A YYYYMMDD version."""
    date_str: str
    prefix: str = ""
    serial: Optional[int] = None  # Same-day counter for ${YYYYMMDD}...${n} patterns

    @property
    def scheme(self) -> Scheme:
        return Scheme.DATE


@dataclass(frozen=True)
class OrdinalVersion:
    """An incrementing number version."""
    number: int
    prefix: str = ""

    @property
    def scheme(self) -> Scheme:
        return Scheme.ORDINAL


VersionInfo = Union[SemanticVersion, DateVersion, OrdinalVersion]


@dataclass
class TagDetails:
    """A tag as listed from the repository."""
    name: str
    date: str = ""
    subject: str = ""


@dataclass
class TagPlan:
    """Represents a tag to be created."""
    tag_env: str
    pattern: str
    bump_kind: BumpKind
    new_tag: str
    latest_tag: Optional[str] = None
    branch: Optional[str] = None
    message: Optional[str] = None
    push: bool = False
    remote: str = "origin"
    dry_run: bool = False


@dataclass
class ListPlan:
    """Tags selected for display."""
    tags: List[TagDetails] = field(default_factory=list)
    pattern: Optional[str] = None
    verbose: bool = False
    total: int = 0


@dataclass
class RemovePlan:
    """Represents a tag to be deleted."""
    tag_name: str
    remote: str = "origin"
    delete_remote: bool = True
    dry_run: bool = False


@dataclass
class ExecutionResult:
    """Result of executing a plan."""
    success: bool
    tag: Optional[str] = None
    pushed: bool = False
    deleted_remote: bool = False
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    changes_made: List[str] = field(default_factory=list)
    dry_run: bool = False
