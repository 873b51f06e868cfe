"""Create, list and delete git tags that follow naming patterns."""

from .branch_policy import resolve_bump_kind
from .exceptions import (
    ExhaustedRetriesError,
    GentagError,
    NotARepositoryError,
    UnknownEnvironmentError,
)
from .models import BumpKind, DateVersion, OrdinalVersion, SemanticVersion
from .tag_classification import detect_scheme
from .tag_sequencer import next_tag

__version__ = "0.1.0"

__all__ = [
    "BumpKind",
    "DateVersion",
    "ExhaustedRetriesError",
    "GentagError",
    "NotARepositoryError",
    "OrdinalVersion",
    "SemanticVersion",
    "UnknownEnvironmentError",
    "detect_scheme",
    "next_tag",
    "resolve_bump_kind",
]
