"""
Environment Configuration Module

Layers the built-in defaults, the config file, environment variables and
command line flags into one configuration value.
This is a pure module - no side effects, just data transformation.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional
import logging

from .config import (
    DEFAULT_AUTO_PUSH,
    DEFAULT_BRANCH_POLICY,
    DEFAULT_INITIAL_TAG,
    DEFAULT_PRERELEASE_ID,
    DEFAULT_REMOTE,
    DEFAULT_TAG_ENV,
    DEFAULT_TAG_PATTERN,
    ENV_AUTO_PUSH,
    ENV_INITIAL,
    ENV_PATTERN,
    ENV_REMOTE,
)
from .exceptions import UnknownEnvironmentError
from .models import BumpKind

logger = logging.getLogger(__name__)

PRERELEASE_ID_RE = re.compile(r"^[0-9A-Za-z-]+$")


@dataclass(frozen=True)
class TagEnvironmentConfig:
    """Configuration of tag patterns and tagging behaviour."""

    tag_patterns: Dict[str, str] = field(
        default_factory=lambda: {DEFAULT_TAG_ENV: DEFAULT_TAG_PATTERN}
    )
    initial_tag: str = DEFAULT_INITIAL_TAG
    auto_push: bool = DEFAULT_AUTO_PUSH
    remote: str = DEFAULT_REMOTE
    prerelease_id: str = DEFAULT_PRERELEASE_ID
    branch_policy: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_BRANCH_POLICY))
    source: Optional[str] = None  # Path of the config file, if any
    _errors: List[str] = field(default_factory=list, compare=False, repr=False)

    @classmethod
    def from_sources(
        cls,
        file_config: Optional[Mapping[str, Any]] = None,
        env: Optional[Mapping[str, str]] = None,
        cli_overrides: Optional[Mapping[str, Any]] = None,
        source: Optional[str] = None,
    ) -> "TagEnvironmentConfig":
        """Create configuration from layered sources.

        Precedence from lowest to highest: built-in defaults, config file,
        environment variables, command line flags.

        Args:
            file_config: Settings read from the config file (camelCase keys)
            env: Dictionary of environment variables (typically os.environ)
            cli_overrides: Settings given on the command line (snake_case keys)
            source: Path of the config file, for messages

        Returns:
            TagEnvironmentConfig instance
        """
        file_config = dict(file_config or {})
        env = env or {}
        cli_overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
        errors = []

        # Config file
        tag_patterns = {DEFAULT_TAG_ENV: DEFAULT_TAG_PATTERN}
        file_patterns = file_config.get("tagPattern")
        if isinstance(file_patterns, str):
            tag_patterns[DEFAULT_TAG_ENV] = file_patterns
        elif isinstance(file_patterns, Mapping):
            tag_patterns.update({str(k): v for k, v in file_patterns.items()})
        elif file_patterns is not None:
            errors.append("tagPattern must be a string or a mapping of environment to pattern")

        branch_policy = dict(DEFAULT_BRANCH_POLICY)
        file_policy = file_config.get("branchPolicy")
        if isinstance(file_policy, Mapping):
            branch_policy = {str(k): v for k, v in file_policy.items()}
            logger.debug(f"branchPolicy from {source or 'config file'} replaces the default policy")
        elif file_policy is not None:
            errors.append("branchPolicy must be a mapping of branch pattern to bump kind")

        initial_tag = str(file_config.get("initialTag", DEFAULT_INITIAL_TAG))
        auto_push = _as_bool(file_config.get("autoPush", DEFAULT_AUTO_PUSH))
        remote = str(file_config.get("remote", DEFAULT_REMOTE))
        prerelease_id = str(file_config.get("prereleaseId", DEFAULT_PRERELEASE_ID))

        # Environment variables
        if pattern := env.get(ENV_PATTERN, "").strip():
            logger.info(f"{ENV_PATTERN} set, using tag pattern {pattern} for the {DEFAULT_TAG_ENV} environment")
            tag_patterns[DEFAULT_TAG_ENV] = pattern
        if initial := env.get(ENV_INITIAL, "").strip():
            initial_tag = initial
        if ENV_AUTO_PUSH in env:
            auto_push = env[ENV_AUTO_PUSH].strip().lower() != "false"
        if remote_env := env.get(ENV_REMOTE, "").strip():
            remote = remote_env

        # Command line
        tag_patterns.update(cli_overrides.get("tag_patterns", {}))

        return cls(
            tag_patterns=tag_patterns,
            initial_tag=cli_overrides.get("initial_tag", initial_tag),
            auto_push=cli_overrides.get("auto_push", auto_push),
            remote=cli_overrides.get("remote", remote),
            prerelease_id=cli_overrides.get("prerelease_id", prerelease_id),
            branch_policy=branch_policy,
            source=source,
            _errors=errors,
        )

    def validate(self) -> List[str]:
        """Validate the configuration.

        Returns:
            List of error messages (empty if valid)
        """
        errors = list(self._errors)

        if not self.tag_patterns:
            errors.append("At least one tagPattern must be configured")
        for tag_env, pattern in self.tag_patterns.items():
            if not isinstance(pattern, str) or not pattern.strip():
                errors.append(f'tagPattern for environment "{tag_env}" must be a non-empty string')

        if not self.initial_tag.strip():
            errors.append("initialTag cannot be empty")

        if not PRERELEASE_ID_RE.match(self.prerelease_id):
            errors.append(f"Invalid prereleaseId '{self.prerelease_id}'")

        valid_kinds = [kind.value for kind in BumpKind]
        for branch_pattern, kind in self.branch_policy.items():
            if getattr(kind, "value", kind) not in valid_kinds:
                errors.append(
                    f"Invalid bump kind '{kind}' for branch '{branch_pattern}'. "
                    f"Valid options are: {', '.join(valid_kinds)}"
                )

        return errors

    def pattern_for(self, tag_env: str) -> str:
        """Return the tag pattern of an environment.

        Raises:
            UnknownEnvironmentError: If the environment has no pattern
        """
        pattern = self.tag_patterns.get(tag_env)
        if not pattern:
            raise UnknownEnvironmentError(tag_env, self.tag_patterns.keys())
        return pattern


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() != "false"
    return bool(value)
