"""
I/O Layer for gentag

This module contains all I/O operations (file system, Git) separated from
the tag computation. This is the "imperative shell" that handles all side
effects.
"""

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple
import yaml
import dpath
from dotenv import dotenv_values
from git import Repo
from git.exc import GitCommandError

from .config import CONFIG_PACKAGE_PROP, CONFIG_SEARCH_PLACES, DOTENV_FILE
from .exceptions import (
    RemoteDeleteError,
    RemotePushError,
    TagAlreadyExistsError,
    TagNotFoundError,
)
from .models import TagDetails

logger = logging.getLogger(__name__)

TAG_DETAILS_FORMAT = "%(refname:strip=2)%09%(creatordate:iso)%09%(contents:subject)"


# -----------------------------------------------------------------------------
# Configuration Files
# -----------------------------------------------------------------------------

def read_config_file(path: Path) -> Optional[Dict[str, Any]]:
    """Read gentag settings from a config file.

    ``.gentagrc`` files may be YAML or JSON. ``pyproject.toml`` and
    ``package.json`` only count when they have a gentag section.

    Args:
        path: Path to the config file

    Returns:
        Dictionary of settings or None if the file holds none
    """
    if not path.exists():
        return None

    text = path.read_text(encoding="utf-8")
    if path.name == "pyproject.toml":
        data = dpath.get(tomllib.loads(text), f"tool/{CONFIG_PACKAGE_PROP}", default=None)
    elif path.name == "package.json":
        data = dpath.get(json.loads(text), CONFIG_PACKAGE_PROP, default=None)
    else:
        data = yaml.safe_load(text) or {}

    if data is None:
        return None
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping of settings")
    return data


def load_config_file(directory: str = ".") -> Tuple[Dict[str, Any], Optional[str]]:
    """Find and read the first config file in a directory.

    A file that cannot be parsed is reported and skipped, so a broken
    config never blocks tagging with the defaults.

    Returns:
        Tuple of (settings, path of the file used or None)
    """
    for name in CONFIG_SEARCH_PLACES:
        path = Path(directory) / name
        try:
            data = read_config_file(path)
        except (OSError, ValueError, yaml.YAMLError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Failed to load config from {path}: {e}")
            continue
        if data is not None:
            logger.debug(f"Loaded config from {path}")
            return data, str(path)
    return {}, None


def load_environment(environ: Dict[str, str], directory: str = ".") -> Dict[str, str]:
    """Environment variables with ``.env`` values underneath them.

    Interpolation is off so patterns keep their ``${...}`` placeholders.
    """
    env = {
        key: value
        for key, value in dotenv_values(Path(directory) / DOTENV_FILE, interpolate=False).items()
        if value is not None
    }
    env.update(environ)
    return env


class IOLayer:
    """Handles all git operations for the application."""

    def __init__(self, repo: Repo, dry_run: bool = False):
        """Initialize the I/O layer.

        Args:
            repo: Git repository object
            dry_run: If True, don't perform actual writes
        """
        self.repo = repo
        self.dry_run = dry_run

    # -----------------------------------------------------------------------------
    # Reading Tags
    # -----------------------------------------------------------------------------

    def list_tags(self) -> Set[str]:
        """Return the names of all tags in the repository."""
        return {tag.name for tag in self.repo.tags}

    def tag_exists(self, name: str) -> bool:
        """Check whether a tag exists locally."""
        return name in self.list_tags()

    def current_branch(self) -> Optional[str]:
        """Return the checked out branch, or None when it cannot be determined."""
        try:
            return self.repo.active_branch.name
        except TypeError:
            logger.info("HEAD is detached, no current branch")
            return None
        except (GitCommandError, ValueError) as e:
            logger.warning(f"Failed to determine current branch: {e}")
            return None

    def list_tag_details(self) -> List[TagDetails]:
        """Return all tags, most recently created first."""
        output = self.repo.git.for_each_ref(
            "refs/tags", sort="-creatordate", format=TAG_DETAILS_FORMAT
        )
        details = []
        for line in output.splitlines():
            if not line.strip():
                continue
            name, date, subject = (line.split("\t", 2) + ["", ""])[:3]
            details.append(TagDetails(name=name, date=date, subject=subject))
        return details

    def latest_created_tag(self) -> Optional[str]:
        """Return the most recently created tag."""
        output = self.repo.git.for_each_ref(
            "refs/tags", sort="-creatordate", format="%(refname:strip=2)", count=1
        )
        return output.strip() or None

    # -----------------------------------------------------------------------------
    # Writing Tags
    # -----------------------------------------------------------------------------

    def create_tag(self, name: str, message: Optional[str] = None) -> bool:
        """Create a tag at HEAD, annotated when a message is given.

        Args:
            name: Tag name
            message: Optional tag message

        Returns:
            True if created, False if dry run

        Raises:
            TagAlreadyExistsError: If the tag already exists
        """
        if self.dry_run:
            print(f"[DRY RUN] Would create tag: {name}")
            return False

        try:
            self.repo.create_tag(name, message=message)
        except GitCommandError as e:
            if "already exists" in str(e.stderr) or self.tag_exists(name):
                raise TagAlreadyExistsError(name) from e
            raise

        logger.info(f"Created tag {name}")
        return True

    def push_tag(self, name: str, remote: str = "origin") -> bool:
        """Push a single tag to a remote.

        Returns:
            True if pushed, False if dry run

        Raises:
            RemotePushError: If the push fails
        """
        if self.dry_run:
            print(f"[DRY RUN] Would push tag {name} to {remote}")
            return False

        try:
            self.repo.git.push(remote, f"refs/tags/{name}")
        except GitCommandError as e:
            raise RemotePushError(
                f"Failed to push tag '{name}' to {remote}: {e.stderr or e}",
                tag_name=name,
                remote=remote,
            ) from e

        logger.info(f"Pushed tag {name} to {remote}")
        return True

    def delete_local_tag(self, name: str) -> bool:
        """Delete a local tag.

        Returns:
            True if deleted, False if dry run

        Raises:
            TagNotFoundError: If the tag does not exist
        """
        if self.dry_run:
            print(f"[DRY RUN] Would delete local tag: {name}")
            return False

        if not self.tag_exists(name):
            raise TagNotFoundError(f"Tag '{name}' does not exist")

        self.repo.git.tag("-d", name)
        logger.info(f"Deleted local tag {name}")
        return True

    def delete_remote_tag(self, name: str, remote: str = "origin") -> bool:
        """Delete a tag from a remote.

        Returns:
            True if deleted, False if dry run

        Raises:
            RemoteDeleteError: If the remote rejects the deletion
        """
        if self.dry_run:
            print(f"[DRY RUN] Would delete tag {name} from {remote}")
            return False

        try:
            self.repo.git.push(remote, "--delete", f"refs/tags/{name}")
        except GitCommandError as e:
            raise RemoteDeleteError(
                f"Failed to delete tag '{name}' from {remote}: {e.stderr or e}",
                tag_name=name,
                remote=remote,
            ) from e

        logger.info(f"Deleted tag {name} from {remote}")
        return True
