"""
Git Operations Module for gentag

This module handles opening the git repository the tool works on.

Functions:
    open_repository: Opens the repository containing a directory

Raises:
    NotARepositoryError: When no repository is found or git is unavailable
"""

from git import Repo
from git.exc import GitCommandNotFound, InvalidGitRepositoryError, NoSuchPathError
from .exceptions import NotARepositoryError


def open_repository(path: str = ".") -> Repo:
    """Open the git repository containing path."""
    try:
        return Repo(path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as e:
        raise NotARepositoryError(f"Not a git repository: {path}") from e
    except GitCommandNotFound as e:
        raise NotARepositoryError(f"git executable is not available: {e}") from e
