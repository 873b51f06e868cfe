"""Test fixtures for gentag.

This module provides shared fixtures used across multiple test modules.
It sets up temporary git repositories and mock objects that simulate
the environment needed for testing.

Fixtures:
    git_repo: Creates a temporary repository with one commit
    remote_repo: Creates a bare repository registered as the origin remote
    mock_repo: Provides a mock GitPython repository
    clean_env: Removes GENTAG_* variables from the environment
"""

from unittest.mock import Mock

import git
import pytest


@pytest.fixture
def git_repo(tmp_path):
    """Creates a temporary git repository with an initial commit.

    tmp_path/
    └── work/
        └── README.md

    Returns:
        git.Repo: The repository, checked out on branch ``main``
    """
    work_dir = tmp_path / "work"
    work_dir.mkdir()
    repo = git.Repo.init(work_dir)
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")
        writer.set_value("tag", "gpgsign", "false")

    readme = work_dir / "README.md"
    readme.write_text("Test repository\n")
    repo.index.add([str(readme)])
    repo.index.commit("Initial commit")
    repo.git.branch("-M", "main")
    return repo


@pytest.fixture
def remote_repo(tmp_path, git_repo):
    """Creates a bare repository and registers it as ``origin`` of git_repo."""
    remote_dir = tmp_path / "remote.git"
    remote = git.Repo.init(remote_dir, bare=True)
    git_repo.create_remote("origin", str(remote_dir))
    return remote


@pytest.fixture
def mock_repo():
    """Provides a mock Git repository."""
    repo = Mock()
    repo.git = Mock()
    return repo


@pytest.fixture
def clean_env(monkeypatch):
    """Removes gentag environment variables so tests see the defaults."""
    for name in ("GENTAG_PATTERN", "GENTAG_INITIAL", "GENTAG_AUTO_PUSH", "GENTAG_REMOTE"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
