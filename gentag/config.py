"""
Configuration Module for gentag

This module contains the built-in defaults and constants used throughout the
application. User settings are layered on top of these by the environment
module.

Constants:
    DEFAULT_TAG_ENV: Name of the tag environment used when none is given
    DEFAULT_TAG_PATTERN: Pattern of the default tag environment
    DEFAULT_INITIAL_TAG: Tag created when no existing tag matches the pattern
    DEFAULT_INITIAL_VERSION: Synthetic baseline for semantic bumps without a prior tag
    DEFAULT_BRANCH_POLICY: Branch name patterns mapped to bump kinds
    CONFIG_SEARCH_PLACES: Files searched for user configuration, in order
    MAX_TAG_ATTEMPTS: Bound of the collision-avoidance loop
    MAX_CREATE_ATTEMPTS: Bound on re-planning after a concurrent duplicate tag
"""

DEFAULT_TAG_ENV = "default"
DEFAULT_TAG_PATTERN = "v${major}.${minor}.${patch}"
DEFAULT_INITIAL_TAG = "v0.1.0"
DEFAULT_INITIAL_VERSION = "0.1.0"
DEFAULT_PRERELEASE_ID = "alpha"
DEFAULT_REMOTE = "origin"
DEFAULT_AUTO_PUSH = True
DEFAULT_BRANCH_POLICY = {
    "main": "minor",
    "release/*": "patch",
    "develop": "prerelease",
}
DEFAULT_LIST_LIMIT = 10

CONFIG_PACKAGE_PROP = "gentag"
CONFIG_SEARCH_PLACES = [
    ".gentagrc",
    ".gentagrc.json",
    ".gentagrc.yaml",
    ".gentagrc.yml",
    "pyproject.toml",
    "package.json",
]
DOTENV_FILE = ".env"

ENV_PATTERN = "GENTAG_PATTERN"
ENV_INITIAL = "GENTAG_INITIAL"
ENV_AUTO_PUSH = "GENTAG_AUTO_PUSH"
ENV_REMOTE = "GENTAG_REMOTE"

MAX_TAG_ATTEMPTS = 100
MAX_CREATE_ATTEMPTS = 3
