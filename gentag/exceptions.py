"""Custom exceptions for gentag."""


class GentagError(Exception):
    """Base class for errors surfaced to the user."""


class ConfigError(GentagError):
    """Raised when the configuration is invalid."""


class NotARepositoryError(GentagError):
    """Raised when not inside a git working tree or git is unavailable."""


class UnknownEnvironmentError(GentagError):
    """Raised when a tag environment has no pattern configured."""

    def __init__(self, tag_env: str, available=None):
        self.tag_env = tag_env
        self.available = sorted(available or [])
        message = f'No tag pattern configured for environment "{tag_env}"'
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class ExhaustedRetriesError(GentagError):
    """Raised when no unique tag is found within the attempt bound."""

    def __init__(self, pattern: str, attempts: int, last_candidate: str = None):
        self.pattern = pattern
        self.attempts = attempts
        self.last_candidate = last_candidate
        super().__init__(
            f"Could not find an unused tag for pattern '{pattern}' after {attempts} attempts"
            + (f" (last candidate: {last_candidate})" if last_candidate else "")
        )


class TagAlreadyExistsError(GentagError):
    """Raised when git rejects a tag because the ref already exists."""

    def __init__(self, tag_name: str):
        self.tag_name = tag_name
        super().__init__(f"Tag '{tag_name}' already exists")


class TagNotFoundError(GentagError):
    """Raised when a tag to delete does not exist."""


class RemotePushError(GentagError):
    """Raised when pushing a tag to a remote fails."""

    def __init__(self, message: str, tag_name: str = None, remote: str = None):
        self.tag_name = tag_name
        self.remote = remote
        super().__init__(message)


class RemoteDeleteError(GentagError):
    """Raised when deleting a tag from a remote fails."""

    def __init__(self, message: str, tag_name: str = None, remote: str = None):
        self.tag_name = tag_name
        self.remote = remote
        super().__init__(message)
