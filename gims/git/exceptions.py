"""Exceptions raised by the repository facade.

- GitError: a git command failed or git is unavailable
- NotARepositoryError: the working directory is outside any repository
- NoStagedChangesError: a command needs staged changes and there are none
"""


class GitError(Exception):
    """A git command failed or git could not be run."""

    pass


class NotARepositoryError(GitError):
    """The current directory is not inside a git repository."""

    pass


class NoStagedChangesError(GitError):
    """Nothing is staged for commit."""

    pass
