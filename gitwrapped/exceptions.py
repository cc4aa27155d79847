"""Errors that cross component boundaries."""

from __future__ import annotations


class GitWrappedError(Exception):
    """Base exception for card generation failures."""


class InvalidUsernameError(GitWrappedError):
    """Raised before any API call when the username is malformed or missing."""

    def __init__(self, username: str | None):
        super().__init__(f"Invalid GitHub username: {username!r}")
        self.username = username


class GitHubAPIError(GitWrappedError):
    """Raised when a GitHub request fails (non-2xx or network error)."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class UserNotFoundError(GitHubAPIError):
    """Raised when the user lookup returns 404."""

    def __init__(self, username: str):
        super().__init__(f"GitHub user not found: {username}", status=404)
        self.username = username
