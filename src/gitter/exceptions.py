"""Errors raised while running git and interpreting its output."""

from typing import List, Optional


class GitterError(Exception):
    """Base class for every error raised by gitter."""


class NoDataError(GitterError):
    """Git produced no output where at least one record was expected."""

    def __init__(self, message: str = "No data available"):
        super().__init__(message)


class MalformedOutputError(GitterError):
    """Git output could not be turned into well-formed structure."""


class MissingFieldError(GitterError):
    """A parsed record lacks a field the pretty-format template always requests."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing field in pretty-format record: {field}")


class ExternalCommandError(GitterError):
    """The git process exited with a non-zero status."""

    def __init__(
        self,
        stderr: str,
        status: Optional[int] = None,
        command: Optional[List[str]] = None,
    ):
        self.stderr = stderr
        self.status = status
        self.command = command or []
        super().__init__(stderr.strip() or f"git exited with status {status}")


class RepositoryNotFoundError(GitterError):
    """No git repository exists at the requested path."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"There is no GIT repository at {path}")


class RepositoryExistsError(GitterError):
    """A git repository already exists where a new one was requested."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"A GIT repository already exists at {path}")
