"""Gitter - structured views over git command output."""

from gitter.core.client import Client
from gitter.core.repository import Repository
from gitter.exceptions import (
    ExternalCommandError,
    GitterError,
    MalformedOutputError,
    MissingFieldError,
    NoDataError,
    RepositoryExistsError,
    RepositoryNotFoundError,
)

__version__ = "0.1.0"

__all__ = [
    "Client",
    "Repository",
    "GitterError",
    "NoDataError",
    "MalformedOutputError",
    "MissingFieldError",
    "ExternalCommandError",
    "RepositoryExistsError",
    "RepositoryNotFoundError",
]
