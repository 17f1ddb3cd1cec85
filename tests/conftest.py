"""Shared fixtures for gitter tests."""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from gitter.core.cache import GitCache
from gitter.core.version import Dialect
from gitter.models.commit import Author, Commit

HASH_A = "a" * 40
HASH_B = "b" * 40
TREE = "c" * 40


def pretty_record(
    commit_hash: str = HASH_A,
    parents: str = "",
    author: str = "Jane Doe",
    author_email: str = "jane@example.com",
    date: int = 1700000000,
    message: str = "Initial commit",
    body: str = None,
) -> str:
    """Render one record exactly as the pretty-format template would."""
    record = (
        f"<item><hash>{commit_hash}</hash><short_hash>{commit_hash[:7]}</short_hash>"
        f"<tree>{TREE}</tree><parents>{parents}</parents>"
        f"<author>{author}</author><author_email>{author_email}</author_email>"
        f"<date>{date}</date><commiter>{author}</commiter>"
        f"<commiter_email>{author_email}</commiter_email><commiter_date>{date}</commiter_date>"
        f"<message><![CDATA[{message}]]></message>"
    )
    if body is not None:
        record += f"<body><![CDATA[{body}]]></body>"
    return record + "</item>"


@pytest.fixture
def make_commit():
    """Factory for Commit models with sensible defaults."""

    def _make_commit(
        commit_hash: str = HASH_A,
        name: str = "Jane Doe",
        email: str = "jane@example.com",
        when: datetime = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc),
        message: str = "Change things",
        parents=None,
    ) -> Commit:
        author = Author(name=name, email=email)
        return Commit(
            hash=commit_hash,
            short_hash=commit_hash[:7],
            tree_hash=TREE,
            parents=parents or [],
            author=author,
            date=when,
            commiter=author,
            commiter_date=when,
            message=message,
        )

    return _make_commit


@pytest.fixture
def mock_client():
    """A client double that records commands instead of running git."""
    client = Mock()
    client.cache = GitCache()
    client.dialect = Dialect.WHITESPACE_INSENSITIVE
    return client
