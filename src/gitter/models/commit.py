"""Commit model built from pretty-format log records."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from .diff import Diff


class Author(BaseModel):
    """Name and email of a commit author or committer."""

    name: str
    email: str

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


class Commit(BaseModel):
    """Represents a single commit as reported by git."""

    hash: str
    short_hash: str
    tree_hash: str
    parents: List[str] = []
    author: Author
    date: datetime
    commiter: Author
    commiter_date: datetime
    message: str
    body: Optional[str] = None
    diffs: Optional[List[Diff]] = None

    @property
    def short_parents(self) -> List[str]:
        return [parent[:7] for parent in self.parents]

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1

    @property
    def is_root(self) -> bool:
        return not self.parents

    @property
    def changed_files(self) -> List[str]:
        """Paths touched by this commit, as far as diffs have been attached."""
        if not self.diffs:
            return []
        return [diff.file_new or diff.file for diff in self.diffs if diff.file]

    def set_diffs(self, diffs: List[Diff]) -> None:
        self.diffs = diffs
