"""Blame model."""

from pydantic import BaseModel


class BlameEntry(BaseModel):
    """A run of contiguous file lines last touched by the same revision."""

    commit: str
    line: str
    start_line: int
    line_count: int = 1
