"""Data models for gitter."""

from .blame import BlameEntry
from .commit import Author, Commit
from .diff import Diff, DiffLine, LineKind

__all__ = ["Author", "BlameEntry", "Commit", "Diff", "DiffLine", "LineKind"]
