"""Diff models reconstructed from unified diff output."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class LineKind(str, Enum):
    """Kind of a single line inside a file diff."""

    CONTEXT = "context"
    CHUNK = "chunk"
    OLD = "old"
    NEW = "new"
    INFO = "info"

    @classmethod
    def classify(cls, line: str) -> "LineKind":
        """Classify a diff line by its leading character."""
        if not line:
            return cls.CONTEXT
        return _KIND_BY_PREFIX.get(line[0], cls.CONTEXT)

    @property
    def advances_old(self) -> bool:
        return self in (LineKind.CONTEXT, LineKind.OLD, LineKind.INFO)

    @property
    def advances_new(self) -> bool:
        return self in (LineKind.CONTEXT, LineKind.NEW, LineKind.INFO)


_KIND_BY_PREFIX = {
    "@": LineKind.CHUNK,
    "-": LineKind.OLD,
    "+": LineKind.NEW,
    "\\": LineKind.INFO,  # No newline at end of file
    "B": LineKind.INFO,  # Binary
    "c": LineKind.INFO,  # copy from/to
    "d": LineKind.INFO,  # deleted file mode, dissimilarity
    "n": LineKind.INFO,  # new file mode
    "o": LineKind.INFO,  # old mode
    "r": LineKind.INFO,  # rename from/to
    "s": LineKind.INFO,  # similarity index
}


class DiffLine(BaseModel):
    """One line of a file diff with its position on both sides."""

    line: str
    kind: LineKind
    old_number: int
    new_number: int


class Diff(BaseModel):
    """Changes made to a single file."""

    file: Optional[str] = None
    file_new: Optional[str] = None
    index: Optional[str] = None
    old: Optional[str] = None
    new: Optional[str] = None
    similarity: Optional[int] = None
    lines: List[DiffLine] = []

    @property
    def is_rename(self) -> bool:
        return self.file_new is not None and self.file_new != self.file

    def add_line(self, line: str, kind: LineKind, old_number: int, new_number: int) -> None:
        self.lines.append(
            DiffLine(line=line, kind=kind, old_number=old_number, new_number=new_number)
        )
