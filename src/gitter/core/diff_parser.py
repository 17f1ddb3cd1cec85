"""Reconstructs per-file diffs from git's unified diff output.

The parser walks the output line by line. File headers (``diff --git``,
``index``, ``---``/``+++`` and binary notices) update the active Diff, every
other line is hunk content and is numbered against the most recent
``@@ -a,b +c,d @@`` header. Unexpected lines are absorbed rather than
rejected since diff output differs slightly between git versions.
"""

import re
from typing import Iterable, List, Optional

from gitter.models.diff import Diff, LineKind

DIFF_PREFIX = "diff"
INDEX_PREFIX = "index"
OLD_FILE_PREFIX = "---"
NEW_FILE_PREFIX = "+++"
BINARY_PREFIX = "Binary"
BINARY_NEW_INDENT = "    "

# Same path on both sides: "diff --git a/some file b/some file"
SAME_PATH_HEADER = re.compile(r"^diff --\S+ a/(?P<path>.+) b/(?P=path)$")
# Renames and copies; the old path is matched greedily up to the last " b/"
TWO_PATH_HEADER = re.compile(r"^diff --\S+ a/?(?P<old>.+) b/?(?P<new>.+)$")
COMBINED_HEADER = re.compile(r"^diff --(?:cc|combined) (?P<path>.+)$")
BINARY_NOTICE = re.compile(r"^Binary files (?P<old>.+) and (?P<new>.+) differ")
CHUNK_HEADER = re.compile(r"^@@+ -(?P<old_start>[0-9]+)")
SIMILARITY = re.compile(r"^similarity index (?P<percent>[0-9]+)%")
RENAME_OR_COPY_TO = re.compile(r"^(?:rename|copy) to (?P<path>.+)$")


class DiffParser:
    """Stateful parser turning diff text into Diff models."""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.diffs: List[Diff] = []
        self.current: Optional[Diff] = None
        self.in_hunk = False
        self.old_number = 0
        self.new_number = 0

    def parse(self, lines: Iterable[str]) -> List[Diff]:
        """Parse diff lines and return one Diff per changed file."""
        self.reset()
        for line in lines:
            self.feed(line)
        return self.finish()

    def feed(self, line: str) -> None:
        line = line.rstrip("\r")

        if line.startswith(DIFF_PREFIX):
            self._start_diff(line)
            return

        if self.current is not None and not self.in_hunk and self._read_header(line):
            return

        self._read_content(line)

    def finish(self) -> List[Diff]:
        if self.current is not None:
            self.diffs.append(self.current)
            self.current = None
        return self.diffs

    def _start_diff(self, line: str) -> None:
        if self.current is not None:
            self.diffs.append(self.current)

        self.current = Diff()
        self.in_hunk = False

        match = SAME_PATH_HEADER.match(line) or COMBINED_HEADER.match(line)
        if match:
            self.current.file = match.group("path")
            return

        match = TWO_PATH_HEADER.match(line)
        if match:
            self.current.file = match.group("old")
            if match.group("new") != match.group("old"):
                self.current.file_new = match.group("new")

    def _read_header(self, line: str) -> bool:
        """Record file header lines on the active diff; True when consumed."""
        diff = self.current

        if line.startswith(INDEX_PREFIX):
            diff.index = line
            return True

        if line.startswith(OLD_FILE_PREFIX):
            diff.old = line
            return True

        if line.startswith(NEW_FILE_PREFIX):
            diff.new = line
            return True

        if line.startswith(BINARY_PREFIX):
            match = BINARY_NOTICE.match(line)
            if match:
                diff.old = match.group("old")
                diff.new = BINARY_NEW_INDENT + match.group("new")
            return True

        match = SIMILARITY.match(line)
        if match:
            diff.similarity = int(match.group("percent"))
        else:
            match = RENAME_OR_COPY_TO.match(line)
            if match:
                diff.file_new = match.group("path")

        # similarity and rename lines still appear as info lines
        return False

    def _read_content(self, line: str) -> None:
        kind = LineKind.classify(line)

        if kind is LineKind.CHUNK:
            match = CHUNK_HEADER.match(line)
            self.in_hunk = True
            if match:
                # Hunks start counting from the line before the first one shown
                self.old_number = self.new_number = int(match.group("old_start")) - 1
        else:
            if kind.advances_old:
                self.old_number += 1
            if kind.advances_new:
                self.new_number += 1

        if self.current is not None:
            self.current.add_line(line, kind, self.old_number, self.new_number)


def parse_diff(lines: Iterable[str]) -> List[Diff]:
    """Parse diff output lines into Diff models."""
    return DiffParser().parse(lines)
