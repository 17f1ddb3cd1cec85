"""Groups ``git blame -s`` output into runs of lines per revision."""

import re
from typing import Iterable, List, Optional

from gitter.models.blame import BlameEntry

# "<8 char revision> <padding><line number>) <content>"
BLAME_LINE = re.compile(r"^([a-zA-Z0-9^]{8})[a-zA-Z0-9]*\s+.*?([0-9]+)\) ?(.*)$")


def parse_blame(lines: Iterable[str]) -> List[BlameEntry]:
    """Parse blame output lines into contiguous per-revision entries.

    Lines that don't look like blame output are skipped.
    """
    entries: List[BlameEntry] = []
    current: Optional[BlameEntry] = None

    for line in lines:
        if not line:
            continue

        match = BLAME_LINE.match(line)
        if not match:
            continue

        revision, number, content = match.groups()

        if current is None or current.commit != revision:
            current = BlameEntry(commit=revision, line=content, start_line=int(number))
            entries.append(current)
            continue

        current.line += "\n" + content
        current.line_count += 1

    return entries
