"""Tests for blame output grouping."""

from gitter.core.blame_parser import parse_blame


def test_contiguous_lines_of_same_revision_are_grouped():
    entries = parse_blame(
        [
            "aaaaaaaa 1) first",
            "aaaaaaaa 2) second",
            "bbbbbbbb 3) third",
        ]
    )

    assert len(entries) == 2
    assert entries[0].commit == "aaaaaaaa"
    assert entries[0].line == "first\nsecond"
    assert entries[0].start_line == 1
    assert entries[0].line_count == 2
    assert entries[1].commit == "bbbbbbbb"
    assert entries[1].line == "third"
    assert entries[1].start_line == 3


def test_revision_returning_later_starts_new_entry():
    entries = parse_blame(
        ["aaaaaaaa 1) a", "bbbbbbbb 2) b", "aaaaaaaa 3) c"]
    )

    assert [entry.commit for entry in entries] == ["aaaaaaaa", "bbbbbbbb", "aaaaaaaa"]


def test_empty_lines_do_not_break_grouping():
    entries = parse_blame(["aaaaaaaa 1) a", "", "aaaaaaaa 2) b", ""])

    assert len(entries) == 1
    assert entries[0].line == "a\nb"


def test_unmatched_lines_are_skipped():
    entries = parse_blame(["fatal: something odd", "aaaaaaaa 1) kept", "short 2) x"])

    assert len(entries) == 1
    assert entries[0].line == "kept"


def test_padding_and_parentheses_in_content():
    entries = parse_blame(["1a2b3c4d  12) call(1) + f(2)"])

    assert entries[0].commit == "1a2b3c4d"
    assert entries[0].start_line == 12
    assert entries[0].line == "call(1) + f(2)"


def test_boundary_commit_marker():
    entries = parse_blame(["^1a2b3c4 1) root line"])

    assert entries[0].commit == "^1a2b3c4"


def test_longer_abbreviations_are_truncated():
    entries = parse_blame(["1a2b3c4d5e 1) x", "1a2b3c4d5e 2) y"])

    assert entries[0].commit == "1a2b3c4d"
    assert entries[0].line == "x\ny"


def test_blank_source_lines_are_kept():
    entries = parse_blame(["aaaaaaaa 1) def f():", "aaaaaaaa 2) ", "aaaaaaaa 3)     pass"])

    assert entries[0].line == "def f():\n\n    pass"


def test_entries_partition_all_lines():
    lines = [f"{rev * 8} {number}) line {number}" for number, rev in enumerate("aabbbc", 1)]

    entries = parse_blame(lines)

    assert sum(entry.line_count for entry in entries) == 6
    assert [entry.start_line for entry in entries] == [1, 3, 6]
