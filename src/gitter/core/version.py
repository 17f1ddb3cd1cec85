"""Selects the git command-line dialect from the reported version."""

import re
from enum import IntEnum
from typing import Tuple

from gitter.exceptions import MalformedOutputError

# Length of the "git version " banner git prints before the version number
BANNER_LENGTH = 12

COLOR_FLAG_VERSION = (1, 7, 2)
WHITESPACE_FLAGS_VERSION = (1, 8, 4)

VERSION_NUMBER = re.compile(r"(\d+)\.(\d+)(?:\.(\d+))?")


class Dialect(IntEnum):
    """Command-line feature levels, ordered from oldest to newest."""

    LEGACY = 0
    NO_COLOR = 1
    WHITESPACE_INSENSITIVE = 2

    @property
    def supports_color_flag(self) -> bool:
        return self >= Dialect.NO_COLOR

    @property
    def supports_whitespace_flags(self) -> bool:
        return self >= Dialect.WHITESPACE_INSENSITIVE


def strip_banner(output: str) -> str:
    """Drop the ``git version`` banner, leaving the version proper."""
    output = output.strip()
    if output.startswith("git version "):
        return output[BANNER_LENGTH:].strip()
    return output


def parse_version(version: str) -> Tuple[int, int, int]:
    """Extract a numeric ``(major, minor, patch)`` tuple from a version string.

    Accepts both the raw ``git --version`` output and the stripped form,
    including vendor suffixes such as ``2.39.2 (Apple Git-143)``.
    """
    match = VERSION_NUMBER.search(strip_banner(version))
    if not match:
        raise MalformedOutputError(f"Unable to read git version from {version!r}")

    major, minor, patch = match.groups()
    return int(major), int(minor), int(patch or 0)


def select_dialect(version: str) -> Dialect:
    version_info = parse_version(version)

    if version_info >= WHITESPACE_FLAGS_VERSION:
        return Dialect.WHITESPACE_INSENSITIVE
    if version_info >= COLOR_FLAG_VERSION:
        return Dialect.NO_COLOR
    return Dialect.LEGACY
