"""Best-effort memoisation of git lookups that rarely change."""

from typing import Dict, List, Optional


class GitCache:
    """Read-through cache for the git version and per-repository listings.

    Entries are keyed by executable path (versions) or repository path
    (branches, tags). Everything here is safe to recompute, so callers may
    invalidate freely.
    """

    def __init__(self):
        self.versions: Dict[str, str] = {}
        self.branches: Dict[str, List[str]] = {}
        self.tags: Dict[str, Optional[List[str]]] = {}

    def invalidate(self, repository_path: Optional[str] = None) -> None:
        """Forget cached listings for one repository, or everything."""
        if repository_path is None:
            self.versions.clear()
            self.branches.clear()
            self.tags.clear()
            return

        self.branches.pop(repository_path, None)
        self.tags.pop(repository_path, None)

    def invalidate_branches(self, repository_path: str) -> None:
        self.branches.pop(repository_path, None)

    def invalidate_tags(self, repository_path: str) -> None:
        self.tags.pop(repository_path, None)
