"""Aggregators that group parsed commits for reporting."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from gitter.models.commit import Commit

DAY_FORMAT = "%Y-%m-%d"


class StatisticsAggregator(ABC):
    """Collects commits as the repository log is parsed."""

    def __init__(self):
        self.items: Dict[str, Any] = {}

    @abstractmethod
    def add_commit(self, commit: Commit) -> None:
        """Account for a single commit."""

    def sort_commits(self) -> None:
        """Order the collected items once every commit has been added."""

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, key: str) -> Any:
        return self.items[key]

    def __contains__(self, key: object) -> bool:
        return key in self.items


class ContributorStatistics(StatisticsAggregator):
    """Groups commits by author email, then by committer day."""

    def add_commit(self, commit: Commit) -> None:
        email = commit.author.email
        day = commit.commiter_date.strftime(DAY_FORMAT)

        contributor = self.items.setdefault(
            email, {"name": commit.author.name, "commits": {}}
        )
        contributor["commits"].setdefault(day, []).append(commit)

    def commit_count(self, email: str) -> int:
        return sum(len(commits) for commits in self.items[email]["commits"].values())

    def sort_commits(self) -> None:
        ordered = sorted(self.items, key=self.commit_count, reverse=True)
        self.items = {email: self.items[email] for email in ordered}


class DateStatistics(StatisticsAggregator):
    """Groups commits by committer day."""

    def add_commit(self, commit: Commit) -> None:
        day = commit.commiter_date.strftime(DAY_FORMAT)
        self.items.setdefault(day, []).append(commit)

    def sort_commits(self) -> None:
        self.items = dict(sorted(self.items.items()))

    def commits_on(self, day: str) -> List[Commit]:
        return self.items.get(day, [])


AGGREGATORS = {
    "contributors": ContributorStatistics,
    "date": DateStatistics,
}
