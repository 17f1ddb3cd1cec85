"""Repository operations backed by the git command line."""

import re
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from gitter.core.blame_parser import parse_blame
from gitter.core.commit_builder import build_commit
from gitter.core.diff_parser import parse_diff
from gitter.core.pretty_format import PrettyFormat, commit_template
from gitter.logger import get_logger
from gitter.models.blame import BlameEntry
from gitter.models.commit import Commit
from gitter.statistics import StatisticsAggregator

if TYPE_CHECKING:
    from gitter.core.client import Client

logger = get_logger(__name__)

ITEM_END = "</item>"
WHITESPACE_FLAGS = ["--ignore-blank-lines", "-w", "-b"]
HEAD_REF = re.compile(r"ref:\s*refs/heads/(.+)")
DETACHED_BRANCH = re.compile(r"(detached|no branch)")


def split_lines(output: str) -> List[str]:
    """Split command output into lines, ignoring the final newline."""
    if output.endswith("\n"):
        output = output[:-1]
    return output.split("\n")


class Repository:
    """A git repository on disk, accessed through a Client."""

    def __init__(self, path: Union[str, Path], client: "Client"):
        self.path = Path(path)
        self.client = client
        self.commits_have_been_parsed = False
        self.statistics: Dict[str, StatisticsAggregator] = {}

    @property
    def cache_key(self) -> str:
        return str(self.path)

    def run(self, args: List[str]) -> str:
        return self.client.run(self.path, args)

    def create(self, bare: bool = False) -> "Repository":
        """Create the directory and initialize a git repository in it."""
        self.path.mkdir(parents=True, exist_ok=True)

        args = ["init"]
        if bare:
            args.append("--bare")
        self.run(args)

        return self

    def get_name(self) -> str:
        """Name of the repository's top level directory."""
        return self.path.name or self.path.resolve().name

    # Configuration

    def get_config(self, key: str) -> str:
        return self.run(["config", key]).strip()

    def set_config(self, key: str, value: str) -> "Repository":
        self.run(["config", key, value])
        return self

    # Working tree passthroughs

    def add(self, files: Union[str, List[str]] = ".") -> "Repository":
        """Stage one or more paths."""
        if isinstance(files, str):
            files = [files]
        self.run(["add", "--", *files])
        return self

    def add_all(self) -> "Repository":
        self.run(["add", "-A"])
        return self

    def commit(self, message: str) -> "Repository":
        self.run(["commit", "-m", message])
        return self

    def checkout(self, branch: str) -> "Repository":
        self.run(["checkout", branch])
        return self

    def pull(self) -> "Repository":
        self.run(["pull"])
        return self

    def push(
        self, repository: Optional[str] = None, refspec: Optional[str] = None
    ) -> "Repository":
        args = ["push"]
        if repository:
            args.append(repository)
        if refspec:
            args.append(refspec)
        self.run(args)
        return self

    # Branches and tags

    def get_branches(self) -> List[str]:
        """List local branch names, skipping the detached HEAD pseudo branch."""
        cache = self.client.cache.branches
        if self.cache_key in cache:
            return cache[self.cache_key]

        # Whitespace is stripped, so "* (HEAD detached at x)" becomes "(HEADdetachedatx)"
        branches = [re.sub(r"[*\s]", "", line) for line in split_lines(self.run(["branch"]))]
        branches = [branch for branch in branches if branch]

        if branches and (
            branches[0].startswith(("(detachedfrom", "(HEADdetached"))
            or branches[0] == "(nobranch)"
        ):
            branches = branches[1:]

        cache[self.cache_key] = branches
        return branches

    def get_current_branch(self) -> Optional[str]:
        """Name of the checked out branch, or None in detached HEAD state."""
        for line in split_lines(self.run(["branch"])):
            if line.startswith("*"):
                if DETACHED_BRANCH.search(line):
                    return None
                return line[2:]

        return None

    def has_branch(self, branch: str) -> bool:
        return branch in self.get_branches()

    def create_branch(self, branch: str) -> None:
        self.run(["branch", branch])
        self.client.cache.invalidate_branches(self.cache_key)

    def create_tag(self, tag: str, message: Optional[str] = None) -> None:
        args = ["tag"]
        if message:
            args.extend(["-a", "-m", message])
        args.append(tag)

        self.run(args)
        self.client.cache.invalidate_tags(self.cache_key)

    def get_tags(self) -> Optional[List[str]]:
        """List tag names, or None when the repository has no tags."""
        cache = self.client.cache.tags
        if self.cache_key in cache:
            return cache[self.cache_key]

        tags = [tag for tag in split_lines(self.run(["tag"])) if tag]
        cache[self.cache_key] = tags or None

        return cache[self.cache_key]

    def get_head(self, default: Optional[str] = None) -> Optional[str]:
        """Name of the HEAD branch, falling back to ``default`` or the first branch."""
        for head_file in (self.path / ".git" / "HEAD", self.path / "HEAD"):
            if head_file.exists():
                for line in head_file.read_text(encoding="utf-8").splitlines():
                    match = HEAD_REF.search(line)
                    if match and self.has_branch(match.group(1)):
                        return match.group(1)
                break

        if default is not None and self.has_branch(default):
            return default

        branches = self.get_branches()
        if branches:
            return branches[0]

        return None

    def get_branch_tree(self, branch: str) -> Optional[str]:
        """Tree hash at the tip of a branch or tree reference."""
        tree = self.run(["log", "--pretty=%T", "--max-count=1", branch])
        return tree.strip() or None

    def get_total_commits(self, file: Optional[str] = None) -> int:
        args = ["rev-list", "--count", "--all"]
        if file:
            args.extend(["--", file])
        return int(self.run(args).strip() or 0)

    # Statistics

    def add_statistics(self, tag: str, aggregator: StatisticsAggregator) -> None:
        """Register an aggregator fed with every commit parsed by get_commits."""
        self.statistics[tag] = aggregator

    def get_statistics(self) -> Dict[str, StatisticsAggregator]:
        if not self.commits_have_been_parsed:
            self.get_commits()

        for aggregator in self.statistics.values():
            aggregator.sort_commits()

        return self.statistics

    # Parsed views

    def get_pretty_format(self, args: List[str]) -> List[Dict[str, Any]]:
        """Run a command using the XML pretty format and parse its records."""
        return PrettyFormat().parse(self.run(args))

    def get_commits(self, file: Optional[str] = None) -> List[Commit]:
        """Return the commit log, newest first."""
        args = ["log", f"--pretty=format:{commit_template()}"]
        if file:
            args.extend(["--", file])

        commits = []
        for record in self.get_pretty_format(args):
            commit = build_commit(record)
            commits.append(commit)

            for aggregator in self.statistics.values():
                aggregator.add_commit(commit)

        self.commits_have_been_parsed = True

        return commits

    def get_commit(self, commit_hash: str) -> Commit:
        """Return a single commit with its diffs attached."""
        args = ["show"]
        if self.client.dialect.supports_whitespace_flags:
            args.extend(WHITESPACE_FLAGS)
        args.extend([f"--pretty=format:{commit_template(with_body=True)}", commit_hash])

        output = self.run(args)

        end = output.find(ITEM_END)
        end = len(output) if end == -1 else end + len(ITEM_END)
        commit = build_commit(PrettyFormat().parse(output[:end])[0])

        # First element is the remainder of the metadata line
        lines = split_lines(output[end:])[1:]

        if (len(lines) < 2 or not lines[1]) and len(commit.parents) == 1:
            logger.info("No diff in show output for %s, diffing against parent", commit_hash)
            lines = split_lines(self.run(["diff", f"{commit_hash}~1..{commit_hash}"]))

        commit.set_diffs(parse_diff(lines))

        return commit

    def get_blame(self, file: str) -> List[BlameEntry]:
        """Blame a file, grouping contiguous lines by revision."""
        return parse_blame(split_lines(self.run(["blame", "-s", "--", file])))
