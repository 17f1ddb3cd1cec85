"""Runs the git executable and hands its output to the parsers."""

import shutil
from pathlib import Path
from typing import List, Optional, Union

from git.cmd import Git
from git.exc import GitCommandNotFound

from gitter.config import GitterConfig
from gitter.core.cache import GitCache
from gitter.core.repository import Repository
from gitter.core.version import Dialect, select_dialect, strip_banner
from gitter.exceptions import (
    ExternalCommandError,
    RepositoryExistsError,
    RepositoryNotFoundError,
)
from gitter.logger import get_logger

logger = get_logger(__name__)

GIT = "git"
GIT_PATH = "/usr/bin/git"
GIT_HEAD = Path(".git") / "HEAD"
BARE_HEAD = Path("HEAD")


class Client:
    """Entry point for opening repositories and running git commands."""

    def __init__(
        self,
        config: Optional[GitterConfig] = None,
        cache: Optional[GitCache] = None,
    ):
        self.config = config or GitterConfig.load()
        self.cache = cache if cache is not None else GitCache()
        self.path = self.config.git_path or shutil.which(GIT) or GIT_PATH

    def create_repository(self, path: Union[str, Path], bare: bool = False) -> Repository:
        """Create a new repository at ``path`` and return it."""
        path = Path(path)
        if (path / GIT_HEAD).exists() and not (path / BARE_HEAD).exists():
            raise RepositoryExistsError(path)

        return Repository(path, self).create(bare)

    def get_repository(self, path: Union[str, Path]) -> Repository:
        """Open the existing repository at ``path``."""
        path = Path(path)
        if not path.exists() or (
            not (path / GIT_HEAD).exists() and not (path / BARE_HEAD).exists()
        ):
            raise RepositoryNotFoundError(path)

        return Repository(path, self)

    def run(self, repository_path: Union[str, Path], args: List[str]) -> str:
        """Run a git command inside a repository and return its stdout."""
        if self.dialect.supports_color_flag:
            args = ["-c", "color.ui=false", *args]

        return self.execute(args, cwd=repository_path)

    def execute(
        self, args: List[str], cwd: Optional[Union[str, Path]] = None
    ) -> str:
        """Run the git executable with ``args``.

        Raises:
            ExternalCommandError: git could not be started, exited non-zero
                or hit the timeout
        """
        command = [self.path, *args]
        logger.debug("Running %s", " ".join(command))

        try:
            status, stdout, stderr = Git(str(cwd) if cwd else None).execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
                kill_after_timeout=self.config.timeout,
                strip_newline_in_stdout=False,
            )
        except GitCommandNotFound as e:
            raise ExternalCommandError(
                f"Unable to run git executable {self.path}: {e}", None, command
            ) from e

        if status != 0:
            raise ExternalCommandError(stderr, status, command)

        return stdout

    def get_version(self) -> str:
        """Return the installed git version, e.g. ``2.43.0``."""
        version = self.cache.versions.get(self.path)
        if version is not None:
            return version

        version = strip_banner(self.execute(["--version"]))
        self.cache.versions[self.path] = version

        return version

    @property
    def dialect(self) -> Dialect:
        return select_dialect(self.get_version())
