"""Tests for the git command client."""

from unittest.mock import patch

import pytest

from gitter.config import GitterConfig
from gitter.core.cache import GitCache
from gitter.core.client import Client
from gitter.core.repository import Repository
from gitter.core.version import Dialect
from gitter.exceptions import (
    ExternalCommandError,
    RepositoryExistsError,
    RepositoryNotFoundError,
)


@pytest.fixture
def git_cmd():
    """Patch GitPython's command wrapper used by the client."""
    with patch("gitter.core.client.Git") as git_class:
        yield git_class.return_value


@pytest.fixture
def client():
    return Client(GitterConfig(git_path="/opt/git/bin/git", timeout=30))


def test_executable_from_config(client):
    assert client.path == "/opt/git/bin/git"


def test_executable_is_resolved_from_path():
    with patch("gitter.core.client.shutil.which", return_value="/usr/local/bin/git"):
        assert Client(GitterConfig()).path == "/usr/local/bin/git"


def test_executable_falls_back_to_default():
    with patch("gitter.core.client.shutil.which", return_value=None):
        assert Client(GitterConfig()).path == "/usr/bin/git"


def test_get_version_strips_banner_and_is_cached(client, git_cmd):
    git_cmd.execute.return_value = (0, "git version 2.43.0\n", "")

    assert client.get_version() == "2.43.0"
    assert client.get_version() == "2.43.0"
    assert git_cmd.execute.call_count == 1
    assert git_cmd.execute.call_args.args[0] == ["/opt/git/bin/git", "--version"]


def test_version_cache_is_shared_between_clients(git_cmd):
    cache = GitCache()
    config = GitterConfig(git_path="/opt/git/bin/git")
    git_cmd.execute.return_value = (0, "git version 2.43.0\n", "")

    Client(config, cache).get_version()
    Client(config, cache).get_version()

    assert git_cmd.execute.call_count == 1
    cache.invalidate()
    assert cache.versions == {}


def test_dialect(client, git_cmd):
    git_cmd.execute.return_value = (0, "git version 1.8.0\n", "")

    assert client.dialect is Dialect.NO_COLOR


def test_run_disables_color_on_recent_git(client, git_cmd, tmp_path):
    git_cmd.execute.side_effect = [(0, "git version 2.43.0\n", ""), (0, "output\n", "")]

    assert client.run(tmp_path, ["log", "-1"]) == "output\n"

    command = git_cmd.execute.call_args.args[0]
    assert command == ["/opt/git/bin/git", "-c", "color.ui=false", "log", "-1"]
    assert git_cmd.execute.call_args.kwargs["kill_after_timeout"] == 30
    assert git_cmd.execute.call_args.kwargs["with_exceptions"] is False


def test_run_without_color_flag_on_old_git(client, git_cmd, tmp_path):
    git_cmd.execute.side_effect = [(0, "git version 1.7.1\n", ""), (0, "", "")]

    client.run(tmp_path, ["status"])

    assert git_cmd.execute.call_args.args[0] == ["/opt/git/bin/git", "status"]


def test_run_runs_inside_repository(client, tmp_path):
    with patch("gitter.core.client.Git") as git_class:
        git_class.return_value.execute.return_value = (0, "git version 2.43.0\n", "")
        client.run(tmp_path, ["status"])

    git_class.assert_called_with(str(tmp_path))


def test_non_zero_exit_raises(client, git_cmd, tmp_path):
    git_cmd.execute.side_effect = [
        (0, "git version 2.43.0\n", ""),
        (128, "", "fatal: not a git repository\n"),
    ]

    with pytest.raises(ExternalCommandError) as excinfo:
        client.run(tmp_path, ["status"])

    assert excinfo.value.status == 128
    assert str(excinfo.value) == "fatal: not a git repository"
    assert excinfo.value.command[-1] == "status"


def test_get_repository_missing(client, tmp_path):
    with pytest.raises(RepositoryNotFoundError):
        client.get_repository(tmp_path / "nothing-here")


def test_get_repository_without_git_dir(client, tmp_path):
    with pytest.raises(RepositoryNotFoundError):
        client.get_repository(tmp_path)


def test_get_repository(client, tmp_path):
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "HEAD").write_text("ref: refs/heads/main\n")

    repository = client.get_repository(tmp_path)

    assert isinstance(repository, Repository)
    assert repository.path == tmp_path
    assert repository.client is client


def test_get_bare_repository(client, tmp_path):
    (tmp_path / "HEAD").write_text("ref: refs/heads/main\n")

    assert client.get_repository(tmp_path).path == tmp_path


def test_create_repository_refuses_existing(client, tmp_path):
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "HEAD").write_text("ref: refs/heads/main\n")

    with pytest.raises(RepositoryExistsError):
        client.create_repository(tmp_path)


def test_create_repository(client, git_cmd, tmp_path):
    git_cmd.execute.return_value = (0, "git version 2.43.0\n", "")
    target = tmp_path / "new"

    repository = client.create_repository(target)

    assert target.is_dir()
    assert repository.path == target
    assert git_cmd.execute.call_args.args[0][-1] == "init"


def test_missing_executable_raises_command_error():
    client = Client(GitterConfig(git_path="/nonexistent/git"))

    with pytest.raises(ExternalCommandError) as excinfo:
        client.get_version()

    assert excinfo.value.status is None
    assert "/nonexistent/git" in str(excinfo.value)


def test_timeout_raises_command_error(client, git_cmd, tmp_path):
    git_cmd.execute.side_effect = [
        (0, "git version 2.43.0\n", ""),
        (-9, "", 'Timeout: the command "git log" did not complete in 30 secs.'),
    ]

    with pytest.raises(ExternalCommandError) as excinfo:
        client.run(tmp_path, ["log"])

    assert excinfo.value.status == -9
    assert "Timeout" in str(excinfo.value)
