"""Unit tests for publishflow.hosting providers and adapter."""

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

from publishflow.exceptions import ErrorCode
from publishflow.hosting import HostingAdapter, HostingCatalog
from publishflow.hosting.github import GitHubProvider
from publishflow.hosting.gitlab import GitLabProvider
from publishflow.remote import Platform
from publishflow.result import Err, Ok
from publishflow.utils.shell import ShellError


def completed(stdout: str = "") -> MagicMock:
    result = MagicMock()
    result.stdout = stdout
    return result


class TestGitHubProvider:
    """Tests for GitHubProvider.create_repository."""

    def test_creates_and_reads_url(self, project_dir: Path) -> None:
        with patch(
            "publishflow.hosting.github.run",
            side_effect=[completed(), completed("https://github.com/octo/demo\n")],
        ) as mock_run:
            result = GitHubProvider().create_repository("demo", True, project_dir)

        assert result.value == "https://github.com/octo/demo"
        create_cmd = mock_run.call_args_list[0][0][0]
        assert create_cmd == ["gh", "repo", "create", "demo", "--source=.", "--private"]

    def test_url_lookup_failure_falls_back(self, project_dir: Path) -> None:
        with patch(
            "publishflow.hosting.github.run",
            side_effect=[completed(), ShellError("gh repo view", 1, "", "not found")],
        ):
            result = GitHubProvider().create_repository("demo", False, project_dir)

        assert result.value == "https://github.com/demo"

    def test_create_failure(self, project_dir: Path) -> None:
        with patch(
            "publishflow.hosting.github.run",
            side_effect=subprocess.TimeoutExpired(cmd="gh", timeout=120),
        ):
            result = GitHubProvider().create_repository("demo", False, project_dir)

        assert isinstance(result, Err)
        assert result.code is ErrorCode.REMOTE_CREATE_FAILED


class TestGitLabProvider:
    """Tests for GitLabProvider.create_repository."""

    def test_reads_web_url(self, project_dir: Path) -> None:
        view = completed('{"web_url": "https://gitlab.com/group/demo"}')
        with patch(
            "publishflow.hosting.gitlab.run", side_effect=[completed(), view]
        ) as mock_run:
            result = GitLabProvider().create_repository("demo", False, project_dir)

        assert result.value == "https://gitlab.com/group/demo"
        assert mock_run.call_args_list[0][0][0] == ["glab", "repo", "create", "demo", "--public"]

    def test_unparseable_view_falls_back(self, project_dir: Path) -> None:
        with patch(
            "publishflow.hosting.gitlab.run", side_effect=[completed(), completed("oops")]
        ):
            result = GitLabProvider().create_repository("demo", False, project_dir)

        assert result.value == "https://gitlab.com/demo"


class TestHostingAdapter:
    """Tests for HostingAdapter."""

    def test_registered_platforms(self) -> None:
        assert HostingCatalog.get(Platform.GITHUB) is GitHubProvider
        assert HostingCatalog.get(Platform.GITLAB) is GitLabProvider
        assert HostingCatalog.get(Platform.BITBUCKET) is None

    def test_probe_returns_available_set(self, project_dir: Path) -> None:
        def fake_probe(cmd: str, timeout: int = 15) -> bool:
            return cmd == "glab"

        with patch("publishflow.hosting.base.probe_version", side_effect=fake_probe):
            assert HostingAdapter(project_dir).probe() == {Platform.GITLAB}

    def test_probe_nothing_available(self, project_dir: Path) -> None:
        with patch("publishflow.hosting.base.probe_version", return_value=False):
            assert HostingAdapter(project_dir).probe() == set()

    def test_unsupported_platform(self, project_dir: Path) -> None:
        result = HostingAdapter(project_dir).create_repository(Platform.BITBUCKET, "demo", False)
        assert result.code is ErrorCode.REMOTE_UNSUPPORTED_PLATFORM

    def test_delegates_with_timeout(self, project_dir: Path) -> None:
        with patch.object(
            GitHubProvider, "create_repository", return_value=Ok("https://github.com/a/b")
        ) as mock_create:
            result = HostingAdapter(project_dir, timeout=30).create_repository(
                Platform.GITHUB, "b", True
            )

        assert result.value == "https://github.com/a/b"
        mock_create.assert_called_once_with("b", True, project_dir, 30)

    def test_display_name(self, project_dir: Path) -> None:
        adapter = HostingAdapter(project_dir)
        assert adapter.display_name(Platform.GITHUB) == "GitHub (using gh CLI)"
        assert adapter.display_name(Platform.BITBUCKET) == "Bitbucket"
