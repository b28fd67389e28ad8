"""Unit tests for publishflow.git.queries.

Tests run against real repositories created in temporary directories.
"""

from collections.abc import Callable
from pathlib import Path

from publishflow.exceptions import ErrorCode
from publishflow.git import (
    GitAdapter,
    RepositoryStatus,
    can_push,
    get_branches,
    get_changes,
    get_config_value,
    get_remotes,
    get_status,
    get_tags,
    is_repository,
    parse_porcelain,
)
from publishflow.result import Err, Ok


class TestParsePorcelain:
    """Tests for parse_porcelain function."""

    def test_classifies_each_group(self) -> None:
        output = "\n".join(
            [
                " M src/mod.ts",
                "A  src/new.ts",
                " D old.ts",
                "?? notes.txt",
                "R  a.ts -> b.ts",
            ]
        )
        changes = parse_porcelain(output)

        assert changes.modified == ["src/mod.ts", "a.ts -> b.ts"]
        assert changes.added == ["src/new.ts"]
        assert changes.deleted == ["old.ts"]
        assert changes.untracked == ["notes.txt"]
        assert changes.total == 5

    def test_modified_wins_over_added(self) -> None:
        changes = parse_porcelain("AM file.ts")
        assert changes.modified == ["file.ts"]
        assert changes.added == []

    def test_empty_output(self) -> None:
        changes = parse_porcelain("\n")
        assert changes.is_empty


class TestStatus:
    """Tests for repository status queries."""

    def test_not_a_repository_keeps_defaults(self, project_dir: Path) -> None:
        result = get_status(project_dir)

        assert isinstance(result, Ok)
        assert result.value == RepositoryStatus()
        assert is_repository(project_dir) is False

    def test_committed_repository(self, committed_repo: Path) -> None:
        result = get_status(committed_repo)

        assert isinstance(result, Ok)
        status = result.value
        assert status.is_repo is True
        assert status.current_branch == "main"
        assert status.has_remote is False
        assert status.is_dirty is False

    def test_dirty_repository_with_remote(self, publishable_repo: Path) -> None:
        (publishable_repo / "new.ts").write_text("export {};\n")

        status = get_status(publishable_repo).value

        assert status.has_remote is True
        assert status.is_dirty is True

    def test_changes(self, committed_repo: Path) -> None:
        (committed_repo / "README.md").write_text("changed\n")
        (committed_repo / "extra.ts").write_text("export {};\n")

        changes = get_changes(committed_repo).value

        assert changes.modified == ["README.md"]
        assert changes.untracked == ["extra.ts"]

    def test_changes_outside_repository_fails(self, project_dir: Path) -> None:
        result = get_changes(project_dir.parent / "missing-dir")
        assert isinstance(result, Err)
        assert result.code is ErrorCode.GIT_STATUS_FAILED


class TestRefs:
    """Tests for branch, tag and remote listing."""

    def test_branches(self, committed_repo: Path, run_git: Callable[..., str]) -> None:
        run_git(committed_repo, "branch", "feature")
        assert get_branches(committed_repo).value == ["feature", "main"]

    def test_tags_in_lexicographic_order(
        self, committed_repo: Path, run_git: Callable[..., str]
    ) -> None:
        for tag in ("v1.10.0", "v1.2.0", "v1.9.0"):
            run_git(committed_repo, "tag", tag)
        assert get_tags(committed_repo).value == ["v1.10.0", "v1.2.0", "v1.9.0"]

    def test_no_tags(self, committed_repo: Path) -> None:
        assert get_tags(committed_repo).value == []

    def test_remotes_one_entry_per_name(self, publishable_repo: Path, origin_repo: Path) -> None:
        remotes = get_remotes(publishable_repo).value

        assert len(remotes) == 1
        assert remotes[0].name == "origin"
        assert remotes[0].url == str(origin_repo)

    def test_config_value(self, git_repo: Path) -> None:
        assert get_config_value("user.name", git_repo) == "Test User"
        assert get_config_value("publishflow.unset", git_repo) is None


class TestCanPush:
    """Tests for the dry-run push probe."""

    def test_pushable_remote(self, publishable_repo: Path) -> None:
        assert can_push("origin", "main", publishable_repo) is True

    def test_missing_remote(self, committed_repo: Path) -> None:
        assert can_push("origin", "main", committed_repo) is False

    def test_adapter_binds_project_root(self, publishable_repo: Path) -> None:
        adapter = GitAdapter(publishable_repo)
        assert adapter.is_repository() is True
        assert adapter.can_push("origin", "main") is True
        assert adapter.status().value.current_branch == "main"
