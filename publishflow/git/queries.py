"""Read-only git queries.

These functions inspect repository state and never mutate it. Failures
are reported as Err results with a GIT_* code instead of raising.
"""

import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from publishflow.exceptions import ErrorCode
from publishflow.result import Ok, Result, fail
from publishflow.utils.shell import ShellError, probe_version, run, run_silent

# Exceptions a git subprocess can surface besides a non-zero exit
GIT_FAILURES = (ShellError, OSError, subprocess.TimeoutExpired)


@dataclass(frozen=True)
class RepositoryStatus:
    """Snapshot of repository state.

    When is_repo is False every other field keeps its default.
    """

    is_repo: bool = False
    has_remote: bool = False
    current_branch: str | None = None
    is_dirty: bool = False


@dataclass(frozen=True)
class GitRemote:
    """A configured remote as listed by `git remote -v`."""

    name: str
    url: str


@dataclass
class PendingChangeSet:
    """Uncommitted files grouped by kind of change."""

    modified: list[str] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    untracked: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.modified) + len(self.added) + len(self.deleted) + len(self.untracked)

    @property
    def is_empty(self) -> bool:
        return self.total == 0


def is_git_installed() -> bool:
    """Check that the git executable is available."""
    return probe_version("git")


def is_repository(cwd: Path) -> bool:
    """Check whether ``cwd`` is the root of a git repository."""
    return (cwd / ".git").exists()


def parse_porcelain(output: str) -> PendingChangeSet:
    """Classify `git status --porcelain` lines.

    Renames and copies count as modifications. The first matching status
    letter wins, in the order M, A, D, ?.
    """
    changes = PendingChangeSet()
    for line in output.splitlines():
        if not line.strip():
            continue
        status = line[:2]
        path = line[3:].strip()
        if "M" in status or "R" in status or "C" in status:
            changes.modified.append(path)
        elif "A" in status:
            changes.added.append(path)
        elif "D" in status:
            changes.deleted.append(path)
        elif "?" in status:
            changes.untracked.append(path)
    return changes


def get_changes(cwd: Path, timeout: int = 60) -> Result[PendingChangeSet]:
    """Get uncommitted changes in the working tree."""
    try:
        result = run(["git", "status", "--porcelain"], cwd=cwd, timeout=timeout)
    except GIT_FAILURES as e:
        return fail("Failed to get git status", ErrorCode.GIT_STATUS_FAILED, cause=e)
    return Ok(parse_porcelain(result.stdout))


def get_current_branch(cwd: Path, timeout: int = 60) -> str | None:
    """Name of the checked-out branch, or None when detached or unknown."""
    try:
        result = run(["git", "branch", "--show-current"], cwd=cwd, timeout=timeout)
    except GIT_FAILURES:
        return None
    return result.stdout.strip() or None


def get_status(cwd: Path, timeout: int = 60) -> Result[RepositoryStatus]:
    """Read a fresh RepositoryStatus for ``cwd``."""
    if not is_repository(cwd):
        return Ok(RepositoryStatus())

    try:
        remotes = run(["git", "remote"], cwd=cwd, timeout=timeout)
        porcelain = run(["git", "status", "--porcelain"], cwd=cwd, timeout=timeout)
    except GIT_FAILURES as e:
        return fail("Failed to read repository status", ErrorCode.GIT_STATUS_FAILED, cause=e)

    return Ok(
        RepositoryStatus(
            is_repo=True,
            has_remote=bool(remotes.stdout.strip()),
            current_branch=get_current_branch(cwd, timeout),
            is_dirty=bool(porcelain.stdout.strip()),
        )
    )


def _lines(output: str) -> list[str]:
    return [line.strip() for line in output.splitlines() if line.strip()]


def get_branches(cwd: Path, timeout: int = 60) -> Result[list[str]]:
    """List local branch names."""
    try:
        result = run(
            ["git", "branch", "--format=%(refname:short)"], cwd=cwd, timeout=timeout
        )
    except GIT_FAILURES as e:
        return fail("Failed to list branches", ErrorCode.GIT_BRANCHES_FAILED, cause=e)
    return Ok(_lines(result.stdout))


def get_tags(cwd: Path, timeout: int = 60) -> Result[list[str]]:
    """List tags in git's default (lexicographic) order."""
    try:
        result = run(["git", "tag", "--list"], cwd=cwd, timeout=timeout)
    except GIT_FAILURES as e:
        return fail("Failed to list tags", ErrorCode.GIT_TAGS_FAILED, cause=e)
    return Ok(_lines(result.stdout))


def get_remotes(cwd: Path, timeout: int = 60) -> Result[list[GitRemote]]:
    """List remotes, one entry per name (the fetch URL wins)."""
    try:
        result = run(["git", "remote", "-v"], cwd=cwd, timeout=timeout)
    except GIT_FAILURES as e:
        return fail("Failed to list remotes", ErrorCode.GIT_REMOTES_FAILED, cause=e)

    remotes: dict[str, GitRemote] = {}
    for line in result.stdout.splitlines():
        parts = line.split()
        if len(parts) >= 2 and parts[0] not in remotes:
            remotes[parts[0]] = GitRemote(name=parts[0], url=parts[1])
    return Ok(list(remotes.values()))


def get_config_value(key: str, cwd: Path, timeout: int = 60) -> str | None:
    """Read a git config value, or None when unset."""
    try:
        result = run(["git", "config", key], cwd=cwd, check=False, timeout=timeout)
    except GIT_FAILURES:
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def can_push(
    remote: str,
    ref: str | None = None,
    cwd: Path | None = None,
    timeout: int = 60,
) -> bool:
    """Probe push permission with `git push --dry-run`."""
    cmd = ["git", "push", "--dry-run", remote]
    if ref:
        cmd.append(ref)
    return run_silent(cmd, cwd=cwd, timeout=timeout)
