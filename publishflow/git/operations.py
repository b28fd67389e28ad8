"""Git operations that modify repository state.

Every operation returns a Result; subprocess failures are wrapped into an
Err whose code names the operation (GIT_PUSH_FAILED, GIT_TAG_FAILED, ...).
"""

from pathlib import Path

from publishflow.exceptions import ErrorCode
from publishflow.git.queries import GIT_FAILURES
from publishflow.result import Ok, Result, fail
from publishflow.utils.shell import run


def init_repository(cwd: Path, timeout: int = 60) -> Result[None]:
    try:
        run(["git", "init"], cwd=cwd, timeout=timeout)
    except GIT_FAILURES as e:
        return fail("Failed to initialize Git repository", ErrorCode.GIT_INIT_FAILED, cause=e)
    return Ok(None)


def set_config_value(key: str, value: str, cwd: Path, timeout: int = 60) -> Result[None]:
    """Set a repository-local git config value."""
    try:
        run(["git", "config", key, value], cwd=cwd, timeout=timeout)
    except GIT_FAILURES as e:
        return fail(f"Failed to set git config {key}", ErrorCode.GIT_CONFIG_FAILED, cause=e)
    return Ok(None)


def stage_all(cwd: Path, timeout: int = 60) -> Result[None]:
    try:
        run(["git", "add", "."], cwd=cwd, timeout=timeout)
    except GIT_FAILURES as e:
        return fail("Failed to stage changes", ErrorCode.GIT_ADD_FAILED, cause=e)
    return Ok(None)


def commit(message: str, cwd: Path, timeout: int = 60) -> Result[None]:
    """Commit whatever is staged."""
    try:
        run(["git", "commit", "-m", message], cwd=cwd, timeout=timeout)
    except GIT_FAILURES as e:
        return fail(
            "Failed to create commit",
            ErrorCode.GIT_COMMIT_FAILED,
            cause=e,
            fix_hint="Run 'git status' to check what is staged",
        )
    return Ok(None)


def create_tag(
    name: str,
    message: str | None = None,
    cwd: Path | None = None,
    timeout: int = 60,
) -> Result[None]:
    """Create a tag; annotated when a message is given, lightweight otherwise."""
    cmd = ["git", "tag", "-a", name, "-m", message] if message else ["git", "tag", name]
    try:
        run(cmd, cwd=cwd, timeout=timeout)
    except GIT_FAILURES as e:
        return fail(
            f"Failed to create tag {name}",
            ErrorCode.GIT_TAG_FAILED,
            cause=e,
            fix_hint=f"Ensure tag '{name}' doesn't already exist. Run 'git tag -d {name}' to delete it first.",
        )
    return Ok(None)


def add_remote(name: str, url: str, cwd: Path, timeout: int = 60) -> Result[None]:
    try:
        run(["git", "remote", "add", name, url], cwd=cwd, timeout=timeout)
    except GIT_FAILURES as e:
        return fail(f"Failed to add remote {name}", ErrorCode.GIT_REMOTE_ADD_FAILED, cause=e)
    return Ok(None)


def push(
    ref: str,
    remote: str = "origin",
    force: bool = False,
    cwd: Path | None = None,
    timeout: int = 300,
) -> Result[None]:
    """Push a single ref (branch or tag) to a remote."""
    cmd = ["git", "push", remote, ref]
    if force:
        cmd.append("--force")
    try:
        run(cmd, cwd=cwd, timeout=timeout)
    except GIT_FAILURES as e:
        return fail(
            f"Failed to push {ref} to {remote}",
            ErrorCode.GIT_PUSH_FAILED,
            cause=e,
            fix_hint="Ensure the ref exists and you have push access. Check network connectivity.",
        )
    return Ok(None)
