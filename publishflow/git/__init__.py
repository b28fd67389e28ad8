"""Git operations and utilities.

Queries and operations are plain functions taking ``cwd``; GitAdapter binds
them to one project root so the pipeline can pass a single object around
and tests can replace it with a fake.
"""

from dataclasses import dataclass
from pathlib import Path

from publishflow.git.operations import (
    add_remote,
    commit,
    create_tag,
    init_repository,
    push,
    set_config_value,
    stage_all,
)
from publishflow.git.queries import (
    GitRemote,
    PendingChangeSet,
    RepositoryStatus,
    can_push,
    get_branches,
    get_changes,
    get_config_value,
    get_remotes,
    get_status,
    get_tags,
    is_git_installed,
    is_repository,
    parse_porcelain,
)
from publishflow.result import Result


@dataclass
class GitAdapter:
    """Version-control adapter bound to a project root."""

    project_root: Path
    timeout: int = 60
    push_timeout: int = 300

    def is_installed(self) -> bool:
        return is_git_installed()

    def is_repository(self) -> bool:
        return is_repository(self.project_root)

    def status(self) -> Result[RepositoryStatus]:
        return get_status(self.project_root, self.timeout)

    def branches(self) -> Result[list[str]]:
        return get_branches(self.project_root, self.timeout)

    def tags(self) -> Result[list[str]]:
        return get_tags(self.project_root, self.timeout)

    def remotes(self) -> Result[list[GitRemote]]:
        return get_remotes(self.project_root, self.timeout)

    def changes(self) -> Result[PendingChangeSet]:
        return get_changes(self.project_root, self.timeout)

    def config_value(self, key: str) -> str | None:
        return get_config_value(key, self.project_root, self.timeout)

    def set_config(self, key: str, value: str) -> Result[None]:
        return set_config_value(key, value, self.project_root, self.timeout)

    def init(self) -> Result[None]:
        return init_repository(self.project_root, self.timeout)

    def stage_all(self) -> Result[None]:
        return stage_all(self.project_root, self.timeout)

    def commit(self, message: str) -> Result[None]:
        return commit(message, self.project_root, self.timeout)

    def create_tag(self, name: str, message: str | None = None) -> Result[None]:
        return create_tag(name, message, self.project_root, self.timeout)

    def add_remote(self, name: str, url: str) -> Result[None]:
        return add_remote(name, url, self.project_root, self.timeout)

    def push(self, ref: str, remote: str = "origin", force: bool = False) -> Result[None]:
        return push(ref, remote, force, self.project_root, self.push_timeout)

    def can_push(self, remote: str, ref: str | None = None) -> bool:
        return can_push(remote, ref, self.project_root, self.push_timeout)


__all__ = [
    "GitAdapter",
    "GitRemote",
    "PendingChangeSet",
    "RepositoryStatus",
    "parse_porcelain",
    # Query operations
    "is_git_installed",
    "is_repository",
    "get_status",
    "get_branches",
    "get_tags",
    "get_remotes",
    "get_changes",
    "get_config_value",
    "can_push",
    # Modification operations
    "init_repository",
    "set_config_value",
    "stage_all",
    "commit",
    "create_tag",
    "add_remote",
    "push",
]
