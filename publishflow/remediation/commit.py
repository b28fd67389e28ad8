"""Commit-Pending-Changes remediation."""

from typing import TYPE_CHECKING

from publishflow.exceptions import ErrorCode, PromptCancelled
from publishflow.git import PendingChangeSet
from publishflow.prompts import not_empty
from publishflow.result import Err, Ok, Result, fail

if TYPE_CHECKING:
    from publishflow.context import ExecutionContext
    from publishflow.logger import Logger


def has_pending_changes(ctx: "ExecutionContext") -> bool:
    """True when the working tree has uncommitted changes.

    A failing status query counts as no changes.
    """
    changes = ctx.git.changes()
    return isinstance(changes, Ok) and not changes.value.is_empty


def _phrase(verb: str, files: list[str]) -> str:
    if len(files) == 1:
        return f"{verb} {files[0]}"
    return f"{verb} {len(files)} files"


def generate_commit_message(changes: PendingChangeSet) -> str:
    """Synthesize a message from the dominant kind of change.

    Additions win over modifications, which win over deletions.
    Untracked files alone fall back to a generic message.
    """
    if changes.added:
        return _phrase("Add", changes.added)
    if changes.modified:
        return _phrase("Update", changes.modified)
    if changes.deleted:
        return _phrase("Delete", changes.deleted)
    return "Update files"


def display_changes(changes: PendingChangeSet, logger: "Logger") -> None:
    groups = [
        ("Modified files:", changes.modified),
        ("Added files:", changes.added),
        ("Deleted files:", changes.deleted),
        ("Untracked files:", changes.untracked),
    ]
    for title, files in groups:
        if files:
            logger.info(title)
            logger.bullets(files)
    logger.info(f"Total: {changes.total} file(s) with changes")


def auto_commit(ctx: "ExecutionContext") -> Result[str | None]:
    """Offer to stage and commit all pending changes.

    Returns the commit message, or None when the tree was already clean.
    Declining returns COMMIT_DECLINED.
    """
    loaded = ctx.git.changes()
    if isinstance(loaded, Err):
        return loaded

    changes = loaded.value
    if changes.is_empty:
        ctx.logger.debug("No uncommitted changes")
        return Ok(None)

    ctx.logger.section("Uncommitted Changes Detected")
    display_changes(changes, ctx.logger)

    try:
        if not ctx.prompter.confirm(f"Commit {changes.total} file(s) before publishing?"):
            return fail("User declined to commit changes", ErrorCode.COMMIT_DECLINED)

        message = generate_commit_message(changes)
        if not ctx.prompter.confirm(f'Use commit message: "{message}"?'):
            message = ctx.prompter.text(
                "Enter commit message",
                default=message,
                validate=not_empty("Commit message"),
            ).strip()
    except PromptCancelled as e:
        return Err(e)

    ctx.logger.info("Staging changes...")
    staged = ctx.git.stage_all()
    if isinstance(staged, Err):
        return staged

    ctx.logger.info("Creating commit...")
    committed = ctx.git.commit(message)
    if isinstance(committed, Err):
        return committed

    ctx.logger.success(f'Commit created: "{message}"')
    return Ok(message)
