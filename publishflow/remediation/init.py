"""Initialize-Repository remediation.

Turns a plain directory into a git repository ready to publish: git init,
a default .gitignore, a configured identity and an initial commit when the
directory already held files.
"""

import re
from typing import TYPE_CHECKING

from publishflow.config.defaults import DEFAULT_GITIGNORE, DEFAULT_INITIAL_COMMIT_MESSAGE
from publishflow.exceptions import ErrorCode, PromptCancelled
from publishflow.prompts import not_empty
from publishflow.result import Err, Ok, Result, fail

if TYPE_CHECKING:
    from publishflow.context import ExecutionContext

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_email(value: str) -> str | None:
    if not EMAIL_PATTERN.match(value.strip()):
        return "Valid email is required"
    return None


def needs_git_init(ctx: "ExecutionContext") -> bool:
    return not ctx.git.is_repository()


def write_gitignore(ctx: "ExecutionContext") -> Result[bool]:
    """Write the default .gitignore unless one exists; True when written."""
    path = ctx.project_root / ".gitignore"
    if path.exists():
        ctx.logger.debug(".gitignore already exists, skipping creation")
        return Ok(False)

    try:
        path.write_text(DEFAULT_GITIGNORE, encoding="utf-8")
    except OSError as e:
        return fail("Failed to create .gitignore", ErrorCode.GITIGNORE_WRITE_FAILED, cause=e)

    ctx.logger.success("Created .gitignore file")
    return Ok(True)


def ensure_identity(ctx: "ExecutionContext") -> Result[None]:
    """Prompt for user.name and user.email, each only when missing."""
    has_name = bool(ctx.git.config_value("user.name"))
    has_email = bool(ctx.git.config_value("user.email"))

    if has_name and has_email:
        ctx.logger.debug("Git user already configured")
        return Ok(None)

    ctx.logger.warn("Git user information is not configured.")
    ctx.logger.info("This is required for creating commits.")

    if not has_name:
        name = ctx.prompter.text("Enter your name for Git commits", validate=not_empty("Name"))
        result = ctx.git.set_config("user.name", name.strip())
        if isinstance(result, Err):
            return result

    if not has_email:
        email = ctx.prompter.text("Enter your email for Git commits", validate=validate_email)
        result = ctx.git.set_config("user.email", email.strip())
        if isinstance(result, Err):
            return result

    ctx.logger.success("Git user configured")
    return Ok(None)


def create_initial_commit(ctx: "ExecutionContext") -> Result[bool]:
    """Commit everything in the new repository; True when a commit was made.

    An empty working tree is not an error: nothing is committed.
    """
    changes = ctx.git.changes()
    if isinstance(changes, Err):
        return changes

    if changes.value.is_empty:
        ctx.logger.info("No files to commit yet")
        return Ok(False)

    ctx.logger.info("Creating initial commit with existing files...")
    message = DEFAULT_INITIAL_COMMIT_MESSAGE
    if ctx.prompter.confirm("Would you like to customize the initial commit message?", default=False):
        message = ctx.prompter.text(
            "Enter commit message",
            default=DEFAULT_INITIAL_COMMIT_MESSAGE,
            validate=not_empty("Commit message"),
        ).strip()

    staged = ctx.git.stage_all()
    if isinstance(staged, Err):
        return staged
    committed = ctx.git.commit(message)
    if isinstance(committed, Err):
        return committed

    ctx.logger.success(f'Initial commit created: "{message}"')
    return Ok(True)


def auto_initialize(ctx: "ExecutionContext") -> Result[None]:
    """Offer to initialize a repository in the project root.

    Declining returns GIT_INIT_DECLINED. Succeeds immediately when the
    directory is already a repository.
    """
    if not needs_git_init(ctx):
        ctx.logger.debug("Already a Git repository")
        return Ok(None)

    ctx.logger.warn("This directory is not a Git repository.")
    ctx.logger.info("Git is required for version control and publishing.")

    try:
        if not ctx.prompter.confirm("Would you like to initialize a Git repository now?"):
            return fail("User declined Git initialization", ErrorCode.GIT_INIT_DECLINED)

        ctx.logger.info("Initializing Git repository...")
        initialized = ctx.git.init()
        if isinstance(initialized, Err):
            return initialized
        ctx.logger.success("Git repository initialized")

        existing = ctx.git.changes()
        if isinstance(existing, Err):
            return existing

        gitignore = write_gitignore(ctx)
        if isinstance(gitignore, Err):
            ctx.logger.warn("Failed to create .gitignore, continuing anyway...")

        identity = ensure_identity(ctx)
        if isinstance(identity, Err):
            return identity

        # The ignore file alone does not warrant an initial commit
        if existing.value.is_empty:
            ctx.logger.info("No files to commit yet")
        else:
            commit = create_initial_commit(ctx)
            if isinstance(commit, Err):
                return commit
    except PromptCancelled as e:
        return Err(e)

    ctx.logger.success("Git repository setup complete!")
    return Ok(None)
