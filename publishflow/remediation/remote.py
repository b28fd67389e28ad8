"""Create-And-Attach-Remote remediation.

Creates a hosted repository with whichever hosting CLI is available and
attaches it as the named remote. Without any CLI, or when the user
declines, manual setup instructions are shown instead.
"""

import re
from typing import TYPE_CHECKING

from publishflow.exceptions import ErrorCode, PromptCancelled
from publishflow.remote import (
    Platform,
    display_remote_setup,
    get_remote,
    guess_platform,
    has_remote,
    validate_remote_url,
)
from publishflow.result import Err, Ok, Result, fail

if TYPE_CHECKING:
    from publishflow.context import ExecutionContext

REPO_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_.-]+$")

CLI_INSTALL_HINT = (
    "Install GitHub CLI: https://cli.github.com/ or GitLab CLI: https://gitlab.com/gitlab-org/cli"
)


def validate_repo_name(value: str) -> str | None:
    if not value.strip():
        return "Repository name is required"
    if not REPO_NAME_PATTERN.match(value.strip()):
        return "Repository name can only contain letters, numbers, hyphens, underscores, and dots"
    return None


def needs_remote_setup(ctx: "ExecutionContext", remote: str = "origin") -> bool:
    """True unless the remote is known to exist."""
    found = has_remote(ctx, remote)
    return not (isinstance(found, Ok) and found.value)


def _choose_platform(ctx: "ExecutionContext", available: set[Platform]) -> Platform:
    # Enum declaration order lists GitHub first
    ordered = [p for p in Platform if p in available]
    if len(ordered) == 1:
        return ordered[0]
    choice = ctx.prompter.select(
        "Select platform",
        [(p.value, ctx.hosting.display_name(p)) for p in ordered],
        default=ordered[0].value,
    )
    return Platform(choice)


def auto_create_remote(ctx: "ExecutionContext", remote: str = "origin") -> Result[str]:
    """Create a hosted repository and attach it as ``remote``.

    Returns the repository URL. Fails with REMOTE_NO_TOOLING when no
    hosting CLI is installed and REMOTE_CREATE_DECLINED when the user
    says no; both print manual instructions first. Succeeds immediately
    with the existing URL when the remote is already configured.
    """
    found = has_remote(ctx, remote)
    if isinstance(found, Err):
        return found
    if found.value:
        ctx.logger.debug(f"Remote '{remote}' already exists")
        existing = get_remote(ctx, remote)
        return Ok(existing.value.url) if isinstance(existing, Ok) else existing

    ctx.logger.section("Remote Repository Setup")
    ctx.logger.info("Checking available CLI tools...")
    available = ctx.hosting.probe()
    for platform in sorted(available, key=lambda p: p.value):
        ctx.logger.success(f"{ctx.hosting.display_name(platform)} detected")

    if not available:
        ctx.logger.warn("No CLI tools detected (gh or glab)")
        ctx.logger.info(CLI_INSTALL_HINT)
        display_remote_setup(ctx.logger, guess_platform(ctx.env), remote)
        return fail(
            "No CLI tools available for automatic repository creation",
            ErrorCode.REMOTE_NO_TOOLING,
            fix_hint=CLI_INSTALL_HINT,
        )

    try:
        if not ctx.prompter.confirm("Would you like to create a remote repository now?"):
            display_remote_setup(ctx.logger, guess_platform(ctx.env), remote)
            return fail("User declined repository creation", ErrorCode.REMOTE_CREATE_DECLINED)

        platform = _choose_platform(ctx, available)
        name = ctx.prompter.text(
            "Repository name",
            default=ctx.project_root.name,
            validate=validate_repo_name,
        ).strip()
        private = ctx.prompter.confirm("Make repository private?", default=False)
    except PromptCancelled as e:
        return Err(e)

    ctx.logger.info(f"Creating {platform.display_name} repository: {name}...")
    created = ctx.hosting.create_repository(platform, name, private)
    if isinstance(created, Err):
        return created
    url = created.value
    ctx.logger.success(f"{platform.display_name} repository created: {url}")

    # gh attaches the remote itself; glab may not
    attached = has_remote(ctx, remote)
    if isinstance(attached, Err):
        return attached
    if attached.value:
        ctx.logger.success(f"Remote '{remote}' configured automatically")
        return Ok(url)

    valid = validate_remote_url(url)
    if isinstance(valid, Err):
        return valid

    ctx.logger.info("Configuring remote...")
    added = ctx.git.add_remote(remote, url)
    if isinstance(added, Err):
        return added

    ctx.logger.success("Remote repository setup complete!")
    return Ok(url)
