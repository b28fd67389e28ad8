"""Decide which branch or tag gets published.

Strategies are tried in a fixed order: explicit branch, explicit tag,
tag to create, then an interactive choice.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from publishflow.exceptions import ErrorCode, PromptCancelled
from publishflow.options import PublishOptions
from publishflow.prompts import not_empty
from publishflow.result import Err, Ok, Result, fail

if TYPE_CHECKING:
    from publishflow.context import ExecutionContext


class RefKind(Enum):
    BRANCH = "branch"
    TAG = "tag"


@dataclass(frozen=True)
class ResolvedRef:
    """The ref to push; ``created`` is True for a tag made during this run."""

    name: str
    kind: RefKind
    created: bool = False


PUBLISH_CHOICES = [
    ("branch", "Push an existing branch"),
    ("tag", "Push an existing tag"),
    ("create-tag", "Create and push a new tag"),
]


def _create_tag(ctx: "ExecutionContext", name: str, message: str | None = None) -> Result[ResolvedRef]:
    created = ctx.git.create_tag(name, message)
    if isinstance(created, Err):
        return created
    ctx.logger.success(f"Created tag {name}")
    return Ok(ResolvedRef(name=name, kind=RefKind.TAG, created=True))


def select_branch(ctx: "ExecutionContext") -> Result[ResolvedRef]:
    """Pick a local branch, defaulting to the current one."""
    branches = ctx.git.branches()
    if isinstance(branches, Err):
        return branches
    if not branches.value:
        return fail("No branches available", ErrorCode.GIT_NO_BRANCHES)

    status = ctx.git.status()
    current = status.value.current_branch if isinstance(status, Ok) else None
    default = current if current in branches.value else branches.value[0]

    name = ctx.prompter.select("Select a branch to publish", branches.value, default=default)
    return Ok(ResolvedRef(name=name, kind=RefKind.BRANCH))


def select_tag(ctx: "ExecutionContext") -> Result[ResolvedRef]:
    """Pick an existing tag, defaulting to the last one git lists."""
    tags = ctx.git.tags()
    if isinstance(tags, Err):
        return tags
    if not tags.value:
        return fail(
            "No tags available",
            ErrorCode.GIT_NO_TAGS,
            fix_hint="Create one with --create-tag",
        )

    # Lexicographic order from git, not semantic version order
    name = ctx.prompter.select("Select a tag to publish", tags.value, default=tags.value[-1])
    return Ok(ResolvedRef(name=name, kind=RefKind.TAG))


def prompt_new_tag(ctx: "ExecutionContext") -> Result[ResolvedRef]:
    name = ctx.prompter.text("Enter tag name (e.g., v1.0.0)", validate=not_empty("Tag name")).strip()
    message = None
    if ctx.prompter.confirm("Add a tag message?", default=False):
        message = ctx.prompter.text("Enter tag message").strip() or None
    return _create_tag(ctx, name, message)


def resolve_ref(ctx: "ExecutionContext", options: PublishOptions) -> Result[ResolvedRef]:
    """Resolve the ref to publish.

    Explicit names are used verbatim without an existence check; a bad
    name surfaces later as a push failure.
    """
    if options.branch:
        return Ok(ResolvedRef(name=options.branch, kind=RefKind.BRANCH))
    if options.tag:
        return Ok(ResolvedRef(name=options.tag, kind=RefKind.TAG))
    if options.create_tag:
        return _create_tag(ctx, options.create_tag)

    try:
        choice = ctx.prompter.select("What would you like to publish?", PUBLISH_CHOICES)
        if choice == "branch":
            return select_branch(ctx)
        if choice == "tag":
            return select_tag(ctx)
        return prompt_new_tag(ctx)
    except PromptCancelled as e:
        return Err(e)
