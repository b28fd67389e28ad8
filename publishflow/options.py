"""Validated per-invocation publish options."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from publishflow.exceptions import ErrorCode
from publishflow.registries import RegistryKind
from publishflow.result import Ok, Result, fail


class PublishOptions(BaseModel):
    """What the user asked for on the command line.

    branch, tag and create_tag select the ref to publish and are mutually
    exclusive; when none is given the ref is chosen interactively.
    """

    model_config = ConfigDict(frozen=True)

    branch: str | None = None
    tag: str | None = None
    create_tag: str | None = None
    remote: str = "origin"
    skip_registries: bool = False
    registries: tuple[RegistryKind, ...] = Field(
        default=(),
        description="Explicit registry subset; empty means every detected registry",
    )
    force: bool = False
    dry_run: bool = False
    verbose: bool = False

    @model_validator(mode="after")
    def check_single_ref_selector(self) -> "PublishOptions":
        selected = [v for v in (self.branch, self.tag, self.create_tag) if v]
        if len(selected) > 1:
            raise ValueError("--branch, --tag and --create-tag are mutually exclusive")
        return self


def build_options(**values: Any) -> Result[PublishOptions]:
    """Validate raw option values into PublishOptions."""
    try:
        return Ok(PublishOptions(**values))
    except ValidationError as e:
        errors = e.errors()
        message = errors[0]["msg"] if errors else str(e)
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        return fail(f"Invalid options: {message}", ErrorCode.OPTIONS_INVALID, cause=e)
