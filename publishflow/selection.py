"""Registry detection and per-registry opt-in."""

from typing import TYPE_CHECKING

from publishflow.exceptions import PromptCancelled
from publishflow.options import PublishOptions
from publishflow.registries import RegistryDescriptor, RegistryKind
from publishflow.result import Err, Ok, Result

if TYPE_CHECKING:
    from publishflow.context import ExecutionContext


def detect_registries(ctx: "ExecutionContext") -> list[RegistryDescriptor]:
    """Return every registry the project can be published to.

    Never fails: a missing or broken manifest just means that registry
    is not eligible. Private npm packages are excluded.
    """
    eligible = []
    for kind in ctx.registries.kinds():
        detected = ctx.registries.detect(kind)
        if isinstance(detected, Err):
            ctx.logger.debug(f"{kind.display_name}: {detected.error.message}")
            continue
        if detected.value.private:
            ctx.logger.debug(f"{kind.display_name}: package is private, skipping")
            continue
        eligible.append(detected.value)
    return eligible


def select_registries(
    ctx: "ExecutionContext",
    detected: list[RegistryDescriptor],
    options: PublishOptions,
) -> Result[list[RegistryKind]]:
    """Let the user opt in to each detected registry.

    An explicit --registry subset is taken as already confirmed.
    """
    if options.skip_registries or not detected:
        return Ok([])

    if options.registries:
        chosen = [d.kind for d in detected if d.kind in options.registries]
        for kind in options.registries:
            if kind not in chosen:
                ctx.logger.warn(f"{kind.display_name} requested but not detected, skipping")
        return Ok(chosen)

    selected = []
    try:
        for descriptor in detected:
            if ctx.prompter.confirm(f"Publish to {descriptor.kind.display_name}?"):
                selected.append(descriptor.kind)
    except PromptCancelled as e:
        return Err(e)
    return Ok(selected)
