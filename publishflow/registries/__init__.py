"""Registry adapter: detect publishable manifests and publish to registries."""

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from publishflow.exceptions import ErrorCode

# Import registries to trigger registration
from publishflow.registries import (
    jsr,  # noqa: F401
    npm,  # noqa: F401
)
from publishflow.registries.base import (
    PublishOutcome,
    PublishStatus,
    Registry,
    RegistryCatalog,
    RegistryDescriptor,
    RegistryKind,
)
from publishflow.result import Result, fail

if TYPE_CHECKING:
    from publishflow.context import ExecutionContext


@dataclass
class RegistryAdapter:
    """Facade over the registered registries for one project."""

    project_root: Path

    def kinds(self) -> list[RegistryKind]:
        return RegistryCatalog.list_registered()

    def detect(self, kind: RegistryKind) -> Result[RegistryDescriptor]:
        registry_class = RegistryCatalog.get(kind)
        if registry_class is None:
            return fail(f"Unknown registry: {kind.value}", ErrorCode.REGISTRY_UNKNOWN)
        return registry_class().detect(self.project_root)

    def publish(self, kind: RegistryKind, ctx: "ExecutionContext") -> Result[str]:
        registry_class = RegistryCatalog.get(kind)
        if registry_class is None:
            return fail(f"Unknown registry: {kind.value}", ErrorCode.REGISTRY_UNKNOWN)
        return registry_class().publish(ctx)


__all__ = [
    "PublishOutcome",
    "PublishStatus",
    "Registry",
    "RegistryAdapter",
    "RegistryCatalog",
    "RegistryDescriptor",
    "RegistryKind",
]
