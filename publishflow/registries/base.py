"""Abstract base class for package registries.

A registry knows how to recognise a publishable project from its
manifest and how to publish it:
- npm (package.json)
- JSR (deno.json / jsr.json)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from publishflow.exceptions import PublishError
from publishflow.result import Result

if TYPE_CHECKING:
    from publishflow.context import ExecutionContext


class RegistryKind(str, Enum):
    """Registries a project can be published to."""

    NPM = "npm"
    JSR = "jsr"

    @property
    def display_name(self) -> str:
        return {RegistryKind.NPM: "npm", RegistryKind.JSR: "JSR"}[self]


@dataclass(frozen=True)
class RegistryDescriptor:
    """A package detected as publishable to one registry."""

    kind: RegistryKind
    name: str
    version: str
    private: bool = False


class PublishStatus(Enum):
    """Status of a publish operation."""

    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class PublishOutcome:
    """Result of publishing to one registry.

    Attributes:
        kind: Registry the outcome belongs to
        status: Overall status
        message: Brief description
        error: The failure, when status is FAILED
    """

    kind: RegistryKind
    status: PublishStatus
    message: str
    error: PublishError | None = None

    @classmethod
    def success(cls, kind: RegistryKind, message: str) -> "PublishOutcome":
        return cls(kind=kind, status=PublishStatus.SUCCESS, message=message)

    @classmethod
    def failed(cls, kind: RegistryKind, error: PublishError) -> "PublishOutcome":
        return cls(kind=kind, status=PublishStatus.FAILED, message=error.message, error=error)

    @classmethod
    def skipped(cls, kind: RegistryKind, message: str) -> "PublishOutcome":
        return cls(kind=kind, status=PublishStatus.SKIPPED, message=message)


class Registry(ABC):
    """Abstract base class for all registries."""

    # Class-level attributes to be defined by subclasses
    kind: ClassVar[RegistryKind]
    display_name: ClassVar[str]
    tool: ClassVar[str]

    @abstractmethod
    def detect(self, project_root: Path) -> Result[RegistryDescriptor]:
        """Read the manifest and describe the publishable package."""

    @abstractmethod
    def publish(self, ctx: "ExecutionContext") -> Result[str]:
        """Publish the project; returns a success message."""


class RegistryCatalog:
    """Registry of registry implementations, keyed by kind."""

    _registries: dict[RegistryKind, type[Registry]] = {}

    @classmethod
    def register(cls, registry_class: type[Registry]) -> type[Registry]:
        """Register a registry class.

        Can be used as a decorator:
            @RegistryCatalog.register
            class NPMRegistry(Registry):
                ...

        Raises:
            TypeError: If registry_class is missing required attributes
            ValueError: If another class already claims the kind
        """
        required_attrs = ["kind", "display_name", "tool"]
        missing = [attr for attr in required_attrs if not hasattr(registry_class, attr)]
        if missing:
            raise TypeError(
                f"Registry class {registry_class.__name__} missing required "
                f"class attributes: {', '.join(missing)}."
            )

        kind = registry_class.kind
        if kind in cls._registries:
            existing = cls._registries[kind]
            if existing is not registry_class:
                raise ValueError(
                    f"Registry '{kind.value}' already registered by {existing.__name__}. "
                    f"Cannot register {registry_class.__name__}."
                )
            return registry_class

        cls._registries[kind] = registry_class
        return registry_class

    @classmethod
    def get(cls, kind: RegistryKind) -> type[Registry] | None:
        return cls._registries.get(kind)

    @classmethod
    def list_registered(cls) -> list[RegistryKind]:
        return list(cls._registries.keys())
