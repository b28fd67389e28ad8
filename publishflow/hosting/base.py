"""Abstract base class for repository hosting providers.

A provider wraps one hosting CLI (gh, glab) and knows how to create a
remote repository for the current project. HostingCatalog holds the
registered providers and answers which ones are usable on this machine.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar

from publishflow.remote import Platform
from publishflow.result import Result
from publishflow.utils.shell import probe_version


class HostingProvider(ABC):
    """Creates remote repositories through a platform CLI."""

    # Class-level attributes to be defined by subclasses
    platform: ClassVar[Platform]
    cli: ClassVar[str]
    display_name: ClassVar[str]

    def is_available(self) -> bool:
        """Check that the provider's CLI is installed and responds."""
        return probe_version(self.cli)

    @abstractmethod
    def create_repository(
        self,
        name: str,
        private: bool,
        cwd: Path,
        timeout: int = 120,
    ) -> Result[str]:
        """Create the repository and return its URL.

        The URL lookup after creation is best-effort; a fallback URL is
        returned when the CLI cannot report it.
        """


class HostingCatalog:
    """Registry of hosting provider implementations."""

    _providers: dict[Platform, type[HostingProvider]] = {}

    @classmethod
    def register(cls, provider_class: type[HostingProvider]) -> type[HostingProvider]:
        """Register a provider class.

        Can be used as a decorator:
            @HostingCatalog.register
            class GitHubProvider(HostingProvider):
                ...

        Raises:
            TypeError: If provider_class is missing required attributes
            ValueError: If another provider already claims the platform
        """
        required_attrs = ["platform", "cli", "display_name"]
        missing = [attr for attr in required_attrs if not hasattr(provider_class, attr)]
        if missing:
            raise TypeError(
                f"Provider class {provider_class.__name__} missing required "
                f"class attributes: {', '.join(missing)}."
            )

        platform = provider_class.platform
        if platform in cls._providers:
            existing = cls._providers[platform]
            if existing is not provider_class:
                raise ValueError(
                    f"Platform '{platform.value}' already registered by {existing.__name__}. "
                    f"Cannot register {provider_class.__name__}."
                )
            return provider_class

        cls._providers[platform] = provider_class
        return provider_class

    @classmethod
    def get(cls, platform: Platform) -> type[HostingProvider] | None:
        return cls._providers.get(platform)

    @classmethod
    def list_registered(cls) -> list[Platform]:
        return list(cls._providers.keys())
