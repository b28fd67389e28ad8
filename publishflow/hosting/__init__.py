"""Remote-hosting adapter: probe hosting CLIs and create repositories."""

from dataclasses import dataclass
from pathlib import Path

from publishflow.exceptions import ErrorCode

# Import providers to trigger registration
from publishflow.hosting import (
    github,  # noqa: F401
    gitlab,  # noqa: F401
)
from publishflow.hosting.base import HostingCatalog, HostingProvider
from publishflow.remote import Platform
from publishflow.result import Result, fail


@dataclass
class HostingAdapter:
    """Facade over the registered hosting providers for one project."""

    project_root: Path
    timeout: int = 120

    def probe(self) -> set[Platform]:
        """Return the platforms whose CLI is usable right now."""
        available = set()
        for platform in HostingCatalog.list_registered():
            provider_class = HostingCatalog.get(platform)
            if provider_class is not None and provider_class().is_available():
                available.add(platform)
        return available

    def display_name(self, platform: Platform) -> str:
        provider_class = HostingCatalog.get(platform)
        return provider_class.display_name if provider_class else platform.display_name

    def create_repository(self, platform: Platform, name: str, private: bool) -> Result[str]:
        provider_class = HostingCatalog.get(platform)
        if provider_class is None:
            return fail(
                f"Unsupported platform: {platform.display_name}",
                ErrorCode.REMOTE_UNSUPPORTED_PLATFORM,
            )
        return provider_class().create_repository(
            name, private, self.project_root, self.timeout
        )


__all__ = [
    "HostingAdapter",
    "HostingCatalog",
    "HostingProvider",
]
