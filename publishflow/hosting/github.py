"""GitHub repository creation through the gh CLI."""

import subprocess
from pathlib import Path
from typing import ClassVar

from publishflow.exceptions import ErrorCode
from publishflow.hosting.base import HostingCatalog, HostingProvider
from publishflow.remote import Platform
from publishflow.result import Ok, Result, fail
from publishflow.utils.shell import ShellError, run


@HostingCatalog.register
class GitHubProvider(HostingProvider):
    """Creates GitHub repositories with `gh repo create`.

    gh attaches the new repository as `origin` when --source is given.
    """

    platform: ClassVar[Platform] = Platform.GITHUB
    cli: ClassVar[str] = "gh"
    display_name: ClassVar[str] = "GitHub (using gh CLI)"

    def create_repository(
        self,
        name: str,
        private: bool,
        cwd: Path,
        timeout: int = 120,
    ) -> Result[str]:
        visibility = "--private" if private else "--public"
        try:
            run(
                ["gh", "repo", "create", name, "--source=.", visibility],
                cwd=cwd,
                timeout=timeout,
            )
        except (ShellError, OSError, subprocess.TimeoutExpired) as e:
            return fail(
                f"Failed to create GitHub repository: {name}",
                ErrorCode.REMOTE_CREATE_FAILED,
                cause=e,
                fix_hint="Run 'gh auth status' to check that gh is logged in",
            )

        try:
            result = run(
                ["gh", "repo", "view", "--json", "url", "-q", ".url"],
                cwd=cwd,
                timeout=timeout,
            )
        except (ShellError, OSError, subprocess.TimeoutExpired):
            return Ok(self.fallback_url(name))

        url = result.stdout.strip()
        return Ok(url or self.fallback_url(name))

    @staticmethod
    def fallback_url(name: str) -> str:
        return f"https://github.com/{name}"
