"""GitLab repository creation through the glab CLI."""

import json
import subprocess
from pathlib import Path
from typing import ClassVar

from publishflow.exceptions import ErrorCode
from publishflow.hosting.base import HostingCatalog, HostingProvider
from publishflow.remote import Platform
from publishflow.result import Ok, Result, fail
from publishflow.utils.shell import ShellError, run


@HostingCatalog.register
class GitLabProvider(HostingProvider):
    """Creates GitLab repositories with `glab repo create`."""

    platform: ClassVar[Platform] = Platform.GITLAB
    cli: ClassVar[str] = "glab"
    display_name: ClassVar[str] = "GitLab (using glab CLI)"

    def create_repository(
        self,
        name: str,
        private: bool,
        cwd: Path,
        timeout: int = 120,
    ) -> Result[str]:
        visibility = "--private" if private else "--public"
        try:
            run(["glab", "repo", "create", name, visibility], cwd=cwd, timeout=timeout)
        except (ShellError, OSError, subprocess.TimeoutExpired) as e:
            return fail(
                f"Failed to create GitLab repository: {name}",
                ErrorCode.REMOTE_CREATE_FAILED,
                cause=e,
                fix_hint="Run 'glab auth status' to check that glab is logged in",
            )

        try:
            result = run(["glab", "repo", "view", "-F", "json"], cwd=cwd, timeout=timeout)
            data = json.loads(result.stdout)
        except (ShellError, OSError, subprocess.TimeoutExpired, json.JSONDecodeError):
            return Ok(self.fallback_url(name))

        url = data.get("web_url") if isinstance(data, dict) else None
        return Ok(url or self.fallback_url(name))

    @staticmethod
    def fallback_url(name: str) -> str:
        return f"https://gitlab.com/{name}"
