"""Remote descriptors and URL classifiers.

Platform and owner/repo are best-effort metadata derived from the remote
URL string. Nothing here touches the network or the repository except
get_remote(), which reads the configured remotes through the git adapter.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from publishflow.exceptions import ErrorCode
from publishflow.git import GitRemote
from publishflow.logger import Logger
from publishflow.result import Err, Ok, Result, fail

if TYPE_CHECKING:
    from publishflow.context import ExecutionContext


class Platform(Enum):
    """Hosting platform inferred from a remote URL."""

    GITHUB = "github"
    GITLAB = "gitlab"
    BITBUCKET = "bitbucket"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return {
            Platform.GITHUB: "GitHub",
            Platform.GITLAB: "GitLab",
            Platform.BITBUCKET: "Bitbucket",
            Platform.OTHER: "Other",
        }[self]


class AuthScheme(Enum):
    """Transport a remote URL authenticates over."""

    SSH = "ssh"
    HTTPS = "https"
    UNKNOWN = "unknown"


SSH_URL_PATTERN = re.compile(r"git@[^:]+:([^/]+)/(.+?)(?:\.git)?$")
HTTPS_URL_PATTERN = re.compile(r"https?://[^/]+/([^/]+)/(.+?)(?:\.git)?$")

PLATFORM_HOSTS = [
    ("github.com", Platform.GITHUB),
    ("gitlab.com", Platform.GITLAB),
    ("bitbucket.org", Platform.BITBUCKET),
]


def detect_platform(url: str) -> Platform:
    lowered = url.lower()
    for host, platform in PLATFORM_HOSTS:
        if host in lowered:
            return platform
    return Platform.OTHER


def detect_auth_scheme(url: str) -> AuthScheme:
    if url.startswith(("git@", "ssh://")):
        return AuthScheme.SSH
    if url.startswith(("https://", "http://")):
        return AuthScheme.HTTPS
    return AuthScheme.UNKNOWN


def parse_git_url(url: str) -> Result[tuple[str, str]]:
    """Extract (owner, repo) from an SCP-style SSH or an HTTP(S) URL."""
    match = SSH_URL_PATTERN.search(url) or HTTPS_URL_PATTERN.search(url)
    if match is None:
        return fail(f"Unable to parse Git URL: {url}", ErrorCode.REMOTE_INVALID_URL)
    return Ok((match.group(1), match.group(2)))


@dataclass(frozen=True)
class RemoteDescriptor:
    """A remote plus what could be inferred from its URL."""

    name: str
    url: str
    platform: Platform
    owner: str | None = None
    repo: str | None = None

    @property
    def auth_scheme(self) -> AuthScheme:
        return detect_auth_scheme(self.url)

    @property
    def slug(self) -> str | None:
        if self.owner and self.repo:
            return f"{self.owner}/{self.repo}"
        return None


def describe_remote(remote: GitRemote) -> RemoteDescriptor:
    parsed = parse_git_url(remote.url)
    owner, repo = parsed.value if isinstance(parsed, Ok) else (None, None)
    return RemoteDescriptor(
        name=remote.name,
        url=remote.url,
        platform=detect_platform(remote.url),
        owner=owner,
        repo=repo,
    )


def has_remote(ctx: "ExecutionContext", name: str) -> Result[bool]:
    """Check for a remote by name; a failed listing is returned as is."""
    remotes = ctx.git.remotes()
    if isinstance(remotes, Err):
        return remotes
    return Ok(any(remote.name == name for remote in remotes.value))


def get_remote(ctx: "ExecutionContext", name: str = "origin") -> Result[RemoteDescriptor]:
    """Read the named remote fresh from the repository."""
    remotes = ctx.git.remotes()
    if isinstance(remotes, Err):
        return remotes
    for remote in remotes.value:
        if remote.name == name:
            return Ok(describe_remote(remote))
    return fail(
        f"Remote '{name}' not found",
        ErrorCode.REMOTE_NOT_FOUND,
        fix_hint=f"Add it with: git remote add {name} <repository-url>",
    )


def validate_remote_url(url: str) -> Result[None]:
    """Accept only URLs git can push to without extra configuration."""
    if not url.startswith(("https://", "http://", "git@")):
        return fail(
            "URL must start with https://, http://, or git@",
            ErrorCode.REMOTE_INVALID_URL,
        )
    if url.startswith("http") and not urlparse(url).netloc:
        return fail(f"Invalid URL: {url}", ErrorCode.REMOTE_INVALID_URL)
    return Ok(None)


def guess_platform(env: Mapping[str, str]) -> Platform:
    """Best guess for setup instructions when no remote exists yet."""
    if env.get("GITLAB_TOKEN") or env.get("GL_TOKEN"):
        return Platform.GITLAB
    return Platform.GITHUB


def remote_setup_instructions(platform: Platform, remote: str = "origin") -> list[str]:
    if platform is Platform.GITHUB:
        return [
            "1. Create a repository on GitHub:",
            "   • Visit https://github.com/new",
            "   • Or use GitHub CLI: gh repo create",
            "",
            "2. Add the remote to your local repository:",
            f"   git remote add {remote} https://github.com/USERNAME/REPO.git",
            "",
            "3. Or with GitHub CLI:",
            "   gh repo create --source=. --push",
        ]
    if platform is Platform.GITLAB:
        return [
            "1. Create a repository on GitLab:",
            "   • Visit https://gitlab.com/projects/new",
            "   • Or use GitLab CLI: glab repo create",
            "",
            "2. Add the remote to your local repository:",
            f"   git remote add {remote} https://gitlab.com/USERNAME/REPO.git",
        ]
    if platform is Platform.BITBUCKET:
        return [
            "1. Create a repository on Bitbucket:",
            "   • Visit https://bitbucket.org/repo/create",
            "",
            "2. Add the remote to your local repository:",
            f"   git remote add {remote} https://bitbucket.org/USERNAME/REPO.git",
        ]
    return [
        "1. Create a repository on your Git hosting platform",
        "",
        "2. Add the remote to your local repository:",
        f"   git remote add {remote} <repository-url>",
    ]


def display_remote_setup(
    logger: Logger,
    platform: Platform = Platform.GITHUB,
    remote: str = "origin",
) -> None:
    logger.section("Remote Repository Setup Required")
    logger.info(f"No remote named '{remote}' is configured for this project.")
    logger.info("Follow these steps to set up a remote repository:")
    logger.lines(remote_setup_instructions(platform, remote))
    logger.info("After adding the remote, run this command again.")
