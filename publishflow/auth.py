"""Push-permission verification and credential setup instructions."""

from collections.abc import Mapping
from typing import TYPE_CHECKING

from publishflow.exceptions import ErrorCode
from publishflow.logger import Logger
from publishflow.remote import AuthScheme, Platform, RemoteDescriptor
from publishflow.result import Ok, Result, fail

if TYPE_CHECKING:
    from publishflow.context import ExecutionContext

# Checked in order; the first non-empty variable wins
TOKEN_VARIABLES: dict[Platform, tuple[str, ...]] = {
    Platform.GITHUB: ("GITHUB_TOKEN", "GH_TOKEN"),
    Platform.GITLAB: ("GITLAB_TOKEN", "GL_TOKEN"),
}
GENERIC_TOKEN_VARIABLES = ("GIT_TOKEN",)


def token_variables(platform: Platform) -> tuple[str, ...]:
    return TOKEN_VARIABLES.get(platform, GENERIC_TOKEN_VARIABLES)


def get_token_from_env(platform: Platform, env: Mapping[str, str]) -> str | None:
    for name in token_variables(platform):
        value = env.get(name)
        if value:
            return value
    return None


def ssh_instructions() -> list[str]:
    return [
        "To set up SSH authentication:",
        "",
        "1. Generate an SSH key (if you don't have one):",
        "   ssh-keygen -t ed25519 -C 'your_email@example.com'",
        "",
        "2. Start the SSH agent:",
        '   eval "$(ssh-agent -s)"',
        "",
        "3. Add your SSH key to the agent:",
        "   ssh-add ~/.ssh/id_ed25519",
        "",
        "4. Add the public key to your Git hosting platform:",
        "   • GitHub: https://github.com/settings/keys",
        "   • GitLab: https://gitlab.com/-/profile/keys",
        "",
        "5. Test the connection:",
        "   ssh -T git@github.com",
        "   # or",
        "   ssh -T git@gitlab.com",
    ]


def token_instructions(platform: Platform) -> list[str]:
    """Personal access token steps for the given platform."""
    credential_helper = [
        "Or configure Git to use the token:",
        "  git config --global credential.helper store",
        "  # Then on next push, use token as password",
    ]
    if platform is Platform.GITHUB:
        return [
            "To create a Personal Access Token on GitHub:",
            "",
            "1. Visit: https://github.com/settings/tokens/new",
            "2. Give your token a descriptive name (e.g., 'publishflow')",
            "3. Set expiration (recommended: 90 days)",
            "4. Select scopes:",
            "   ✓ repo (Full control of private repositories)",
            "5. Click 'Generate token'",
            "6. Copy the token (you won't see it again!)",
            "",
            "Set the token as an environment variable:",
            "  export GITHUB_TOKEN=your_token_here",
            "",
            *credential_helper,
        ]
    if platform is Platform.GITLAB:
        return [
            "To create a Personal Access Token on GitLab:",
            "",
            "1. Visit: https://gitlab.com/-/profile/personal_access_tokens",
            "2. Give your token a descriptive name (e.g., 'publishflow')",
            "3. Set expiration date (optional)",
            "4. Select scopes:",
            "   ✓ api (Full API access)",
            "   ✓ write_repository (Write to repository)",
            "5. Click 'Create personal access token'",
            "6. Copy the token (you won't see it again!)",
            "",
            "Set the token as an environment variable:",
            "  export GITLAB_TOKEN=your_token_here",
            "",
            *credential_helper,
        ]
    return [
        "To authenticate with your Git hosting platform:",
        "",
        "1. Create a Personal Access Token in your platform's settings",
        "2. Give it permission to push to repositories",
        "3. Copy the token",
        "",
        "Then set it as an environment variable (GIT_TOKEN) or configure Git:",
        "  git config --global credential.helper store",
        "  # Then on next push, use token as password",
    ]


def display_auth_setup(logger: Logger, scheme: AuthScheme, platform: Platform) -> None:
    logger.section("Authentication Setup Required")
    logger.warn("You don't have permission to push to the remote repository.")
    logger.info("This could be due to missing or invalid credentials.")

    if scheme is AuthScheme.SSH:
        logger.info("Your remote uses SSH authentication.")
        logger.lines(ssh_instructions())
    elif scheme is AuthScheme.HTTPS:
        logger.info("Your remote uses HTTPS authentication.")
        logger.lines(token_instructions(platform))
    else:
        logger.info("Unable to determine authentication method.")
        logger.info("SSH instructions:")
        logger.lines(ssh_instructions())
        logger.info("HTTPS/token instructions:")
        logger.lines(token_instructions(platform))

    logger.info("After setting up authentication, run this command again.")


def verify_auth(
    ctx: "ExecutionContext",
    remote: RemoteDescriptor,
    branch: str | None = None,
) -> Result[None]:
    """Probe push permission with a dry-run push.

    On failure the matching setup instructions are printed and an
    AUTH_FAILED error is returned; the probe is never retried.
    """
    ctx.logger.debug(f"Checking push permissions for {remote.name} ({remote.url})")

    if ctx.git.can_push(remote.name, branch):
        ctx.logger.debug("Authentication verified")
        return Ok(None)

    display_auth_setup(ctx.logger, remote.auth_scheme, remote.platform)
    return fail(
        "Push permissions check failed. Please set up authentication.",
        ErrorCode.AUTH_FAILED,
        fix_hint=f"Check your credentials for {remote.url}",
    )
