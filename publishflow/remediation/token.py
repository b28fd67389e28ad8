"""Guided one-time setup of the JSR publishing token."""

from typing import TYPE_CHECKING

from publishflow.exceptions import ErrorCode, PromptCancelled
from publishflow.result import Err, Ok, Result, fail

if TYPE_CHECKING:
    from publishflow.context import ExecutionContext
    from publishflow.logger import Logger


def mask_token(token: str) -> str:
    """Show the first 8 and last 4 characters of a token."""
    if len(token) <= 12:
        return "*" * len(token)
    return f"{token[:8]}...{token[-4:]}"


def jsr_token_instructions(variable: str = "JSR_TOKEN") -> list[str]:
    return [
        "1. Visit: https://jsr.io/account/tokens",
        "2. Click 'Create token' button",
        "3. Give your token a descriptive name (e.g., 'publishflow')",
        "4. Select appropriate permissions:",
        "   • Package publishing",
        "5. Click 'Create'",
        "6. Copy the token (you won't see it again!)",
        "",
        "Then set it as an environment variable:",
        "",
        "  For current session:",
        f"  export {variable}=your_token_here",
        "",
        "  For permanent configuration, add to your shell profile:",
        f"  echo 'export {variable}=your_token_here' >> ~/.bashrc",
        "  # or ~/.zshrc if using zsh",
    ]


def display_jsr_token_instructions(logger: "Logger", variable: str = "JSR_TOKEN") -> None:
    logger.section("JSR Authentication Setup")
    logger.info("To publish to JSR, you need an authentication token.")
    logger.info("Follow these steps:")
    logger.lines(jsr_token_instructions(variable))
    logger.warn("Keep your token secure! Never commit it to version control.")


def has_registry_token(ctx: "ExecutionContext") -> bool:
    return ctx.env_value(ctx.config.jsr.token_env) is not None


def verify_registry_token(ctx: "ExecutionContext") -> Result[None]:
    """Make sure the JSR token is present, guiding the user once if not.

    Returns REGISTRY_TOKEN_MISSING when the variable is still unset after
    the guided setup.
    """
    variable = ctx.config.jsr.token_env
    ctx.logger.debug("Checking JSR authentication...")

    if has_registry_token(ctx):
        ctx.logger.debug("JSR token found")
        return Ok(None)

    ctx.logger.warn(f"{variable} environment variable is not set")
    ctx.logger.info("Authentication is required to publish to JSR")
    display_jsr_token_instructions(ctx.logger, variable)

    try:
        ctx.prompter.pause(f"Press Enter after you've set the {variable} environment variable...")
    except PromptCancelled as e:
        return Err(e)

    ctx.reload_env()
    if has_registry_token(ctx):
        ctx.logger.success("JSR token detected!")
        return Ok(None)

    ctx.logger.error(f"{variable} environment variable is still not set")
    ctx.logger.info("Make sure to export the variable in the shell that runs publishflow")
    return fail(
        f"{variable} not set after setup",
        ErrorCode.REGISTRY_TOKEN_MISSING,
        fix_hint=f"export {variable}=your_token_here",
    )
