"""JSR registry.

Detects deno.json / jsr.json packages and publishes them with
`deno publish`. Publish failures are classified from deno's output so
the user gets a targeted hint.
"""

import subprocess
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from publishflow.exceptions import ErrorCode
from publishflow.manifest import read_manifest
from publishflow.registries.base import (
    Registry,
    RegistryCatalog,
    RegistryDescriptor,
    RegistryKind,
)
from publishflow.result import Ok, Result, fail
from publishflow.utils.shell import ShellError, is_command_available, run

if TYPE_CHECKING:
    from publishflow.context import ExecutionContext

JSR_TOKENS_URL = "https://jsr.io/account/tokens"


def classify_publish_failure(output: str) -> tuple[ErrorCode, str, str]:
    """Map deno publish output to (code, message, fix hint)."""
    if "authentication" in output or "token" in output:
        return (
            ErrorCode.REGISTRY_AUTH_FAILED,
            "JSR authentication failed. Set JSR_TOKEN environment variable.",
            f"Get a token at: {JSR_TOKENS_URL}",
        )
    if "name" in output or "scope" in output:
        return (
            ErrorCode.REGISTRY_INVALID_NAME,
            "Invalid JSR package name. Check deno.json",
            "Package name must be in format: @scope/package-name",
        )
    if "version" in output:
        return (
            ErrorCode.REGISTRY_INVALID_VERSION,
            "Invalid or duplicate version. Update version in deno.json",
            "Version must be valid semver and not already published",
        )
    return (
        ErrorCode.REGISTRY_PUBLISH_FAILED,
        f"Failed to publish to JSR: {output}" if output else "Failed to publish to JSR",
        "Run 'deno publish --dry-run' to see the full error",
    )


@RegistryCatalog.register
class JSRRegistry(Registry):
    """Publishes packages to jsr.io."""

    kind: ClassVar[RegistryKind] = RegistryKind.JSR
    display_name: ClassVar[str] = "JSR"
    tool: ClassVar[str] = "deno"

    def detect(self, project_root: Path) -> Result[RegistryDescriptor]:
        loaded = read_manifest(project_root)
        if not isinstance(loaded, Ok):
            return loaded

        manifest_file = loaded.value
        manifest = manifest_file.manifest
        for required in ("name", "version"):
            if not getattr(manifest, required):
                return fail(
                    f"{manifest_file.path.name} missing '{required}' field",
                    ErrorCode.REGISTRY_INVALID_MANIFEST,
                )

        return Ok(
            RegistryDescriptor(
                kind=self.kind,
                name=str(manifest.name),
                version=str(manifest.version),
            )
        )

    def publish(self, ctx: "ExecutionContext") -> Result[str]:
        if not is_command_available(self.tool):
            return fail(
                "deno is not installed or not available in PATH",
                ErrorCode.REGISTRY_TOOL_MISSING,
                fix_hint="Install Deno from https://deno.com/",
            )

        cmd = ["deno", "publish"]
        if ctx.config.jsr.allow_dirty:
            cmd.append("--allow-dirty")
        token = ctx.env_value(ctx.config.jsr.token_env)
        if token:
            cmd.extend(["--token", token])

        try:
            run(
                cmd,
                cwd=ctx.project_root,
                timeout=ctx.config.timeouts.publish,
                env=ctx.env,
            )
        except ShellError as e:
            code, message, hint = classify_publish_failure(e.output)
            return fail(message, code, cause=e, fix_hint=hint)
        except (OSError, subprocess.TimeoutExpired) as e:
            return fail("Failed to publish to JSR", ErrorCode.REGISTRY_PUBLISH_FAILED, cause=e)

        return Ok("Successfully published to JSR")
