"""npm registry.

Detects package.json packages and publishes them with `npm publish`.
"""

import json
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from publishflow.exceptions import ErrorCode
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


def get_package_json(project_root: Path) -> Result[dict[str, Any]]:
    """Parse package.json from the project root."""
    path = project_root / "package.json"
    if not path.is_file():
        return fail("package.json not found", ErrorCode.REGISTRY_NOT_FOUND)

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        return fail("Failed to parse package.json", ErrorCode.MANIFEST_PARSE_ERROR, cause=e)

    if not isinstance(data, dict):
        return fail("package.json must contain a JSON object", ErrorCode.MANIFEST_PARSE_ERROR)
    return Ok(data)


@RegistryCatalog.register
class NPMRegistry(Registry):
    """Publishes packages to the npm registry."""

    kind: ClassVar[RegistryKind] = RegistryKind.NPM
    display_name: ClassVar[str] = "npm"
    tool: ClassVar[str] = "npm"

    def detect(self, project_root: Path) -> Result[RegistryDescriptor]:
        loaded = get_package_json(project_root)
        if not isinstance(loaded, Ok):
            return loaded

        pkg = loaded.value
        for required in ("name", "version"):
            if not pkg.get(required):
                return fail(
                    f"package.json missing '{required}' field",
                    ErrorCode.REGISTRY_INVALID_MANIFEST,
                )

        return Ok(
            RegistryDescriptor(
                kind=self.kind,
                name=str(pkg["name"]),
                version=str(pkg["version"]),
                private=pkg.get("private") is True,
            )
        )

    def publish(self, ctx: "ExecutionContext") -> Result[str]:
        if not is_command_available(self.tool):
            return fail(
                "npm is not installed or not available in PATH",
                ErrorCode.REGISTRY_TOOL_MISSING,
                fix_hint="Install Node.js from https://nodejs.org/",
            )

        npm_config = ctx.config.npm
        cmd = ["npm", "publish", "--access", npm_config.access]
        if npm_config.tag:
            cmd.extend(["--tag", npm_config.tag])

        try:
            run(
                cmd,
                cwd=ctx.project_root,
                timeout=ctx.config.timeouts.publish,
                env=ctx.env,
            )
        except (ShellError, OSError, subprocess.TimeoutExpired) as e:
            return fail(
                "Failed to publish to npm",
                ErrorCode.REGISTRY_PUBLISH_FAILED,
                cause=e,
                fix_hint="Run 'npm whoami' to check that you are logged in",
            )

        return Ok("Successfully published to npm")
