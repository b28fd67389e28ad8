"""Fix-Registry-Manifest remediation for the JSR manifest."""

import re
from typing import TYPE_CHECKING

from publishflow.config.defaults import (
    DEFAULT_LICENSE,
    DEFAULT_MANIFEST_VERSION,
    EXPORTS_CANDIDATES,
    FALLBACK_EXPORTS,
)
from publishflow.exceptions import ErrorCode, PromptCancelled
from publishflow.manifest import (
    MANIFEST_FILES,
    JsrManifest,
    ManifestFile,
    ManifestValidation,
    is_valid_name_part,
    write_manifest,
)
from publishflow.result import Err, Ok, Result, fail

if TYPE_CHECKING:
    from publishflow.context import ExecutionContext


def _name_part_validator(label: str):
    def _check(value: str) -> str | None:
        if not value.strip():
            return f"{label} is required"
        if not is_valid_name_part(value.strip()):
            return f"{label} can only contain lowercase letters, numbers, and hyphens"
        return None

    return _check


def suggest_package_name(ctx: "ExecutionContext", current: str | None) -> str:
    """Package-name default: the part after '/' of the current name, else the directory name."""
    if current and "/" in current:
        suffix = current.split("/", 1)[1]
        if suffix:
            return suffix
    return re.sub(r"[^a-z0-9-]", "-", ctx.project_root.name.lower())


def find_entry_file(ctx: "ExecutionContext") -> str | None:
    for candidate in EXPORTS_CANDIDATES:
        if (ctx.project_root / candidate).is_file():
            return f"./{candidate}"
    return None


def auto_fix_manifest(ctx: "ExecutionContext", validation: ManifestValidation) -> Result[None]:
    """Fill in missing or invalid manifest fields after confirmation.

    Fields that already validate are left untouched and unknown keys are
    preserved. Declining returns MANIFEST_AUTO_FIX_DECLINED.
    """
    if validation.is_valid:
        ctx.logger.success("JSR configuration is already valid")
        return Ok(None)

    ctx.logger.section("JSR Configuration Auto-Fix")
    ctx.logger.warn("The following issues were found:")
    ctx.logger.bullets(validation.issues, limit=len(validation.issues))

    manifest_file = validation.manifest_file or ManifestFile(
        path=ctx.project_root / MANIFEST_FILES[0],
        data={},
        manifest=JsrManifest(),
    )
    manifest = manifest_file.manifest

    try:
        if not ctx.prompter.confirm("Would you like to fix these issues automatically?"):
            return fail("User declined auto-fix", ErrorCode.MANIFEST_AUTO_FIX_DECLINED)

        if not validation.has_valid_name:
            ctx.logger.info("Configuring package name...")
            scope = ctx.prompter.text(
                "Enter your JSR scope (e.g., your-username)",
                validate=_name_part_validator("Scope"),
            ).strip()
            package = ctx.prompter.text(
                "Enter package name",
                default=suggest_package_name(ctx, manifest.name),
                validate=_name_part_validator("Package name"),
            ).strip()
            manifest.name = f"@{scope}/{package}"
            ctx.logger.success(f"Package name set to: {manifest.name}")

        if not validation.has_valid_version:
            manifest.version = DEFAULT_MANIFEST_VERSION
            ctx.logger.success(f"Version set to: {DEFAULT_MANIFEST_VERSION}")

        if not validation.has_exports:
            entry = find_entry_file(ctx)
            if entry:
                manifest.exports = entry
                ctx.logger.success(f"Exports set to: {entry}")
            else:
                manifest.exports = FALLBACK_EXPORTS
                ctx.logger.warn(
                    f"No main file detected. Please set 'exports' manually in {manifest_file.path.name}"
                )

        if not validation.has_license:
            if ctx.prompter.confirm(f"Add {DEFAULT_LICENSE} license to {manifest_file.path.name}?"):
                manifest.license = DEFAULT_LICENSE
                ctx.logger.success(f"License set to: {DEFAULT_LICENSE}")
    except PromptCancelled as e:
        return Err(e)

    written = write_manifest(manifest_file)
    if isinstance(written, Err):
        return written

    ctx.logger.success(f"{manifest_file.path.name} updated successfully!")
    return Ok(None)
