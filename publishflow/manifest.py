"""JSR manifest (deno.json / jsr.json) reading, validation and writing.

The manifest is modelled with the fields publishing cares about; every
other key is kept as-is so a read-modify-write cycle never loses data.
"""

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from publishflow.exceptions import ErrorCode
from publishflow.result import Ok, Result, fail

# Checked in order; the first existing file is the manifest
MANIFEST_FILES = ["deno.json", "jsr.json"]

JSR_NAME_PATTERN = re.compile(r"^@[a-z0-9-]+/[a-z0-9-]+$")
SEMVER_PATTERN = re.compile(r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.-]+)?(\+[a-zA-Z0-9.-]+)?$")
NAME_PART_PATTERN = re.compile(r"^[a-z0-9-]+$")


class JsrManifest(BaseModel):
    """Publishing fields of a JSR manifest; unknown keys are allowed."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    version: str | None = None
    exports: str | dict[str, Any] | None = None
    license: str | None = None
    description: str | None = None


@dataclass
class ManifestFile:
    """A manifest as read from disk.

    ``data`` is the parsed JSON in file order; ``manifest`` is the typed view.
    """

    path: Path
    data: dict[str, Any]
    manifest: JsrManifest

    def to_dict(self) -> dict[str, Any]:
        """Merge fields changed on ``manifest`` into the original key order."""
        merged = dict(self.data)
        merged.update(self.manifest.model_dump(exclude_unset=True, exclude_none=True))
        return merged


def is_valid_jsr_name(name: str) -> bool:
    return bool(JSR_NAME_PATTERN.match(name))


def is_valid_semver(version: str) -> bool:
    return bool(SEMVER_PATTERN.match(version))


def is_valid_name_part(value: str) -> bool:
    """Scope or package-name segment of a JSR name."""
    return bool(NAME_PART_PATTERN.match(value))


def find_manifest(project_root: Path) -> Path | None:
    for filename in MANIFEST_FILES:
        candidate = project_root / filename
        if candidate.is_file():
            return candidate
    return None


def read_manifest(project_root: Path) -> Result[ManifestFile]:
    """Read and parse the project's JSR manifest."""
    path = find_manifest(project_root)
    if path is None:
        return fail(
            "deno.json or jsr.json not found",
            ErrorCode.MANIFEST_NOT_FOUND,
            fix_hint="Create a deno.json file for JSR publishing",
        )

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        return fail(f"Failed to parse {path.name}", ErrorCode.MANIFEST_PARSE_ERROR, cause=e)

    if not isinstance(data, dict):
        return fail(
            f"Failed to parse {path.name}",
            ErrorCode.MANIFEST_PARSE_ERROR,
            cause="Top level must be a JSON object",
        )

    try:
        manifest = JsrManifest.model_validate(data)
    except ValidationError as e:
        return fail(f"Invalid field types in {path.name}", ErrorCode.MANIFEST_PARSE_ERROR, cause=e)

    return Ok(ManifestFile(path=path, data=data, manifest=manifest))


def write_manifest(manifest_file: ManifestFile) -> Result[None]:
    """Write the manifest back as pretty-printed JSON."""
    content = json.dumps(manifest_file.to_dict(), indent=2, ensure_ascii=False) + "\n"
    try:
        manifest_file.path.write_text(content, encoding="utf-8")
    except OSError as e:
        return fail(
            f"Failed to write {manifest_file.path.name}",
            ErrorCode.MANIFEST_WRITE_FAILED,
            cause=e,
        )
    return Ok(None)


@dataclass
class ManifestValidation:
    """Field-by-field validation of a JSR manifest.

    A license is recommended but never required for validity.
    """

    has_config: bool = False
    has_name: bool = False
    has_valid_name: bool = False
    has_version: bool = False
    has_valid_version: bool = False
    has_exports: bool = False
    has_license: bool = False
    manifest_file: ManifestFile | None = None
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.has_valid_name and self.has_valid_version and self.has_exports


def validate_manifest(project_root: Path) -> Result[ManifestValidation]:
    """Validate the JSR manifest.

    A missing manifest is a validation outcome, not an error; an
    unparseable one is returned as MANIFEST_PARSE_ERROR.
    """
    validation = ManifestValidation()

    loaded = read_manifest(project_root)
    if not isinstance(loaded, Ok):
        if loaded.code is not ErrorCode.MANIFEST_NOT_FOUND:
            return loaded
        validation.issues.append("deno.json file not found")
        validation.suggestions.append("Create a deno.json file for JSR publishing")
        validation.suggestions.append("Consider adding 'license' field (e.g., 'MIT')")
        return Ok(validation)

    validation.has_config = True
    validation.manifest_file = loaded.value
    manifest = loaded.value.manifest

    if not manifest.name:
        validation.issues.append("Missing 'name' field")
        validation.suggestions.append("Add 'name' field in format: @scope/package-name")
    else:
        validation.has_name = True
        if is_valid_jsr_name(manifest.name):
            validation.has_valid_name = True
        else:
            validation.issues.append(
                f"Invalid name format: {manifest.name}. Must be @scope/package"
            )
            validation.suggestions.append(
                "Use format: @your-username/package-name (all lowercase, hyphens allowed)"
            )

    if not manifest.version:
        validation.issues.append("Missing 'version' field")
        validation.suggestions.append("Add 'version' field (e.g., '0.1.0')")
    else:
        validation.has_version = True
        if is_valid_semver(manifest.version):
            validation.has_valid_version = True
        else:
            validation.issues.append(
                f"Invalid version format: {manifest.version}. Must be semver"
            )
            validation.suggestions.append(
                "Use semver format: MAJOR.MINOR.PATCH (e.g., '1.0.0')"
            )

    if not manifest.exports:
        validation.issues.append("Missing 'exports' field")
        validation.suggestions.append("Add 'exports' field pointing to main file")
    else:
        validation.has_exports = True

    if manifest.license:
        validation.has_license = True
    else:
        validation.suggestions.append("Consider adding 'license' field (e.g., 'MIT')")

    return Ok(validation)
