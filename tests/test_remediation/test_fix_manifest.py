"""Unit tests for publishflow.remediation.manifest (Fix-Registry-Manifest)."""

import json
from pathlib import Path

from publishflow.config.defaults import FALLBACK_EXPORTS
from publishflow.exceptions import ErrorCode, PromptCancelled
from publishflow.manifest import validate_manifest
from publishflow.remediation import auto_fix_manifest, find_entry_file, suggest_package_name
from publishflow.result import Ok


def read_json(path: Path) -> dict:
    return json.loads(path.read_text())


class TestSuggestions:
    """Tests for suggest_package_name and find_entry_file."""

    def test_name_from_existing_scope(self, make_context) -> None:
        assert suggest_package_name(make_context(), "@old/pkg-name") == "pkg-name"

    def test_name_from_directory(self, make_context, temp_dir: Path) -> None:
        root = temp_dir / "My_Project.v2"
        root.mkdir()
        assert suggest_package_name(make_context(root=root), None) == "my-project-v2"

    def test_entry_file_order(self, make_context, project_dir: Path) -> None:
        (project_dir / "src").mkdir()
        (project_dir / "src" / "mod.ts").write_text("")
        (project_dir / "main.ts").write_text("")

        assert find_entry_file(make_context()) == "./main.ts"

    def test_no_entry_file(self, make_context) -> None:
        assert find_entry_file(make_context()) is None


class TestAutoFixManifest:
    """Tests for auto_fix_manifest."""

    def test_valid_manifest_is_untouched(self, make_context, jsr_project: Path) -> None:
        before = (jsr_project / "deno.json").read_text()
        ctx = make_context()

        result = auto_fix_manifest(ctx, validate_manifest(jsr_project).value)

        assert isinstance(result, Ok)
        assert ctx.prompter.asked == []
        assert (jsr_project / "deno.json").read_text() == before

    def test_decline(self, make_context, project_dir: Path) -> None:
        path = project_dir / "deno.json"
        path.write_text('{"name": "bad"}')
        ctx = make_context(answers=[False])

        result = auto_fix_manifest(ctx, validate_manifest(project_dir).value)

        assert result.code is ErrorCode.MANIFEST_AUTO_FIX_DECLINED
        assert path.read_text() == '{"name": "bad"}'

    def test_missing_exports_only(self, make_context, jsr_project: Path) -> None:
        path = jsr_project / "deno.json"
        data = read_json(path)
        del data["exports"]
        path.write_text(json.dumps(data, indent=2))
        ctx = make_context(answers=[True])

        assert isinstance(auto_fix_manifest(ctx, validate_manifest(jsr_project).value), Ok)

        revalidated = validate_manifest(jsr_project).value
        fixed = read_json(path)
        assert revalidated.has_exports is True
        assert revalidated.is_valid is True
        assert fixed["exports"] == "./mod.ts"
        assert fixed["name"] == data["name"]
        assert fixed["version"] == data["version"]
        assert fixed["tasks"] == {"test": "deno test"}

    def test_creates_manifest_from_scratch(self, make_context, output, project_dir: Path) -> None:
        ctx = make_context(answers=[True, "Bad Scope", "my-scope", None, True])

        assert isinstance(auto_fix_manifest(ctx, validate_manifest(project_dir).value), Ok)

        created = read_json(project_dir / "deno.json")
        assert created == {
            "name": "@my-scope/test-project",
            "version": "0.1.0",
            "exports": FALLBACK_EXPORTS,
            "license": "MIT",
        }
        assert "Please set 'exports' manually" in output(ctx)

    def test_only_invalid_fields_are_replaced(self, make_context, project_dir: Path) -> None:
        path = project_dir / "jsr.json"
        path.write_text(json.dumps({"name": "@old/thing", "version": "v1", "exports": "./x.ts"}))
        ctx = make_context(answers=[True, False])

        result = auto_fix_manifest(ctx, validate_manifest(project_dir).value)

        assert isinstance(result, Ok)
        fixed = read_json(path)
        assert fixed["name"] == "@old/thing"
        assert fixed["version"] == "0.1.0"
        assert "license" not in fixed

    def test_cancel_writes_nothing(self, make_context, project_dir: Path) -> None:
        ctx = make_context(answers=[True, PromptCancelled])

        result = auto_fix_manifest(ctx, validate_manifest(project_dir).value)

        assert result.code is ErrorCode.PROMPT_CANCELLED
        assert not (project_dir / "deno.json").exists()
