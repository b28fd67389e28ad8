"""Unit tests for command-line option validation."""

import pytest
from pydantic import ValidationError

from publishflow.exceptions import ErrorCode
from publishflow.options import PublishOptions, build_options
from publishflow.registries import RegistryKind
from publishflow.result import Err, Ok


class TestPublishOptions:
    def test_defaults(self) -> None:
        options = PublishOptions()
        assert options.remote == "origin"
        assert options.registries == ()
        assert options.branch is None

    @pytest.mark.parametrize(
        "values",
        [{"branch": "main"}, {"tag": "v1.0.0"}, {"create_tag": "v1.1.0"}],
    )
    def test_single_ref_selector(self, values: dict) -> None:
        options = PublishOptions(**values)
        assert [v for v in (options.branch, options.tag, options.create_tag) if v] == list(
            values.values()
        )

    def test_selectors_are_mutually_exclusive(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            PublishOptions(branch="main", tag="v1.0.0")
        assert "mutually exclusive" in str(exc_info.value)

    def test_empty_selector_ignored(self) -> None:
        options = PublishOptions(branch="", tag="v1.0.0")
        assert options.tag == "v1.0.0"

    def test_registry_names_coerced(self) -> None:
        options = PublishOptions(registries=("npm", "jsr"))
        assert options.registries == (RegistryKind.NPM, RegistryKind.JSR)

    def test_frozen(self) -> None:
        options = PublishOptions()
        with pytest.raises(ValidationError):
            options.force = True


class TestBuildOptions:
    def test_valid(self) -> None:
        result = build_options(tag="v1.0.0", dry_run=True)
        assert isinstance(result, Ok)
        assert result.value.dry_run

    def test_conflict_reported_as_err(self) -> None:
        result = build_options(branch="main", create_tag="v2.0.0")

        assert isinstance(result, Err)
        assert result.code is ErrorCode.OPTIONS_INVALID
        assert result.error.message == (
            "Invalid options: --branch, --tag and --create-tag are mutually exclusive"
        )

    def test_unknown_registry(self) -> None:
        result = build_options(registries=("pypi",))

        assert isinstance(result, Err)
        assert result.code is ErrorCode.OPTIONS_INVALID
        assert result.error.message.startswith("Invalid options:")
