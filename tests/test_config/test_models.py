"""Unit tests for Pydantic configuration models.

Tests cover:
- Default value behavior
- Model validation with invalid inputs
- Field validators
- Environment variable override support (PublishConfig)
"""

import pytest
from pydantic import ValidationError

from publishflow.config.models import (
    GitConfig,
    JSRConfig,
    NPMConfig,
    PublishConfig,
    TimeoutsConfig,
)


class TestGitConfig:
    """Tests for GitConfig model."""

    def test_default_remote(self) -> None:
        assert GitConfig().remote == "origin"

    def test_remote_is_stripped(self) -> None:
        assert GitConfig(remote="  upstream ").remote == "upstream"

    def test_empty_remote_rejected(self) -> None:
        """GitConfig raises ValidationError for a blank remote."""
        with pytest.raises(ValidationError) as exc_info:
            GitConfig(remote="   ")
        assert "remote cannot be empty" in str(exc_info.value)


class TestNPMConfig:
    """Tests for NPMConfig model."""

    def test_defaults(self) -> None:
        config = NPMConfig()
        assert config.access == "public"
        assert config.tag is None

    def test_invalid_access(self) -> None:
        with pytest.raises(ValidationError):
            NPMConfig(access="everyone")


class TestJSRConfig:
    def test_defaults(self) -> None:
        config = JSRConfig()
        assert config.allow_dirty is True
        assert config.token_env == "JSR_TOKEN"


class TestTimeoutsConfig:
    """Tests for TimeoutsConfig bounds."""

    def test_defaults(self) -> None:
        config = TimeoutsConfig()
        assert (config.git_operations, config.push, config.hosting, config.publish) == (
            60,
            300,
            120,
            600,
        )

    @pytest.mark.parametrize(
        ("field", "value"),
        [("git_operations", 5), ("push", 10), ("hosting", 1), ("publish", 30)],
    )
    def test_lower_bounds(self, field: str, value: int) -> None:
        """Timeouts below the minimum are rejected."""
        with pytest.raises(ValidationError):
            TimeoutsConfig(**{field: value})


class TestPublishConfig:
    """Tests for the root PublishConfig settings model."""

    def test_all_sections_default(self) -> None:
        config = PublishConfig()
        assert config.git.remote == "origin"
        assert config.timeouts.publish == 600

    def test_nested_dicts(self) -> None:
        config = PublishConfig(git={"remote": "upstream"}, npm={"tag": "beta"})
        assert config.git.remote == "upstream"
        assert config.npm.tag == "beta"

    def test_extra_keys_forbidden(self) -> None:
        with pytest.raises(ValidationError):
            PublishConfig(unknown={"a": 1})

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """PUBLISHFLOW_ variables override defaults with __ as nested delimiter."""
        monkeypatch.setenv("PUBLISHFLOW_NPM__ACCESS", "restricted")
        monkeypatch.setenv("PUBLISHFLOW_TIMEOUTS__PUBLISH", "1200")

        config = PublishConfig()

        assert config.npm.access == "restricted"
        assert config.timeouts.publish == 1200
