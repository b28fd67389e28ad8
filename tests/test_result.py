"""Unit tests for publishflow.result and publishflow.exceptions.

Tests cover:
- Ok / Err variants and the fail() shorthand
- PublishError rendering and decline classification
- PromptCancelled and ConfigurationError codes
"""

import pytest

from publishflow.exceptions import (
    ConfigurationError,
    ErrorCode,
    PromptCancelled,
    PublishError,
)
from publishflow.result import Err, Ok, fail


class TestResult:
    """Tests for the Ok / Err variants."""

    def test_ok_carries_value(self) -> None:
        result = Ok("v1.0.0")
        assert result.ok is True
        assert result.value == "v1.0.0"

    def test_err_exposes_code(self) -> None:
        result = Err(PublishError("Push failed", ErrorCode.GIT_PUSH_FAILED))
        assert result.ok is False
        assert result.code is ErrorCode.GIT_PUSH_FAILED

    def test_fail_builds_err(self) -> None:
        cause = OSError("disk full")
        result = fail("Failed to write", ErrorCode.MANIFEST_WRITE_FAILED, cause=cause, fix_hint="Free space")

        assert isinstance(result, Err)
        assert result.error.message == "Failed to write"
        assert result.error.cause is cause
        assert result.error.fix_hint == "Free space"


class TestPublishError:
    """Tests for PublishError."""

    def test_default_code(self) -> None:
        assert PublishError("boom").code is ErrorCode.PUBLISH_FAILED

    def test_str_includes_details_and_fix(self) -> None:
        error = PublishError(
            "Failed to publish",
            ErrorCode.REGISTRY_PUBLISH_FAILED,
            cause="403 Forbidden",
            fix_hint="Run npm login",
        )
        rendered = str(error)
        assert rendered.startswith("Failed to publish")
        assert "Details: 403 Forbidden" in rendered
        assert "Fix: Run npm login" in rendered

    def test_str_without_extras_is_message(self) -> None:
        assert str(PublishError("Just this")) == "Just this"

    @pytest.mark.parametrize(
        "code",
        [
            ErrorCode.GIT_INIT_DECLINED,
            ErrorCode.REMOTE_CREATE_DECLINED,
            ErrorCode.COMMIT_DECLINED,
            ErrorCode.MANIFEST_AUTO_FIX_DECLINED,
        ],
    )
    def test_declined_codes(self, code: ErrorCode) -> None:
        assert PublishError("no", code).is_declined is True

    def test_cancel_is_not_decline(self) -> None:
        assert PromptCancelled().is_declined is False

    def test_prompt_cancelled_code(self) -> None:
        error = PromptCancelled("Cancelled: Proceed?")
        assert isinstance(error, PublishError)
        assert error.code is ErrorCode.PROMPT_CANCELLED

    def test_configuration_error(self) -> None:
        error = ConfigurationError("Invalid YAML", details="line 3", fix_hint="Check syntax")
        assert error.code is ErrorCode.CONFIG_INVALID
        assert error.exit_code == 1
        assert "line 3" in str(error)
