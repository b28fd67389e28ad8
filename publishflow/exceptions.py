"""Typed errors for the publish pipeline.

Every fallible step reports failure as a PublishError carried inside an
Err result (see publishflow.result). The code is what callers branch on;
the message is only for humans.

Code prefixes group errors by subsystem:
- GIT_: version-control tooling and repository operations
- REMOTE_: remote lookup and hosting repository creation
- AUTH_: push permission checks
- COMMIT_: pending change reconciliation
- MANIFEST_: JSR manifest reading, validation and repair
- REGISTRY_: registry detection, authentication and publishing
- PROMPT_: interactive prompts
- OPTIONS_ / CONFIG_: input validation before the pipeline starts
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Stable, machine-readable failure codes."""

    GIT_NOT_INSTALLED = "GIT_NOT_INSTALLED"
    GIT_INIT_DECLINED = "GIT_INIT_DECLINED"
    GIT_INIT_FAILED = "GIT_INIT_FAILED"
    GIT_STATUS_FAILED = "GIT_STATUS_FAILED"
    GIT_BRANCHES_FAILED = "GIT_BRANCHES_FAILED"
    GIT_TAGS_FAILED = "GIT_TAGS_FAILED"
    GIT_REMOTES_FAILED = "GIT_REMOTES_FAILED"
    GIT_NO_BRANCHES = "GIT_NO_BRANCHES"
    GIT_NO_TAGS = "GIT_NO_TAGS"
    GIT_ADD_FAILED = "GIT_ADD_FAILED"
    GIT_COMMIT_FAILED = "GIT_COMMIT_FAILED"
    GIT_TAG_FAILED = "GIT_TAG_FAILED"
    GIT_REMOTE_ADD_FAILED = "GIT_REMOTE_ADD_FAILED"
    GIT_CONFIG_FAILED = "GIT_CONFIG_FAILED"
    GIT_PUSH_FAILED = "GIT_PUSH_FAILED"
    GITIGNORE_WRITE_FAILED = "GITIGNORE_WRITE_FAILED"

    REMOTE_NOT_FOUND = "REMOTE_NOT_FOUND"
    REMOTE_NO_TOOLING = "REMOTE_NO_TOOLING"
    REMOTE_CREATE_DECLINED = "REMOTE_CREATE_DECLINED"
    REMOTE_CREATE_FAILED = "REMOTE_CREATE_FAILED"
    REMOTE_UNSUPPORTED_PLATFORM = "REMOTE_UNSUPPORTED_PLATFORM"
    REMOTE_INVALID_URL = "REMOTE_INVALID_URL"

    AUTH_FAILED = "AUTH_FAILED"

    COMMIT_DECLINED = "COMMIT_DECLINED"

    MANIFEST_NOT_FOUND = "MANIFEST_NOT_FOUND"
    MANIFEST_PARSE_ERROR = "MANIFEST_PARSE_ERROR"
    MANIFEST_WRITE_FAILED = "MANIFEST_WRITE_FAILED"
    MANIFEST_AUTO_FIX_DECLINED = "MANIFEST_AUTO_FIX_DECLINED"

    REGISTRY_NOT_FOUND = "REGISTRY_NOT_FOUND"
    REGISTRY_INVALID_MANIFEST = "REGISTRY_INVALID_MANIFEST"
    REGISTRY_UNKNOWN = "REGISTRY_UNKNOWN"
    REGISTRY_TOOL_MISSING = "REGISTRY_TOOL_MISSING"
    REGISTRY_TOKEN_MISSING = "REGISTRY_TOKEN_MISSING"
    REGISTRY_AUTH_FAILED = "REGISTRY_AUTH_FAILED"
    REGISTRY_INVALID_NAME = "REGISTRY_INVALID_NAME"
    REGISTRY_INVALID_VERSION = "REGISTRY_INVALID_VERSION"
    REGISTRY_PUBLISH_FAILED = "REGISTRY_PUBLISH_FAILED"

    PROMPT_CANCELLED = "PROMPT_CANCELLED"

    OPTIONS_INVALID = "OPTIONS_INVALID"
    CONFIG_INVALID = "CONFIG_INVALID"

    PUBLISH_FAILED = "PUBLISH_FAILED"


class PublishError(Exception):
    """A classified pipeline failure.

    Attributes:
        code: Stable code used for branching decisions
        message: Human-readable summary
        cause: Wrapped underlying failure, kept for diagnostics
        fix_hint: Suggested command or action to fix the issue
    """

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.PUBLISH_FAILED,
        cause: object | None = None,
        fix_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.cause = cause
        self.fix_hint = fix_hint

    @property
    def is_declined(self) -> bool:
        """True when the user explicitly said no to an offered step."""
        return self.code.value.endswith("_DECLINED")

    def __str__(self) -> str:
        parts = [self.message]
        if self.cause is not None:
            parts.append(f"\nDetails: {self.cause}")
        if self.fix_hint:
            parts.append(f"\nFix: {self.fix_hint}")
        return "".join(parts)

    def __repr__(self) -> str:
        return f"PublishError({self.code.value}: {self.message!r})"


class PromptCancelled(PublishError):
    """The user aborted an interactive prompt (Ctrl-C or end of input).

    Distinct from a decline: a cancelled prompt always stops the pipeline.
    """

    def __init__(self, message: str = "Prompt cancelled", cause: object | None = None) -> None:
        super().__init__(message, ErrorCode.PROMPT_CANCELLED, cause=cause)


class ConfigurationError(PublishError):
    """Configuration file errors, raised before the pipeline starts.

    Raised when:
    - An explicit config file does not exist
    - A config file has invalid syntax (YAML/TOML)
    - Config values fail validation
    """

    def __init__(
        self,
        message: str,
        details: str | None = None,
        fix_hint: str | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.CONFIG_INVALID, cause=details, fix_hint=fix_hint)
