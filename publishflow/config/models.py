"""Pydantic v2 configuration models for publishflow.yml.

Every field has a default, so a project without a configuration file
runs with PublishConfig(). Environment variables override file values
with the PUBLISHFLOW_ prefix, e.g. PUBLISHFLOW_NPM__ACCESS=restricted.
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GitConfig(BaseModel):
    """Git workflow configuration."""

    remote: str = Field(
        default="origin",
        description="Remote used when --remote is not given",
    )

    @field_validator("remote")
    @classmethod
    def validate_remote(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("remote cannot be empty")
        return v.strip()


class NPMConfig(BaseModel):
    """npm publishing configuration."""

    access: Literal["public", "restricted"] = Field(
        default="public",
        description="npm access level",
    )
    tag: str | None = Field(
        default=None,
        description="Dist-tag passed to npm publish (npm defaults to 'latest')",
    )


class JSRConfig(BaseModel):
    """JSR publishing configuration."""

    allow_dirty: bool = Field(
        default=True,
        description="Pass --allow-dirty to deno publish",
    )
    token_env: str = Field(
        default="JSR_TOKEN",
        description="Environment variable holding the JSR token",
    )


class TimeoutsConfig(BaseModel):
    """Timeout settings in seconds."""

    git_operations: int = Field(
        default=60,
        ge=10,
        description="Local git command timeout",
    )
    push: int = Field(
        default=300,
        ge=30,
        description="git push and push-permission probe timeout",
    )
    hosting: int = Field(
        default=120,
        ge=10,
        description="gh / glab repository creation timeout",
    )
    publish: int = Field(
        default=600,
        ge=60,
        description="Registry publish timeout",
    )


class PublishConfig(BaseSettings):
    """Root configuration model for publishflow.yml.

    Supports environment variable overrides with PUBLISHFLOW_ prefix.
    Example: PUBLISHFLOW_GIT__REMOTE=upstream
    """

    git: GitConfig = Field(default_factory=GitConfig)
    npm: NPMConfig = Field(default_factory=NPMConfig)
    jsr: JSRConfig = Field(default_factory=JSRConfig)
    timeouts: TimeoutsConfig = Field(default_factory=TimeoutsConfig)

    model_config = SettingsConfigDict(
        env_prefix="PUBLISHFLOW_",
        env_nested_delimiter="__",
        extra="forbid",
    )
