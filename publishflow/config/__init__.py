"""Configuration management for publishflow."""

from publishflow.config.loader import load_config
from publishflow.config.models import (
    GitConfig,
    JSRConfig,
    NPMConfig,
    PublishConfig,
    TimeoutsConfig,
)

__all__ = [
    "PublishConfig",
    "GitConfig",
    "NPMConfig",
    "JSRConfig",
    "TimeoutsConfig",
    "load_config",
]
