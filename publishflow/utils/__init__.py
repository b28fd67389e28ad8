"""Utility modules for publishflow."""

from publishflow.utils.shell import (
    ShellError,
    is_command_available,
    probe_version,
    run,
    run_silent,
    strip_ansi,
)

__all__ = [
    "run",
    "run_silent",
    "strip_ansi",
    "is_command_available",
    "probe_version",
    "ShellError",
]
