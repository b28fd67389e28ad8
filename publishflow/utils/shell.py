"""Subprocess execution for every external tool the pipeline drives.

git, gh, glab, npm and deno are all invoked through run(), which:
- Never uses a shell (argument lists only)
- Strips ANSI escape codes so tool output can be parsed and compared
- Raises ShellError with the captured output on non-zero exit
- Accepts an explicit environment so callers can pass their own snapshot
"""

import os
import re
import shlex
import shutil
import subprocess
from collections.abc import Mapping
from pathlib import Path


class ShellError(Exception):
    """Exception raised when a command exits non-zero.

    Attributes:
        cmd: The command that failed
        returncode: Exit code of the failed command
        stdout: Standard output (ANSI stripped)
        stderr: Standard error (ANSI stripped)
    """

    def __init__(
        self,
        cmd: str,
        returncode: int,
        stdout: str,
        stderr: str,
    ) -> None:
        self.cmd = cmd
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"Command failed with exit code {returncode}: {cmd}")

    @property
    def output(self) -> str:
        """Most useful output for error reporting (stderr first)."""
        return (self.stderr or self.stdout).strip()

    def __str__(self) -> str:
        parts = [f"Command failed: {self.cmd}", f"Exit code: {self.returncode}"]
        if self.stderr:
            parts.append(f"Stderr: {self.stderr.strip()}")
        if self.stdout:
            parts.append(f"Stdout: {self.stdout.strip()}")
        return "\n".join(parts)


# ESC[...m style sequences, OSC sequences and DCS/PM/APC strings
ANSI_PATTERN = re.compile(
    r"\x1b\[[0-9;]*[a-zA-Z]|\x1b\][^\x07]*\x07|\x1b[PX^_][^\x1b]*\x1b\\"
)

CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences and stray control characters.

    Tag and branch names read back from git must compare equal to what
    the user typed, so colour codes from tool output cannot leak through.
    """
    if not text:
        return ""
    result = ANSI_PATTERN.sub("", text)
    return CONTROL_CHARS_PATTERN.sub("", result)


def run(
    cmd: str | list[str],
    cwd: Path | None = None,
    check: bool = True,
    timeout: int = 300,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Execute a command and capture its output.

    Args:
        cmd: Command to execute (string or list of arguments)
        cwd: Working directory for the command
        check: Whether to raise ShellError on non-zero exit
        timeout: Maximum execution time in seconds
        env: Full environment for the child process (defaults to os.environ)

    Returns:
        CompletedProcess with ANSI-stripped stdout/stderr

    Raises:
        ShellError: If the command fails and check=True
        FileNotFoundError: If the executable does not exist
        subprocess.TimeoutExpired: If the command exceeds timeout
    """
    cmd_list = shlex.split(cmd) if isinstance(cmd, str) else list(cmd)

    result = subprocess.run(
        cmd_list,
        cwd=cwd,
        capture_output=True,
        text=True,
        timeout=timeout,
        env=dict(env) if env is not None else dict(os.environ),
    )

    result.stdout = strip_ansi(result.stdout) if result.stdout else ""
    result.stderr = strip_ansi(result.stderr) if result.stderr else ""

    if check and result.returncode != 0:
        raise ShellError(
            cmd=" ".join(cmd_list),
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )

    return result


def run_silent(
    cmd: str | list[str],
    cwd: Path | None = None,
    timeout: int = 300,
    env: Mapping[str, str] | None = None,
) -> bool:
    """Execute a command, returning only whether it exited zero.

    Missing executables and timeouts count as failure.
    """
    try:
        result = run(cmd, cwd=cwd, check=False, timeout=timeout, env=env)
    except (OSError, subprocess.TimeoutExpired):
        return False
    return result.returncode == 0


def is_command_available(cmd: str) -> bool:
    """Check if a command is available in PATH."""
    return shutil.which(cmd) is not None


def probe_version(cmd: str, timeout: int = 15) -> bool:
    """Check that a CLI is installed and answers `--version`."""
    if not is_command_available(cmd):
        return False
    return run_silent([cmd, "--version"], timeout=timeout)
