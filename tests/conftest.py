"""Pytest fixtures for publishflow tests.

Provides common fixtures for:
- Temporary project directories
- Git repository setup (isolated from the user's global git config)
- A bare repository acting as the push remote
- A scripted prompter and fake hosting / registry adapters
- An ExecutionContext factory wiring them together
"""

import io
import json
import subprocess
from collections.abc import Callable, Generator, Iterable
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from publishflow.config.models import PublishConfig
from publishflow.context import ExecutionContext
from publishflow.exceptions import PromptCancelled
from publishflow.git import GitAdapter
from publishflow.logger import Logger
from publishflow.prompts import Prompter
from publishflow.registries import RegistryDescriptor, RegistryKind
from publishflow.remote import Platform
from publishflow.result import Err, Ok, Result


def git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


class ScriptedPrompter(Prompter):
    """Prompter replaying queued answers.

    Answers are consumed in order. The PromptCancelled class itself as an
    answer simulates Ctrl-C; None accepts the prompt's default.
    """

    def __init__(self, answers: Iterable[Any] = ()) -> None:
        super().__init__(console=Console(file=io.StringIO()))
        self.answers = list(answers)
        self.asked: list[str] = []

    def _next(self, message: str) -> Any:
        self.asked.append(message)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {message}")
        answer = self.answers.pop(0)
        if answer is PromptCancelled:
            raise PromptCancelled(f"Cancelled: {message}")
        return answer

    def confirm(self, message: str, default: bool = True) -> bool:
        answer = self._next(message)
        return default if answer is None else answer

    def text(self, message, default=None, validate=None, password=False) -> str:
        while True:
            value = self._next(message)
            if value is None:
                value = default or ""
            if validate is None or validate(value) is None:
                return value

    def select(self, message, options, default=None) -> str:
        answer = self._next(message)
        return default if answer is None else answer

    def pause(self, message: str = "Press Enter to continue...") -> None:
        self._next(message)


class FakeHosting:
    """Hosting adapter with a fixed set of available platforms."""

    def __init__(
        self,
        available: Iterable[Platform] = (),
        url: str = "https://github.com/test-user/test-project.git",
        result: Result[str] | None = None,
        on_create: Callable[[], None] | None = None,
    ) -> None:
        self.available = set(available)
        self.url = url
        self.result = result
        self.on_create = on_create
        self.created: list[tuple[Platform, str, bool]] = []

    def probe(self) -> set[Platform]:
        return set(self.available)

    def display_name(self, platform: Platform) -> str:
        return platform.display_name

    def create_repository(self, platform: Platform, name: str, private: bool) -> Result[str]:
        self.created.append((platform, name, private))
        if self.result is not None:
            return self.result
        if self.on_create:
            self.on_create()
        return Ok(self.url)


class FakeRegistries:
    """Registry adapter with canned detection and publish results."""

    def __init__(
        self,
        detected: dict[RegistryKind, RegistryDescriptor | Err] | None = None,
        results: dict[RegistryKind, Result[str]] | None = None,
    ) -> None:
        self.detected = detected or {}
        self.results = results or {}
        self.published: list[RegistryKind] = []

    def kinds(self) -> list[RegistryKind]:
        return list(self.detected)

    def detect(self, kind: RegistryKind) -> Result[RegistryDescriptor]:
        value = self.detected[kind]
        return value if isinstance(value, Err) else Ok(value)

    def publish(self, kind: RegistryKind, ctx: ExecutionContext) -> Result[str]:
        self.published.append(kind)
        return self.results.get(kind, Ok(f"Successfully published to {kind.display_name}"))


@pytest.fixture(autouse=True)
def isolated_git_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point git at a throwaway global config so results never depend on the host."""
    config = tmp_path / "gitconfig"
    config.write_text(
        "[init]\n"
        "\tdefaultBranch = main\n"
        "[commit]\n"
        "\tgpgsign = false\n"
        "[tag]\n"
        "\tgpgsign = false\n"
    )
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_TERMINAL_PROMPT", "0")
    for name in ("JSR_TOKEN", "GITHUB_TOKEN", "GH_TOKEN", "GITLAB_TOKEN", "GL_TOKEN"):
        monkeypatch.delenv(name, raising=False)
    return config


@pytest.fixture
def temp_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary directory for tests.

    Yields:
        Path to temporary directory
    """
    yield tmp_path
    # Cleanup handled by pytest's tmp_path


@pytest.fixture
def project_dir(temp_dir: Path) -> Path:
    """Create a temporary project directory.

    Returns:
        Path to project directory
    """
    project = temp_dir / "test-project"
    project.mkdir()
    return project


@pytest.fixture
def git_repo(project_dir: Path) -> Path:
    """Create a git repository in the project directory.

    Returns:
        Path to git repository
    """
    git(project_dir, "init")
    git(project_dir, "config", "user.email", "test@test.com")
    git(project_dir, "config", "user.name", "Test User")
    return project_dir


@pytest.fixture
def committed_repo(git_repo: Path) -> Path:
    """Git repository with one commit on main.

    Returns:
        Path to git repository
    """
    (git_repo / "README.md").write_text("# test-project\n")
    git(git_repo, "add", ".")
    git(git_repo, "commit", "-m", "Initial commit")
    return git_repo


@pytest.fixture
def origin_repo(temp_dir: Path) -> Path:
    """Bare repository to push to.

    Returns:
        Path to bare repository
    """
    bare = temp_dir / "origin.git"
    subprocess.run(["git", "init", "--bare", str(bare)], capture_output=True, check=True)
    return bare


@pytest.fixture
def publishable_repo(committed_repo: Path, origin_repo: Path) -> Path:
    """Committed repository with a pushable 'origin' remote.

    Returns:
        Path to git repository
    """
    git(committed_repo, "remote", "add", "origin", str(origin_repo))
    return committed_repo


@pytest.fixture
def jsr_project(project_dir: Path) -> Path:
    """Project with a valid deno.json.

    Returns:
        Path to project directory
    """
    deno_json = {
        "name": "@test-user/test-project",
        "version": "1.0.0",
        "exports": "./mod.ts",
        "license": "MIT",
        "tasks": {"test": "deno test"},
    }
    (project_dir / "deno.json").write_text(json.dumps(deno_json, indent=2))
    (project_dir / "mod.ts").write_text("export const hello = 'world';\n")
    return project_dir


@pytest.fixture
def make_context(project_dir: Path) -> Callable[..., ExecutionContext]:
    """Factory for an ExecutionContext wired with a real git adapter and fakes.

    Console output is captured; read it with ``output(ctx)``.
    """

    def _make(
        answers: Iterable[Any] = (),
        root: Path | None = None,
        git: GitAdapter | None = None,
        hosting: Any = None,
        registries: Any = None,
        env: dict[str, str] | None = None,
        config: PublishConfig | None = None,
        verbose: bool = True,
    ) -> ExecutionContext:
        root = root or project_dir
        console = Console(file=io.StringIO(), width=200, highlight=False)
        return ExecutionContext(
            project_root=root,
            config=config or PublishConfig(),
            logger=Logger(verbose=verbose, console=console),
            prompter=ScriptedPrompter(answers),
            git=git or GitAdapter(root),
            hosting=hosting or FakeHosting(),
            registries=registries or FakeRegistries(),
            env=env or {},
        )

    return _make


@pytest.fixture
def output() -> Callable[[ExecutionContext], str]:
    """Return everything the context's logger printed so far."""

    def _read(ctx: ExecutionContext) -> str:
        return ctx.logger.console.file.getvalue()

    return _read


@pytest.fixture
def fake_hosting() -> type[FakeHosting]:
    return FakeHosting


@pytest.fixture
def fake_registries() -> type[FakeRegistries]:
    return FakeRegistries


@pytest.fixture
def run_git() -> Callable[..., str]:
    """Run a git command in a directory and return its stripped stdout."""
    return git
