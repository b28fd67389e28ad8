"""Execution context passed through every phase of the pipeline.

The context replaces ambient process state: the working directory and
the environment are captured once and handed to each component along
with the adapters it may call.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console

from publishflow.config.models import PublishConfig
from publishflow.git import GitAdapter
from publishflow.hosting import HostingAdapter
from publishflow.logger import Logger
from publishflow.prompts import Prompter
from publishflow.registries import RegistryAdapter


@dataclass
class ExecutionContext:
    """Everything a pipeline phase needs to run.

    Attributes:
        project_root: Directory holding the project being published
        env: Environment snapshot used for token lookups and child processes
        config: Loaded configuration
        logger: Console output
        prompter: Interactive input
        git: Version-control adapter bound to project_root
        hosting: Repository hosting adapter
        registries: Package registry adapter
    """

    project_root: Path
    config: PublishConfig
    logger: Logger
    prompter: Prompter
    git: GitAdapter
    hosting: HostingAdapter
    registries: RegistryAdapter
    env: dict[str, str] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        project_root: Path | None = None,
        config: PublishConfig | None = None,
        verbose: bool = False,
        console: Console | None = None,
    ) -> "ExecutionContext":
        """Build the production wiring for one invocation."""
        root = (project_root or Path.cwd()).resolve()
        config = config or PublishConfig()
        console = console or Console(highlight=False)
        timeouts = config.timeouts
        return cls(
            project_root=root,
            config=config,
            logger=Logger(verbose=verbose, console=console),
            prompter=Prompter(console=console),
            git=GitAdapter(root, timeout=timeouts.git_operations, push_timeout=timeouts.push),
            hosting=HostingAdapter(root, timeout=timeouts.hosting),
            registries=RegistryAdapter(root),
            env=dict(os.environ),
        )

    def env_value(self, *names: str) -> str | None:
        """Return the first non-empty variable among ``names``."""
        for name in names:
            value = self.env.get(name)
            if value:
                return value
        return None

    def reload_env(self) -> None:
        """Re-snapshot the process environment."""
        self.env = dict(os.environ)
