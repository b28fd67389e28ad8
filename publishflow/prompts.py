"""Interactive prompts.

Prompter is the only place the pipeline waits for user input. Each method
blocks until answered; Ctrl-C or end of input raises PromptCancelled so
callers can tell an aborted prompt apart from an explicit "no".
"""

from collections.abc import Callable, Sequence

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from publishflow.exceptions import PromptCancelled

# A validator returns an error message, or None when the value is acceptable
Validator = Callable[[str], str | None]

# Select options are either plain values or (value, label) pairs
Option = str | tuple[str, str]


def not_empty(label: str) -> Validator:
    """Build a validator rejecting blank input."""

    def _check(value: str) -> str | None:
        if not value.strip():
            return f"{label} cannot be empty"
        return None

    return _check


class Prompter:
    """Terminal prompts backed by rich.prompt."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def confirm(self, message: str, default: bool = True) -> bool:
        try:
            return Confirm.ask(escape(message), default=default, console=self.console)
        except (KeyboardInterrupt, EOFError) as e:
            raise PromptCancelled(f"Cancelled: {message}", cause=e) from e

    def text(
        self,
        message: str,
        default: str | None = None,
        validate: Validator | None = None,
        password: bool = False,
    ) -> str:
        """Ask for free text, re-asking until ``validate`` accepts it."""
        while True:
            try:
                if default is None:
                    value = Prompt.ask(
                        escape(message), console=self.console, password=password
                    )
                else:
                    value = Prompt.ask(
                        escape(message),
                        default=default,
                        console=self.console,
                        password=password,
                    )
            except (KeyboardInterrupt, EOFError) as e:
                raise PromptCancelled(f"Cancelled: {message}", cause=e) from e

            value = value or ""
            problem = validate(value) if validate else None
            if problem is None:
                return value
            self.console.print(f"[red]{escape(problem)}[/red]")

    def select(
        self,
        message: str,
        options: Sequence[Option],
        default: str | None = None,
    ) -> str:
        """Ask the user to pick one option; returns the option's value."""
        pairs = [(o, o) if isinstance(o, str) else o for o in options]
        values = [value for value, _ in pairs]

        self.console.print(escape(message))
        for index, (_, label) in enumerate(pairs, start=1):
            self.console.print(f"  [cyan]{index}[/cyan]) {escape(label)}")

        default_index = values.index(default) + 1 if default in values else 1
        choices = [str(i) for i in range(1, len(pairs) + 1)]
        try:
            answer = Prompt.ask(
                "Choice",
                choices=choices,
                default=str(default_index),
                show_choices=False,
                console=self.console,
            )
        except (KeyboardInterrupt, EOFError) as e:
            raise PromptCancelled(f"Cancelled: {message}", cause=e) from e
        return values[int(answer) - 1]

    def pause(self, message: str = "Press Enter to continue...") -> None:
        try:
            Prompt.ask(escape(message), default="", show_default=False, console=self.console)
        except (KeyboardInterrupt, EOFError) as e:
            raise PromptCancelled(f"Cancelled: {message}", cause=e) from e
