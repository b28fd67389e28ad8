"""Command-line interface for publishflow.

Provides commands for:
- publishflow: Push a branch or tag and publish to npm / JSR
- check: Report publish readiness without changing anything
- init: Prepare the project (git, remote, commit, JSR manifest)
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from publishflow import __version__
from publishflow.config.defaults import write_default_config
from publishflow.config.loader import load_config
from publishflow.config.models import PublishConfig
from publishflow.context import ExecutionContext
from publishflow.exceptions import PublishError
from publishflow.options import build_options
from publishflow.result import Err
from publishflow.workflow import Outcome, execute_publish, render_check, run_check, run_init

# Create Typer app
app = typer.Typer(
    name="publishflow",
    help="Interactive publishing for git repositories and npm / JSR packages",
    add_completion=False,
)

# Rich console for formatted output
console = Console(highlight=False)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"publishflow version {__version__}")
        raise typer.Exit()


def report_error(error: PublishError, verbose: bool = False) -> None:
    """Print a fatal error; the wrapped cause is shown only when verbose."""
    console.print(f"[red]Error:[/red] {escape(error.message)}")
    if verbose and error.cause is not None:
        console.print(f"[dim]Details: {escape(str(error.cause))}[/dim]")
    if error.fix_hint:
        console.print(f"[yellow]Fix:[/yellow] {escape(error.fix_hint)}")


def load_or_exit(config: Path | None, project_root: Path) -> PublishConfig:
    try:
        return load_config(config, project_root)
    except PublishError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=e.exit_code) from None


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    branch: str | None = typer.Option(  # noqa: B008
        None,
        "--branch",
        "-b",
        help="Branch to push",
    ),
    tag: str | None = typer.Option(  # noqa: B008
        None,
        "--tag",
        "-t",
        help="Existing tag to push",
    ),
    create_tag: str | None = typer.Option(  # noqa: B008
        None,
        "--create-tag",
        "-c",
        help="Create this tag and push it",
    ),
    remote: str | None = typer.Option(  # noqa: B008
        None,
        "--remote",
        "-r",
        help="Remote to push to (default: git.remote from config, else origin)",
    ),
    skip_registries: bool = typer.Option(  # noqa: B008
        False,
        "--skip-registries",
        help="Only push to git, never publish to registries",
    ),
    registry: list[str] | None = typer.Option(  # noqa: B008
        None,
        "--registry",
        help="Publish only to this registry (npm, jsr); repeatable",
    ),
    force: bool = typer.Option(  # noqa: B008
        False,
        "--force",
        "-f",
        help="Force push",
    ),
    dry_run: bool = typer.Option(  # noqa: B008
        False,
        "--dry-run",
        "-d",
        help="Show what would be published without pushing or publishing",
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False,
        "--verbose",
        "-v",
        help="Show debug output and error details",
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        help="Path to configuration file",
    ),
    version: bool = typer.Option(  # noqa: B008
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Push a branch or tag and publish the package to npm and JSR.

    Missing prerequisites (git repository, remote, commit, JSR manifest)
    are fixed interactively along the way.

    Examples:
        publishflow                     # choose everything interactively
        publishflow --tag v1.2.0        # push an existing tag
        publishflow -c v1.3.0 --registry jsr
        publishflow --branch main --skip-registries --dry-run
    """
    if ctx.invoked_subcommand is not None:
        return

    project_root = Path.cwd()
    cfg = load_or_exit(config, project_root)

    built = build_options(
        branch=branch,
        tag=tag,
        create_tag=create_tag,
        remote=remote or cfg.git.remote,
        skip_registries=skip_registries,
        registries=tuple(registry or ()),
        force=force,
        dry_run=dry_run,
        verbose=verbose,
    )
    if isinstance(built, Err):
        report_error(built.error, verbose)
        raise typer.Exit(code=1)
    options = built.value

    exec_ctx = ExecutionContext.create(project_root, cfg, verbose=verbose, console=console)
    result = execute_publish(exec_ctx, options)
    if isinstance(result, Err):
        report_error(result.error, verbose)
        raise typer.Exit(code=result.error.exit_code)

    report = result.value
    if report.outcome is Outcome.COMPLETED and report.failed_registries:
        names = ", ".join(k.display_name for k in report.failed_registries)
        console.print(f"[yellow]Published with registry failures: {names}[/yellow]")


@app.command()
def check(
    remote: str | None = typer.Option(  # noqa: B008
        None,
        "--remote",
        "-r",
        help="Remote to check",
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        help="Path to configuration file",
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False,
        "--verbose",
        "-v",
        help="Show debug output",
    ),
) -> None:
    """Report publish readiness without prompting or changing anything.

    Checks git, the repository, the remote, push access and the
    detected registries. Exits 1 when a required check fails.
    """
    project_root = Path.cwd()
    cfg = load_or_exit(config, project_root)
    exec_ctx = ExecutionContext.create(project_root, cfg, verbose=verbose, console=console)

    report = run_check(exec_ctx, remote or cfg.git.remote)
    console.print(render_check(report))

    if not report.ok:
        console.print("\n[red]Not ready to publish. Fix the failed checks above.[/red]")
        raise typer.Exit(code=1)
    console.print("\n[green]Ready to publish[/green]")


@app.command()
def init(
    remote: str | None = typer.Option(  # noqa: B008
        None,
        "--remote",
        "-r",
        help="Remote to create if missing",
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        help="Path to configuration file",
    ),
    write_config: bool = typer.Option(  # noqa: B008
        False,
        "--write-config",
        help="Also write a default publishflow.yml (never overwrites)",
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False,
        "--verbose",
        "-v",
        help="Show debug output and error details",
    ),
) -> None:
    """Prepare the project for publishing without publishing anything.

    Offers to initialize git, create the remote, commit pending changes
    and fix the JSR manifest.
    """
    project_root = Path.cwd()
    cfg = load_or_exit(config, project_root)
    exec_ctx = ExecutionContext.create(project_root, cfg, verbose=verbose, console=console)

    result = run_init(exec_ctx, remote or cfg.git.remote)
    if isinstance(result, Err):
        report_error(result.error, verbose)
        raise typer.Exit(code=result.error.exit_code)

    if write_config:
        path = write_default_config(project_root)
        console.print(f"[green]Configuration:[/green] {path.name}")


if __name__ == "__main__":
    app()
