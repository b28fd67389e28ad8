"""Publish workflow orchestration.

Coordinates the complete publish process:
1. Verify git and the repository (offer git init)
2. Verify the remote (offer to create one)
3. Verify push permission
4. Reconcile uncommitted changes (offer a commit)
5. Resolve the branch or tag to publish
6. Detect package registries
7. Select registries
8. Validate the JSR manifest and token
9. Confirm
10. Push, then publish to each selected registry

Every step returns a Result. A failed step stops the pipeline except for
the declines listed in each step, which are downgraded to warnings.
"""

from dataclasses import dataclass, field
from enum import Enum

from rich.panel import Panel
from rich.table import Table

from publishflow.auth import get_token_from_env, verify_auth
from publishflow.context import ExecutionContext
from publishflow.exceptions import ErrorCode, PublishError
from publishflow.logger import Logger
from publishflow.manifest import find_manifest, validate_manifest
from publishflow.options import PublishOptions
from publishflow.registries import PublishOutcome, PublishStatus, RegistryDescriptor, RegistryKind
from publishflow.remediation import (
    auto_commit,
    auto_create_remote,
    auto_fix_manifest,
    auto_initialize,
    mask_token,
    needs_git_init,
    verify_registry_token,
)
from publishflow.remote import RemoteDescriptor, get_remote
from publishflow.resolver import ResolvedRef, resolve_ref
from publishflow.result import Err, Ok, Result, fail
from publishflow.selection import detect_registries, select_registries

GIT_DOWNLOAD_URL = "https://git-scm.com/downloads"


class Outcome(Enum):
    """How a successful run ended."""

    COMPLETED = "completed"
    DECLINED = "declined"
    DRY_RUN = "dry_run"


@dataclass
class PublishReport:
    """Summary of a finished (non-failed) publish run."""

    outcome: Outcome
    ref: ResolvedRef | None = None
    remote: str | None = None
    selected: list[RegistryKind] = field(default_factory=list)
    results: list[PublishOutcome] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def failed_registries(self) -> list[RegistryKind]:
        return [r.kind for r in self.results if r.status is PublishStatus.FAILED]


@dataclass
class PublishWorkflow:
    """Runs the publish pipeline for one invocation."""

    ctx: ExecutionContext
    options: PublishOptions

    # State tracking
    remote: RemoteDescriptor | None = None
    ref: ResolvedRef | None = None
    detected: list[RegistryDescriptor] = field(default_factory=list)
    selected: list[RegistryKind] = field(default_factory=list)
    skipped: list[PublishOutcome] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def logger(self) -> Logger:
        return self.ctx.logger

    @property
    def remote_name(self) -> str:
        return self.remote.name if self.remote else self.options.remote

    def warn(self, message: str) -> None:
        self.logger.warn(message)
        self.warnings.append(message)

    def run(self) -> Result[PublishReport]:
        """Execute the complete publish workflow."""
        steps = [
            ("Checking Git setup", self.verify_repository),
            ("Checking remote repository", self.verify_remote),
            ("Verifying authentication", self.verify_authentication),
            ("Checking working tree", self.reconcile_changes),
            ("Determining what to publish", self.resolve_target),
            ("Detecting package registries", self.detect),
            ("Selecting registries", self.select),
            ("Validating JSR configuration", self.prepare_jsr),
        ]

        try:
            for title, step in steps:
                self.logger.section(title)
                result = step()
                if isinstance(result, Err):
                    return result

            confirmed = self.confirm()
            if isinstance(confirmed, Err):
                return confirmed
            if not confirmed.value:
                self.logger.warn("Publish cancelled by user")
                return Ok(self.report(Outcome.DECLINED))

            return self.execute()
        except PublishError as e:
            return Err(e)

    def report(self, outcome: Outcome, results: list[PublishOutcome] | None = None) -> PublishReport:
        return PublishReport(
            outcome=outcome,
            ref=self.ref,
            remote=self.remote_name,
            selected=list(self.selected),
            results=self.skipped + (results or []),
            warnings=list(self.warnings),
        )

    def verify_repository(self) -> Result[None]:
        """Fail without git; offer to initialize a repository.

        Declining initialization is fatal.
        """
        if not self.ctx.git.is_installed():
            self.logger.error("Git is not installed or not available in PATH")
            self.logger.info(f"Please install Git: {GIT_DOWNLOAD_URL}")
            return fail(
                "Git not installed",
                ErrorCode.GIT_NOT_INSTALLED,
                fix_hint=f"Install Git from {GIT_DOWNLOAD_URL}",
            )
        self.logger.success("Git is installed")

        if needs_git_init(self.ctx):
            return auto_initialize(self.ctx)

        self.logger.success("Git repository detected")
        return Ok(None)

    def verify_remote(self) -> Result[None]:
        """Make sure the remote exists, offering to create it.

        Any failure, including a decline, is fatal.
        """
        name = self.options.remote
        created = auto_create_remote(self.ctx, name)
        if isinstance(created, Err):
            return created

        remote = get_remote(self.ctx, name)
        if isinstance(remote, Err):
            return remote

        self.remote = remote.value
        self.logger.success(f"Remote: {self.remote.name} ({self.remote.platform.display_name})")
        self.logger.debug(f"URL: {self.remote.url}")
        return Ok(None)

    def verify_authentication(self) -> Result[None]:
        if self.remote is None:
            return fail(
                f"Remote '{self.options.remote}' not verified", ErrorCode.REMOTE_NOT_FOUND
            )
        status = self.ctx.git.status()
        branch = status.value.current_branch if isinstance(status, Ok) else None

        verified = verify_auth(self.ctx, self.remote, branch)
        if isinstance(verified, Err):
            return verified
        self.logger.success("Authentication verified")
        return Ok(None)

    def reconcile_changes(self) -> Result[None]:
        """Offer to commit pending changes.

        Declining is allowed: publishing continues with the dirty tree.
        """
        committed = auto_commit(self.ctx)
        if isinstance(committed, Err):
            if committed.code is ErrorCode.COMMIT_DECLINED:
                self.warn("Proceeding with uncommitted changes")
                return Ok(None)
            return committed
        if committed.value is None:
            self.logger.success("Working tree clean")
        return Ok(None)

    def resolve_target(self) -> Result[None]:
        resolved = resolve_ref(self.ctx, self.options)
        if isinstance(resolved, Err):
            return resolved
        self.ref = resolved.value
        self.logger.success(f"Publishing: {self.ref.name}")
        return Ok(None)

    def detect(self) -> Result[None]:
        """Detect eligible registries; informational and never fails."""
        self.detected = detect_registries(self.ctx)
        if not self.detected:
            self.logger.info("No package registries detected (npm/jsr)")
        for descriptor in self.detected:
            self.logger.info(
                f"Found {descriptor.kind.display_name}: {descriptor.name}@{descriptor.version}"
            )
        return Ok(None)

    def select(self) -> Result[None]:
        if self.options.skip_registries:
            self.logger.info("Skipping registry publishing")
            self.selected = []
            return Ok(None)
        if not self.detected:
            self.selected = []
            return Ok(None)

        chosen = select_registries(self.ctx, self.detected, self.options)
        if isinstance(chosen, Err):
            return chosen
        self.selected = chosen.value
        if not self.selected:
            self.logger.info("No registries selected")
        return Ok(None)

    def prepare_jsr(self) -> Result[None]:
        """Validate the JSR manifest and token when JSR is selected.

        A declined auto-fix or a token that is still missing after the
        guided setup drops JSR from the selection instead of failing.
        """
        if RegistryKind.JSR not in self.selected:
            self.logger.debug("JSR not selected")
            return Ok(None)

        validated = validate_manifest(self.ctx.project_root)
        if isinstance(validated, Err):
            return validated

        validation = validated.value
        if validation.is_valid:
            self.logger.success("JSR configuration is valid")
        else:
            self.logger.warn("JSR configuration has issues")
            fixed = auto_fix_manifest(self.ctx, validation)
            if isinstance(fixed, Err):
                if fixed.code is not ErrorCode.MANIFEST_AUTO_FIX_DECLINED:
                    return fixed
                self.drop_jsr("Publishing to JSR skipped")
                return Ok(None)
            self.logger.success("JSR configuration fixed")

        token = verify_registry_token(self.ctx)
        if isinstance(token, Err):
            if token.code is ErrorCode.PROMPT_CANCELLED:
                return token
            self.drop_jsr("JSR authentication not configured, skipping JSR publishing")
        return Ok(None)

    def drop_jsr(self, reason: str) -> None:
        self.warn(reason)
        self.selected.remove(RegistryKind.JSR)
        self.skipped.append(PublishOutcome.skipped(RegistryKind.JSR, reason))

    def summary_lines(self, ref: ResolvedRef) -> list[str]:
        lines = [f"Git: {ref.name} → {self.remote_name}"]
        if self.selected:
            lines.append("Registries: " + ", ".join(k.display_name for k in self.selected))
        return lines

    def confirm(self) -> Result[bool]:
        """Ask for final confirmation; skipped on dry runs."""
        if self.options.dry_run:
            return Ok(True)
        if self.ref is None:
            return fail("Nothing resolved to publish", ErrorCode.PUBLISH_FAILED)

        self.logger.console.print(
            Panel("\n".join(self.summary_lines(self.ref)), title="Ready to publish", expand=False)
        )
        try:
            return Ok(self.ctx.prompter.confirm("Proceed with publish?"))
        except PublishError as e:
            return Err(e)

    def execute(self) -> Result[PublishReport]:
        """Push the ref, then publish to every selected registry.

        A push failure is fatal. Registry failures are reported and the
        loop carries on with the next registry.
        """
        if self.ref is None:
            return fail("Nothing resolved to publish", ErrorCode.PUBLISH_FAILED)
        remote = self.remote_name

        if self.options.dry_run:
            lines = [f"Would push: {self.ref.name} → {remote}"]
            if self.selected:
                lines.append(
                    "Would publish to: " + ", ".join(k.display_name for k in self.selected)
                )
            self.logger.console.print(
                Panel("\n".join(lines), title="Dry run - no changes will be made", expand=False)
            )
            return Ok(self.report(Outcome.DRY_RUN))

        self.logger.section("Publishing")
        pushed = self.ctx.git.push(self.ref.name, remote, force=self.options.force)
        if isinstance(pushed, Err):
            return pushed
        self.logger.success(f"Pushed {self.ref.name} to {remote}")

        results = []
        for kind in self.selected:
            self.logger.info(f"Publishing to {kind.display_name}...")
            published = self.ctx.registries.publish(kind, self.ctx)
            if isinstance(published, Err):
                error = published.error
                self.logger.error(f"Failed to publish to {kind.display_name}: {error.message}")
                if error.fix_hint:
                    self.logger.info(error.fix_hint)
                results.append(PublishOutcome.failed(kind, error))
            else:
                self.logger.success(published.value)
                results.append(PublishOutcome.success(kind, published.value))

        report = self.report(Outcome.COMPLETED, results)
        if report.results:
            self.logger.console.print(render_results(report))
        self.logger.section("Publish complete")
        return Ok(report)


def render_results(report: PublishReport) -> Table:
    """Per-registry outcome table."""
    table = Table(title="Registry results")
    table.add_column("Registry", style="cyan")
    table.add_column("Status")
    table.add_column("Details")
    styles = {
        PublishStatus.SUCCESS: "[green]success[/green]",
        PublishStatus.FAILED: "[red]failed[/red]",
        PublishStatus.SKIPPED: "[yellow]skipped[/yellow]",
    }
    for result in report.results:
        table.add_row(result.kind.display_name, styles[result.status], result.message)
    return table


def execute_publish(ctx: ExecutionContext, options: PublishOptions) -> Result[PublishReport]:
    """Run the publish pipeline."""
    return PublishWorkflow(ctx=ctx, options=options).run()


@dataclass
class CheckItem:
    """One line of the read-only status report."""

    name: str
    ok: bool
    detail: str
    required: bool = True


@dataclass
class CheckReport:
    items: list[CheckItem] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(item.ok for item in self.items if item.required)

    def add(self, name: str, ok: bool, detail: str, required: bool = True) -> None:
        self.items.append(CheckItem(name=name, ok=ok, detail=detail, required=required))


def run_check(ctx: ExecutionContext, remote_name: str = "origin") -> CheckReport:
    """Inspect publish readiness without prompting or changing anything."""
    report = CheckReport()

    installed = ctx.git.is_installed()
    report.add("Git installed", installed, "git found" if installed else "git not found in PATH")
    if not installed:
        return report

    is_repo = ctx.git.is_repository()
    report.add("Repository", is_repo, str(ctx.project_root) if is_repo else "not a Git repository")

    if is_repo:
        remote = get_remote(ctx, remote_name)
        if isinstance(remote, Ok):
            descriptor = remote.value
            report.add(
                f"Remote '{remote_name}'",
                True,
                f"{descriptor.url} ({descriptor.platform.display_name})",
            )
            status = ctx.git.status()
            branch = status.value.current_branch if isinstance(status, Ok) else None
            can_push = ctx.git.can_push(descriptor.name, branch)
            report.add(
                "Push access",
                can_push,
                f"{descriptor.auth_scheme.value} access verified"
                if can_push
                else "push dry-run failed",
            )
            token = get_token_from_env(descriptor.platform, ctx.env)
            report.add(
                "Hosting token",
                True,
                "set" if token else "not set (only needed for HTTPS remotes)",
                required=False,
            )
        else:
            report.add(f"Remote '{remote_name}'", False, remote.error.message)

        changes = ctx.git.changes()
        if isinstance(changes, Ok):
            pending = changes.value.total
            report.add(
                "Working tree",
                True,
                "clean" if pending == 0 else f"{pending} file(s) with changes",
                required=False,
            )

    available = ctx.hosting.probe()
    report.add(
        "Hosting CLIs",
        True,
        ", ".join(sorted(p.value for p in available)) or "none (gh or glab)",
        required=False,
    )

    detected = detect_registries(ctx)
    if not detected:
        report.add("Registries", True, "none detected (npm/jsr)", required=False)
    for descriptor in detected:
        report.add(
            descriptor.kind.display_name,
            True,
            f"{descriptor.name}@{descriptor.version}",
            required=False,
        )

    if any(d.kind is RegistryKind.JSR for d in detected):
        validated = validate_manifest(ctx.project_root)
        if isinstance(validated, Ok):
            validation = validated.value
            report.add(
                "JSR manifest",
                validation.is_valid,
                "valid" if validation.is_valid else "; ".join(validation.issues),
                required=False,
            )
        token = ctx.env_value(ctx.config.jsr.token_env)
        report.add(
            "JSR token",
            token is not None,
            mask_token(token) if token else f"{ctx.config.jsr.token_env} not set",
            required=False,
        )

    return report


def render_check(report: CheckReport) -> Table:
    table = Table(title="Publish readiness")
    table.add_column("Check", style="cyan")
    table.add_column("Status")
    table.add_column("Details")
    for item in report.items:
        if item.ok:
            status = "[green]ok[/green]"
        elif item.required:
            status = "[red]failed[/red]"
        else:
            status = "[yellow]warning[/yellow]"
        table.add_row(item.name, status, item.detail)
    return table


def run_init(ctx: ExecutionContext, remote_name: str = "origin") -> Result[list[str]]:
    """Run the remediation flows up front, without publishing.

    Returns the warnings for declined optional steps.
    """
    warnings: list[str] = []
    try:
        ctx.logger.section("Checking Git setup")
        if not ctx.git.is_installed():
            return fail(
                "Git not installed",
                ErrorCode.GIT_NOT_INSTALLED,
                fix_hint=f"Install Git from {GIT_DOWNLOAD_URL}",
            )
        initialized = auto_initialize(ctx)
        if isinstance(initialized, Err):
            return initialized
        ctx.logger.success("Git repository ready")

        ctx.logger.section("Checking remote repository")
        remote = auto_create_remote(ctx, remote_name)
        if isinstance(remote, Err):
            return remote
        ctx.logger.success(f"Remote '{remote_name}': {remote.value}")

        ctx.logger.section("Checking working tree")
        committed = auto_commit(ctx)
        if isinstance(committed, Err):
            if committed.code is not ErrorCode.COMMIT_DECLINED:
                return committed
            warnings.append("Uncommitted changes left in place")
            ctx.logger.warn(warnings[-1])

        if find_manifest(ctx.project_root) is not None:
            ctx.logger.section("Validating JSR configuration")
            validated = validate_manifest(ctx.project_root)
            if isinstance(validated, Err):
                return validated
            if validated.value.is_valid:
                ctx.logger.success("JSR configuration is valid")
            else:
                fixed = auto_fix_manifest(ctx, validated.value)
                if isinstance(fixed, Err):
                    if fixed.code is not ErrorCode.MANIFEST_AUTO_FIX_DECLINED:
                        return fixed
                    warnings.append("JSR manifest left unchanged")
                    ctx.logger.warn(warnings[-1])
    except PublishError as e:
        return Err(e)

    ctx.logger.section("Project ready to publish")
    return Ok(warnings)
