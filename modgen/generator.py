"""Main scaffolding orchestrator.

Takes a raw module name and drives the generation steps for it:

1. Derive the ``NamingForms`` record once.
2. Render and emit the handler, service, model, and repository files, stopping
   at the first ``TemplateError`` or ``ConflictError``.  Files written by
   earlier steps stay on disk and are listed in the report.
3. Register the module: inject snippets into the router and store files (a
   missing marker is a warning, and the other target is still attempted), or
   emit a registry entry when registry mode is on.

Staged mode renders everything and checks every precondition in memory before
writing anything, so a failure leaves the project untouched.  Runs are not
safe to execute concurrently against the same project.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from .config import GeneratorConfig
from .emitter import ARTIFACTS, FileEmitter, TemplateSpec
from .errors import (
    ConflictError,
    MarkerNotFoundError,
    ScaffoldError,
    TemplateError,
    WriteError,
)
from .injector import InjectionTarget, MarkerInjector, default_targets
from .naming import NamingForms, derive_forms, pluralize
from .registry import entry_filename, render_entry
from .report import GenerationReport, StepResult, StepStatus
from .templates import TemplateRenderer


class ModuleGenerator:
    """Generates one CRUD module into an existing project.

    Attributes:
        config: Generator configuration (project root, directories, targets).
        renderer: Jinja2 renderer for the artifact templates.
        emitter: Create-only file writer rooted at the project root.
        injector: Marker injector rooted at the project root.
    """

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        *,
        import_path: str | None = None,
        pluralizer: Callable[[str], str] = pluralize,
        renderer: TemplateRenderer | None = None,
        artifacts: tuple[TemplateSpec, ...] = ARTIFACTS,
        targets: tuple[InjectionTarget, ...] | None = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.import_path = import_path
        self.pluralizer = pluralizer
        self.renderer = renderer or TemplateRenderer(override_dir=self.config.template_dir)
        self.artifacts = artifacts
        self.targets = targets or default_targets(self.config.router_file, self.config.store_file)
        self.emitter = FileEmitter(self.config.project_root)
        self.injector = MarkerInjector(self.config.project_root)

    # -- Public API --------------------------------------------------------

    def build_forms(self, raw: str, display_name: str = "") -> NamingForms:
        """Derive the naming forms, detecting the import path if none was given.

        Raises:
            ValidationError: *raw* is empty or not a usable identifier.
        """
        import_path = self.import_path or self.config.detect_import_path()
        return derive_forms(raw, display_name, import_path, self.pluralizer)

    def generate(
        self,
        raw: str,
        display_name: str = "",
        *,
        staged: bool = False,
        dry_run: bool = False,
        use_registry: bool = False,
    ) -> GenerationReport:
        """Generate a module and report every step.

        Args:
            raw: Module identifier (snake, kebab, camel, or Pascal).
            display_name: Human label; defaults to *raw*.
            staged: Check all preconditions before writing anything.
            dry_run: Like *staged*, but never write.
            use_registry: Emit a registry entry instead of injecting snippets.

        Raises:
            ValidationError: *raw* is empty or invalid.  Nothing is written.
        """
        forms = self.build_forms(raw, display_name)
        mode = "dry-run" if dry_run else ("staged" if staged else "sequential")
        report = GenerationReport(module=forms.snake, forms=forms, mode=mode)
        if dry_run or staged:
            self._generate_staged(forms, report, use_registry, write=not dry_run)
        else:
            self._generate_sequential(forms, report, use_registry)
        return report

    # -- Sequential mode ---------------------------------------------------

    def _generate_sequential(
        self, forms: NamingForms, report: GenerationReport, use_registry: bool
    ) -> None:
        aborted = False
        for spec in self.artifacts:
            rel = spec.output_path(forms, self.config.output_dirs())
            shown = str(self.emitter.resolve(rel))
            if aborted:
                report.add(StepResult(name=spec.kind, phase="emit", status="skipped", path=shown))
                continue
            try:
                content = self.renderer.render(spec.template, forms)
                path = self.emitter.emit(rel, content)
            except (TemplateError, ConflictError, WriteError) as exc:
                report.add(StepResult.from_error(spec.kind, "emit", exc, shown))
                aborted = True
                continue
            report.add(StepResult(name=spec.kind, phase="emit", path=str(path)))

        if use_registry:
            self._emit_registry_entry(forms, report, skip=aborted)
            return

        for target in self.targets:
            path = self.injector.resolve(target)
            if aborted:
                report.add(StepResult(name=target.name, phase="inject", status="skipped", path=str(path)))
                continue
            try:
                self.injector.inject(target, forms)
            except (MarkerNotFoundError, TemplateError, WriteError) as exc:
                report.add(StepResult.from_error(target.name, "inject", exc, str(path), status="warning"))
                continue
            report.add(StepResult(name=target.name, phase="inject", path=str(path)))

    def _emit_registry_entry(
        self, forms: NamingForms, report: GenerationReport, *, skip: bool
    ) -> None:
        rel = Path(self.config.registry_dir) / entry_filename(forms)
        shown = str(self.emitter.resolve(rel))
        if skip:
            report.add(StepResult(name="registry", phase="registry", status="skipped", path=shown))
            return
        try:
            path = self.emitter.emit(rel, render_entry(forms))
        except (ConflictError, WriteError) as exc:
            report.add(StepResult.from_error("registry", "registry", exc, shown))
            return
        report.add(StepResult(name="registry", phase="registry", path=str(path)))

    # -- Staged mode -------------------------------------------------------

    def _generate_staged(
        self,
        forms: NamingForms,
        report: GenerationReport,
        use_registry: bool,
        *,
        write: bool,
    ) -> None:
        """Render and validate everything first, then write only if all checks pass.

        Every precondition (template renders, no output conflicts, every
        sentinel present) is fatal here, so a failed preflight leaves the
        project exactly as it was.
        """
        files: list[tuple[StepResult, Path, str]] = []
        edits: dict[Path, tuple[list[StepResult], str]] = {}

        for spec in self.artifacts:
            rel = spec.output_path(forms, self.config.output_dirs())
            step = report.add(
                StepResult(name=spec.kind, phase="emit", path=str(self.emitter.resolve(rel)))
            )
            try:
                content = self.renderer.render(spec.template, forms)
                self.emitter.check(rel)
            except (TemplateError, ConflictError, WriteError) as exc:
                _mark_failed(step, exc)
                continue
            files.append((step, rel, content))

        if use_registry:
            rel = Path(self.config.registry_dir) / entry_filename(forms)
            step = report.add(
                StepResult(name="registry", phase="registry", path=str(self.emitter.resolve(rel)))
            )
            try:
                self.emitter.check(rel)
            except (ConflictError, WriteError) as exc:
                _mark_failed(step, exc)
            else:
                files.append((step, rel, render_entry(forms)))
        else:
            for target in self.targets:
                path = self.injector.resolve(target)
                step = report.add(StepResult(name=target.name, phase="inject", path=str(path)))
                steps, pending = edits.get(path, ([], None))
                try:
                    _, new_content = self.injector.prepare(target, forms, pending)
                except (MarkerNotFoundError, TemplateError) as exc:
                    _mark_failed(step, exc)
                    continue
                edits[path] = (steps + [step], new_content)

        if not report.success:
            _mark_pending(report.steps, "skipped")
            return
        if not write:
            _mark_pending(report.steps, "planned")
            return

        pending_steps = [step for step, _, _ in files]
        for steps, _ in edits.values():
            pending_steps.extend(steps)

        for step, rel, content in files:
            try:
                self.emitter.emit(rel, content)
            except (ConflictError, WriteError) as exc:
                # A conflict here means the file appeared after the preflight.
                _abort_commit(step, exc, pending_steps)
                return
            pending_steps.remove(step)
        for path, (steps, content) in edits.items():
            try:
                self.injector.write(path, content)
            except WriteError as exc:
                _abort_commit(steps[0], exc, pending_steps)
                return
            for step in steps:
                pending_steps.remove(step)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _mark_failed(step: StepResult, exc: ScaffoldError) -> None:
    step.status = "failed"
    step.error_kind = exc.kind
    step.message = str(exc)


def _abort_commit(step: StepResult, exc: ScaffoldError, pending: list[StepResult]) -> None:
    """Fail *step* and skip every step whose write has not happened yet."""
    _mark_failed(step, exc)
    _mark_pending(pending, "skipped")


def _mark_pending(steps: list[StepResult], status: StepStatus) -> None:
    for step in steps:
        if step.status == "ok":
            step.status = status


def summarize(report: GenerationReport) -> str:
    """One-line outcome of *report* for the CLI footer."""
    if report.mode == "dry-run" and report.success:
        return f"dry run: {len(report.steps)} steps planned for module {report.module}"
    failure = report.failure
    if failure is not None:
        return f"module {report.module} failed at step {failure.name} ({failure.error_kind})"
    if report.warnings:
        return f"module {report.module} generated with {len(report.warnings)} warning(s)"
    return f"module {report.module} generated successfully"
