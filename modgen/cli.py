"""Command-line entry point.

Usage::

    modgen order --display-name "Order"
    modgen order-item --root ./my-api --atomic
    python -m modgen payment --dry-run

Exit status is non-zero when the module name is invalid or any template or
emit step fails.  Injection warnings (a missing marker) are printed as
advisories and do not change the exit status.
"""

from __future__ import annotations

import sys
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from .config import GeneratorConfig
from .errors import ValidationError
from .generator import ModuleGenerator, summarize
from .naming import NamingForms
from .report import GenerationReport
from .utils import (
    console,
    print_error,
    print_report,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        prog="modgen",
        description="Generate a CRUD module (handler, service, model, repository) and register it",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  modgen order --display-name Order\n"
            "  modgen order-item --root ./my-api --atomic\n"
            "  modgen payment --registry\n"
        ),
    )
    parser.add_argument("name", help="Module name (snake_case, kebab-case, camelCase or PascalCase)")
    parser.add_argument(
        "--display-name", "-d",
        default="",
        help="Human display label (default: the module name)",
    )
    parser.add_argument(
        "--import-path", "-m",
        default=None,
        help="Root package of the project (auto-detected from pyproject.toml if omitted)",
    )
    parser.add_argument(
        "--root", "-r",
        default=None,
        help="Project root directory (default: current directory)",
    )
    parser.add_argument(
        "--templates",
        default=None,
        help="Directory with templates overriding the built-in ones",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="JSON configuration file (see GeneratorConfig)",
    )
    parser.add_argument(
        "--atomic",
        action="store_true",
        help="Check every precondition before writing; write nothing on failure",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be generated without writing anything",
    )
    parser.add_argument(
        "--registry",
        action="store_true",
        help="Write a registry entry instead of editing the router and store files",
    )
    return parser


def load_config(args) -> GeneratorConfig:
    """Build the configuration from a config file or the environment, then apply flags."""
    overrides = {"project_root": args.root, "template_dir": args.templates}
    if args.config:
        config = GeneratorConfig.load(Path(args.config))
        updates = {k: v for k, v in overrides.items() if v is not None}
        return config.model_copy(update={k: Path(v) for k, v in updates.items()})
    return GeneratorConfig.from_env(**overrides)


def next_steps(forms: NamingForms, config: GeneratorConfig) -> list[str]:
    return [
        f"edit {config.model_dir}/{forms.snake}.py: add model fields",
        f"edit {config.service_dir}/{forms.snake}_service.py: implement business logic",
        "run the test suite and regenerate the OpenAPI docs",
    ]


def print_outcome(report: GenerationReport, config: GeneratorConfig) -> None:
    print_report(report)
    for step in report.warnings:
        print_warning(f"  ! {step.name}: {step.message} (register manually)")

    if not report.success:
        failure = report.failure
        if failure is not None:
            print_error(failure.message)
        if report.created_files and report.mode == "sequential":
            print_warning("Files created before the failure were kept:")
            for path in report.created_files:
                print_warning(f"  {path}")
        print_error(summarize(report))
        return

    print_success(summarize(report))
    if report.mode != "dry-run" and report.forms is not None:
        console.print("\nNext steps:")
        for index, step in enumerate(next_steps(report.forms, config), start=1):
            console.print(f"  {index}. {step}")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``modgen`` and ``python -m modgen``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.name.strip():
        print_error("Error: module name is required")
        parser.print_usage(sys.stderr)
        return 1

    try:
        config = load_config(args)
    except (OSError, PydanticValidationError) as exc:
        print_error(f"Error: invalid configuration: {exc}")
        return 1
    generator = ModuleGenerator(config, import_path=args.import_path)

    try:
        forms = generator.build_forms(args.name, args.display_name)
    except ValidationError as exc:
        print_error(f"Error: {exc}")
        return 1

    print_summary_table(
        {
            "Module": forms.pascal,
            "Display name": forms.display_name,
            "Snake / plural": f"{forms.snake} / {forms.plural}",
            "Import path": forms.import_path,
            "Project root": str(config.project_root),
        },
        title="Generating module",
    )

    report = generator.generate(
        args.name,
        args.display_name,
        staged=args.atomic,
        dry_run=args.dry_run,
        use_registry=args.registry,
    )
    print_outcome(report, config)
    return 0 if report.success else 1


if __name__ == "__main__":
    sys.exit(main())
