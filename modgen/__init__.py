"""modgen -- CRUD module scaffolding for layered FastAPI projects.

Given a module name, ``ModuleGenerator`` renders a handler, service, model,
and repository from Jinja2 templates and registers the new module in the
project's router and store files at their ``GEN:`` marker comments.

Quick usage::

    from modgen import GeneratorConfig, ModuleGenerator

    generator = ModuleGenerator(GeneratorConfig(project_root="./my-api"))
    report = generator.generate("order-item", "Order item")
    assert report.success
"""

from modgen.config import GeneratorConfig
from modgen.emitter import ARTIFACTS, FileEmitter, TemplateSpec
from modgen.errors import (
    ConflictError,
    MarkerNotFoundError,
    ScaffoldError,
    TemplateError,
    ValidationError,
    WriteError,
)
from modgen.generator import ModuleGenerator
from modgen.injector import InjectionTarget, MarkerInjector, default_targets
from modgen.naming import NamingForms, derive_forms, pluralize
from modgen.registry import RegistryEntry, load_registry
from modgen.report import GenerationReport, StepResult
from modgen.templates import TemplateRenderer

__all__ = [
    "ARTIFACTS",
    "ConflictError",
    "FileEmitter",
    "GenerationReport",
    "GeneratorConfig",
    "InjectionTarget",
    "MarkerInjector",
    "MarkerNotFoundError",
    "ModuleGenerator",
    "NamingForms",
    "RegistryEntry",
    "ScaffoldError",
    "StepResult",
    "TemplateError",
    "TemplateRenderer",
    "TemplateSpec",
    "ValidationError",
    "WriteError",
    "default_targets",
    "derive_forms",
    "load_registry",
    "pluralize",
]
