"""Shared pytest fixtures for the modgen test suite.

Provides reusable fixtures for:
- A temporary target project with router/store marker files and a manifest
- Pre-derived naming forms
- A generator wired to the temporary project
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from modgen.config import GeneratorConfig
from modgen.generator import ModuleGenerator
from modgen.injector import MODEL_SENTINEL, ROUTE_SENTINEL
from modgen.naming import NamingForms, derive_forms


# ---------------------------------------------------------------------------
# Target project contents
# ---------------------------------------------------------------------------

ROUTER_SOURCE = textwrap.dedent(
    f"""\
    \"\"\"Application router.\"\"\"

    from fastapi import APIRouter

    from sample_shop.handlers.auth import router as auth_router


    def build_router() -> APIRouter:
        router = APIRouter(prefix="/api/v1")
        router.include_router(auth_router, prefix="/auth", tags=["Auth"])

        {ROUTE_SENTINEL}
        return router
    """
)

STORE_SOURCE = textwrap.dedent(
    f"""\
    \"\"\"Database wiring.\"\"\"

    MODELS: list[str] = [
        "sample_shop.models.user:User",
        {MODEL_SENTINEL}
    ]
    """
)

MANIFEST_SOURCE = textwrap.dedent(
    """\
    [project]
    name = "sample-shop"
    version = "0.1.0"
    """
)


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """Temporary target project with both marker files and a pyproject.toml."""
    root = tmp_path / "sample-shop"
    (root / "app" / "handlers").mkdir(parents=True)
    (root / "app" / "store").mkdir(parents=True)
    (root / "app" / "handlers" / "router.py").write_text(ROUTER_SOURCE, encoding="utf-8")
    (root / "app" / "store" / "store.py").write_text(STORE_SOURCE, encoding="utf-8")
    (root / "pyproject.toml").write_text(MANIFEST_SOURCE, encoding="utf-8")
    yield root


@pytest.fixture
def router_file(sample_project: Path) -> Path:
    return sample_project / "app" / "handlers" / "router.py"


@pytest.fixture
def store_file(sample_project: Path) -> Path:
    return sample_project / "app" / "store" / "store.py"


# ---------------------------------------------------------------------------
# Generator objects
# ---------------------------------------------------------------------------


@pytest.fixture
def payment_forms() -> NamingForms:
    """Naming forms for the ``payment`` module in the sample project."""
    return derive_forms("payment", "", "sample_shop")


@pytest.fixture
def project_config(sample_project: Path) -> GeneratorConfig:
    return GeneratorConfig(project_root=sample_project)


@pytest.fixture
def generator(project_config: GeneratorConfig) -> ModuleGenerator:
    return ModuleGenerator(project_config)


@pytest.fixture
def snapshot():
    """Return a helper mapping every file under a directory to its bytes."""

    def _snapshot(root: Path) -> dict[str, bytes]:
        return {
            str(p.relative_to(root)): p.read_bytes()
            for p in sorted(root.rglob("*"))
            if p.is_file()
        }

    return _snapshot
