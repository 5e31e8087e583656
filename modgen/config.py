"""modgen configuration.

Typed settings for the generator: where the target project lives, where each
artifact kind is written, and which files carry the registration markers.
All settings use Pydantic v2 models so they validate at construction time and
serialise to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .naming import DEFAULT_IMPORT_PATH


class GeneratorConfig(BaseModel):
    """Global generator configuration.

    Directory and file settings are relative to ``project_root``.  Instances
    are typically created once by the CLI entry point and handed to
    ``ModuleGenerator``.
    """

    project_root: Path = Field(default=Path("."))
    handler_dir: str = Field(default="app/handlers")
    service_dir: str = Field(default="app/services")
    model_dir: str = Field(default="app/models")
    repository_dir: str = Field(default="app/store")
    registry_dir: str = Field(default="app/registry")
    router_file: str = Field(default="app/handlers/router.py")
    store_file: str = Field(default="app/store/store.py")
    manifest_file: str = Field(default="pyproject.toml")
    default_import_path: str = Field(default=DEFAULT_IMPORT_PATH)
    template_dir: Optional[Path] = Field(
        default=None, description="Directory whose templates override the built-in ones"
    )

    @field_validator("default_import_path")
    @classmethod
    def _check_import_path(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("default_import_path must not be empty")
        return value.strip()

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def manifest_path(self) -> Path:
        """Path of the project manifest used for import-path detection."""
        return self.project_root / self.manifest_file

    def output_dirs(self) -> dict[str, str]:
        """Return the ``{placeholder: directory}`` mapping used in output patterns."""
        return {
            "handler_dir": self.handler_dir,
            "service_dir": self.service_dir,
            "model_dir": self.model_dir,
            "repository_dir": self.repository_dir,
            "registry_dir": self.registry_dir,
        }

    # ------------------------------------------------------------------
    # Import-path detection
    # ------------------------------------------------------------------

    def detect_import_path(self) -> str:
        """Read the project's import path from its manifest.

        Uses ``[project].name`` from ``pyproject.toml`` with hyphens and dots
        turned into underscores.  Falls back to ``default_import_path`` when
        the manifest is missing, unreadable, or declares no name.
        """
        try:
            raw = self.manifest_path.read_text(encoding="utf-8")
            data = tomllib.loads(raw)
        except (OSError, tomllib.TOMLDecodeError):
            return self.default_import_path

        project = data.get("project")
        name = project.get("name") if isinstance(project, dict) else None
        if not isinstance(name, str) or not name.strip():
            return self.default_import_path
        return name.strip().replace("-", "_").replace(".", "_").lower()

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``<project_root>/.modgen.json``.

        Returns:
            The path where the file was written.
        """
        target = path or (self.project_root / ".modgen.json")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "GeneratorConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls, **overrides: Any) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            MODGEN_PROJECT_ROOT, MODGEN_HANDLER_DIR, MODGEN_SERVICE_DIR,
            MODGEN_MODEL_DIR, MODGEN_REPOSITORY_DIR, MODGEN_REGISTRY_DIR,
            MODGEN_ROUTER_FILE, MODGEN_STORE_FILE, MODGEN_DEFAULT_IMPORT_PATH,
            MODGEN_TEMPLATE_DIR.

        Keyword *overrides* win over the environment.
        """
        env_map = {
            "project_root": "MODGEN_PROJECT_ROOT",
            "handler_dir": "MODGEN_HANDLER_DIR",
            "service_dir": "MODGEN_SERVICE_DIR",
            "model_dir": "MODGEN_MODEL_DIR",
            "repository_dir": "MODGEN_REPOSITORY_DIR",
            "registry_dir": "MODGEN_REGISTRY_DIR",
            "router_file": "MODGEN_ROUTER_FILE",
            "store_file": "MODGEN_STORE_FILE",
            "default_import_path": "MODGEN_DEFAULT_IMPORT_PATH",
            "template_dir": "MODGEN_TEMPLATE_DIR",
        }
        kwargs: dict[str, Any] = {}
        for field_name, var in env_map.items():
            if os.environ.get(var):
                kwargs[field_name] = os.environ[var]
        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
