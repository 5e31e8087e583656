"""Data-driven module registry.

The alternative to marker injection: each generated module gets its own JSON
entry under the registry directory (``app/registry/<snake>.json`` by default),
written create-only like every other generated file.  ``load_registry``
aggregates the entries into a ``{module: RegistryEntry}`` mapping that the
target project's startup code (or a build step) turns into router and model
registrations.  Re-running the generator for a module is refused instead of
producing a duplicate registration.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .naming import NamingForms


class RegistryEntry(BaseModel):
    """Everything needed to wire one generated module into the application."""

    model_config = ConfigDict(frozen=True)

    module: str = Field(..., description="snake_case module identifier")
    display_name: str = Field(default="")
    route_prefix: str = Field(..., description="URL prefix, e.g. /order-items")
    router: str = Field(..., description="Import reference of the APIRouter, 'pkg.mod:attr'")
    model: str = Field(..., description="Import reference of the ORM model, 'pkg.mod:attr'")
    table: str = Field(..., description="Database table name")


def build_entry(forms: NamingForms) -> RegistryEntry:
    """Build the registry entry for *forms*."""
    return RegistryEntry(
        module=forms.snake,
        display_name=forms.display_name,
        route_prefix=f"/{forms.plural_kebab}",
        router=f"{forms.import_path}.handlers.{forms.snake}_handler:router",
        model=f"{forms.import_path}.models.{forms.snake}:{forms.pascal}",
        table=forms.plural,
    )


def entry_filename(forms: NamingForms) -> str:
    return f"{forms.snake}.json"


def render_entry(forms: NamingForms) -> str:
    """Serialise the entry for *forms* as pretty-printed JSON."""
    return build_entry(forms).model_dump_json(indent=2) + "\n"


def load_registry(directory: str | Path) -> dict[str, RegistryEntry]:
    """Aggregate every ``*.json`` entry under *directory*.

    Returns an empty mapping if the directory does not exist.  Entries are
    keyed by module name in sorted order.

    Raises:
        pydantic.ValidationError: An entry file is not a valid registry entry.
    """
    root = Path(directory)
    if not root.is_dir():
        return {}
    entries: dict[str, RegistryEntry] = {}
    for path in sorted(root.glob("*.json")):
        entry = RegistryEntry.model_validate_json(path.read_text(encoding="utf-8"))
        entries[entry.module] = entry
    return dict(sorted(entries.items()))
