"""Marker-based registration of generated modules.

Hand-maintained project files carry a sentinel comment such as::

    # GEN:ROUTE_REGISTER - Auto-appended by code generator, do not remove

``MarkerInjector`` inserts a generated snippet immediately before that line and
leaves the sentinel in place so later runs can find it again.  There is no
check for an existing registration: injecting the same module twice inserts
the snippet twice.
"""

from __future__ import annotations

import stat
import textwrap
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from .emitter import write_atomic
from .errors import MarkerNotFoundError, TemplateError, WriteError
from .naming import NamingForms
from .templates import python_string

ROUTE_SENTINEL = "# GEN:ROUTE_REGISTER - Auto-appended by code generator, do not remove"
MODEL_SENTINEL = "# GEN:MODEL_MIGRATE - Auto-appended by code generator, do not remove"


# ---------------------------------------------------------------------------
# Snippet builders
# ---------------------------------------------------------------------------


def route_snippet(forms: NamingForms) -> str:
    """Router registration for one module (mounted at ``/<plural-kebab>``)."""
    return textwrap.dedent(
        f"""\
        # {forms.pascal} module
        from {forms.import_path}.handlers.{forms.snake}_handler import router as {forms.snake}_router

        router.include_router({forms.snake}_router, prefix="/{forms.plural_kebab}", tags=[{python_string(forms.display_name)}])

        """
    )


def model_snippet(forms: NamingForms) -> str:
    """Model registration entry for the store's migration list."""
    return f'"{forms.import_path}.models.{forms.snake}:{forms.pascal}",  # {forms.plural}\n'


# ---------------------------------------------------------------------------
# Injection targets
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class InjectionTarget:
    """A hand-maintained file, its sentinel, and the snippet to place before it."""

    name: str
    path: Path
    sentinel: str
    snippet: Callable[[NamingForms], str]


def default_targets(router_file: str | Path, store_file: str | Path) -> tuple[InjectionTarget, ...]:
    """The two registration targets of a generated module, in injection order."""
    return (
        InjectionTarget("route", Path(router_file), ROUTE_SENTINEL, route_snippet),
        InjectionTarget("migration", Path(store_file), MODEL_SENTINEL, model_snippet),
    )


# ---------------------------------------------------------------------------
# MarkerInjector
# ---------------------------------------------------------------------------


class MarkerInjector:
    """Splices snippets into target files below *root*."""

    def __init__(self, root: str | Path = ".") -> None:
        self.root = Path(root)

    def resolve(self, target: InjectionTarget) -> Path:
        return self.root / target.path

    def prepare(
        self, target: InjectionTarget, forms: NamingForms, content: str | None = None
    ) -> tuple[Path, str]:
        """Compute the new contents of *target* without writing anything.

        *content* stands in for the file body when an earlier staged edit of
        the same file has not been written yet.  Line endings are kept as
        they are, and the snippet uses the sentinel line's ending.

        Returns:
            ``(path, new_content)``.

        Raises:
            MarkerNotFoundError: The file is missing, unreadable, or has no
                sentinel.
            TemplateError: The snippet itself contains the sentinel.
        """
        path = self.resolve(target)
        if content is None:
            content = _read_target(path, target.sentinel)

        index = content.find(target.sentinel)
        if index < 0:
            raise MarkerNotFoundError(path, target.sentinel)

        snippet = target.snippet(forms)
        if target.sentinel in snippet:
            raise TemplateError(f"<{target.name} snippet>", "snippet contains the sentinel")

        line_start = content.rfind("\n", 0, index) + 1
        indent = content[line_start:index]
        if indent.strip():
            # Sentinel follows code on the same line; insert the snippet verbatim.
            indent = ""
        block = _indent_block(snippet, indent)
        newline = _line_ending(content, index)
        if newline != "\n":
            block = block.replace("\n", newline)
        return path, content[:index] + block + content[index:]

    def inject(self, target: InjectionTarget, forms: NamingForms) -> Path:
        """Insert the snippet for *forms* before the first sentinel of *target*.

        Not idempotent: each call adds another copy of the snippet.

        Raises:
            MarkerNotFoundError: The file is missing, unreadable, or has no
                sentinel; the file is left unchanged.
            WriteError: The edited file could not be written back.
        """
        path, new_content = self.prepare(target, forms)
        self.write(path, new_content)
        return path

    def write(self, path: Path, content: str) -> None:
        """Replace the body of an existing target file, keeping its permissions."""
        try:
            write_atomic(path, content, stat.S_IMODE(path.stat().st_mode))
        except OSError as exc:
            raise WriteError(path, str(exc)) from exc


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _read_target(path: Path, sentinel: str) -> str:
    try:
        with path.open(encoding="utf-8", newline="") as fh:
            return fh.read()
    except FileNotFoundError:
        raise MarkerNotFoundError(path, sentinel, "target file not found") from None
    except (OSError, UnicodeDecodeError) as exc:
        raise MarkerNotFoundError(path, sentinel, f"cannot read target file: {exc}") from exc


def _line_ending(content: str, index: int) -> str:
    """Line ending of the line at *index*, or of the line above when it is the last."""
    end = content.find("\n", index)
    if end < 0:
        end = content.rfind("\n", 0, index)
    if end > 0 and content[end - 1] == "\r":
        return "\r\n"
    return "\n"


def _indent_block(snippet: str, indent: str) -> str:
    """Indent *snippet* to the sentinel's column.

    The first line reuses the indentation already in front of the sentinel,
    and the block ends with *indent* so the sentinel keeps its column.
    """
    if not snippet.endswith("\n"):
        snippet += "\n"
    if not indent:
        return snippet
    indented = textwrap.indent(snippet, indent)
    if indented.startswith(indent):
        indented = indented[len(indent):]
    return indented + indent
