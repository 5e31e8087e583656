"""Jinja2 template rendering for module scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``modgen/templates/`` directory (optionally shadowed by a user directory) and
renders them with a ``NamingForms`` record.  Rendering is strict: any template
that is missing, malformed, or references an undefined field raises
``TemplateError`` before anything touches the disk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
    UndefinedError,
    select_autoescape,
)

from .errors import TemplateError
from .naming import NamingForms, to_camel, to_kebab, to_pascal, to_snake


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for module scaffolding.

    The renderer discovers ``.j2`` template files under the built-in template
    directory.  When *override_dir* is given, templates found there take
    precedence over the built-in ones with the same name.
    """

    def __init__(
        self,
        template_dir: str | Path | None = None,
        override_dir: str | Path | None = None,
    ) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.override_dir = Path(override_dir) if override_dir else None

        loaders = [FileSystemLoader(str(self.template_dir))]
        if self.override_dir is not None:
            loaders.insert(0, FileSystemLoader(str(self.override_dir)))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["pascal_case"] = to_pascal
        self.env.filters["snake_case"] = to_snake
        self.env.filters["camel_case"] = to_camel
        self.env.filters["kebab_case"] = to_kebab
        self.env.filters["pystr"] = python_string
        self.env.filters["docstring"] = docstring_text

    # -- Rendering ---------------------------------------------------------

    def render(self, template_id: str, forms: NamingForms) -> str:
        """Render a single template with the fields of *forms*.

        Args:
            template_id: Path relative to the template directory (e.g.
                ``"handler.py.j2"``).
            forms: Naming forms of the module being generated.

        Raises:
            TemplateError: The template is missing, cannot be parsed, or uses
                a field that *forms* does not define.
        """
        try:
            template = self.env.get_template(template_id)
        except TemplateNotFound:
            raise TemplateError(template_id, "template not found") from None
        except TemplateSyntaxError as exc:
            raise TemplateError(template_id, f"line {exc.lineno}: {exc.message}") from exc
        return self._render(template_id, template, forms.as_context())

    @staticmethod
    def _render(template_id: str, template: Any, context: dict[str, Any]) -> str:
        try:
            return template.render(**context)
        except UndefinedError as exc:
            raise TemplateError(template_id, f"undefined field: {exc.message}") from exc


# ---------------------------------------------------------------------------
# Python source filters
# ---------------------------------------------------------------------------


def python_string(value: str) -> str:
    """Double-quoted Python string literal for *value*."""
    text = repr(str(value))
    if text.startswith("'") and '"' not in value:
        text = '"' + text[1:-1] + '"'
    return text


def docstring_text(value: str) -> str:
    """Escape *value* for use inside a triple-double-quoted docstring."""
    return str(value).replace("\\", "\\\\").replace('"', '\\"')
