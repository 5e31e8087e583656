"""Naming-form derivation for generated modules.

Turns one raw identifier (``order-item``, ``order_item``, ``orderItem`` or
``OrderItem``) into every spelling the templates need.  All functions here are
pure: the same input always yields the same ``NamingForms``.
"""

from __future__ import annotations

import keyword
import re
from typing import Callable

from pydantic import BaseModel, ConfigDict, Field

from .errors import ValidationError

DEFAULT_IMPORT_PATH = "api_scaffold"

_SEPARATORS = re.compile(r"[-\s]+")
# Every upper-case letter after the first character of a token starts a new word.
_CASE_BOUNDARY = re.compile(r"(?<=.)(?=[A-Z])")
_VOWELS = frozenset("aeiou")


# ---------------------------------------------------------------------------
# Naming forms record
# ---------------------------------------------------------------------------


class NamingForms(BaseModel):
    """Every derived spelling of one module name.  Immutable once built."""

    model_config = ConfigDict(frozen=True)

    raw: str = Field(..., description="Identifier exactly as given by the user")
    name: str = Field(..., description="Lower-cased raw identifier")
    pascal: str = Field(..., description="PascalCase, e.g. OrderItem")
    camel: str = Field(..., description="camelCase, e.g. orderItem")
    snake: str = Field(..., description="snake_case, e.g. order_item")
    kebab: str = Field(..., description="kebab-case, e.g. order-item")
    plural: str = Field(..., description="Pluralized snake form, e.g. order_items")
    plural_kebab: str = Field(..., description="Pluralized kebab form, used in URLs")
    display_name: str = Field(..., description="Human display label")
    import_path: str = Field(
        default=DEFAULT_IMPORT_PATH,
        description="Import path of the target project's root package",
    )

    def as_context(self) -> dict[str, str]:
        """Return the template context for this record."""
        return self.model_dump()


# ---------------------------------------------------------------------------
# Word splitting and case assembly
# ---------------------------------------------------------------------------


def split_words(value: str) -> list[str]:
    """Split an identifier in any common spelling into its words.

    Examples::

        split_words("order-item") -> ["order", "item"]
        split_words("OrderItem")  -> ["Order", "Item"]
        split_words("order_item") -> ["order", "item"]
    """
    normalised = _SEPARATORS.sub("_", value.strip())
    words: list[str] = []
    for token in normalised.split("_"):
        if not token:
            continue
        words.extend(part for part in _CASE_BOUNDARY.split(token) if part)
    return words


def to_pascal(value: str) -> str:
    """``order_item`` -> ``OrderItem``."""
    return "".join(word.capitalize() for word in split_words(value))


def to_camel(value: str) -> str:
    """``order_item`` -> ``orderItem``."""
    pascal = to_pascal(value)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


def to_snake(value: str) -> str:
    """``OrderItem`` -> ``order_item``."""
    return "_".join(word.lower() for word in split_words(value))


def to_kebab(value: str) -> str:
    """``OrderItem`` -> ``order-item``."""
    return "-".join(word.lower() for word in split_words(value))


# ---------------------------------------------------------------------------
# Pluralization
# ---------------------------------------------------------------------------


def pluralize(word: str) -> str:
    """Best-effort English plural of a lower-case word.

    Irregular plurals are not handled (``person`` -> ``persons``).  Pass a
    different callable to :func:`derive_forms` when that matters.
    """
    if word.endswith(("s", "x", "ch", "sh")):
        return word + "es"
    if word.endswith("y") and len(word) > 1 and word[-2] not in _VOWELS:
        return word[:-1] + "ies"
    return word + "s"


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def derive_forms(
    raw: str,
    display_name: str = "",
    import_path: str = DEFAULT_IMPORT_PATH,
    pluralizer: Callable[[str], str] = pluralize,
) -> NamingForms:
    """Build the ``NamingForms`` record for *raw*.

    Args:
        raw: Module identifier in snake, kebab, camel, or Pascal spelling.
        display_name: Human label; defaults to *raw* when empty.
        import_path: Root package of the target project.
        pluralizer: Callable turning the snake form into its plural.

    Raises:
        ValidationError: If *raw* is empty or contains no usable words.
    """
    raw = raw.strip()
    if not raw:
        raise ValidationError("module name is required")
    snake = to_snake(raw)
    if not re.fullmatch(r"[a-z][a-z0-9_]*", snake):
        raise ValidationError(
            f"invalid module name {raw!r}: must start with a letter and contain "
            "only letters, digits, '-' or '_'"
        )
    pascal = to_pascal(raw)
    if keyword.iskeyword(snake) or keyword.iskeyword(pascal):
        raise ValidationError(f"invalid module name {raw!r}: {snake!r} is a Python keyword")

    plural = pluralizer(snake)
    return NamingForms(
        raw=raw,
        name=raw.lower(),
        pascal=pascal,
        camel=to_camel(raw),
        snake=snake,
        kebab=to_kebab(raw),
        plural=plural,
        plural_kebab=plural.replace("_", "-"),
        display_name=display_name.strip() or raw,
        import_path=import_path,
    )
