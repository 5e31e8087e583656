"""Exception hierarchy for the module generator.

Every error the generator raises on purpose derives from ``ScaffoldError`` so
the orchestrator can record it in the report without swallowing unrelated
failures.  Emit-phase errors (``ConflictError``, ``TemplateError``) abort a
run; ``MarkerNotFoundError`` is downgraded to a warning by the orchestrator.
``WriteError`` wraps operating-system failures while writing a file.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for all generator errors."""

    @property
    def kind(self) -> str:
        """Short error kind used in reports (the class name)."""
        return type(self).__name__


class ValidationError(ScaffoldError):
    """Raised when the raw module identifier is empty or unusable."""


class TemplateError(ScaffoldError):
    """Raised when a template is missing, malformed, or references an undefined field."""

    def __init__(self, template: str, message: str) -> None:
        self.template = template
        super().__init__(f"Template {template}: {message}")


class ConflictError(ScaffoldError):
    """Raised when an output file already exists.  Generation never overwrites."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"File already exists: {self.path}")


class MarkerNotFoundError(ScaffoldError):
    """Raised when an injection target (or its sentinel) cannot be found."""

    def __init__(self, path: str | Path, sentinel: str, reason: str = "") -> None:
        self.path = Path(path)
        self.sentinel = sentinel
        detail = reason or "marker comment not found"
        super().__init__(f"{self.path}: {detail} ({sentinel!r})")


class WriteError(ScaffoldError):
    """Raised when a generated file or an edited target cannot be written."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"{self.path}: {reason}")
