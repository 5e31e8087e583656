"""Create-only file emission and the artifact table.

``FileEmitter`` writes freshly rendered files and never overwrites: an
existing path raises ``ConflictError``.  Content goes to a temporary file in
the destination directory first and is then renamed into place, so a reader
never observes a half-written file.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from .errors import ConflictError, WriteError
from .naming import NamingForms


# ---------------------------------------------------------------------------
# Artifact table
# ---------------------------------------------------------------------------


class TemplateSpec(BaseModel):
    """One artifact kind: which template to render and where the result goes."""

    model_config = ConfigDict(frozen=True)

    kind: str
    template: str
    output: str

    def output_path(self, forms: NamingForms, dirs: dict[str, str]) -> Path:
        """Resolve the output pattern for *forms* (relative to the project root)."""
        return Path(self.output.format(snake=forms.snake, **dirs))


ARTIFACTS: tuple[TemplateSpec, ...] = (
    TemplateSpec(kind="handler", template="handler.py.j2", output="{handler_dir}/{snake}_handler.py"),
    TemplateSpec(kind="service", template="service.py.j2", output="{service_dir}/{snake}_service.py"),
    TemplateSpec(kind="model", template="model.py.j2", output="{model_dir}/{snake}.py"),
    TemplateSpec(kind="repository", template="repo.py.j2", output="{repository_dir}/{snake}_repo.py"),
)


# ---------------------------------------------------------------------------
# FileEmitter
# ---------------------------------------------------------------------------


class FileEmitter:
    """Writes new files below *root*, refusing to touch existing ones."""

    def __init__(self, root: str | Path = ".") -> None:
        self.root = Path(root)

    def resolve(self, path: str | Path) -> Path:
        return self.root / path

    def check(self, path: str | Path) -> Path:
        """Raise ``ConflictError`` if *path* already exists; return the resolved path."""
        target = self.resolve(path)
        try:
            exists = target.exists()
        except OSError as exc:
            raise WriteError(target, f"cannot check path: {exc}") from exc
        if exists:
            raise ConflictError(target)
        return target

    def emit(self, path: str | Path, content: str) -> Path:
        """Write *content* to *path* (relative to the root) as a new file.

        Parent directories are created as needed.

        Raises:
            ConflictError: A file already exists at *path*.
            WriteError: The directory or file could not be written.
        """
        target = self.check(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            write_atomic(target, content)
        except OSError as exc:
            raise WriteError(target, str(exc)) from exc
        return target


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def write_atomic(path: Path, content: str, mode: int = 0o644) -> None:
    """Write via a sibling temp file and rename it over *path*."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
