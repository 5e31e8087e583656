"""Per-step results of a generation run.

Provides Pydantic v2 models describing what each step of a run did: the four
file emits, the two marker injections (or the registry entry), their status,
and the error kind when a step did not succeed.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field, computed_field

from .errors import ScaffoldError
from .naming import NamingForms

StepStatus = Literal["ok", "failed", "warning", "skipped", "planned"]


class StepResult(BaseModel):
    """Outcome of one emit, injection, or registry step."""

    name: str = Field(..., description="Artifact kind or injection target name")
    phase: Literal["emit", "inject", "registry"] = Field(...)
    status: StepStatus = Field(default="ok")
    path: str = Field(default="", description="File created or edited")
    error_kind: str = Field(default="", description="Exception class name when not ok")
    message: str = Field(default="")

    @classmethod
    def from_error(
        cls,
        name: str,
        phase: Literal["emit", "inject", "registry"],
        error: ScaffoldError,
        path: str = "",
        status: StepStatus = "failed",
    ) -> "StepResult":
        return cls(
            name=name,
            phase=phase,
            status=status,
            path=path,
            error_kind=error.kind,
            message=str(error),
        )


class GenerationReport(BaseModel):
    """Aggregated result of one ``ModuleGenerator.generate`` call."""

    module: str = Field(default="")
    forms: Optional[NamingForms] = Field(default=None)
    mode: Literal["sequential", "staged", "dry-run"] = Field(default="sequential")
    steps: list[StepResult] = Field(default_factory=list)

    def add(self, step: StepResult) -> StepResult:
        self.steps.append(step)
        return step

    @computed_field  # type: ignore[misc]
    @property
    def success(self) -> bool:
        """True when no step failed.  Warnings do not count as failures."""
        return not any(s.status == "failed" for s in self.steps)

    @computed_field  # type: ignore[misc]
    @property
    def created_files(self) -> list[str]:
        """Paths of files this run created."""
        return [s.path for s in self.steps if s.phase != "inject" and s.status == "ok"]

    @computed_field  # type: ignore[misc]
    @property
    def warnings(self) -> list[StepResult]:
        return [s for s in self.steps if s.status == "warning"]

    @property
    def failure(self) -> Optional[StepResult]:
        """The step that aborted the run, if any."""
        for step in self.steps:
            if step.status == "failed":
                return step
        return None
