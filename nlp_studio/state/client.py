"""Client-side state snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from .outputs import TaskOutput

Status = Literal["idle", "loading", "ready", "error"]


@dataclass(frozen=True, slots=True)
class ProgressSnapshot:
    """Latest model-file download progress reported during a run."""

    file: str
    percentage: float
    phase: str


@dataclass(frozen=True, slots=True)
class RunMetrics:
    """Timing of a finished run.

    ``load_time_ms`` is only set when the run had to load its pipeline.
    """

    inference_time_ms: float
    load_time_ms: float | None = None


@dataclass(frozen=True, slots=True)
class AIState:
    status: Status = "idle"
    progress: ProgressSnapshot | None = None
    result: TaskOutput | None = None
    metrics: RunMetrics | None = None
    error: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in ("ready", "error")


__all__ = ["AIState", "ProgressSnapshot", "RunMetrics", "Status"]
