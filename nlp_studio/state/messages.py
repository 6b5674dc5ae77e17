"""Messages exchanged across the worker boundary.

Requests flow client -> worker on the worker inbox; responses flow
worker -> client on the outbox. Every response echoes the ``run_id`` of the
request that produced it so the client can drop responses for runs it no
longer tracks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Union

from .outputs import TaskOutput


@dataclass(frozen=True, slots=True)
class RunRequest:
    TYPE: ClassVar[str] = "run"
    run_id: int
    task_id: str
    text: str
    model_ref: str
    pipeline_kind: str
    quantized: bool = True

    def as_dict(self) -> dict[str, Any]:
        return {
            "type": self.TYPE,
            "run_id": self.run_id,
            "task_id": self.task_id,
            "text": self.text,
            "model_ref": self.model_ref,
            "pipeline_kind": self.pipeline_kind,
            "quantized": self.quantized,
        }


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    TYPE: ClassVar[str] = "progress"
    run_id: int
    file: str
    percentage: float
    phase: str

    def as_dict(self) -> dict[str, Any]:
        return {
            "type": self.TYPE,
            "run_id": self.run_id,
            "file": self.file,
            "percentage": self.percentage,
            "phase": self.phase,
        }


@dataclass(frozen=True, slots=True)
class ResultEvent:
    TYPE: ClassVar[str] = "result"
    run_id: int
    data: TaskOutput
    inference_time_ms: float
    load_time_ms: float | None = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": self.TYPE,
            "run_id": self.run_id,
            "data": self.data.as_dict(),
            "inference_time_ms": self.inference_time_ms,
        }
        if self.load_time_ms is not None:
            payload["load_time_ms"] = self.load_time_ms
        return payload


@dataclass(frozen=True, slots=True)
class ErrorEvent:
    TYPE: ClassVar[str] = "error"
    run_id: int
    message: str

    def as_dict(self) -> dict[str, Any]:
        return {"type": self.TYPE, "run_id": self.run_id, "message": self.message}


WorkerResponse = Union[ProgressEvent, ResultEvent, ErrorEvent]
TERMINAL_EVENTS: tuple[type, ...] = (ResultEvent, ErrorEvent)


__all__ = [
    "ErrorEvent",
    "ProgressEvent",
    "ResultEvent",
    "RunRequest",
    "TERMINAL_EVENTS",
    "WorkerResponse",
]
