"""Task profile and routing dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

TaskId = Literal["sentiment", "ner", "summarization"]


@dataclass(frozen=True, slots=True)
class TaskProfile:
    """Static description of one task.

    Attributes:
        id: Task identifier from the closed set.
        model_ref: Hub repo id or local directory of the checkpoint.
        pipeline_kind: ``transformers.pipeline`` task name.
        quantized: Whether to load the reduced-precision variant.
        label: Human-readable name.
        description: One-line summary of what the task does.
        estimated_size: Approximate download size, for display only.
        sample_text: Preset input shown when no text has been entered.
    """

    id: TaskId
    model_ref: str
    pipeline_kind: str
    quantized: bool
    label: str
    description: str
    estimated_size: str
    sample_text: str


@dataclass(frozen=True, slots=True)
class TaskSuggestion:
    """Outcome of the smart-detect router."""

    task_id: TaskId
    reason: str
    switched: bool
    word_count: int
    scores: dict[str, int] = field(default_factory=dict)


__all__ = ["TaskId", "TaskProfile", "TaskSuggestion"]
