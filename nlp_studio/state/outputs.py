"""Validated task outputs.

Each task has its own output type; the worker builds one of these from the
raw pipeline result before anything leaves the worker thread.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Union


@dataclass(frozen=True, slots=True)
class LabelScore:
    label: str
    score: float


@dataclass(frozen=True, slots=True)
class SentimentOutput:
    """Scored labels in the order the pipeline returned them."""

    TASK: ClassVar[str] = "sentiment"
    scores: tuple[LabelScore, ...]

    def as_dict(self) -> list[dict[str, Any]]:
        return [{"label": item.label, "score": item.score} for item in self.scores]


@dataclass(frozen=True, slots=True)
class RawEntity:
    """Entity as reported by the NER pipeline.

    Offsets are optional and not trusted: they may be missing, equal, or
    disagree with ``word``. See ``nlp_studio.entities.reconcile_entities``.
    """

    entity_group: str
    score: float
    word: str
    start: int | None = None
    end: int | None = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "entity_group": self.entity_group,
            "score": self.score,
            "word": self.word,
        }
        if self.start is not None:
            payload["start"] = self.start
        if self.end is not None:
            payload["end"] = self.end
        return payload


@dataclass(frozen=True, slots=True)
class EntityList:
    TASK: ClassVar[str] = "ner"
    entities: tuple[RawEntity, ...]

    def as_dict(self) -> list[dict[str, Any]]:
        return [entity.as_dict() for entity in self.entities]


@dataclass(frozen=True, slots=True)
class SummaryOutput:
    TASK: ClassVar[str] = "summarization"
    summary_text: str

    def as_dict(self) -> dict[str, Any]:
        return {"summary_text": self.summary_text}


TaskOutput = Union[SentimentOutput, EntityList, SummaryOutput]


__all__ = [
    "EntityList",
    "LabelScore",
    "RawEntity",
    "SentimentOutput",
    "SummaryOutput",
    "TaskOutput",
]
