"""Validation of raw pipeline output into typed task outputs.

Pipelines return loosely shaped data (lists or single dicts, nested lists
when called with a batch, numpy scalars). ``parse_output`` first converts
the value to plain JSON types and then builds the output type of the task,
raising ``InferenceError`` when the shape does not fit.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from nlp_studio.errors import ConfigurationError, InferenceError
from nlp_studio.state import (
    EntityList,
    LabelScore,
    RawEntity,
    SentimentOutput,
    SummaryOutput,
    TaskOutput,
)
from nlp_studio.utils.jsonsafe import to_jsonable


def _as_records(raw: Any, task_id: str) -> list[Any]:
    if isinstance(raw, Mapping):
        return [raw]
    if not isinstance(raw, list):
        raise InferenceError(f"Unexpected {task_id} output of type {type(raw).__name__}")
    # Single-text calls occasionally come back wrapped in a batch list
    if len(raw) == 1 and isinstance(raw[0], list):
        return raw[0]
    return raw


def _require_mapping(item: Any, task_id: str) -> Mapping[str, Any]:
    if not isinstance(item, Mapping):
        raise InferenceError(f"Unexpected {task_id} item of type {type(item).__name__}")
    return item


def _number(value: Any, field: str, task_id: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InferenceError(f"{task_id} output field {field!r} must be a number, got {value!r}")
    return float(value)


def _offset(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _parse_sentiment(raw: Any) -> SentimentOutput:
    scores: list[LabelScore] = []
    for item in _as_records(raw, "sentiment"):
        record = _require_mapping(item, "sentiment")
        label = record.get("label")
        if not isinstance(label, str):
            raise InferenceError(f"sentiment output is missing a label: {record!r}")
        scores.append(LabelScore(label=label, score=_number(record.get("score"), "score", "sentiment")))
    if not scores:
        raise InferenceError("sentiment output is empty")
    return SentimentOutput(scores=tuple(scores))


def _parse_entities(raw: Any) -> EntityList:
    entities: list[RawEntity] = []
    for item in _as_records(raw, "ner"):
        record = _require_mapping(item, "ner")
        # Non-aggregated pipelines report the tag under "entity"
        group = record.get("entity_group", record.get("entity"))
        word = record.get("word")
        entities.append(
            RawEntity(
                entity_group=group if isinstance(group, str) else "MISC",
                score=_number(record.get("score", 0.0), "score", "ner"),
                word=word if isinstance(word, str) else "",
                start=_offset(record.get("start")),
                end=_offset(record.get("end")),
            )
        )
    return EntityList(entities=tuple(entities))


def _parse_summary(raw: Any) -> SummaryOutput:
    records = _as_records(raw, "summarization")
    if not records:
        return SummaryOutput(summary_text="")
    record = _require_mapping(records[0], "summarization")
    summary = record.get("summary_text", "")
    if not isinstance(summary, str):
        raise InferenceError(f"summarization output has a non-text summary: {summary!r}")
    return SummaryOutput(summary_text=summary)


_PARSERS = {
    "sentiment": _parse_sentiment,
    "ner": _parse_entities,
    "summarization": _parse_summary,
}


def parse_output(task_id: str, raw: Any) -> TaskOutput:
    """Sanitize and validate ``raw`` pipeline output for ``task_id``.

    Raises:
        ConfigurationError: If ``task_id`` is unknown.
        InferenceError: If the output cannot be converted or has the wrong shape.
    """
    parser = _PARSERS.get(task_id)
    if parser is None:
        raise ConfigurationError(f"No output parser for task {task_id!r}")
    try:
        plain = to_jsonable(raw)
    except (TypeError, ValueError) as exc:
        raise InferenceError(f"{task_id} output is not serializable: {exc}") from exc
    return parser(plain)


__all__ = ["parse_output"]
