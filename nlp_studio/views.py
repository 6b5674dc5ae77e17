"""Presentation helpers for task results.

Turns validated task output into display-ready values (sorted scores,
percentages, trigger words, summary statistics, timing strings). No
styling lives here; the CLI and any other front end format these further.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from nlp_studio.config.display import (
    NEGATIVE_TRIGGER_WORDS,
    NO_SUMMARY_TEXT,
    POSITIVE_LABEL,
    POSITIVE_TRIGGER_WORDS,
    TRIGGER_STRIP_CHARS,
)
from nlp_studio.state import LabelScore, RunMetrics, SentimentOutput, SummaryOutput

_WHITESPACE_SPLIT = re.compile(r"(\s+)")


@dataclass(frozen=True, slots=True)
class SentimentView:
    dominant: LabelScore
    is_positive: bool
    # (label, whole percent), highest first
    bars: tuple[tuple[str, int], ...]


@dataclass(frozen=True, slots=True)
class SummaryView:
    text: str
    reduction_percent: int
    char_count: int


@dataclass(frozen=True, slots=True)
class TriggerToken:
    text: str
    polarity: str | None


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def sentiment_view(output: SentimentOutput) -> SentimentView:
    ordered = sorted(output.scores, key=lambda item: item.score, reverse=True)
    dominant = ordered[0]
    return SentimentView(
        dominant=dominant,
        is_positive=dominant.label == POSITIVE_LABEL,
        bars=tuple((item.label, _round_half_up(item.score * 100)) for item in ordered),
    )


def trigger_words(text: str) -> list[TriggerToken]:
    """Split ``text`` keeping whitespace and tag sentiment-loaded words.

    Joining the token texts gives back ``text`` unchanged.
    """
    tokens: list[TriggerToken] = []
    for piece in _WHITESPACE_SPLIT.split(text):
        if not piece:
            continue
        key = piece.lower().translate(str.maketrans("", "", TRIGGER_STRIP_CHARS))
        polarity = None
        if key in POSITIVE_TRIGGER_WORDS:
            polarity = "positive"
        elif key in NEGATIVE_TRIGGER_WORDS:
            polarity = "negative"
        tokens.append(TriggerToken(text=piece, polarity=polarity))
    return tokens


def summary_view(output: SummaryOutput, input_text: str) -> SummaryView:
    text = output.summary_text or NO_SUMMARY_TEXT
    reduction = 0
    if input_text:
        reduction = max(0, _round_half_up((1 - len(text) / len(input_text)) * 100))
    return SummaryView(text=text, reduction_percent=reduction, char_count=len(text))


def format_metrics(metrics: RunMetrics) -> str:
    parts = []
    if metrics.load_time_ms is not None:
        parts.append(f"load {metrics.load_time_ms / 1000:.2f}s")
    parts.append(f"inference {metrics.inference_time_ms:.2f}ms")
    return " / ".join(parts)


__all__ = [
    "SentimentView",
    "SummaryView",
    "TriggerToken",
    "format_metrics",
    "sentiment_view",
    "summary_view",
    "trigger_words",
]
