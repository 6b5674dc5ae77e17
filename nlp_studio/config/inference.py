"""Per-task inference parameters passed to the pipeline call.

These are fixed on purpose: the rendered output of each task depends on
them (two sentiment scores, merged entity groups, short deterministic
summaries).
"""

from __future__ import annotations

from typing import Any, Final

# Merge B-/I- sub-token predictions into whole entities and drop O tokens
NER_AGGREGATION_STRATEGY: Final = "simple"

SUMMARY_MAX_NEW_TOKENS: Final = 150
SUMMARY_MIN_NEW_TOKENS: Final = 10
SUMMARY_NUM_BEAMS: Final = 2
SUMMARY_LENGTH_PENALTY: Final = 2.0
SUMMARY_DO_SAMPLE: Final = False

# Both polarity scores, not just the argmax
SENTIMENT_TOP_K: Final = 2

TASK_INFERENCE_OPTIONS: Final[dict[str, dict[str, Any]]] = {
    "ner": {
        "aggregation_strategy": NER_AGGREGATION_STRATEGY,
    },
    "summarization": {
        "max_new_tokens": SUMMARY_MAX_NEW_TOKENS,
        "min_new_tokens": SUMMARY_MIN_NEW_TOKENS,
        "num_beams": SUMMARY_NUM_BEAMS,
        "length_penalty": SUMMARY_LENGTH_PENALTY,
        "do_sample": SUMMARY_DO_SAMPLE,
    },
    "sentiment": {
        "top_k": SENTIMENT_TOP_K,
    },
}


__all__ = [
    "NER_AGGREGATION_STRATEGY",
    "SUMMARY_MAX_NEW_TOKENS",
    "SUMMARY_MIN_NEW_TOKENS",
    "SUMMARY_NUM_BEAMS",
    "SUMMARY_LENGTH_PENALTY",
    "SUMMARY_DO_SAMPLE",
    "SENTIMENT_TOP_K",
    "TASK_INFERENCE_OPTIONS",
]
