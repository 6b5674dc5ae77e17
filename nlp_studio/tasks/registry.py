"""Static registry of the supported tasks.

The set of task ids is closed. Lookups for anything outside it either
return ``None`` (``get_task_profile``) or raise ``ConfigurationError``
(``require_task_profile``); nothing falls back to a default task.
"""

from __future__ import annotations

from nlp_studio.config import (
    NER_MODEL,
    QUANTIZE_MODELS,
    SENTIMENT_MODEL,
    SUMMARIZATION_MODEL,
)
from nlp_studio.errors import ConfigurationError
from nlp_studio.state import TaskProfile

TASK_REGISTRY: tuple[TaskProfile, ...] = (
    TaskProfile(
        id="sentiment",
        model_ref=SENTIMENT_MODEL,
        pipeline_kind="sentiment-analysis",
        quantized=QUANTIZE_MODELS,
        label="Sentiment Analysis",
        description="Real-time emotional tone detection. Classifies text as Positive or Negative using DistilBERT.",
        estimated_size="67 MB",
        sample_text=(
            "The new framework architecture significantly improves render performance. "
            "However, the documentation is somewhat sparse and the learning curve is steep for beginners."
        ),
    ),
    TaskProfile(
        id="ner",
        model_ref=NER_MODEL,
        pipeline_kind="token-classification",
        quantized=QUANTIZE_MODELS,
        label="Entity Recognition",
        description="Extracts entities like Persons, Organizations, and Locations using BERT-base NER.",
        estimated_size="100 MB",
        sample_text=(
            "Elon Musk announced that SpaceX plans to launch the Starship rocket from Boca Chica, "
            "Texas next month. NASA has already secured a contract for the Artemis mission."
        ),
    ),
    TaskProfile(
        id="summarization",
        model_ref=SUMMARIZATION_MODEL,
        pipeline_kind="summarization",
        quantized=QUANTIZE_MODELS,
        label="Summarization",
        description="Distills long articles into concise summaries using DistilBART CNN.",
        estimated_size="280 MB",
        sample_text=(
            "Quantum computing is a type of computation whose operations can exploit the collective "
            "properties of quantum states, such as superposition, interference, and entanglement. "
            "Devices that perform quantum computations are known as quantum computers. Though current "
            "quantum computers are too small to outperform usual (classical) computers for practical "
            "applications, they are believed to be capable of solving certain computational problems, "
            "such as integer factorization (which underlies RSA encryption), substantially faster than "
            "classical computers."
        ),
    ),
)

_BY_ID: dict[str, TaskProfile] = {profile.id: profile for profile in TASK_REGISTRY}


def task_ids() -> tuple[str, ...]:
    return tuple(_BY_ID)


def get_task_profile(task_id: str) -> TaskProfile | None:
    """Return the profile for ``task_id`` or ``None`` when unknown."""
    return _BY_ID.get(task_id)


def require_task_profile(task_id: str) -> TaskProfile:
    """Return the profile for ``task_id``.

    Raises:
        ConfigurationError: If ``task_id`` is not a registered task.
    """
    profile = _BY_ID.get(task_id)
    if profile is None:
        raise ConfigurationError(f"Unknown task id {task_id!r}; expected one of {sorted(_BY_ID)}")
    return profile


__all__ = [
    "TASK_REGISTRY",
    "get_task_profile",
    "require_task_profile",
    "task_ids",
]
