"""Smart-detect: heuristic routing of free text to a task.

Each task gets a score from a few surface features (length, word count,
capitalized-word density, sentiment keywords) and the best score wins.
There are no learned parameters; identical input always yields the same
suggestion.

Decision order:
    1. summarization if its score is >= the entity score and strictly
       greater than the sentiment score
    2. ner if its score is strictly greater than both others
    3. sentiment otherwise (including when everything scores zero)
"""

from __future__ import annotations

from nlp_studio.config.router import (
    ENTITY_DENSITY_SCORE,
    ENTITY_DENSITY_THRESHOLD,
    ENTITY_MATCHES_SCORE,
    ENTITY_MIN_MATCHES,
    PROPER_NOUN_PATTERN,
    SENTIMENT_KEYWORD_BASE_SCORE,
    SENTIMENT_KEYWORD_SCORE,
    SENTIMENT_KEYWORDS,
    SENTIMENT_SHORT_CHARS,
    SENTIMENT_SHORT_SCORE,
    SUMMARY_LONG_CHARS,
    SUMMARY_LONG_SCORE,
    SUMMARY_LONG_WORDS,
    SUMMARY_VERY_LONG_CHARS,
    SUMMARY_VERY_LONG_SCORE,
)
from nlp_studio.state import TaskSuggestion

from .registry import require_task_profile


def _summarization_score(length: int, word_count: int) -> int:
    score = 0
    if length > SUMMARY_LONG_CHARS or word_count > SUMMARY_LONG_WORDS:
        score += SUMMARY_LONG_SCORE
    if length > SUMMARY_VERY_LONG_CHARS:
        score += SUMMARY_VERY_LONG_SCORE
    return score


def _entity_score(text: str, word_count: int) -> int:
    matches = PROPER_NOUN_PATTERN.findall(text)
    density = len(matches) / (word_count or 1)
    score = 0
    if density > ENTITY_DENSITY_THRESHOLD:
        score += ENTITY_DENSITY_SCORE
    if len(matches) > ENTITY_MIN_MATCHES:
        score += ENTITY_MATCHES_SCORE
    return score


def _sentiment_score(length: int, words: list[str]) -> int:
    score = 0
    if length < SENTIMENT_SHORT_CHARS:
        score += SENTIMENT_SHORT_SCORE
    keyword_matches = sum(1 for word in words if word.lower() in SENTIMENT_KEYWORDS)
    if keyword_matches > 0:
        score += SENTIMENT_KEYWORD_BASE_SCORE + keyword_matches * SENTIMENT_KEYWORD_SCORE
    return score


def score_tasks(text: str) -> dict[str, int]:
    """Return the raw score of every task for ``text``."""
    words = text.split()
    word_count = len(words)
    length = len(text)
    return {
        "summarization": _summarization_score(length, word_count),
        "ner": _entity_score(text, word_count),
        "sentiment": _sentiment_score(length, words),
    }


def suggest_task(text: str, active_task: str) -> TaskSuggestion:
    """Suggest the best-fit task for ``text``.

    Args:
        text: Raw user input. Callers reject blank input beforehand.
        active_task: Currently selected task id.

    Returns:
        The suggested task, a human-readable reason, and whether it differs
        from ``active_task``. A caller that switches tasks should reset the
        client first, since results of different tasks have different shapes.

    Raises:
        ConfigurationError: If ``active_task`` is not a registered task.
    """
    require_task_profile(active_task)

    word_count = len(text.split())
    scores = score_tasks(text)
    summarization = scores["summarization"]
    ner = scores["ner"]
    sentiment = scores["sentiment"]

    if summarization >= ner and summarization > sentiment:
        task_id = "summarization"
        reason = f"Long text detected ({word_count} words). Switching to Summarization model."
    elif ner > summarization and ner > sentiment:
        task_id = "ner"
        reason = "High density of potential entities detected. Switching to Entity Recognition."
    else:
        task_id = "sentiment"
        reason = "Short, opinionated text detected. Keeping Sentiment Analysis."

    return TaskSuggestion(
        task_id=task_id,
        reason=reason,
        switched=task_id != active_task,
        word_count=word_count,
        scores=scores,
    )


__all__ = ["score_tasks", "suggest_task"]
