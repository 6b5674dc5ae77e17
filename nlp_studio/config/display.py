"""Display vocabularies used when rendering task output."""

from __future__ import annotations

from typing import Final

# Highlighted in the input next to a sentiment result. Hand-picked, not
# derived from the model.
POSITIVE_TRIGGER_WORDS: Final = frozenset({
    "good", "great", "excellent", "amazing", "love", "best", "fantastic",
    "wonderful", "beautiful", "happy", "joy", "improves", "significantly",
    "perfect", "awesome", "nice", "clean", "efficient", "fast", "secure",
    "better", "rich", "easy", "smart", "secured", "success",
})
NEGATIVE_TRIGGER_WORDS: Final = frozenset({
    "bad", "terrible", "awful", "hate", "worst", "horrible", "sad", "poor",
    "sparse", "steep", "difficult", "slow", "broken", "error", "fail",
    "failure", "ugly", "messy", "hard", "complex", "boring", "weak",
    "insecure", "vulnerable", "problem", "issue",
})
TRIGGER_STRIP_CHARS: Final = ".,!?;:"

POSITIVE_LABEL: Final = "POSITIVE"
NO_SUMMARY_TEXT: Final = "No summary generated."


__all__ = [
    "POSITIVE_TRIGGER_WORDS",
    "NEGATIVE_TRIGGER_WORDS",
    "TRIGGER_STRIP_CHARS",
    "POSITIVE_LABEL",
    "NO_SUMMARY_TEXT",
]
