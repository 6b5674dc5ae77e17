"""Scoring constants for the smart-detect task router.

Sections:
    Summarization: length thresholds and weights
    Entities: proper-noun pattern, density threshold and weights
    Sentiment: short-text threshold, keyword list and weights
"""

from __future__ import annotations

import re
from typing import Final

# =============================================================================
# Summarization
# =============================================================================

SUMMARY_LONG_CHARS: Final = 300
SUMMARY_LONG_WORDS: Final = 50
SUMMARY_VERY_LONG_CHARS: Final = 800
SUMMARY_LONG_SCORE: Final = 10
SUMMARY_VERY_LONG_SCORE: Final = 20

# =============================================================================
# Entities
# =============================================================================

# Capitalized word not directly after ". " (rough proper-noun detector)
PROPER_NOUN_PATTERN: Final = re.compile(r"(?<!\. )\b[A-Z][a-z]+\b", re.ASCII)
ENTITY_DENSITY_THRESHOLD: Final = 0.07
ENTITY_DENSITY_SCORE: Final = 10
ENTITY_MIN_MATCHES: Final = 3
ENTITY_MATCHES_SCORE: Final = 5

# =============================================================================
# Sentiment
# =============================================================================

SENTIMENT_SHORT_CHARS: Final = 300
SENTIMENT_SHORT_SCORE: Final = 5
SENTIMENT_KEYWORD_BASE_SCORE: Final = 5
SENTIMENT_KEYWORD_SCORE: Final = 2
SENTIMENT_KEYWORDS: Final = frozenset({
    "good",
    "bad",
    "great",
    "terrible",
    "love",
    "hate",
    "amazing",
    "awful",
    "best",
    "worst",
    "excellent",
    "poor",
})


__all__ = [
    "SUMMARY_LONG_CHARS",
    "SUMMARY_LONG_WORDS",
    "SUMMARY_VERY_LONG_CHARS",
    "SUMMARY_LONG_SCORE",
    "SUMMARY_VERY_LONG_SCORE",
    "PROPER_NOUN_PATTERN",
    "ENTITY_DENSITY_THRESHOLD",
    "ENTITY_DENSITY_SCORE",
    "ENTITY_MIN_MATCHES",
    "ENTITY_MATCHES_SCORE",
    "SENTIMENT_SHORT_CHARS",
    "SENTIMENT_SHORT_SCORE",
    "SENTIMENT_KEYWORD_BASE_SCORE",
    "SENTIMENT_KEYWORD_SCORE",
    "SENTIMENT_KEYWORDS",
]
