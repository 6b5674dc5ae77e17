"""Entity offset reconciliation.

NER pipelines do not always return usable character offsets: some
backends report ``start == end``, omit them entirely, or disagree with the
surface word. This module places each entity on the original text so that
every highlighted span is a literal slice of the input, and splits the
input into alternating plain-text and entity fragments.

Guarantees:
    - fragments are strictly increasing and never overlap
    - joining the fragment texts reproduces the input exactly
    - an entity that cannot be placed is dropped and reported in
      ``Reconciliation.dropped``; dropping never moves the cursor
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from nlp_studio.state import (
    EntityFragment,
    Fragment,
    RawEntity,
    Reconciliation,
    ReconciliationGap,
    TextFragment,
)

logger = logging.getLogger(__name__)


def normalize_entity_group(group: str | None) -> str:
    """Map a pipeline entity group (``PER``, ``B-LOC``...) to a display label."""
    normalized = (group or "MISC").upper()
    if "PER" in normalized:
        return "PERSON"
    if "ORG" in normalized:
        return "ORG"
    if "LOC" in normalized:
        return "LOCATION"
    return "MISC"


def _has_usable_offsets(entity: RawEntity, text_length: int) -> bool:
    start, end = entity.start, entity.end
    if not isinstance(start, int) or isinstance(start, bool):
        return False
    if not isinstance(end, int) or isinstance(end, bool):
        return False
    return 0 <= start < end <= text_length


def _locate(text: str, word: str, cursor: int) -> int | None:
    """Find ``word`` at or after ``cursor``; never returns a position before it."""
    found = text.find(word, cursor)
    if found != -1:
        return found
    loose = text.find(word)
    if loose != -1 and loose >= cursor:
        return loose
    return None


def reconcile_entities(text: str, entities: Iterable[RawEntity]) -> Reconciliation:
    """Place ``entities`` on ``text`` and split it into fragments.

    Args:
        text: The exact input the pipeline was run on.
        entities: Entities in pipeline order; offsets may be missing or wrong.

    Returns:
        Ordered fragments covering all of ``text`` plus the dropped entities.
    """
    ordered = sorted(entities, key=lambda entity: entity.start or 0)
    fragments: list[Fragment] = []
    dropped: list[ReconciliationGap] = []
    cursor = 0

    for entity in ordered:
        if _has_usable_offsets(entity, len(text)):
            start, end = entity.start, entity.end
        else:
            word = (entity.word or "").strip()
            if not word:
                dropped.append(ReconciliationGap(entity, "missing word and offsets"))
                continue
            found = _locate(text, word, cursor)
            if found is None:
                dropped.append(ReconciliationGap(entity, f"word {word!r} not found after offset {cursor}"))
                continue
            start, end = found, found + len(word)

        if start < cursor:
            dropped.append(ReconciliationGap(entity, f"span {start}:{end} overlaps offset {cursor}"))
            continue

        if start > cursor:
            fragments.append(TextFragment(start=cursor, end=start, text=text[cursor:start]))
        fragments.append(
            EntityFragment(
                start=start,
                end=end,
                text=text[start:end],
                label=normalize_entity_group(entity.entity_group),
                entity=entity,
            )
        )
        cursor = end

    if cursor < len(text):
        fragments.append(TextFragment(start=cursor, end=len(text), text=text[cursor:]))

    if dropped:
        logger.debug("entities: dropped %d of %d entities", len(dropped), len(ordered))
    return Reconciliation(fragments=tuple(fragments), dropped=tuple(dropped))


__all__ = ["normalize_entity_group", "reconcile_entities"]
