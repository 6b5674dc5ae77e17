"""NER post-processing."""

from __future__ import annotations

from .reconcile import normalize_entity_group, reconcile_entities

__all__ = ["normalize_entity_group", "reconcile_entities"]
