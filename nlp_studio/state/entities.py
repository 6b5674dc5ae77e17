"""Reconciled entity fragments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .outputs import RawEntity


@dataclass(frozen=True, slots=True)
class TextFragment:
    """Plain text between (or around) entity spans."""

    start: int
    end: int
    text: str


@dataclass(frozen=True, slots=True)
class EntityFragment:
    """An entity placed at ``text[start:end]`` of the original input."""

    start: int
    end: int
    text: str
    label: str
    entity: RawEntity


Fragment = Union[TextFragment, EntityFragment]


@dataclass(frozen=True, slots=True)
class ReconciliationGap:
    """An entity that could not be placed and was left out of the output."""

    entity: RawEntity
    reason: str


@dataclass(frozen=True, slots=True)
class Reconciliation:
    fragments: tuple[Fragment, ...]
    dropped: tuple[ReconciliationGap, ...] = ()

    @property
    def spans(self) -> tuple[EntityFragment, ...]:
        return tuple(fragment for fragment in self.fragments if isinstance(fragment, EntityFragment))

    @property
    def text(self) -> str:
        return "".join(fragment.text for fragment in self.fragments)


__all__ = [
    "EntityFragment",
    "Fragment",
    "Reconciliation",
    "ReconciliationGap",
    "TextFragment",
]
