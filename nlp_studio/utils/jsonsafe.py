"""Conversion of provider output into plain JSON-compatible values."""

from __future__ import annotations

import json
from typing import Any

import numpy as np


def _default(value: Any) -> Any:
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_jsonable(value: Any) -> Any:
    """Round-trip ``value`` through JSON so only plain builtins remain.

    Pipelines return numpy scalars (``numpy.float32`` scores, ``numpy.int64``
    offsets) that must not leak past the worker boundary.
    """
    return json.loads(json.dumps(value, default=_default))


__all__ = ["to_jsonable"]
