"""Exception classification helpers for log labels."""

from __future__ import annotations

from .configuration import ConfigurationError
from .inference import InferenceError, LoadError

ERROR_CATEGORIES: tuple[tuple[type[BaseException], str], ...] = (
    (ConfigurationError, "configuration"),
    (LoadError, "load"),
    (InferenceError, "inference"),
    (TimeoutError, "timeout"),
)


def classify_error(exc: BaseException) -> str:
    """Map an exception to a short category label."""

    for cls, label in ERROR_CATEGORIES:
        if isinstance(exc, cls):
            return label
    return "unknown"


__all__ = ["ERROR_CATEGORIES", "classify_error"]
