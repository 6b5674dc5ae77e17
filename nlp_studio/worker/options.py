"""Task-specific pipeline call parameters."""

from __future__ import annotations

from typing import Any

from nlp_studio.config.inference import TASK_INFERENCE_OPTIONS
from nlp_studio.errors import ConfigurationError


def inference_options(task_id: str) -> dict[str, Any]:
    """Return a fresh copy of the call options for ``task_id``.

    Raises:
        ConfigurationError: If ``task_id`` has no registered options.
    """
    try:
        options = TASK_INFERENCE_OPTIONS[task_id]
    except KeyError as exc:
        raise ConfigurationError(f"No inference options for task {task_id!r}") from exc
    return dict(options)


__all__ = ["inference_options"]
