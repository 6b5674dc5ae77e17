"""Task profiles and smart-detect routing."""

from __future__ import annotations

from .registry import TASK_REGISTRY, get_task_profile, require_task_profile, task_ids
from .router import score_tasks, suggest_task

__all__ = [
    "TASK_REGISTRY",
    "get_task_profile",
    "require_task_profile",
    "score_tasks",
    "suggest_task",
    "task_ids",
]
