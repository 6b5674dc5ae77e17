"""Centralized state dataclasses.

This module re-exports all state definitions from their respective modules,
providing a single import point for state types.
"""

from .tasks import TaskId, TaskProfile, TaskSuggestion
from .client import AIState, ProgressSnapshot, RunMetrics, Status
from .outputs import EntityList, LabelScore, RawEntity, SentimentOutput, SummaryOutput, TaskOutput
from .entities import EntityFragment, Fragment, Reconciliation, ReconciliationGap, TextFragment
from .messages import ErrorEvent, ProgressEvent, ResultEvent, RunRequest, TERMINAL_EVENTS, WorkerResponse

__all__ = [
    "AIState",
    "EntityFragment",
    "EntityList",
    "ErrorEvent",
    "Fragment",
    "LabelScore",
    "ProgressEvent",
    "ProgressSnapshot",
    "RawEntity",
    "Reconciliation",
    "ReconciliationGap",
    "ResultEvent",
    "RunMetrics",
    "RunRequest",
    "SentimentOutput",
    "Status",
    "SummaryOutput",
    "TERMINAL_EVENTS",
    "TaskId",
    "TaskOutput",
    "TaskProfile",
    "TaskSuggestion",
    "TextFragment",
    "WorkerResponse",
]
