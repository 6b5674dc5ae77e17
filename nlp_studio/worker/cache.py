"""Per-worker cache of loaded pipelines."""

from __future__ import annotations

from typing import Any

PipelineKey = tuple[str, str]


class PipelineCache:
    """Map ``(pipeline_kind, model_ref)`` to a loaded pipeline handle.

    Entries are added on first use and kept for the lifetime of the owning
    worker. There is no eviction; the task set is small and fixed.
    """

    def __init__(self) -> None:
        self._handles: dict[PipelineKey, Any] = {}

    def get(self, pipeline_kind: str, model_ref: str) -> Any | None:
        return self._handles.get((pipeline_kind, model_ref))

    def put(self, pipeline_kind: str, model_ref: str, handle: Any) -> None:
        self._handles[(pipeline_kind, model_ref)] = handle

    def __contains__(self, key: object) -> bool:
        return key in self._handles

    def __len__(self) -> int:
        return len(self._handles)


__all__ = ["PipelineCache", "PipelineKey"]
