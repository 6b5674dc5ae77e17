"""Caller-side orchestration of the inference worker.

Usage:
    from nlp_studio.client import WorkerClient

    with WorkerClient() as client:
        client.run_task("ner", text)
        state = client.wait(timeout=300)
"""

from __future__ import annotations

from .client import StateListener, WorkerClient

__all__ = ["StateListener", "WorkerClient"]
