"""Worker orchestration client.

Runs on the caller's thread and drives a small state machine:

    idle --run_task--> loading --progress--> loading
                       loading --result---> ready
                       loading --error----> error
    any  --reset-----> idle

Responses are only applied when the caller pumps the worker outbox
(``pump``/``wait``), so state is never mutated from the worker thread.
Every request carries a monotonic run id; responses for any other run id
(a run superseded by ``reset`` or by a newer ``run_task``) are discarded.
"""

from __future__ import annotations

import itertools
import logging
import time
from collections.abc import Callable
from dataclasses import replace
from queue import Empty

from nlp_studio.errors import ConfigurationError
from nlp_studio.state import (
    AIState,
    ErrorEvent,
    ProgressEvent,
    ProgressSnapshot,
    ResultEvent,
    RunMetrics,
    RunRequest,
    TERMINAL_EVENTS,
    WorkerResponse,
)
from nlp_studio.tasks import require_task_profile
from nlp_studio.worker import InferenceWorker

logger = logging.getLogger(__name__)

StateListener = Callable[[AIState], None]


class WorkerClient:
    """Own an ``InferenceWorker`` and expose its runs as ``AIState`` snapshots.

    One run may be in flight at a time. Calling ``run_task`` again before the
    previous run finished is outside the contract: nothing is queued, and the
    older run's responses are dropped when they arrive.
    """

    def __init__(self, worker: InferenceWorker | None = None) -> None:
        self._worker = worker if worker is not None else InferenceWorker()
        self._state = AIState()
        self._run_ids = itertools.count(1)
        self._active_run: int | None = None
        self._listeners: list[StateListener] = []

    # ============================================================================
    # Internal helpers
    # ============================================================================

    def _set_state(self, state: AIState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def _apply_progress(self, event: ProgressEvent) -> None:
        snapshot = ProgressSnapshot(file=event.file, percentage=event.percentage, phase=event.phase)
        self._set_state(replace(self._state, status="loading", progress=snapshot))

    def _apply_result(self, event: ResultEvent) -> None:
        self._set_state(
            replace(
                self._state,
                status="ready",
                result=event.data,
                metrics=RunMetrics(
                    inference_time_ms=event.inference_time_ms,
                    load_time_ms=event.load_time_ms,
                ),
                progress=None,
            )
        )

    def _apply_error(self, event: ErrorEvent) -> None:
        self._set_state(replace(self._state, status="error", error=event.message, progress=None))

    # ============================================================================
    # Public API
    # ============================================================================

    @property
    def state(self) -> AIState:
        return self._state

    @property
    def active_run(self) -> int | None:
        return self._active_run

    @property
    def worker(self) -> InferenceWorker:
        return self._worker

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with every new state; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def run_task(self, task_id: str, text: str) -> int | None:
        """Start a run of ``task_id`` on ``text``.

        Returns:
            The run id, or ``None`` when the call was ignored (blank text or
            unknown task). Ignored calls leave the state untouched and send
            nothing to the worker.
        """
        if not text or not text.strip():
            return None
        try:
            profile = require_task_profile(task_id)
        except ConfigurationError as exc:
            logger.error("client: not starting run: %s", exc)
            return None

        run_id = next(self._run_ids)
        self._active_run = run_id
        self._set_state(replace(self._state, status="loading", result=None, error=None, metrics=None))
        self._worker.post(
            RunRequest(
                run_id=run_id,
                task_id=profile.id,
                text=text,
                model_ref=profile.model_ref,
                pipeline_kind=profile.pipeline_kind,
                quantized=profile.quantized,
            )
        )
        logger.debug("client: posted run %d for task %s", run_id, profile.id)
        return run_id

    def reset(self) -> None:
        """Return to ``idle`` and forget the active run.

        The worker keeps computing whatever it was doing; its eventual
        response no longer matches a tracked run and is discarded.
        """
        self._active_run = None
        self._set_state(AIState())

    def handle_response(self, response: WorkerResponse) -> bool:
        """Apply one worker response; returns False if it was discarded as stale."""
        if self._active_run is None or response.run_id != self._active_run:
            logger.debug("client: dropping %s for stale run %s", response.TYPE, response.run_id)
            return False
        if isinstance(response, ProgressEvent):
            self._apply_progress(response)
        elif isinstance(response, ResultEvent):
            self._apply_result(response)
        elif isinstance(response, ErrorEvent):
            self._apply_error(response)
        else:
            raise TypeError(f"Unsupported worker response {response!r}")
        if isinstance(response, TERMINAL_EVENTS):
            logger.debug("client: run %d finished with %s", response.run_id, response.TYPE)
        return True

    def pump(self, timeout: float = 0.0) -> int:
        """Apply queued worker responses.

        Waits up to ``timeout`` seconds for the first response, then drains
        whatever else is already queued. Returns the number of responses
        applied (stale ones are not counted).
        """
        outbox = self._worker.outbox
        applied = 0
        try:
            response = outbox.get(timeout=timeout) if timeout > 0 else outbox.get_nowait()
        except Empty:
            return 0
        while True:
            if self.handle_response(response):
                applied += 1
            try:
                response = outbox.get_nowait()
            except Empty:
                return applied

    def wait(self, timeout: float | None = None) -> AIState:
        """Pump until the active run finishes.

        Returns immediately when no run is active.

        Raises:
            TimeoutError: If the run is still loading after ``timeout`` seconds.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while self._active_run is not None and self._state.status == "loading":
            if deadline is None:
                self.pump(timeout=1.0)
                continue
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise TimeoutError(f"Run {self._active_run} did not finish within {timeout:.1f}s")
            self.pump(timeout=remaining)
        return self._state

    def close(self) -> None:
        self._worker.close()

    def __enter__(self) -> WorkerClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["StateListener", "WorkerClient"]
