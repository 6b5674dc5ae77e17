"""Background inference worker.

The worker runs on its own daemon thread and communicates only through two
queues:

    inbox  (client -> worker): RunRequest, or None to stop
    outbox (worker -> client): ProgressEvent*, then one ResultEvent or ErrorEvent

Requests are handled strictly one at a time, so the pipeline cache is only
ever touched from the worker thread. Each request produces exactly one
terminal event; failures are reported, never retried.
"""

from __future__ import annotations

import logging
import threading
import time
from queue import Queue
from typing import TYPE_CHECKING, Any

from nlp_studio.config.worker import (
    INFERENCE_ERROR_FALLBACK,
    PROGRESS_FILE_MARKERS,
    PROGRESS_STATUS,
)
from nlp_studio.errors import ConfigurationError, InferenceError, LoadError, classify_error
from nlp_studio.logging import log_context
from nlp_studio.state import ErrorEvent, ProgressEvent, ResultEvent, RunRequest, WorkerResponse

from .cache import PipelineCache
from .options import inference_options
from .outputs import parse_output

if TYPE_CHECKING:
    from .provider import InferenceProvider

logger = logging.getLogger(__name__)


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000.0


def is_model_file(filename: str) -> bool:
    """Whether a downloaded file is worth surfacing as load progress."""
    return any(marker in filename for marker in PROGRESS_FILE_MARKERS)


class InferenceWorker:
    """Own a pipeline cache and serve run requests on a background thread.

    Attributes:
        provider: Loads and invokes pipelines (``TransformersProvider`` by default).
        cache: Loaded pipelines keyed by ``(pipeline_kind, model_ref)``.
    """

    def __init__(
        self,
        provider: InferenceProvider | None = None,
        *,
        cache: PipelineCache | None = None,
        start: bool = True,
        name: str = "inference-worker",
    ) -> None:
        if provider is None:
            from .provider import TransformersProvider  # noqa: PLC0415

            provider = TransformersProvider()
        self.provider = provider
        self.cache = cache if cache is not None else PipelineCache()
        self._name = name
        self._inbox: Queue[RunRequest | None] = Queue()
        self._outbox: Queue[WorkerResponse] = Queue()
        self._thread: threading.Thread | None = None
        if start:
            self.start()

    # ============================================================================
    # Lifecycle
    # ============================================================================

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._thread = threading.Thread(target=self._worker_loop, name=self._name, daemon=True)
        self._thread.start()

    def close(self, timeout: float | None = 5.0) -> None:
        """Stop the thread after the request in progress (if any) finishes."""
        thread = self._thread
        if thread is None:
            return
        self._inbox.put(None)
        thread.join(timeout)
        if thread.is_alive():
            logger.warning("worker: thread %s still busy after %.1fs; leaving it to exit", self._name, timeout)
        self._thread = None

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def outbox(self) -> Queue[WorkerResponse]:
        return self._outbox

    def post(self, request: RunRequest) -> None:
        self._inbox.put(request)

    # ============================================================================
    # Request handling
    # ============================================================================

    def _emit(self, response: WorkerResponse) -> None:
        self._outbox.put(response)

    def _forward_progress(self, run_id: int, event: dict[str, Any]) -> None:
        filename = str(event.get("file") or "")
        if event.get("status") != PROGRESS_STATUS or not is_model_file(filename):
            return
        try:
            percentage = float(event.get("progress", 0.0))
        except (TypeError, ValueError):
            percentage = 0.0
        self._emit(
            ProgressEvent(
                run_id=run_id,
                file=filename,
                percentage=max(0.0, min(100.0, percentage)),
                phase=str(event.get("status")),
            )
        )

    def _load(self, request: RunRequest) -> tuple[Any, float | None]:
        handle = self.cache.get(request.pipeline_kind, request.model_ref)
        if handle is not None:
            return handle, None

        logger.info("worker: loading model %s (%s)", request.model_ref, request.pipeline_kind)
        started = time.perf_counter()
        try:
            handle = self.provider.load(
                request.pipeline_kind,
                request.model_ref,
                quantized=request.quantized,
                on_progress=lambda event: self._forward_progress(request.run_id, event),
            )
        except Exception as exc:
            raise LoadError(str(exc)) from exc
        load_time_ms = _elapsed_ms(started)
        self.cache.put(request.pipeline_kind, request.model_ref, handle)
        logger.info("worker: model loaded in %.1fms", load_time_ms)
        return handle, load_time_ms

    def _run(self, request: RunRequest) -> ResultEvent:
        if not request.model_ref or not request.pipeline_kind:
            raise ConfigurationError("Invalid configuration: model reference and pipeline kind are required.")
        options = inference_options(request.task_id)
        handle, load_time_ms = self._load(request)

        logger.debug("worker: running inference")
        started = time.perf_counter()
        try:
            raw = self.provider.invoke(handle, request.text, options)
        except Exception as exc:
            raise InferenceError(str(exc)) from exc
        inference_time_ms = _elapsed_ms(started)

        data = parse_output(request.task_id, raw)
        logger.info("worker: inference complete in %.1fms", inference_time_ms)
        return ResultEvent(
            run_id=request.run_id,
            data=data,
            inference_time_ms=inference_time_ms,
            load_time_ms=load_time_ms,
        )

    def handle_request(self, request: RunRequest) -> None:
        """Process one request, posting progress and exactly one terminal event."""
        with log_context(run_id=str(request.run_id), task_id=request.task_id):
            try:
                response: WorkerResponse = self._run(request)
            except Exception as exc:  # noqa: BLE001
                category = classify_error(exc)
                if category == "configuration":
                    logger.warning("worker: rejected request: %s", exc)
                else:
                    logger.error("worker: run failed category=%s: %s", category, exc, exc_info=exc)
                response = ErrorEvent(run_id=request.run_id, message=str(exc) or INFERENCE_ERROR_FALLBACK)
            self._emit(response)

    def _worker_loop(self) -> None:
        """Background worker: take requests off the inbox until told to stop."""
        while True:
            request = self._inbox.get()
            if request is None:
                break
            self.handle_request(request)


__all__ = ["InferenceWorker", "is_model_file"]
