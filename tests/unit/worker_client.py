"""Unit tests for the worker orchestration client."""

from __future__ import annotations

import logging
import threading
from queue import Queue
from types import SimpleNamespace

import pytest

from nlp_studio.client import WorkerClient
from nlp_studio.state import (
    AIState,
    EntityList,
    ErrorEvent,
    ProgressEvent,
    ProgressSnapshot,
    ResultEvent,
    RunMetrics,
    SummaryOutput,
)
from nlp_studio.worker import InferenceWorker
from tests.helpers.provider import scripted_provider

NER_SENTENCE = "Elon Musk announced that SpaceX plans to launch the Starship rocket."


class _RecordingWorker:
    """Worker stand-in that records requests and never answers on its own."""

    def __init__(self) -> None:
        self.posted = []
        self.outbox: Queue = Queue()
        self.closed = False

    def post(self, request) -> None:
        self.posted.append(request)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def worker() -> _RecordingWorker:
    return _RecordingWorker()


@pytest.fixture
def client(worker: _RecordingWorker) -> WorkerClient:
    return WorkerClient(worker)  # type: ignore[arg-type]


# --- run_task ---


def test_run_task_posts_one_request_and_enters_loading(client: WorkerClient, worker: _RecordingWorker) -> None:
    run_id = client.run_task("ner", NER_SENTENCE)

    assert run_id == 1
    assert client.active_run == 1
    assert client.state == AIState(status="loading")
    (request,) = worker.posted
    assert request.run_id == 1
    assert request.task_id == "ner"
    assert request.pipeline_kind == "token-classification"
    assert request.text == NER_SENTENCE


def test_run_ids_increase(client: WorkerClient) -> None:
    assert client.run_task("sentiment", "a") == 1
    assert client.run_task("sentiment", "b") == 2


def test_whitespace_text_is_a_no_op(client: WorkerClient, worker: _RecordingWorker) -> None:
    seen = []
    client.subscribe(seen.append)
    before = client.state

    assert client.run_task("sentiment", "   ") is None

    assert client.state is before
    assert worker.posted == []
    assert seen == []


def test_unknown_task_is_logged_and_ignored(
    client: WorkerClient,
    worker: _RecordingWorker,
    caplog: pytest.LogCaptureFixture,
) -> None:
    caplog.set_level(logging.ERROR, logger="nlp_studio.client.client")

    assert client.run_task("translation", "hola") is None

    assert worker.posted == []
    assert client.state == AIState()
    assert any("translation" in record.getMessage() for record in caplog.records)


def test_new_run_clears_previous_result_and_metrics(client: WorkerClient) -> None:
    client.run_task("summarization", "long text")
    client.handle_response(ResultEvent(run_id=1, data=SummaryOutput("short"), inference_time_ms=5.0))

    client.run_task("summarization", "more text")

    assert client.state.status == "loading"
    assert client.state.result is None
    assert client.state.metrics is None


# --- responses ---


def test_progress_keeps_loading_with_snapshot(client: WorkerClient) -> None:
    client.run_task("ner", NER_SENTENCE)

    applied = client.handle_response(ProgressEvent(run_id=1, file="model.safetensors", percentage=42.0, phase="progress"))

    assert applied is True
    assert client.state.status == "loading"
    assert client.state.progress == ProgressSnapshot(file="model.safetensors", percentage=42.0, phase="progress")


def test_result_moves_to_ready_and_clears_progress(client: WorkerClient) -> None:
    client.run_task("ner", NER_SENTENCE)
    client.handle_response(ProgressEvent(run_id=1, file="model.safetensors", percentage=100.0, phase="progress"))

    client.handle_response(
        ResultEvent(run_id=1, data=EntityList(entities=()), inference_time_ms=12.0, load_time_ms=800.0)
    )

    assert client.state == AIState(
        status="ready",
        result=EntityList(entities=()),
        metrics=RunMetrics(inference_time_ms=12.0, load_time_ms=800.0),
    )
    assert client.state.is_terminal


def test_error_moves_to_error_and_clears_progress(client: WorkerClient) -> None:
    client.run_task("sentiment", "fine")
    client.handle_response(ProgressEvent(run_id=1, file="model.onnx", percentage=10.0, phase="progress"))

    client.handle_response(ErrorEvent(run_id=1, message="boom"))

    assert client.state.status == "error"
    assert client.state.error == "boom"
    assert client.state.progress is None


def test_new_run_is_accepted_after_error(client: WorkerClient, worker: _RecordingWorker) -> None:
    client.run_task("sentiment", "fine")
    client.handle_response(ErrorEvent(run_id=1, message="boom"))

    assert client.run_task("sentiment", "fine again") == 2
    assert client.state.status == "loading"
    assert client.state.error is None
    assert len(worker.posted) == 2


def test_unsupported_response_raises(client: WorkerClient) -> None:
    client.run_task("sentiment", "fine")

    with pytest.raises(TypeError):
        client.handle_response(SimpleNamespace(run_id=1, TYPE="bogus"))  # type: ignore[arg-type]


# --- reset and stale runs ---


def test_reset_twice_equals_reset_once(client: WorkerClient) -> None:
    client.run_task("sentiment", "fine")
    client.handle_response(ErrorEvent(run_id=1, message="boom"))

    client.reset()
    once = (client.state, client.active_run)
    client.reset()

    assert (client.state, client.active_run) == once == (AIState(), None)


def test_response_after_reset_is_discarded(client: WorkerClient) -> None:
    client.run_task("summarization", "long text")
    client.reset()

    applied = client.handle_response(ResultEvent(run_id=1, data=SummaryOutput("late"), inference_time_ms=1.0))

    assert applied is False
    assert client.state == AIState()


def test_response_for_superseded_run_is_discarded(client: WorkerClient) -> None:
    client.run_task("sentiment", "first")
    client.run_task("sentiment", "second")

    assert client.handle_response(ErrorEvent(run_id=1, message="old")) is False
    assert client.state.status == "loading"
    assert client.handle_response(ErrorEvent(run_id=2, message="new")) is True
    assert client.state.error == "new"


# --- pump / wait / listeners ---


def test_pump_drains_queued_responses(client: WorkerClient, worker: _RecordingWorker) -> None:
    client.run_task("sentiment", "fine")
    worker.outbox.put(ErrorEvent(run_id=99, message="stale"))
    worker.outbox.put(ProgressEvent(run_id=1, file="model.onnx", percentage=50.0, phase="progress"))
    worker.outbox.put(ErrorEvent(run_id=1, message="boom"))

    assert client.pump() == 2
    assert client.state.error == "boom"
    assert client.pump() == 0


def test_wait_returns_immediately_without_active_run(client: WorkerClient) -> None:
    assert client.wait(timeout=0.01) == AIState()


def test_wait_times_out_when_worker_is_silent(client: WorkerClient) -> None:
    client.run_task("sentiment", "fine")

    with pytest.raises(TimeoutError):
        client.wait(timeout=0.05)


def test_listeners_see_every_state_until_unsubscribed(client: WorkerClient) -> None:
    seen: list[str] = []
    unsubscribe = client.subscribe(lambda state: seen.append(state.status))

    client.run_task("sentiment", "fine")
    client.handle_response(ErrorEvent(run_id=1, message="boom"))
    unsubscribe()
    client.reset()

    assert seen == ["loading", "error"]


def test_context_manager_closes_worker(worker: _RecordingWorker) -> None:
    with WorkerClient(worker) as client:  # type: ignore[arg-type]
        assert client.worker is worker

    assert worker.closed


# --- with a real worker thread ---


def test_end_to_end_runs_reuse_the_loaded_pipeline() -> None:
    provider = scripted_provider()
    with WorkerClient(InferenceWorker(provider)) as client:
        client.run_task("ner", NER_SENTENCE)
        first = client.wait(timeout=5.0)
        client.run_task("ner", NER_SENTENCE)
        second = client.wait(timeout=5.0)

    assert first.status == "ready"
    assert isinstance(first.result, EntityList)
    assert first.metrics.load_time_ms is not None
    assert second.status == "ready"
    assert second.metrics.load_time_ms is None
    assert len(provider.loads) == 1


def test_in_flight_result_is_dropped_after_reset() -> None:
    gate = threading.Event()
    provider = scripted_provider(gate=gate)
    worker = InferenceWorker(provider)
    client = WorkerClient(worker)

    client.run_task("summarization", "a long article")
    client.reset()
    gate.set()
    worker.close()

    assert client.pump() == 0
    assert client.state == AIState()
    assert len(provider.invocations) == 1


def test_terminal_responses_are_logged(client: WorkerClient, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="nlp_studio.client.client")
    client.run_task("sentiment", "fine")

    client.handle_response(ProgressEvent(run_id=1, file="model.onnx", percentage=5.0, phase="progress"))
    client.handle_response(ErrorEvent(run_id=1, message="boom"))

    finished = [record.getMessage() for record in caplog.records if "finished" in record.getMessage()]
    assert finished == ["client: run 1 finished with error"]
