"""Unit tests for the background inference worker."""

from __future__ import annotations

import logging
from queue import Empty

import pytest

from nlp_studio.logging import install_log_context
from nlp_studio.state import (
    TERMINAL_EVENTS,
    EntityList,
    ErrorEvent,
    ProgressEvent,
    ResultEvent,
    RunRequest,
    SentimentOutput,
)
from nlp_studio.tasks import require_task_profile
from nlp_studio.worker import InferenceWorker, PipelineCache, is_model_file
from tests.helpers.provider import scripted_provider


def _request(task_id: str = "sentiment", run_id: int = 1, text: str = "great stuff", **overrides) -> RunRequest:
    profile = require_task_profile(task_id)
    fields = {
        "run_id": run_id,
        "task_id": task_id,
        "text": text,
        "model_ref": profile.model_ref,
        "pipeline_kind": profile.pipeline_kind,
        "quantized": True,
    }
    fields.update(overrides)
    return RunRequest(**fields)


def _drain(worker: InferenceWorker) -> list:
    events = []
    while True:
        try:
            events.append(worker.outbox.get_nowait())
        except Empty:
            return events


# --- happy path ---


def test_cold_run_reports_model_progress_then_result() -> None:
    provider = scripted_provider()
    worker = InferenceWorker(provider, start=False)

    worker.handle_request(_request())
    events = _drain(worker)

    progress, result = events[:-1], events[-1]
    assert [(event.file, event.percentage) for event in progress] == [
        ("model.safetensors", 40.0),
        ("model.safetensors", 100.0),
    ]
    assert all(isinstance(event, ProgressEvent) and event.run_id == 1 for event in progress)
    assert isinstance(result, ResultEvent)
    assert isinstance(result.data, SentimentOutput)
    assert result.load_time_ms is not None
    assert result.inference_time_ms >= 0.0


def test_warm_run_reuses_the_cached_pipeline() -> None:
    provider = scripted_provider()
    worker = InferenceWorker(provider, start=False)

    worker.handle_request(_request(run_id=1))
    _drain(worker)
    worker.handle_request(_request(run_id=2, text="second"))
    events = _drain(worker)

    assert len(provider.loads) == 1
    assert len(events) == 1
    (result,) = events
    assert isinstance(result, ResultEvent)
    assert result.run_id == 2
    assert result.load_time_ms is None
    assert "load_time_ms" not in result.as_dict()


def test_each_task_is_loaded_once_and_called_with_its_options() -> None:
    provider = scripted_provider()
    worker = InferenceWorker(provider, start=False)

    for run_id, task_id in enumerate(("sentiment", "ner", "summarization", "ner"), start=1):
        worker.handle_request(_request(task_id, run_id=run_id, text="Elon Musk and SpaceX"))

    assert [kind for kind, _ref, _q in provider.loads] == [
        "sentiment-analysis",
        "token-classification",
        "summarization",
    ]
    assert len(worker.cache) == 3
    assert provider.invocations[1] == ("token-classification", "Elon Musk and SpaceX", {"aggregation_strategy": "simple"})
    assert provider.invocations[2][2]["num_beams"] == 2


def test_injected_cache_skips_loading() -> None:
    provider = scripted_provider()
    cache = PipelineCache()
    profile = require_task_profile("ner")
    cache.put(profile.pipeline_kind, profile.model_ref, "token-classification")
    worker = InferenceWorker(provider, cache=cache, start=False)

    worker.handle_request(_request("ner", text="Elon Musk and SpaceX"))
    (result,) = _drain(worker)

    assert provider.loads == []
    assert isinstance(result.data, EntityList)
    assert (profile.pipeline_kind, profile.model_ref) in cache


def test_progress_is_clamped_to_percent_range() -> None:
    provider = scripted_provider(progress=({"status": "progress", "file": "onnx/model.onnx", "progress": 130},))
    worker = InferenceWorker(provider, start=False)

    worker.handle_request(_request())
    progress = _drain(worker)[0]

    assert progress.percentage == 100.0
    assert progress.phase == "progress"


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("model.safetensors", True),
        ("onnx/model_quantized.onnx", True),
        ("pytorch_model.bin", True),
        ("tokenizer.json", False),
        ("config.json", False),
    ],
)
def test_is_model_file(filename: str, expected: bool) -> None:
    assert is_model_file(filename) is expected


# --- failures ---


def test_load_failure_posts_a_single_error() -> None:
    provider = scripted_provider(load_error=OSError("repo not found"))
    worker = InferenceWorker(provider, start=False)

    worker.handle_request(_request())
    events = _drain(worker)

    terminal = [event for event in events if not isinstance(event, ProgressEvent)]
    assert terminal == [ErrorEvent(run_id=1, message="repo not found")]
    assert len(worker.cache) == 0


def test_inference_failure_posts_provider_message() -> None:
    provider = scripted_provider(invoke_error=RuntimeError("boom"))
    worker = InferenceWorker(provider, start=False)

    worker.handle_request(_request())

    assert _drain(worker)[-1] == ErrorEvent(run_id=1, message="boom")


def test_empty_failure_message_uses_fallback() -> None:
    provider = scripted_provider(invoke_error=RuntimeError())
    worker = InferenceWorker(provider, start=False)

    worker.handle_request(_request())

    assert _drain(worker)[-1].message == "An error occurred during inference."


def test_malformed_output_becomes_an_error() -> None:
    provider = scripted_provider()
    provider.outputs["sentiment-analysis"] = "POSITIVE"
    worker = InferenceWorker(provider, start=False)

    worker.handle_request(_request())
    event = _drain(worker)[-1]

    assert isinstance(event, ErrorEvent)
    assert "sentiment" in event.message


def test_missing_model_reference_is_rejected_before_loading(caplog: pytest.LogCaptureFixture) -> None:
    install_log_context()
    caplog.set_level(logging.WARNING, logger="nlp_studio.worker.worker")
    provider = scripted_provider()
    worker = InferenceWorker(provider, start=False)

    worker.handle_request(_request(run_id=7, model_ref=""))

    assert _drain(worker) == [
        ErrorEvent(run_id=7, message="Invalid configuration: model reference and pipeline kind are required."),
    ]
    assert provider.loads == []
    (record,) = [r for r in caplog.records if "rejected request" in r.getMessage()]
    assert record.run_id == "7"
    assert record.task_id == "sentiment"


def test_unknown_task_is_rejected_before_loading() -> None:
    provider = scripted_provider()
    worker = InferenceWorker(provider, start=False)

    worker.handle_request(
        RunRequest(
            run_id=3,
            task_id="translation",
            text="hola",
            model_ref="some/model",
            pipeline_kind="translation",
        )
    )

    (event,) = _drain(worker)
    assert isinstance(event, ErrorEvent)
    assert "translation" in event.message
    assert provider.loads == []


# --- thread ---


def test_worker_thread_serves_requests_until_closed() -> None:
    provider = scripted_provider()
    worker = InferenceWorker(provider)
    try:
        assert worker.is_alive
        worker.post(_request(run_id=1))
        worker.post(_request(run_id=2))

        results = []
        while len(results) < 2:
            event = worker.outbox.get(timeout=5.0)
            if isinstance(event, TERMINAL_EVENTS):
                results.append(event)
    finally:
        worker.close()

    assert [event.run_id for event in results] == [1, 2]
    assert all(isinstance(event, ResultEvent) for event in results)
    assert not worker.is_alive
