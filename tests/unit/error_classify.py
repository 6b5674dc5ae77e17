"""Unit tests for exception classification."""

from __future__ import annotations

from nlp_studio.errors import ConfigurationError, InferenceError, LoadError, classify_error


def test_classify_error_known_categories() -> None:
    assert classify_error(ConfigurationError("unknown task")) == "configuration"
    assert classify_error(LoadError("download failed")) == "load"
    assert classify_error(InferenceError("bad output")) == "inference"
    assert classify_error(TimeoutError("deadline exceeded")) == "timeout"


def test_classify_error_defaults_to_unknown() -> None:
    assert classify_error(RuntimeError("boom")) == "unknown"
    assert classify_error(KeyError("ner")) == "unknown"
