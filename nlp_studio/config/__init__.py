"""Aggregator of configuration modules.

This module re-exports the config API from smaller modules:
- models: model reference per task and quantization switch
- inference: per-task pipeline call parameters
- router: smart-detect thresholds and keywords
- worker: device, timeouts, download and progress filters
- display: trigger-word vocabularies and fallback strings
- logging: log level and format
"""

from .models import (
    SENTIMENT_MODEL,
    NER_MODEL,
    SUMMARIZATION_MODEL,
    QUANTIZE_MODELS,
)
from .inference import TASK_INFERENCE_OPTIONS
from .worker import (
    WORKER_DEVICE,
    WORKER_RESULT_TIMEOUT_S,
    HF_REVISION,
)
from .logging import (
    APP_LOG_LEVEL,
    APP_LOG_FORMAT,
    APP_LOG_DATEFMT,
)

__all__ = [
    "SENTIMENT_MODEL",
    "NER_MODEL",
    "SUMMARIZATION_MODEL",
    "QUANTIZE_MODELS",
    "TASK_INFERENCE_OPTIONS",
    "WORKER_DEVICE",
    "WORKER_RESULT_TIMEOUT_S",
    "HF_REVISION",
    "APP_LOG_LEVEL",
    "APP_LOG_FORMAT",
    "APP_LOG_DATEFMT",
]
