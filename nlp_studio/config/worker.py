"""Inference worker runtime settings."""

from __future__ import annotations

import os
from typing import Final

from ..utils.env import env_str


# 'auto' picks cuda when available, else cpu
WORKER_DEVICE = env_str("WORKER_DEVICE", "auto").lower()

# How long callers block in WorkerClient.wait() before giving up
WORKER_RESULT_TIMEOUT_S = float(os.getenv("WORKER_RESULT_TIMEOUT_S", "300"))

# Hub revision (branch, tag or commit) used for every model download
HF_REVISION = os.getenv("HF_REVISION") or None

# Files fetched from the Hub before the pipeline is built. Weights are taken
# from safetensors when the repo has them, otherwise from the torch bin.
HF_CONFIG_PATTERNS: Final = ("*.json", "*.txt", "*.model")
HF_WEIGHT_PATTERNS: Final = ("*.safetensors",)
HF_FALLBACK_WEIGHT_PATTERNS: Final = ("pytorch_model*.bin",)

# Only files whose name contains one of these are surfaced as progress
PROGRESS_FILE_MARKERS: Final = ("onnx", "model")
PROGRESS_STATUS: Final = "progress"

INFERENCE_ERROR_FALLBACK: Final = "An error occurred during inference."


__all__ = [
    "WORKER_DEVICE",
    "WORKER_RESULT_TIMEOUT_S",
    "HF_REVISION",
    "HF_CONFIG_PATTERNS",
    "HF_WEIGHT_PATTERNS",
    "HF_FALLBACK_WEIGHT_PATTERNS",
    "PROGRESS_FILE_MARKERS",
    "PROGRESS_STATUS",
    "INFERENCE_ERROR_FALLBACK",
]
