"""Inference provider seam and its transformers implementation.

The worker only talks to an ``InferenceProvider``:

    load(pipeline_kind, model_ref, quantized=..., on_progress=...) -> handle
    invoke(handle, text, options) -> raw output

``TransformersProvider`` is the production implementation:

1. Download:
   - lists the repo files on the Hub and fetches config, tokenizer and
     weight files one at a time, reporting download percentages per file
     to ``on_progress`` through a tqdm class
   - prefers safetensors weights and skips ONNX/TF/Flax variants
   - skipped for local directories and when HF_HUB_OFFLINE is set
2. Pipeline:
   - ``transformers.pipeline`` on the configured device
3. Quantization:
   - dynamic int8 quantization of linear layers when running on CPU
"""

from __future__ import annotations

import fnmatch
import logging
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any, Protocol

import torch
from huggingface_hub import constants as hf_constants
from huggingface_hub import hf_hub_download, list_repo_files
from huggingface_hub.utils import tqdm as hf_tqdm
from transformers import pipeline

from nlp_studio.config.worker import (
    HF_CONFIG_PATTERNS,
    HF_FALLBACK_WEIGHT_PATTERNS,
    HF_REVISION,
    HF_WEIGHT_PATTERNS,
    WORKER_DEVICE,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[dict[str, Any]], None]


class InferenceProvider(Protocol):
    def load(
        self,
        pipeline_kind: str,
        model_ref: str,
        *,
        quantized: bool,
        on_progress: ProgressCallback | None = None,
    ) -> Any: ...

    def invoke(self, handle: Any, text: str, options: Mapping[str, Any]) -> Any: ...


def resolve_device(device: str) -> str:
    if device == "auto":
        return "cuda" if torch.cuda.is_available() else "cpu"
    return device


def _matches(filename: str, patterns: Iterable[str]) -> bool:
    return any(fnmatch.fnmatch(filename, pattern) for pattern in patterns)


def select_model_files(files: Iterable[str]) -> list[str]:
    """Pick the files a PyTorch pipeline needs from a Hub file listing."""
    files = [name for name in files if "/" not in name]
    weights = [name for name in files if _matches(name, HF_WEIGHT_PATTERNS)]
    if not weights:
        weights = [name for name in files if _matches(name, HF_FALLBACK_WEIGHT_PATTERNS)]
    configs = [name for name in files if _matches(name, HF_CONFIG_PATTERNS)]
    return sorted(configs) + sorted(weights)


def progress_bar_class(filename: str, on_progress: ProgressCallback) -> type[hf_tqdm]:
    """Build a tqdm class that reports download percentages for ``filename``.

    Bytes are counted here (starting from ``initial`` on resumed downloads)
    rather than read from ``n`` after the update, so reporting keeps
    working when progress bars are disabled (HF_HUB_DISABLE_PROGRESS_BARS).
    """

    class _FileProgress(hf_tqdm):
        def update(self, n=1):
            received = getattr(self, "_received", self.n) + (n or 0)
            self._received = received
            if self.total:
                percentage = min(100.0, 100.0 * received / self.total)
                on_progress({"status": "progress", "file": filename, "progress": percentage})
            return super().update(n)

    return _FileProgress


class TransformersProvider:
    """Load Hugging Face pipelines and run them under ``torch.inference_mode``."""

    def __init__(self, *, device: str | None = None, revision: str | None = None) -> None:
        self.device = resolve_device(device or WORKER_DEVICE)
        self.revision = revision if revision is not None else HF_REVISION

    # ============================================================================
    # Internal helpers
    # ============================================================================

    @staticmethod
    def _emit(on_progress: ProgressCallback | None, status: str, filename: str, progress: float) -> None:
        if on_progress is not None:
            on_progress({"status": status, "file": filename, "progress": progress})

    def _fetch(self, model_ref: str, on_progress: ProgressCallback | None) -> None:
        if Path(model_ref).is_dir():
            return
        if hf_constants.HF_HUB_OFFLINE:
            logger.info("provider: offline mode, using cached files for %s", model_ref)
            return
        filenames = select_model_files(list_repo_files(model_ref, revision=self.revision))
        for filename in filenames:
            self._emit(on_progress, "initiate", filename, 0.0)
            download_kwargs: dict[str, Any] = {}
            if on_progress is not None:
                download_kwargs["tqdm_class"] = progress_bar_class(filename, on_progress)
            hf_hub_download(repo_id=model_ref, filename=filename, revision=self.revision, **download_kwargs)
            # Cached files never open a progress bar
            self._emit(on_progress, "progress", filename, 100.0)
            self._emit(on_progress, "done", filename, 100.0)
        logger.debug("provider: fetched %d files for %s", len(filenames), model_ref)

    def _quantize(self, handle: Any, model_ref: str) -> None:
        if self.device != "cpu":
            logger.info("provider: dynamic quantization is CPU-only; keeping full precision for %s", model_ref)
            return
        try:
            handle.model = torch.ao.quantization.quantize_dynamic(
                handle.model,
                {torch.nn.Linear},
                dtype=torch.qint8,
            )
        except Exception as exc:  # noqa: BLE001
            logger.warning("provider: quantization failed for %s, running full precision: %s", model_ref, exc)

    # ============================================================================
    # Public API
    # ============================================================================

    def load(
        self,
        pipeline_kind: str,
        model_ref: str,
        *,
        quantized: bool,
        on_progress: ProgressCallback | None = None,
    ) -> Any:
        self._fetch(model_ref, on_progress)
        handle = pipeline(pipeline_kind, model=model_ref, revision=self.revision, device=self.device)
        if quantized:
            self._quantize(handle, model_ref)
        logger.info(
            "provider: ready kind=%s model=%s device=%s quantized=%s",
            pipeline_kind,
            model_ref,
            self.device,
            quantized,
        )
        return handle

    def invoke(self, handle: Any, text: str, options: Mapping[str, Any]) -> Any:
        with torch.inference_mode():
            return handle(text, **options)


__all__ = [
    "InferenceProvider",
    "ProgressCallback",
    "progress_bar_class",
    "TransformersProvider",
    "resolve_device",
    "select_model_files",
]
