"""Background inference worker.

Architecture:
    InferenceWorker:
        Daemon thread serving RunRequests from an inbox queue:
        - loads each (pipeline_kind, model_ref) at most once
        - forwards model-file download progress
        - runs the pipeline with task-specific options
        - posts one ResultEvent or ErrorEvent per request

    PipelineCache:
        Loaded pipelines owned by a single worker instance.

    InferenceProvider / TransformersProvider:
        The seam to the inference library. Tests inject a fake provider;
        production uses transformers pipelines on torch.

Configuration (via environment):
    WORKER_DEVICE: 'auto', 'cpu', 'cuda', 'cuda:1', ...
    HF_REVISION: Hub revision used for downloads
"""

from __future__ import annotations

from .cache import PipelineCache
from .options import inference_options
from .outputs import parse_output
from .worker import InferenceWorker, is_model_file

__all__ = [
    "InferenceWorker",
    "PipelineCache",
    "inference_options",
    "is_model_file",
    "parse_output",
]
