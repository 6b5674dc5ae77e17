"""Model references for each task.

Defaults are the PyTorch checkpoints of the DistilBERT SST-2, BERT-base NER
and DistilBART CNN models. Each can be pointed at another Hub repo or a
local directory through its environment variable.
"""

from __future__ import annotations

from ..utils.env import env_flag, env_str


SENTIMENT_MODEL = env_str("SENTIMENT_MODEL", "distilbert/distilbert-base-uncased-finetuned-sst-2-english")
NER_MODEL = env_str("NER_MODEL", "dslim/bert-base-NER")
SUMMARIZATION_MODEL = env_str("SUMMARIZATION_MODEL", "sshleifer/distilbart-cnn-6-6")

# Dynamic int8 quantization of linear layers (CPU only)
QUANTIZE_MODELS = env_flag("QUANTIZE_MODELS", True)


__all__ = [
    "SENTIMENT_MODEL",
    "NER_MODEL",
    "SUMMARIZATION_MODEL",
    "QUANTIZE_MODELS",
]
