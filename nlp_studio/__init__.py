"""Sentiment, entity recognition and summarization behind a background worker.

Main entry points:
    nlp_studio.client.WorkerClient: run tasks and observe their state
    nlp_studio.tasks.suggest_task: smart-detect the best task for a text
    nlp_studio.entities.reconcile_entities: place NER spans on the input
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("nlp-studio")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"

__all__ = ["__version__"]
