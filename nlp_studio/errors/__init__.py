"""Centralized exception classes.

Organization:
    - configuration.py: unknown task ids and incomplete run requests
    - inference.py: pipeline load and execution failures
    - classify.py: exception-to-label mapping for logs

Entities the reconciler cannot place are not errors; they are reported as
``nlp_studio.state.ReconciliationGap`` records.
"""

from .classify import classify_error
from .configuration import ConfigurationError
from .inference import InferenceError, LoadError

__all__ = [
    "ConfigurationError",
    "InferenceError",
    "LoadError",
    "classify_error",
]
