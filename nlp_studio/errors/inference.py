"""Inference provider exceptions.

Both are reported to the client as a single terminal error event carrying
the original failure message. Neither is retried.
"""


class LoadError(Exception):
    """Raised when the provider fails to fetch or initialize a pipeline."""


class InferenceError(Exception):
    """Raised when a pipeline fails during execution.

    Also covers output the worker cannot validate for the task, which is
    treated as a failed execution rather than passed through.
    """


__all__ = ["LoadError", "InferenceError"]
