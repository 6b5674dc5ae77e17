"""Configuration exceptions.

Raised for programmer errors such as an unknown task id or a run request
without a model reference. These are never papered over with a default.
"""


class ConfigurationError(LookupError):
    """Raised when a task id or model configuration cannot be resolved."""


__all__ = ["ConfigurationError"]
