"""Shared test doubles."""

__all__ = [
    "provider",
]
