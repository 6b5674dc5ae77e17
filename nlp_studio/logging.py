"""Run/task log fields and process logging setup.

Every record logged while a run is being handled carries ``run_id`` and
``task_id`` attributes ("-" outside a run), so the default format can
print them next to the message.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token

_FIELDS: dict[str, ContextVar[str]] = {
    "run_id": ContextVar("run_id", default="-"),
    "task_id": ContextVar("task_id", default="-"),
}

LogTokens = list[tuple[ContextVar[str], Token[str]]]


def set_log_context(*, run_id: str | None = None, task_id: str | None = None) -> LogTokens:
    """Set the given fields; pass the returned tokens to ``reset_log_context``."""
    tokens: LogTokens = []
    for name, value in (("run_id", run_id), ("task_id", task_id)):
        if value is not None:
            var = _FIELDS[name]
            tokens.append((var, var.set(value)))
    return tokens


def reset_log_context(tokens: LogTokens) -> None:
    for var, token in reversed(tokens):
        var.reset(token)


@contextmanager
def log_context(*, run_id: str | None = None, task_id: str | None = None) -> Iterator[None]:
    tokens = set_log_context(run_id=run_id, task_id=task_id)
    try:
        yield
    finally:
        reset_log_context(tokens)


def current_log_context() -> dict[str, str]:
    return {name: var.get() for name, var in _FIELDS.items()}


def install_log_context() -> None:
    """Wrap the LogRecord factory so records get the current run fields. Idempotent."""
    if getattr(install_log_context, "_installed", False):
        return

    base_factory = logging.getLogRecordFactory()

    def record_factory(*args, **kwargs):
        record = base_factory(*args, **kwargs)
        for name, var in _FIELDS.items():
            setattr(record, name, var.get())
        return record

    logging.setLogRecordFactory(record_factory)
    install_log_context._installed = True  # type: ignore[attr-defined]


def configure_logging(level: str | None = None) -> None:
    """Set up root logging for the CLI.

    An existing root handler (pytest, an embedding application) is left as
    configured; only the ``nlp_studio`` logger level is applied then.
    """
    from nlp_studio.config.logging import APP_LOG_DATEFMT, APP_LOG_FORMAT, APP_LOG_LEVEL  # noqa: PLC0415

    resolved_level = (level or APP_LOG_LEVEL).upper()
    install_log_context()
    if not logging.getLogger().handlers:
        logging.basicConfig(level=resolved_level, format=APP_LOG_FORMAT, datefmt=APP_LOG_DATEFMT)
    logging.getLogger("nlp_studio").setLevel(resolved_level)


__all__ = [
    "configure_logging",
    "current_log_context",
    "install_log_context",
    "log_context",
    "reset_log_context",
    "set_log_context",
]
