"""Console logging for the access-control engine.

Records are rendered as one line each::

    2026-10-19T09:12:44.120Z DEBUG portal_access.core.auth.evaluator [cid=-] access.permission.denied user_id=u-1 roles=Applicant permission=sponsor.modifications.authorise

Structured fields travel in ``extra`` (see :func:`log_context`) and are
appended as ``key=value`` pairs. A correlation ID bound by the host for the
current request is stamped on every record by :class:`CorrelationIdFilter`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import IO, Any

from portal_access.settings import Settings

_CORRELATION_ID: ContextVar[str | None] = ContextVar(
    "portal_access_correlation_id",
    default=None,
)

# Everything a bare LogRecord carries, plus what Formatter.format adds.
_RESERVED_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", (), None))
) | {"message", "asctime", "correlation_id", "color_message"}

_CONFIGURED_FLAG = "_portal_access_configured"

_HOST_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi")


class CorrelationIdFilter(logging.Filter):
    """Stamp ``correlation_id`` on each record from the bound request context."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = _CORRELATION_ID.get() or "-"
        return True


class ConsoleLogFormatter(logging.Formatter):
    """Single-line formatter: UTC timestamp, level, logger, cid, message, extras."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s %(levelname)-5s %(name)s [cid=%(correlation_id)s] %(message)s",
        )

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=UTC)
        return stamp.strftime(datefmt or "%Y-%m-%dT%H:%M:%S") + f".{int(record.msecs):03d}Z"

    def format(self, record: logging.LogRecord) -> str:
        # Records may reach this formatter without passing the filter.
        CorrelationIdFilter().filter(record)
        line = super().format(record)
        fields = " ".join(
            f"{key}={_render(value)}"
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        )
        return f"{line} {fields}" if fields else line


def setup_logging(settings: Settings, *, stream: IO[str] | None = None) -> None:
    """Install the console handler on the root logger.

    The level comes from ``settings.logging_level``
    (``PORTAL_ACCESS_LOGGING_LEVEL``). Repeat calls only change the level.
    """

    root = logging.getLogger()
    root.setLevel(settings.logging_level_value)
    if getattr(root, _CONFIGURED_FLAG, False):
        return

    handler = logging.StreamHandler(stream)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(ConsoleLogFormatter())
    root.handlers = [handler]

    for name in _HOST_LOGGERS:
        host_logger = logging.getLogger(name)
        host_logger.handlers.clear()
        host_logger.propagate = True

    setattr(root, _CONFIGURED_FLAG, True)


def bind_request_context(correlation_id: str | None) -> None:
    """Bind a correlation ID for the current request."""
    _CORRELATION_ID.set(correlation_id)


def clear_request_context() -> None:
    _CORRELATION_ID.set(None)


@contextmanager
def correlation_scope(correlation_id: str | None) -> Iterator[None]:
    """Bind ``correlation_id`` for the duration of the block."""

    token = _CORRELATION_ID.set(correlation_id)
    try:
        yield
    finally:
        _CORRELATION_ID.reset(token)


def log_context(
    *,
    user_id: str | None = None,
    roles: Iterable[str] | None = None,
    permission: str | None = None,
    entity_type: str | None = None,
    status: str | None = None,
    workspace: str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build the ``extra`` payload for an access decision log.

    Unset fields are omitted. ``roles`` is rendered as a sorted comma list
    (``-`` when empty) so the same principal always logs the same way::

        logger.debug(
            "access.status.denied",
            extra=log_context(user_id=snapshot.user_id, entity_type="Modification", status="InDraft"),
        )
    """

    fields = {
        "user_id": user_id,
        "roles": None if roles is None else (",".join(sorted(roles)) or "-"),
        "permission": permission,
        "entity_type": entity_type,
        "status": status,
        "workspace": workspace,
    }
    ctx = {key: value for key, value in fields.items() if value is not None}
    ctx.update(extra)
    return ctx


def _render(value: Any) -> str:
    return "null" if value is None else str(value)


__all__ = [
    "ConsoleLogFormatter",
    "CorrelationIdFilter",
    "bind_request_context",
    "clear_request_context",
    "correlation_scope",
    "log_context",
    "setup_logging",
]
