"""Correlation ID context, forwarded to the backend as request headers.

The HTTP transport reads both ids on every request and sends them as
``X-Correlation-ID`` / ``X-Causation-ID``. Values live in ``ContextVar`` so
concurrent tasks never see each other's ids.
"""

from __future__ import annotations

import contextlib
import uuid
from collections.abc import Iterator
from contextvars import ContextVar

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_causation_id: ContextVar[str | None] = ContextVar("causation_id", default=None)


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())


def get_correlation_id() -> str | None:
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None) -> None:
    _correlation_id.set(correlation_id)


def get_causation_id() -> str | None:
    return _causation_id.get()


def set_causation_id(causation_id: str | None) -> None:
    _causation_id.set(causation_id)


@contextlib.contextmanager
def correlation_scope(
    correlation_id: str | None = None,
    causation_id: str | None = None,
) -> Iterator[str]:
    """
    Tag every request issued inside the block with the same ids.

    A missing *correlation_id* is generated. Previous values are restored
    on exit, even when the block raises::

        with correlation_scope() as cid:
            await repo.read("1")
            await repo.query(spec)
    """
    cid = correlation_id or generate_correlation_id()
    correlation_token = _correlation_id.set(cid)
    causation_token = _causation_id.set(causation_id)
    try:
        yield cid
    finally:
        _causation_id.reset(causation_token)
        _correlation_id.reset(correlation_token)
