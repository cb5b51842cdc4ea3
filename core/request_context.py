"""
Request Context - deadlines and cancellation

Each inbound request runs inside inbound_request_scope(), which attaches the
extracted trace context and starts the request's deadline. Outbound calls
read remaining_timeout() to bound themselves, and run_until_disconnected()
cancels the pipeline when the caller goes away.
"""

import asyncio
import logging
import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Awaitable, Dict, Iterator, Mapping, Optional

from opentelemetry import context as otel_context
from starlette.requests import Request

from .tracing import extract_trace_context

logger = logging.getLogger(__name__)

DEADLINE_HEADER = "X-Request-Timeout-Ms"

# nginx's "client closed request"
CLIENT_CLOSED_REQUEST = 499

_request_deadline: ContextVar[Optional[float]] = ContextVar("request_deadline", default=None)


class ClientDisconnectedError(Exception):
    """Raised when the inbound client disconnects mid-request"""


# =============================================================================
# Deadlines
# =============================================================================

def budget_from_headers(headers: Mapping[str, str], default_timeout: float) -> float:
    """
    Work out the request budget in seconds.

    The caller's remaining budget (DEADLINE_HEADER, milliseconds) only ever
    shortens the configured timeout.
    """
    raw = headers.get(DEADLINE_HEADER)
    if not raw:
        return default_timeout
    try:
        caller_budget = int(raw) / 1000.0
    except ValueError:
        logger.debug(f"Ignoring malformed {DEADLINE_HEADER} header: {raw!r}")
        return default_timeout
    return max(0.0, min(default_timeout, caller_budget))


@contextmanager
def request_deadline(timeout: float) -> Iterator[float]:
    """Set the deadline for everything awaited inside the block"""
    deadline = time.monotonic() + timeout
    token = _request_deadline.set(deadline)
    try:
        yield deadline
    finally:
        _request_deadline.reset(token)


def remaining_timeout() -> Optional[float]:
    """Seconds left before the current request's deadline, or None if unbounded"""
    deadline = _request_deadline.get()
    if deadline is None:
        return None
    return max(0.0, deadline - time.monotonic())


def deadline_headers() -> Dict[str, str]:
    """Headers telling a downstream service how much budget is left"""
    remaining = remaining_timeout()
    if remaining is None:
        return {}
    return {DEADLINE_HEADER: str(int(remaining * 1000))}


@contextmanager
def inbound_request_scope(headers: Mapping[str, str], default_timeout: float) -> Iterator[None]:
    """Attach the caller's trace context and start this request's deadline"""
    token = otel_context.attach(extract_trace_context(headers))
    try:
        with request_deadline(budget_from_headers(headers, default_timeout)):
            yield
    finally:
        otel_context.detach(token)


# =============================================================================
# Cancellation
# =============================================================================

async def run_until_disconnected(
    request: Request,
    awaitable: Awaitable[Any],
    poll_interval: float = 0.05,
) -> Any:
    """
    Await the request pipeline, cancelling it if the client disconnects.

    The pipeline runs as its own task (inheriting the current context), so
    cancelling it also cancels whatever downstream call it is awaiting.

    Raises:
        ClientDisconnectedError: If the client went away first
    """
    task = asyncio.ensure_future(awaitable)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.info(f"Client disconnected, cancelling {request.method} {request.url.path}")
                task.cancel()
                raise ClientDisconnectedError()
    finally:
        if not task.done():
            task.cancel()


__all__ = [
    "DEADLINE_HEADER",
    "CLIENT_CLOSED_REQUEST",
    "ClientDisconnectedError",
    "budget_from_headers",
    "request_deadline",
    "remaining_timeout",
    "deadline_headers",
    "inbound_request_scope",
    "run_until_disconnected",
]
