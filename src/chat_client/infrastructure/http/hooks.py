"""httpx event hooks: request correlation id and timing log."""
from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

import httpx

logger = logging.getLogger(__name__)

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")

HEADER = "X-Request-ID"
_STARTED_AT = "chat_client.started_at"


@contextmanager
def correlation_scope(cid: str | None = None) -> Iterator[str]:
    """Tag every request made inside the block with one correlation id."""
    cid = cid or uuid.uuid4().hex
    token = correlation_id_ctx.set(cid)
    try:
        yield cid
    finally:
        correlation_id_ctx.reset(token)


async def attach_correlation_id(request: httpx.Request) -> None:
    request.headers[HEADER] = correlation_id_ctx.get() or uuid.uuid4().hex
    request.extensions[_STARTED_AT] = time.perf_counter()


async def log_response_timing(response: httpx.Response) -> None:
    request = response.request
    started = request.extensions.get(_STARTED_AT)
    elapsed_ms = (time.perf_counter() - started) * 1000 if started is not None else 0.0
    logger.info(
        "%s %s %s %.1fms [%s]",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
        request.headers.get(HEADER, ""),
    )
