"""Request tracing middleware: trace id propagation and access logging."""

from time import perf_counter
from typing import Awaitable, Callable
from uuid import uuid4

from fastapi import Request, Response

from src.shared import (
    TRACE_ID_HEADER,
    bind_request_context,
    clear_request_context,
    get_logger,
)

logger = get_logger(__name__)


async def trace_id_middleware(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """
    Bind a trace id to every log event emitted while serving the request.

    The id is taken from the ``X-Trace-Id`` header when present, otherwise a
    new UUID4 is generated, and it is echoed back on the response.
    """
    trace_id = request.headers.get(TRACE_ID_HEADER) or str(uuid4())
    request.state.trace_id = trace_id

    clear_request_context()
    bind_request_context(
        trace_id=trace_id,
        method=request.method,
        path=request.url.path,
    )

    start = perf_counter()
    logger.info("request.started")
    try:
        response = await call_next(request)
    except Exception as exc:
        logger.error(
            "request.failed",
            elapsed_ms=round((perf_counter() - start) * 1000, 2),
            error=str(exc),
            exc_info=exc,
        )
        clear_request_context()
        raise

    response.headers[TRACE_ID_HEADER] = trace_id
    logger.info(
        "request.completed",
        status_code=response.status_code,
        elapsed_ms=round((perf_counter() - start) * 1000, 2),
    )
    clear_request_context()
    return response
