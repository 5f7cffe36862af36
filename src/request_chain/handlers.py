"""Built-in handlers for common chain concerns."""

from __future__ import annotations

import logging
import time

from request_chain._types import Handler
from request_chain.context import Context
from request_chain.exceptions import ChainAbort

logger = logging.getLogger(__name__)


def request_logger(log: logging.Logger | None = None) -> Handler:
    """Log method, path, status and elapsed time around the rest of the chain."""
    log = log or logger

    async def handler(ctx: Context) -> None:
        start = time.perf_counter()
        await ctx.next()
        elapsed = (time.perf_counter() - start) * 1000
        log.info(
            "%s %s %d %.3fms",
            ctx.request.method,
            ctx.request.url.path,
            ctx.response.status_code,
            elapsed,
        )

    return handler


def require_header(name: str, *, status_code: int = 401) -> Handler:
    """Stop the chain with ``status_code`` when the request lacks ``name``."""

    async def handler(ctx: Context) -> None:
        if not ctx.request.headers.get(name):
            ctx.response.write_header(status_code)
            return
        await ctx.next()

    return handler


def recovery(log: logging.Logger | None = None) -> Handler:
    """Turn unexpected exceptions from later handlers into a 500 response.

    ``ChainAbort`` is left for the dispatcher to render.
    """
    log = log or logger

    async def handler(ctx: Context) -> None:
        try:
            await ctx.next()
        except ChainAbort:
            raise
        except Exception:
            log.exception(
                "Recovered from error in %s %s",
                ctx.request.method,
                ctx.request.url.path,
            )
            ctx.abort()
            response = ctx.response
            if not response.started:
                response.write_header(500)
                await response.write(b"Internal Server Error")

    return handler
