"""ChainApp — ASGI dispatcher that drives a handler chain per request."""

from __future__ import annotations

import logging

from starlette.requests import Request
from starlette.types import Receive, Scope, Send

from request_chain._types import Handler
from request_chain.context import Context
from request_chain.exceptions import (
    ChainAbort,
    ChainError,
    ChainException,
    ChainInternalError,
)
from request_chain.pool import ContextPool
from request_chain.response import ResponseWriter

logger = logging.getLogger(__name__)


class ChainApp:
    """ASGI application running an ordered handler chain for every request.

    Route parameters are taken from ``scope["path_params"]``, so the app can
    be used as the endpoint of a Starlette or FastAPI ``Route``::

        app = Starlette(routes=[Route("/users/{id}", ChainApp(auth, show_user))])
    """

    def __init__(
        self,
        *handlers: Handler,
        pool: ContextPool | None = None,
        debug: bool = False,
    ) -> None:
        self._handlers: list[Handler] = list(handlers)
        self._pool = pool if pool is not None else ContextPool()
        self._debug = debug

    def use(self, *handlers: Handler) -> ChainApp:
        self._handlers.extend(handlers)
        return self

    @property
    def handlers(self) -> tuple[Handler, ...]:
        return tuple(self._handlers)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            raise ChainError(f"Unsupported ASGI scope type: {scope['type']!r}")

        request = Request(scope, receive)
        response = ResponseWriter(send)
        ctx = self._pool.acquire()
        ctx.init(response, request, self._handlers)
        ctx.set_params(scope.get("path_params", {}))

        if self._debug:
            logger.debug(
                "%s %s -> %s (%d handlers)",
                request.method,
                request.url.path,
                ctx.handler_name(),
                len(self._handlers),
            )

        try:
            await self._dispatch(ctx, response)
            await response.finish()
        finally:
            self._pool.release(ctx)

    async def _dispatch(self, ctx: Context, response: ResponseWriter) -> None:
        try:
            await ctx.next()
        except ChainAbort as exc:
            ctx.abort()
            if response.started:
                logger.warning(
                    "Chain aborted after response started: %s", exc.detail
                )
                return
            await _write_error(response, exc.status_code, exc.detail)
        except ChainException:
            raise
        except Exception as exc:
            logger.exception(
                "Unhandled error in %s for %s %s",
                ctx.handler_name(),
                ctx.request.method,
                ctx.request.url.path,
            )
            wrapped = ChainInternalError("Internal Server Error", cause=exc)
            if response.started:
                raise wrapped from exc
            await _write_error(response, 500, wrapped.detail)


async def _write_error(response: ResponseWriter, status_code: int, detail: str) -> None:
    response.write_header(status_code)
    response.headers["content-type"] = "text/plain; charset=utf-8"
    await response.write(detail.encode("utf-8"))
