"""Context — per-request execution context and handler-chain driver."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Mapping
from typing import Any

from starlette.datastructures import URL
from starlette.requests import Request

from request_chain._types import Handler, HandlersChain
from request_chain.exceptions import ContextReleased
from request_chain.params import Params
from request_chain.response import ResponseWriter

# Cursor value that is larger than any chain length; next() never runs past it.
ABORT_INDEX = sys.maxsize // 2


def name_of_handler(handler: Handler | None) -> str:
    if handler is None:
        return ""
    module = getattr(handler, "__module__", None)
    name = getattr(handler, "__qualname__", None) or type(handler).__qualname__
    return f"{module}.{name}" if module else name


class Context:
    """Execution context for one in-flight request.

    Holds the request/response pair, the handler chain and a shared cursor
    into it. The cursor only moves forward. ``next()`` advances it and runs
    the handler it lands on; a handler that awaits ``ctx.next()`` runs the
    rest of the chain before continuing, and a handler that returns without
    calling it stops the chain.

    A redundant ``next()`` call resumes from the shared cursor, not from the
    caller's position: it never re-runs a handler the cursor has passed, but
    it does run handlers that a downstream short-circuit left behind. Nothing
    guards against that.

    The store (``values``) holds type-erased values; callers check the type
    they expect. Neither the store nor the params are synchronized.
    """

    def __init__(
        self,
        response: ResponseWriter | None = None,
        request: Request | None = None,
        handlers: HandlersChain = (),
    ) -> None:
        self._response = response
        self._request = request
        self._index = -1
        self._params = Params()
        self._values: dict[str, Any] = {}
        self._handlers: list[Handler] = list(handlers)

    def init(
        self,
        response: ResponseWriter,
        request: Request,
        handlers: HandlersChain,
    ) -> None:
        """Bind a request and re-arm the context. Params are left untouched."""
        self._response = response
        self._request = request
        self._index = -1
        self._values = {}
        self._handlers = list(handlers)

    async def next(self) -> None:
        """Run the handler after the cursor; it decides whether the chain goes on.

        Returns once that handler, and everything it continued into, is done.
        """
        if self._index < ABORT_INDEX:
            self._index += 1
        # Bound is read on every call so handlers appended mid-flight run.
        if self._index < len(self._handlers):
            await self._handlers[self._index](self)

    def abort(self) -> None:
        """Skip every remaining handler, including on later next() calls."""
        self._index = ABORT_INDEX

    def is_aborted(self) -> bool:
        return self._index >= ABORT_INDEX

    @property
    def index(self) -> int:
        return self._index

    def append_handlers(self, *handlers: Handler) -> None:
        self._handlers.extend(handlers)

    @property
    def handlers(self) -> tuple[Handler, ...]:
        return tuple(self._handlers)

    def handler(self) -> Handler | None:
        """Return the main (last) handler of the chain."""
        return self._handlers[-1] if self._handlers else None

    def handler_name(self) -> str:
        return name_of_handler(self.handler())

    def reset(self) -> None:
        self._response = None
        self._request = None
        self._index = -1
        self._params = Params()
        self._values = {}
        self._handlers = []

    def copy(self) -> Context:
        """Return a detached snapshot that can outlive the dispatch.

        The copy shares the request and response, owns clones of the store
        and params, and has no chain: ``next()`` on it does nothing.
        """
        ctx = Context(self._response, self._request)
        ctx._params = Params(self._params)
        ctx._values = dict(self._values)
        ctx._index = ABORT_INDEX
        return ctx

    # -- store --

    @property
    def values(self) -> dict[str, Any]:
        return self._values

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    # -- getters/setters --

    @property
    def request(self) -> Request:
        if self._request is None:
            raise ContextReleased()
        return self._request

    @property
    def response(self) -> ResponseWriter:
        if self._response is None:
            raise ContextReleased()
        return self._response

    @property
    def params(self) -> Params:
        return self._params

    def set_params(
        self, params: Params | Mapping[str, Any] | Iterable[tuple[str, Any]]
    ) -> None:
        self._params = params if isinstance(params, Params) else Params(params)

    # -- request/response helpers --

    @property
    def url(self) -> URL:
        return self.request.url

    async def get_raw_data(self) -> bytes:
        return await self.request.body()

    async def write(self, data: bytes) -> int:
        return await self.response.write(data)

    async def write_bytes(self, data: bytes) -> int:
        return await self.response.write(data)

    async def write_string(self, text: str) -> int:
        return await self.response.write(text.encode("utf-8"))
