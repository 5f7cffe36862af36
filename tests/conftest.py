"""Shared pytest fixtures for request-chain tests."""

from __future__ import annotations

from typing import Any

import pytest
from starlette.requests import Request

from request_chain.context import Context
from request_chain.response import ResponseWriter


class SendRecorder:
    """ASGI ``send`` stand-in that keeps every message."""

    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def __call__(self, message: dict[str, Any]) -> None:
        self.messages.append(message)

    @property
    def status(self) -> int | None:
        for message in self.messages:
            if message["type"] == "http.response.start":
                return int(message["status"])
        return None

    @property
    def body(self) -> bytes:
        return b"".join(
            m["body"] for m in self.messages if m["type"] == "http.response.body"
        )


@pytest.fixture
def make_request() -> Any:
    """Factory for creating Starlette Request objects."""

    def _make(
        method: str = "GET",
        path: str = "/",
        headers: dict[str, str] | None = None,
        query_string: str = "",
        body: bytes = b"",
    ) -> Request:
        scope: dict[str, Any] = {
            "type": "http",
            "method": method,
            "scheme": "http",
            "server": ("test", 80),
            "path": path,
            "query_string": query_string.encode(),
            "headers": [
                (k.lower().encode(), v.encode()) for k, v in (headers or {}).items()
            ],
            "root_path": "",
        }

        async def receive() -> dict[str, Any]:
            return {"type": "http.request", "body": body, "more_body": False}

        return Request(scope, receive)

    return _make


@pytest.fixture
def send() -> SendRecorder:
    return SendRecorder()


@pytest.fixture
def make_context(make_request: Any, send: SendRecorder) -> Any:
    """Factory for contexts bound to a fresh request and the recorded send."""

    def _make(*handlers: Any, **request_kwargs: Any) -> Context:
        return Context(ResponseWriter(send), make_request(**request_kwargs), handlers)

    return _make
