"""Tests for ResponseWriter."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from request_chain.exceptions import ResponseClosed
from request_chain.response import ResponseWriter


class TestResponseWriter:
    def test_defaults(self, send: Any) -> None:
        response = ResponseWriter(send)
        assert response.status_code == 200
        assert response.started is False
        assert response.finished is False
        assert response.size == 0
        assert send.messages == []

    async def test_first_write_sends_start(self, send: Any) -> None:
        response = ResponseWriter(send)
        response.write_header(201)
        response.headers["x-trace"] = "abc"
        await response.write(b"hi")
        start, body = send.messages
        assert start == {
            "type": "http.response.start",
            "status": 201,
            "headers": [(b"x-trace", b"abc")],
        }
        assert body == {"type": "http.response.body", "body": b"hi", "more_body": True}

    async def test_writes_are_not_buffered(self, send: Any) -> None:
        response = ResponseWriter(send)
        await response.write(b"a")
        await response.write(b"b")
        assert len(send.messages) == 3
        assert send.body == b"ab"
        assert response.size == 2

    async def test_finish_without_body(self, send: Any) -> None:
        response = ResponseWriter(send)
        response.write_header(204)
        await response.finish()
        assert send.status == 204
        assert send.messages[-1] == {
            "type": "http.response.body",
            "body": b"",
            "more_body": False,
        }
        assert response.finished is True

    async def test_finish_is_idempotent(self, send: Any) -> None:
        response = ResponseWriter(send)
        await response.finish()
        await response.finish()
        assert len(send.messages) == 2

    async def test_write_after_finish_raises(self, send: Any) -> None:
        response = ResponseWriter(send)
        await response.finish()
        with pytest.raises(ResponseClosed):
            await response.write(b"late")

    async def test_superfluous_write_header_is_ignored(
        self, send: Any, caplog: pytest.LogCaptureFixture
    ) -> None:
        response = ResponseWriter(send)
        await response.write(b"x")
        with caplog.at_level(logging.WARNING, logger="request_chain.response"):
            response.write_header(500)
        assert response.status_code == 200
        assert "superfluous write_header" in caplog.text
