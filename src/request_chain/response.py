"""ResponseWriter — pass-through response sink over an ASGI ``send``."""

from __future__ import annotations

import logging

from starlette.datastructures import MutableHeaders
from starlette.types import Send

from request_chain.exceptions import ResponseClosed

logger = logging.getLogger(__name__)


class ResponseWriter:
    """Streams the response straight to the ASGI server.

    The status line and headers go out with the first body write (or with
    ``finish()`` when nothing was written). Nothing is buffered.
    """

    def __init__(self, send: Send, *, status_code: int = 200) -> None:
        self._send = send
        self.status_code = status_code
        self.headers = MutableHeaders(raw=[])
        self.started = False
        self.finished = False
        self.size = 0

    def write_header(self, status_code: int) -> None:
        if self.started:
            logger.warning(
                "superfluous write_header(%d): status %d already sent",
                status_code,
                self.status_code,
            )
            return
        self.status_code = status_code

    async def write(self, data: bytes) -> int:
        if self.finished:
            raise ResponseClosed()
        if not self.started:
            await self._start()
        await self._send(
            {"type": "http.response.body", "body": bytes(data), "more_body": True}
        )
        self.size += len(data)
        return len(data)

    async def finish(self) -> None:
        if self.finished:
            return
        if not self.started:
            await self._start()
        self.finished = True
        await self._send({"type": "http.response.body", "body": b"", "more_body": False})

    async def _start(self) -> None:
        self.started = True
        await self._send(
            {
                "type": "http.response.start",
                "status": self.status_code,
                "headers": self.headers.raw,
            }
        )
