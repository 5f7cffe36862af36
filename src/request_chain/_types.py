"""Shared type aliases."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from request_chain.context import Context

# A handler receives the context and returns nothing; continuation is ctx.next()
Handler = Callable[["Context"], Awaitable[None]]
HandlersChain = Sequence[Handler]
