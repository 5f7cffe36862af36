"""ContextPool — free list of reset Context instances."""

from __future__ import annotations

from request_chain.context import Context


class ContextPool:
    """Recycles contexts across requests. Single event loop only.

    A context is reset on release, so nothing from the previous request
    survives into the next ``acquire()``.
    """

    def __init__(self, max_size: int = 256) -> None:
        self._max_size = max_size
        self._free: list[Context] = []

    def acquire(self) -> Context:
        if self._free:
            return self._free.pop()
        return Context()

    def release(self, ctx: Context) -> None:
        ctx.reset()
        if len(self._free) < self._max_size:
            self._free.append(ctx)

    def __len__(self) -> int:
        return len(self._free)
