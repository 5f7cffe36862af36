"""Route parameters — Param and the ordered, unique-key Params mapping."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class Param:
    """Single matched route parameter."""

    key: str
    value: str


class Params(Mapping[str, str]):
    """Ordered route parameters produced by the router.

    Accepts a mapping or an iterable of ``(name, value)`` pairs. Names must be
    unique; iteration follows the order the router matched them in.
    """

    __slots__ = ("_items",)

    def __init__(
        self, items: Mapping[str, object] | Iterable[tuple[str, object]] = ()
    ) -> None:
        pairs = items.items() if isinstance(items, Mapping) else items
        self._items: dict[str, str] = {}
        for key, value in pairs:
            if key in self._items:
                raise ValueError(f"Duplicate route parameter: {key!r}")
            self._items[key] = str(value)

    def __getitem__(self, key: str) -> str:
        return self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Params({list(self._items.items())!r})"

    def by_name(self, name: str) -> str:
        """Return the value for ``name``, or ``""`` when it was not matched."""
        return self._items.get(name, "")

    def as_list(self) -> list[Param]:
        return [Param(key, value) for key, value in self._items.items()]
