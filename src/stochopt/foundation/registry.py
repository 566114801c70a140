"""
Generic registry for named components (metaheuristics, operators, problems).
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any, Callable, Generic, Iterable, TypeVar

T = TypeVar("T")


class Registry(Generic[T]):
    """
    Maps names to items.

    Keys are normalized to lower case, so ``"Rank"`` and ``"rank"`` name the
    same entry. Supports usage as a decorator::

        SELECTIONS = Registry("selection")

        @SELECTIONS.register("rank")
        def rank_selection(state, count, rng, problem): ...
    """

    def __init__(self, name: str = "Registry") -> None:
        self._name = name
        self._items: dict[str, T] = {}

    @property
    def name(self) -> str:
        return self._name

    @staticmethod
    def _normalize(key: str) -> str:
        return key.strip().lower()

    def register(self, key: str, item: T | None = None, *, override: bool = False) -> Callable[[T], T] | T:
        """
        Register an item with the given key.

        Args:
            key: The unique name for the item.
            item: The item to register. If None, returns a decorator.
            override: If True, overwrite an existing key instead of raising ValueError.
        """
        name = self._normalize(key)

        def _do_register(obj: T) -> T:
            if name in self._items and not override:
                raise ValueError(f"Key '{name}' already exists in registry '{self._name}'")
            self._items[name] = obj
            return obj

        if item is None:
            return _do_register
        return _do_register(item)

    def get(self, key: str, default: Any = ...) -> T:
        """Retrieve an item by key; raises KeyError unless a default is given."""
        name = self._normalize(key)
        if name not in self._items:
            if default is not ...:
                return default
            raise KeyError(f"Key '{name}' not found in registry '{self._name}'")
        return self._items[name]

    def suggest(self, key: str, n: int = 3) -> list[str]:
        """Registered names close to ``key``, best match first."""
        if not key:
            return []
        return get_close_matches(self._normalize(key), list(self._items), n=n, cutoff=0.6)

    def list(self) -> list[str]:
        """Return a sorted list of registered keys."""
        return sorted(self._items.keys())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._normalize(key) in self._items

    def __getitem__(self, key: str) -> T:
        return self.get(key)

    def __iter__(self) -> Iterable[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def items(self) -> Iterable[tuple[str, T]]:
        return self._items.items()


__all__ = ["Registry"]
