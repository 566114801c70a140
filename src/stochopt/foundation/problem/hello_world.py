"""String matching: evolve a string towards a target text."""

from __future__ import annotations

import numpy as np

from ..element import manhattan_distance
from .base import ElementSpec, Problem

# Printable ASCII: codes 32 (inclusive) to 127 (exclusive).
_FIRST_CODE = 32
_LAST_CODE = 127


class HelloWorld(Problem):
    """Each element is a string; the evaluation is its distance to ``target``.

    Values in ``[0, 1]`` are scaled to printable ASCII codes. The distance is
    computed on the continuous codes so that small moves are rewarded.
    """

    title = "Hello world"
    description = "Simple problem where each element is a string, and the optimization goes towards the target string."

    def __init__(self, target: str = "Hello world!", *, random: np.random.Generator | int | None = None) -> None:
        if not target:
            raise ValueError("HelloWorld needs a non-empty target string.")
        super().__init__(ElementSpec(len(target), 0.0, 1.0), random=random)
        self.target = target
        self._target_codes = [ord(c) for c in target]

    def _codes(self, element) -> list[float]:
        return element.range_mapping((_FIRST_CODE, _LAST_CODE - 1e-9))

    def mapping(self, element) -> str:
        return "".join(chr(int(code)) for code in self._codes(element))

    def evaluation(self, element) -> float:
        return manhattan_distance(self._target_codes, self._codes(element))

    def sufficient_element(self, element) -> bool:
        return self.mapping(element) == self.target
