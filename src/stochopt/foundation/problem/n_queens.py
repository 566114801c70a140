"""The N-queens puzzle as a permutation problem."""

from __future__ import annotations

import numpy as np

from .base import ElementSpec, Problem


class NQueensPuzzle(Problem):
    """Place ``n`` queens on an ``n x n`` board so that none attack each other.

    Each element maps to a permutation of rows (one queen per column and
    row), so only diagonal attacks remain; the evaluation counts the pairs of
    queens sharing a diagonal.
    """

    title = "N-queens puzzle"
    description = (
        "Generalized version of the classic problem of placing 8 chess queens on an 8x8 "
        "chessboard so that no two queens attack each other."
    )

    def __init__(self, n: int = 8, *, random: np.random.Generator | int | None = None) -> None:
        super().__init__(ElementSpec(n, 0.0, 1.0), random=random)
        self.n = int(n)
        self._rows = list(range(self.n))

    def mapping(self, element) -> list[int]:
        return element.set_mapping(self._rows)

    def evaluation(self, element) -> float:
        rows = self.mapping(element)
        count = 0
        for i, row in enumerate(rows):
            for j in range(i + 1, len(rows)):
                if abs(rows[j] - row) == j - i:
                    count += 1
        return float(count)

    def sufficient_element(self, element) -> bool:
        return element.evaluation == 0
