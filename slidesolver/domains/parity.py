from __future__ import annotations
from typing import List, Optional, Sequence


class ParityCheckPermutation:
    """
    Permutation of the board read row-major, blank counted as size*size.
    Its parity, together with the blank's distance from home, decides solvability.
    """
    def __init__(self, permutation: List[int]):
        self.permutation = permutation

    @classmethod
    def from_numbers(cls, numbers: Sequence[Sequence[Optional[int]]]) -> "ParityCheckPermutation":
        blank_value = len(numbers) * len(numbers)
        permutation = [blank_value if x is None else x for row in numbers for x in row]
        return cls(permutation)

    def is_even(self) -> bool:
        """Counts transpositions through cycle decomposition."""
        n = len(self.permutation)
        checked = [False] * (n + 1)
        swaps = 0
        for start in range(1, n + 1):
            if checked[start]:
                continue
            checked[start] = True
            idx = start - 1
            while self.permutation[idx] != start:
                value = self.permutation[idx]
                checked[value] = True
                idx = value - 1
                swaps += 1
        return swaps % 2 == 0
