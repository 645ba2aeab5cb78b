"""Compressed bitset representation."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CompressedBitset:
    """A bitset reduced to its combinadic rank.

    Attributes
    ----------
    rank: int
        Index of the bitset among all length-``n`` bitsets with ``k`` set bits.
    n: int
        Length of the original bitset.
    k: int
        Number of set bits. Required for decoding; the rank alone is ambiguous.
    """

    rank: int
    n: int
    k: int

    def __post_init__(self) -> None:
        if self.n < 0 or self.k < 0:
            raise ValueError("n and k must be non-negative")
        if self.k > self.n:
            raise ValueError("k must not exceed n")
        if self.rank < 0:
            raise ValueError("rank must be non-negative")

    @property
    def bit_length(self) -> int:
        return int(self.rank).bit_length()

    def __str__(self) -> str:  # pragma: no cover - trivial wrapper
        return self._format()

    def _format(self) -> str:
        return f"CompressedBitset(n={self.n}, k={self.k}, rank={self.rank})"
