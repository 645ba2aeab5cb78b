"""Combinadic rank/unrank of bitsets with a known number of set bits."""
from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Sequence

from .binom import BinomialTable
from .model import CompressedBitset

logger = logging.getLogger(__name__)


def _as_bits(bits: Iterable[object]) -> List[bool]:
    return [bool(bit) for bit in bits]


# ---------------------------------------------------------------------------
# Rank / unrank
# ---------------------------------------------------------------------------

def encode(table: BinomialTable, bits: Sequence[bool], k: int, *, strict: bool = False) -> int:
    """Return the rank of ``bits`` among all bitsets of its length with ``k`` set bits.

    Positions are scanned from index 0; at each position a set bit ranks
    before an unset one. The scan stops once no set bits remain to be placed,
    so ``k`` is trusted rather than checked unless ``strict`` is true.

    Raises :class:`~combinadic.binom.TableLookupError` when ``table`` is too
    small for ``len(bits)``.
    """

    if k < 0:
        raise ValueError("k must be non-negative")
    bit_list = _as_bits(bits)
    if strict:
        count = sum(bit_list)
        if count != k:
            raise ValueError(f"k={k} does not match the {count} set bits")

    rank = 0
    n_remaining = len(bit_list)
    k_remaining = k
    for bit in bit_list:
        if k_remaining == 0 or k_remaining > n_remaining:
            break
        if bit:
            k_remaining -= 1
        else:
            rank += table.lookup(n_remaining - 1, k_remaining - 1)
        n_remaining -= 1
    return int(rank)


def decode(table: BinomialTable, rank: int, n: int, k: int, *, strict: bool = False) -> List[bool]:
    """Rebuild the length-``n`` bitset with ``k`` set bits that has ``rank``.

    Inverse of :func:`encode` for ``0 <= rank < C(n, k)``. An out-of-range
    rank is only rejected when ``strict`` is true; otherwise the output is
    unspecified.
    """

    if n < 0 or k < 0:
        raise ValueError("n and k must be non-negative")
    if rank < 0:
        raise ValueError("rank must be non-negative")
    if strict:
        if k > n:
            raise ValueError(f"k={k} exceeds n={n}")
        total = table.lookup(n, k)
        if rank >= total:
            raise ValueError(f"rank {rank} out of range for C({n}, {k}) = {total}")

    result = [False] * n
    current = rank
    n_rem = n
    k_rem = k
    for i in range(n):
        if k_rem == 0 or k_rem > n_rem:
            n_rem -= 1
            continue
        if k_rem == n_rem:
            result[i] = True
            k_rem -= 1
            n_rem -= 1
            continue
        threshold = table.lookup(n_rem - 1, k_rem - 1)
        if current < threshold:
            result[i] = True
            k_rem -= 1
        else:
            current -= threshold
        n_rem -= 1
    return result


# ---------------------------------------------------------------------------
# Helpers built on the codec
# ---------------------------------------------------------------------------

def rank_bit_length(table: BinomialTable, n: int, k: int) -> int:
    """Bits needed to store any rank for ``(n, k)``: ``ceil(log2(C(n, k)))``."""

    return (int(table.lookup(n, k)) - 1).bit_length()


def iter_subsets(table: BinomialTable, n: int, k: int) -> Iterator[List[bool]]:
    """Yield every length-``n`` bitset with ``k`` set bits in rank order."""

    if 0 <= n < k:
        # C(n, k) == 0
        return
    total = int(table.lookup(n, k))
    for rank in range(total):
        yield decode(table, rank, n, k)


def compress(table: BinomialTable, bits: Sequence[bool]) -> CompressedBitset:
    bit_list = _as_bits(bits)
    k = sum(bit_list)
    rank = encode(table, bit_list, k)
    if logger.isEnabledFor(logging.DEBUG) and (len(bit_list), k) in table:
        logger.debug(
            "compressed n=%d k=%d into %d bits",
            len(bit_list),
            k,
            rank_bit_length(table, len(bit_list), k),
        )
    return CompressedBitset(rank=rank, n=len(bit_list), k=k)


def decompress(table: BinomialTable, compressed: CompressedBitset) -> List[bool]:
    return decode(table, compressed.rank, compressed.n, compressed.k)
