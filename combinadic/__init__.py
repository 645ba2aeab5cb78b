"""Public API for combinadic."""
import logging

from .binom import DEFAULT_BACKEND, BinomialTable, TableLookupError, triangular_index
from .codec import compress, decode, decompress, encode, iter_subsets, rank_bit_length
from .model import CompressedBitset

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "BinomialTable",
    "TableLookupError",
    "DEFAULT_BACKEND",
    "triangular_index",
    "encode",
    "decode",
    "compress",
    "decompress",
    "iter_subsets",
    "rank_bit_length",
    "CompressedBitset",
]
