"""Precomputed binomial coefficient table with arbitrary-precision entries."""
from __future__ import annotations

import logging
import operator
from typing import Any, Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

# flint is optional; detect lazily so a runtime install (e.g., in a notebook) is picked up
_FLINT_AVAILABLE = False

def _ensure_flint_available() -> bool:
    """Try importing flint on demand and cache the result."""

    global _FLINT_AVAILABLE, fmpz  # type: ignore[name-defined]
    if _FLINT_AVAILABLE:
        return True
    try:
        from flint import fmpz as _fmpz
    except ImportError:
        return False
    fmpz = _fmpz  # type: ignore[assignment]
    _FLINT_AVAILABLE = True
    return True


Backend = str
DEFAULT_BACKEND: Backend = "auto"


class TableLookupError(LookupError):
    """A coefficient needed by the codec lies outside the table.

    Raised when a table was built for a ``max_n`` smaller than the bitset being
    encoded or decoded. This is a caller error, not a recoverable condition.
    """


def _resolve_backend(backend: Backend) -> Tuple[Backend, Callable[[int], Any]]:
    if backend == "python":
        return "python", int
    if backend == "flint":
        if not _ensure_flint_available():
            raise RuntimeError("flint_not_installed")
        return "flint", fmpz
    if backend != "auto":
        raise ValueError(f"Unknown backend: {backend}")
    if _ensure_flint_available():
        return "flint", fmpz
    logger.debug("python-flint not importable, using built-in int entries")
    return "python", int


def triangular_index(n: int, k: int) -> int:
    """Offset of ``C(n, k)`` in the row-major triangular layout."""

    return n * (n + 1) // 2 + k


class BinomialTable:
    """All binomial coefficients ``C(n, k)`` for ``0 <= k <= n <= max_n``.

    The table is computed eagerly with Pascal's rule and stored in a flat
    tuple indexed by :func:`triangular_index`. It never changes after
    construction, so one instance can serve any number of concurrent encode
    and decode calls.

    Parameters
    ----------
    max_n:
        Largest ``n`` the table answers for. Size the table for the longest
        bitset you intend to encode or decode.
    backend:
        ``"python"`` stores built-in ints, ``"flint"`` stores
        ``flint.fmpz`` values, ``"auto"`` picks flint when it is installed.
    """

    def __init__(self, max_n: int, *, backend: Backend = DEFAULT_BACKEND):
        max_n = operator.index(max_n)
        if max_n < 0:
            raise ValueError("max_n must be non-negative")
        self.backend, make = _resolve_backend(backend)
        self.max_n = max_n
        self._entries: Optional[Tuple[Any, ...]] = self._build(max_n, make)
        logger.debug(
            "built binomial table max_n=%d backend=%s entries=%d",
            max_n,
            self.backend,
            len(self._entries),
        )

    @staticmethod
    def _build(max_n: int, make: Callable[[int], Any]) -> Tuple[Any, ...]:
        # A MemoryError anywhere here leaves nothing behind but the unreferenced list.
        zero = make(0)
        one = make(1)
        entries: List[Any] = [zero] * triangular_index(max_n + 1, 0)
        entries[0] = one
        for n in range(1, max_n + 1):
            row = triangular_index(n, 0)
            prev = triangular_index(n - 1, 0)
            entries[row] = one
            for k in range(1, n):
                entries[row + k] = entries[prev + k - 1] + entries[prev + k]
            entries[row + n] = entries[prev + n - 1]
        return tuple(entries)

    @property
    def entries(self) -> Tuple[Any, ...]:
        if self._entries is None:
            return ()
        return self._entries

    @property
    def released(self) -> bool:
        return self._entries is None

    def get(self, n: int, k: int) -> Optional[Any]:
        """Return ``C(n, k)``, or ``None`` when ``(n, k)`` is not in the table.

        ``None`` means "not found" and is distinct from a zero coefficient,
        which never occurs for ``k <= n``.
        """

        if self._entries is None:
            return None
        if k < 0 or k > n or n > self.max_n:
            return None
        return self._entries[triangular_index(n, k)]

    def lookup(self, n: int, k: int) -> Any:
        """Like :meth:`get`, but a miss raises :class:`TableLookupError`."""

        value = self.get(n, k)
        if value is None:
            if self._entries is None:
                raise TableLookupError("binomial table has been released")
            if k < 0 or k > n:
                raise TableLookupError(f"C({n}, {k}) is undefined: k must satisfy 0 <= k <= n")
            raise TableLookupError(f"C({n}, {k}) is outside a table built for max_n={self.max_n}")
        return value

    def release(self) -> None:
        """Drop every stored entry. Safe to call more than once."""

        if self._entries is None:
            return
        self._entries = None
        logger.debug("released binomial table max_n=%d", self.max_n)

    def __contains__(self, item: Tuple[int, int]) -> bool:
        n, k = item
        return self.get(n, k) is not None

    def __len__(self) -> int:
        return len(self.entries)

    def __enter__(self) -> "BinomialTable":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self.released else f"{len(self)} entries"
        return f"BinomialTable(max_n={self.max_n}, backend={self.backend!r}, {state})"
