"""Secure random source backed by the operating system CSPRNG.

Every random operation in rando goes through a :class:`SecureRandom`.
Integers are produced by rejection sampling over raw bytes so no range
ever picks up modulo bias.

Usage::

    from rando.source import secure_random_int
    secure_random_int(1, 6)
"""

from __future__ import annotations

import os
import struct
import threading
from typing import Callable, MutableSequence, Sequence, TypeVar

from rando.errors import InvalidArgument

T = TypeVar("T")

_FLOAT_SCALE = 2.0**32


class SecureRandom:
    """Thread-safe secure random generator.

    Parameters
    ----------
    source:
        Callable returning *n* random bytes. Defaults to ``os.urandom``.
        Only tests should pass anything else.
    buffer_size:
        Bytes fetched from *source* per refill.
    """

    def __init__(self, source: Callable[[int], bytes] | None = None, buffer_size: int = 256) -> None:
        self._source = source or os.urandom
        self._buffer_size = buffer_size
        self._buf = bytearray()
        self._lock = threading.Lock()
        self._total_output = 0

    # ── raw bytes ──

    def _take(self, n: int) -> bytes:
        with self._lock:
            while len(self._buf) < n:
                self._buf.extend(self._source(max(n, self._buffer_size)))
            out = bytes(self._buf[:n])
            del self._buf[:n]
            self._total_output += n
        return out

    def random_bytes(self, n: int) -> bytes:
        """Return *n* secure random bytes."""
        if n < 0:
            raise InvalidArgument(f"byte count must be non-negative, got {n}")
        if n == 0:
            return b""
        return self._take(n)

    @property
    def total_output(self) -> int:
        return self._total_output

    # ── integers ──

    def randint(self, low: int, high: int) -> int:
        """Uniform integer over the closed interval ``[low, high]``."""
        if low > high:
            raise InvalidArgument(f"minimum {low} is greater than maximum {high}")
        span = high - low
        if span == 0:
            return low

        bits = span.bit_length()
        n_bytes = (bits + 7) // 8
        mask = (1 << bits) - 1
        while True:
            candidate = int.from_bytes(self._take(n_bytes), "big") & mask
            if candidate <= span:
                return low + candidate

    # ── floats ──

    def uniform(self, low: float, high: float) -> float:
        """Float in ``[low, high)`` from a 32-bit secure draw."""
        (raw,) = struct.unpack(">I", self._take(4))
        return low + (raw / _FLOAT_SCALE) * (high - low)

    # ── sequences ──

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Shuffled copy of *items*; the input is left untouched."""
        out = list(items)
        self.shuffle_in_place(out)
        return out

    def shuffle_in_place(self, items: MutableSequence[T]) -> None:
        """Fisher–Yates permutation of *items*."""
        for i in range(len(items) - 1, 0, -1):
            j = self.randint(0, i)
            items[i], items[j] = items[j], items[i]

    def choice(self, items: Sequence[T]) -> T:
        if len(items) == 0:
            raise InvalidArgument("cannot choose from an empty sequence")
        return items[self.randint(0, len(items) - 1)]

    def __repr__(self) -> str:
        return f"<SecureRandom output={self._total_output}>"


_default = SecureRandom()


def default_rng() -> SecureRandom:
    """The process-wide generator used when callers do not inject one."""
    return _default


def secure_random_int(min_value: int, max_value: int) -> int:
    return _default.randint(min_value, max_value)


def secure_random_float(min_value: float, max_value: float) -> float:
    return _default.uniform(min_value, max_value)


def secure_shuffle(items: Sequence[T]) -> list[T]:
    return _default.shuffle(items)


def secure_choice(items: Sequence[T]) -> T:
    return _default.choice(items)


def random_bytes(n: int) -> bytes:
    return _default.random_bytes(n)
