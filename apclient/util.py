"""Small helpers shared across the client: randomness, time, files, arithmetic."""

from __future__ import annotations

import logging
import os
import random
import secrets
import subprocess
import time
from collections.abc import Iterator
from pathlib import Path

logger = logging.getLogger(__name__)


def rand_vec(size: int, rng: random.Random | None = None) -> bytes:
    """Return ``size`` random bytes, drawn from ``rng`` when one is given."""
    if size < 0:
        raise ValueError("size must not be negative")
    if rng is None:
        return secrets.token_bytes(size)
    return rng.randbytes(size)


def now_ms() -> int:
    """Milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def mkdir_existing(path: str | os.PathLike[str]) -> None:
    """Create a directory, doing nothing if it already exists."""
    try:
        os.mkdir(Path(path))
    except FileExistsError:
        pass


def run_program(program: str) -> int:
    """Run a whitespace-separated command line and return its exit status."""
    logger.info("Running %s", program)
    args = program.split()
    if not args:
        raise ValueError("empty program")
    completed = subprocess.run(args, check=False)
    logger.info("Exit status: %s", completed.returncode)
    return completed.returncode


def powm(base: int, exp: int, modulus: int) -> int:
    """Modular exponentiation; an exponent of zero always yields 1."""
    if exp < 0:
        raise ValueError("exponent must not be negative")
    if exp == 0:
        return 1
    return pow(base, exp, modulus)


def str_chunks(data: str, size: int) -> Iterator[str]:
    """Yield consecutive ``size``-character pieces of ``data``.

    The length of ``data`` must be a multiple of ``size``.
    """
    if size <= 0:
        raise ValueError("chunk size must be positive")
    for start in range(0, len(data), size):
        chunk = data[start:start + size]
        if len(chunk) != size:
            raise ValueError(
                f"string of length {len(data)} does not split into chunks of {size}"
            )
        yield chunk


class SeqGenerator:
    """Hands out consecutive sequence numbers, optionally wrapping at ``bits``."""

    def __init__(self, value: int = 0, bits: int | None = None) -> None:
        self._bits = bits
        self._value = self._wrap(value)

    def _wrap(self, value: int) -> int:
        if self._bits is None:
            return value
        return value % (1 << self._bits)

    def get(self) -> int:
        """Return the current value and advance to the next one."""
        value = self._value
        self._value = self._wrap(value + 1)
        return value

    def __repr__(self) -> str:
        return f"SeqGenerator({self._value!r}, bits={self._bits!r})"