"""Short identifiers for blocks and their nested items"""

import itertools
import random
import string
from typing import Protocol
from uuid import uuid4


ALPHABET = string.ascii_lowercase + string.digits


class IdGenerator(Protocol):
    def generate(self) -> str: ...


class RandomIdGenerator:
    """Base-36 tokens from a pseudo-random source; unique enough within one document."""

    def __init__(self, length: int = 9, rng: random.Random | None = None):
        if length < 1:
            raise ValueError(f"id length must be positive, got {length}")
        self.length = length
        self._rng = rng or random.Random()

    def generate(self) -> str:
        return ''.join(self._rng.choices(ALPHABET, k=self.length))


class CounterIdGenerator:
    """Deterministic ids (b1, b2, ...) for tests and reproducible output."""

    def __init__(self, prefix: str = 'b', start: int = 1):
        self.prefix = prefix
        self._counter = itertools.count(start)

    def generate(self) -> str:
        return f"{self.prefix}{next(self._counter)}"


class UuidIdGenerator:
    def generate(self) -> str:
        return uuid4().hex


_default: IdGenerator = RandomIdGenerator()


def set_default_generator(generator: IdGenerator) -> IdGenerator:
    """Swap the process-wide generator; returns the previous one so callers can restore it."""
    global _default
    previous, _default = _default, generator
    return previous


def generate_id() -> str:
    """Return a fresh id from the default generator."""
    return _default.generate()
