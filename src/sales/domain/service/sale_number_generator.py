"""Domain service: Sale Number generation.

Sale numbers are human-facing tracking numbers in a fixed ten-digit
range.  The generator is injected into the create handler so tests can
use a deterministic sequence; the store enforces uniqueness.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod

from sales.domain.constraints import SALE_NUMBER_MAX, SALE_NUMBER_MIN
from sales.domain.exceptions import InvalidArgumentError, InvalidOperationError


class SaleNumberGenerator(ABC):

    @abstractmethod
    def next_number(self) -> int:
        """Return a sale number in [SALE_NUMBER_MIN, SALE_NUMBER_MAX]."""


class RandomSaleNumberGenerator(SaleNumberGenerator):
    """Uniform random draw.  Collisions are possible but rare."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def next_number(self) -> int:
        return self._rng.randint(SALE_NUMBER_MIN, SALE_NUMBER_MAX)


class SequentialSaleNumberGenerator(SaleNumberGenerator):
    """Monotonic counter; never repeats within one instance."""

    def __init__(self, start: int = SALE_NUMBER_MIN) -> None:
        if not SALE_NUMBER_MIN <= start <= SALE_NUMBER_MAX:
            raise InvalidArgumentError(
                f"Start must be between {SALE_NUMBER_MIN} and {SALE_NUMBER_MAX}"
            )
        self._next = start

    def next_number(self) -> int:
        if self._next > SALE_NUMBER_MAX:
            raise InvalidOperationError("Sale number range exhausted")
        number = self._next
        self._next += 1
        return number
