"""Shared stock contract: price floor, sign vector, bankruptcy and randomness."""

import numbers
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .exceptions import InvalidArgumentError, InvalidStateError
from .sign import Sign

# 0.25 is exact in binary floating point, which keeps floor comparisons exact.
MINIMUM_PRICE = 0.25


def require_flag(name: str, value) -> bool:
    """Return ``value`` if it is a real bool; persisted strings are not coerced."""
    if not isinstance(value, (bool, np.bool_)):
        raise InvalidStateError(f"{name} must be a boolean, got {value!r}")
    return bool(value)


def require_count(name: str, value, high: int) -> int:
    """Return ``value`` if it is an integer in [0, high]."""
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Integral):
        raise InvalidStateError(f"{name} must be an integer, got {value!r}")
    if not 0 <= value <= high:
        raise InvalidStateError(f"{name} must be a value from 0-{high}, got {value}")
    return int(value)


class StockType(Enum):
    """Discriminator for the closed set of stock variants."""
    BABY = "BabyStock"
    RISKY = "RiskyStock"
    MEME = "MemeStock"


@dataclass(frozen=True)
class StockState:
    """Price and bankruptcy of a stock right after one advancement."""
    price: float
    bankrupt: bool


class Stock(ABC):
    """A synthetic stock whose price is advanced one period at a time.

    Every instance owns its random source, so advancing one stock never
    affects the stream of another. A different source can be supplied per
    call to ``advance`` for deterministic runs; any object with a
    ``random()`` method returning floats in [0, 1) works.

    A single instance is mutated in place and must not be advanced from two
    threads at once.
    """

    STOCK_TYPE: StockType
    DEFAULT_PRICE: float
    DEFAULT_SIGN_VECTOR: tuple[Sign, ...]

    def __init__(self, price: float, sign_vector, bankrupt: bool = False,
                 stock_id: str | None = None,
                 rng: np.random.Generator | None = None):
        if isinstance(price, (bool, np.bool_)) or not isinstance(price, numbers.Real):
            raise InvalidStateError(f"The price must be a number, got {price!r}")
        # Written as a negated >= so that NaN is rejected too
        if not price >= MINIMUM_PRICE:
            raise InvalidStateError(
                f"The price must be greater than or equal to the minimum "
                f"bound of ${MINIMUM_PRICE:.2f}, got {price}")

        signs = [Sign.from_value(s) for s in sign_vector]
        if len(signs) != len(self.DEFAULT_SIGN_VECTOR):
            raise InvalidStateError(
                f"{type(self).__name__} must have exactly "
                f"{len(self.DEFAULT_SIGN_VECTOR)} elements in its sign vector, "
                f"got {len(signs)}")

        self.price = float(price)
        self.sign_vector: list[Sign] = signs
        self.bankrupt = require_flag('bankrupt', bankrupt)
        self.stock_id = stock_id or uuid.uuid4().hex
        self.rng = rng or np.random.default_rng()

    def _source(self, rng):
        return self.rng if rng is None else rng

    def uniform_random(self, low: float, high: float, rng=None) -> float:
        """Sample uniformly from [low, high)."""
        return self._source(rng).random() * (high - low) + low

    def _chance(self, probability: float, rng) -> bool:
        return rng.random() <= probability

    def _restore_defaults(self):
        self.price = self.DEFAULT_PRICE
        # Mutated in place, never rebound
        self.sign_vector[:] = self.DEFAULT_SIGN_VECTOR
        self.bankrupt = False

    @abstractmethod
    def reset_values(self):
        """Restore the default price, signs and counters; keep the identity."""

    @abstractmethod
    def advance(self, rng=None) -> float:
        """Advance the price by one period and return it."""

    def advance_many(self, n: int, rng=None) -> list[StockState]:
        """Advance ``n`` times and return one snapshot per advancement."""
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 1:
            raise InvalidArgumentError(
                f"The price must be advanced at least once, got {n!r}")

        states = []
        for _ in range(n):
            self.advance(rng)
            states.append(StockState(self.price, self.bankrupt))
        return states

    def get_price(self) -> float:
        return self.price

    def is_bankrupt(self) -> bool:
        return self.bankrupt

    @property
    def name(self) -> str:
        return self.STOCK_TYPE.value

    def __repr__(self) -> str:
        signs = ", ".join(str(s) for s in self.sign_vector)
        return (f"{type(self).__name__}(price={self.price:.2f}, "
                f"signs=[{signs}], bankrupt={self.bankrupt})")
