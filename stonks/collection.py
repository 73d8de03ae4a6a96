"""Grouping of exactly one stock of each variant."""

from dataclasses import dataclass

import numpy as np

from .baby_stock import BabyStock
from .exceptions import InvalidArgumentError
from .meme_stock import MemeStock
from .risky_stock import RiskyStock
from .stock import Stock, StockType

STOCK_TYPES: dict[StockType, type[Stock]] = {
    StockType.BABY: BabyStock,
    StockType.RISKY: RiskyStock,
    StockType.MEME: MemeStock,
}


def spawn_rngs(seed, n: int = len(STOCK_TYPES)) -> list[np.random.Generator]:
    """Independent, reproducible generators, one per stock."""
    return [np.random.default_rng(s) for s in np.random.SeedSequence(seed).spawn(n)]


def default_stock_list(rngs=None) -> list[Stock]:
    """Return one freshly defaulted stock of each variant.

    Parameters
    ----------
    rngs : sequence of random sources, optional
        One per variant, in ``STOCK_TYPES`` order. Each stock creates its
        own source when omitted.
    """
    if rngs is None:
        rngs = [None] * len(STOCK_TYPES)
    if len(rngs) != len(STOCK_TYPES):
        raise InvalidArgumentError(
            f"Expected {len(STOCK_TYPES)} random sources, got {len(rngs)}")
    return [cls(rng=rng) for cls, rng in zip(STOCK_TYPES.values(), rngs)]


@dataclass
class StockCollection:
    baby_stock: BabyStock
    risky_stock: RiskyStock
    meme_stock: MemeStock

    def __post_init__(self):
        expected = {'baby_stock': BabyStock, 'risky_stock': RiskyStock,
                    'meme_stock': MemeStock}
        for field_name, cls in expected.items():
            value = getattr(self, field_name)
            if value is None:
                raise InvalidArgumentError(f"{field_name} cannot be None")
            if not isinstance(value, cls):
                raise InvalidArgumentError(
                    f"{field_name} must be a {cls.__name__}, "
                    f"got {type(value).__name__}")

    @classmethod
    def default(cls, rngs=None) -> "StockCollection":
        return cls(*default_stock_list(rngs))

    @classmethod
    def from_list(cls, stocks: list[Stock]) -> "StockCollection":
        """Group a list holding exactly one stock of each variant."""
        by_type: dict[StockType, Stock] = {}
        for stock in stocks:
            if stock.STOCK_TYPE in by_type:
                raise InvalidArgumentError(
                    f"Duplicate {stock.STOCK_TYPE.value} in stock list")
            by_type[stock.STOCK_TYPE] = stock
        missing = [t.value for t in STOCK_TYPES if t not in by_type]
        if missing:
            raise InvalidArgumentError(f"Missing stocks: {', '.join(missing)}")
        return cls(by_type[StockType.BABY], by_type[StockType.RISKY],
                   by_type[StockType.MEME])

    def to_list(self) -> list[Stock]:
        """Stocks in variant order; mutating them mutates the collection."""
        return [self.baby_stock, self.risky_stock, self.meme_stock]

    def advance_all(self, rng=None) -> dict[StockType, float]:
        """Advance every stock once and return the new prices by variant."""
        return {stock.STOCK_TYPE: stock.advance(rng) for stock in self.to_list()}
