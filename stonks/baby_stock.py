"""BabyStock — the low-volatility variant."""

from .exceptions import InvalidStateError
from .sign import Sign
from .stock import MINIMUM_PRICE, Stock, StockType, require_count


class BabyStock(Stock):
    """Small, mostly smooth moves with a rare shock term.

    P(t+1) = max(0.25, P(t) + s0 * U[1.5, 3) + s1 * U[1.5, 2)
                       + (5%) * (+/-) * U[5, 15)) * (1 + 0.04 * failure_level)

    Each sign flips with 20% probability every period. A healthy stock
    starts failing with probability 0.002 per period; once failing, the
    multiplier grows every period until the stock goes bankrupt.
    """

    STOCK_TYPE = StockType.BABY
    DEFAULT_PRICE = 50.0
    DEFAULT_SIGN_VECTOR = (Sign.POSITIVE, Sign.POSITIVE)

    # After this many failing periods the next period declares bankruptcy
    MAX_FAILURE_LEVEL = 5

    FLIP_PROBABILITY = 0.20
    SHOCK_PROBABILITY = 0.05
    FAILURE_PROBABILITY = 0.002
    FAILURE_MULTIPLIER = 0.04

    def __init__(self, price: float = DEFAULT_PRICE,
                 sign_vector=DEFAULT_SIGN_VECTOR, bankrupt: bool = False,
                 failure_level: int = 0, stock_id: str | None = None,
                 rng=None):
        super().__init__(price, sign_vector, bankrupt, stock_id, rng)

        failure_level = require_count('failure_level', failure_level,
                                      self.MAX_FAILURE_LEVEL + 1)
        if failure_level != 0 and self.bankrupt:
            raise InvalidStateError(
                f"The stock cannot be failing and bankrupt at the same time "
                f"(failure_level: {failure_level})")

        self.failure_level = failure_level

    def reset_values(self):
        self._restore_defaults()
        self.failure_level = 0

    def advance(self, rng=None) -> float:
        rng = self._source(rng)

        # Failure cycle exhausted: pin to the floor for exactly one period
        if self.failure_level > self.MAX_FAILURE_LEVEL:
            self.bankrupt = True
            self.failure_level = 0
            self.price = MINIMUM_PRICE
            return self.price

        if self.bankrupt:
            self.reset_values()
            return self.price

        for i, sign in enumerate(self.sign_vector):
            if self._chance(self.FLIP_PROBABILITY, rng):
                self.sign_vector[i] = sign.negative()

        self.price += self.sign_vector[0].value * self.uniform_random(1.5, 3.0, rng)
        self.price += self.sign_vector[1].value * self.uniform_random(1.5, 2.0, rng)

        if self._chance(self.SHOCK_PROBABILITY, rng):
            shock = Sign.POSITIVE if self._chance(0.5, rng) else Sign.NEGATIVE
            self.price += shock.value * self.uniform_random(5.0, 15.0, rng)

        self.price = max(self.price, MINIMUM_PRICE)

        # Multiplier uses the level from before this period's increment
        self.price *= 1 + self.failure_level * self.FAILURE_MULTIPLIER

        if self.failure_level > 0:
            self.failure_level += 1
        elif self._chance(self.FAILURE_PROBABILITY, rng):
            self.failure_level = 1

        return self.price
