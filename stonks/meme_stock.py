"""MemeStock — the high-volatility variant whose risk scales with price."""

from .exceptions import InvalidStateError
from .sign import Sign
from .stock import (
    MINIMUM_PRICE,
    Stock,
    StockType,
    require_count,
    require_flag,
)


class MemeStock(Stock):
    """Wild swings, strikes, and a short fall into bankruptcy.

    P(t+1) = max(0.25, P(t) + s0 * U[1, 20) + s1 * U[1, 20) - U[1, 10) - U[1, 10))

    Only the first two terms have a tracked sign; the last two are always
    negative. Every healthy period accrues a strike with probability
    P / 100000. At ``MAX_STRIKES`` both tracked signs are forced negative and
    the stock is failing for one period, then bankrupt for one period, then
    reset.
    """

    STOCK_TYPE = StockType.MEME
    DEFAULT_PRICE = 1.0
    DEFAULT_SIGN_VECTOR = (Sign.POSITIVE, Sign.POSITIVE)

    MAX_STRIKES = 3
    STRIKE_SCALE = 100000.0

    def __init__(self, price: float = DEFAULT_PRICE,
                 sign_vector=DEFAULT_SIGN_VECTOR, bankrupt: bool = False,
                 failing: bool = False, strikes: int = 0,
                 stock_id: str | None = None, rng=None):
        super().__init__(price, sign_vector, bankrupt, stock_id, rng)

        failing = require_flag('failing', failing)
        strikes = require_count('strikes', strikes, self.MAX_STRIKES)
        if failing and self.bankrupt:
            raise InvalidStateError(
                "The stock cannot be failing and bankrupt at the same time")
        # Declaring bankruptcy clears the strikes
        if strikes != 0 and self.bankrupt:
            raise InvalidStateError(
                f"A bankrupt stock cannot carry strikes (strikes: {strikes})")

        self.failing = failing
        self.strikes = strikes

    def reset_values(self):
        self._restore_defaults()
        self.failing = False
        self.strikes = 0

    def strike_probability(self) -> float:
        return self.price / self.STRIKE_SCALE

    def advance(self, rng=None) -> float:
        rng = self._source(rng)

        if self.bankrupt:
            self.reset_values()
            return self.price

        # A failing period has already been observed; declare bankruptcy
        if self.failing:
            self.failing = False
            self.bankrupt = True
            self.strikes = 0
            self.price = MINIMUM_PRICE
            return self.price

        if self.strikes == self.MAX_STRIKES:
            self.sign_vector[:] = [Sign.NEGATIVE] * len(self.sign_vector)
            self.failing = True

        for sign in self.sign_vector:
            self.price += sign.value * self.uniform_random(1.0, 20.0, rng)
        for _ in range(2):
            self.price -= self.uniform_random(1.0, 10.0, rng)

        self.price = max(self.price, MINIMUM_PRICE)

        if not self.failing and self._chance(self.strike_probability(), rng):
            self.strikes += 1

        return self.price
