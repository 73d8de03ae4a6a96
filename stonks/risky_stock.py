"""RiskyStock — the mid-volatility variant with an escalating death spiral."""

from .exceptions import InvalidStateError
from .sign import Sign
from .stock import MINIMUM_PRICE, Stock, StockType, require_count


class RiskyStock(Stock):
    """Three optional directional terms plus a large spike term.

    P(t+1) = max(0.25, P(t) + sum_i (2/3) * s_i * U_i + (p_spike) * (+/-) * U[25, 75))
             * (1 + 0.10 * failure_level)

    with U_0 ~ U[8, 10), U_1 ~ U[5, 7), U_2 ~ U[5, 10). A sign only gets a
    chance to flip (40%) in a period where its term is included. While the
    stock is failing, the spike probability climbs through
    ``SPIKE_PROBABILITIES`` so that price swings grow until bankruptcy.
    """

    STOCK_TYPE = StockType.RISKY
    DEFAULT_PRICE = 100.0
    DEFAULT_SIGN_VECTOR = (Sign.POSITIVE, Sign.POSITIVE, Sign.POSITIVE)

    MAX_FAILURE_LEVEL = 5

    TERM_BOUNDS = ((8.0, 10.0), (5.0, 7.0), (5.0, 10.0))
    TERM_PROBABILITY = 2.0 / 3.0
    FLIP_PROBABILITY = 0.40
    SPIKE_BOUNDS = (25.0, 75.0)
    SPIKE_PROBABILITY = 0.10
    # Indexed by failure_level - 1
    SPIKE_PROBABILITIES = (1.0 / 8.0, 1.0 / 6.0, 1.0 / 4.0, 1.0 / 2.0, 1.0)
    FAILURE_PROBABILITY = 0.004
    FAILURE_MULTIPLIER = 0.10

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

    def spike_probability(self) -> float:
        """Probability of the spike term for the current failure level."""
        if self.failure_level == 0:
            return self.SPIKE_PROBABILITY
        # Past the table the spike is certain; that level is turned into
        # bankruptcy at step start anyway
        index = min(self.failure_level, len(self.SPIKE_PROBABILITIES)) - 1
        return self.SPIKE_PROBABILITIES[index]

    def advance(self, rng=None) -> float:
        rng = self._source(rng)

        if self.failure_level > self.MAX_FAILURE_LEVEL:
            self.bankrupt = True
            self.failure_level = 0
            self.price = MINIMUM_PRICE
            return self.price

        if self.bankrupt:
            self.reset_values()
            return self.price

        # All three magnitudes are drawn up front, used or not
        magnitudes = [self.uniform_random(low, high, rng)
                      for low, high in self.TERM_BOUNDS]

        for i, magnitude in enumerate(magnitudes):
            if not self._chance(self.TERM_PROBABILITY, rng):
                continue
            if self._chance(self.FLIP_PROBABILITY, rng):
                self.sign_vector[i] = self.sign_vector[i].negative()
            self.price += self.sign_vector[i].value * magnitude

        if self._chance(self.spike_probability(), rng):
            spike = Sign.POSITIVE if self._chance(0.5, rng) else Sign.NEGATIVE
            self.price += spike.value * self.uniform_random(*self.SPIKE_BOUNDS, rng)

        self.price = max(self.price, MINIMUM_PRICE)
        self.price *= 1 + self.failure_level * self.FAILURE_MULTIPLIER

        if self.failure_level > 0:
            self.failure_level += 1
        elif self._chance(self.FAILURE_PROBABILITY, rng):
            self.failure_level = 1

        return self.price
