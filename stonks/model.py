"""StonksModel — multi-period simulation of the three stock variants."""

import agentpy as ap

from .collection import STOCK_TYPES, StockCollection, spawn_rngs
from .config import DEFAULT_PARAMS


class StonksModel(ap.Model):
    """Advances one stock of each variant for ``steps`` periods.

    Simulation loop per step:
      1. Advance every stock once with its own random source
      2. Record price and bankruptcy per stock

    Recorded variables are named ``price_<variant>`` and
    ``bankrupt_<variant>``, e.g. ``price_BabyStock``.
    """

    def setup(self):
        for key, val in DEFAULT_PARAMS.items():
            if key not in self.p:
                self.p[key] = val

        # Spawned per stock so that no two stocks share a stream
        rngs = spawn_rngs(self.p.get('seed', None), len(STOCK_TYPES))
        self.stocks = StockCollection.default(rngs)
        self.bankruptcies = {stock.name: 0 for stock in self.stocks.to_list()}
        self.max_prices = {stock.name: stock.get_price() for stock in self.stocks.to_list()}

    def step(self):
        for stock in self.stocks.to_list():
            stock.advance()
            if stock.is_bankrupt():
                self.bankruptcies[stock.name] += 1

    def update(self):
        """Record observables after each step."""
        for stock in self.stocks.to_list():
            self.record(f'price_{stock.name}', stock.get_price())
            self.record(f'bankrupt_{stock.name}', stock.is_bankrupt())
            self.max_prices[stock.name] = max(self.max_prices[stock.name], stock.get_price())

    def end(self):
        """Report per-stock summary values."""
        for stock in self.stocks.to_list():
            self.report(f'bankruptcies_{stock.name}', self.bankruptcies[stock.name])
            self.report(f'final_price_{stock.name}', stock.get_price())
            self.report(f'max_price_{stock.name}', self.max_prices[stock.name])
