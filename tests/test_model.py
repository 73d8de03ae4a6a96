"""Integration tests for StonksModel."""

import numpy as np

from stonks.config import DEFAULT_PARAMS
from stonks.model import StonksModel
from stonks.stock import MINIMUM_PRICE

NAMES = ['BabyStock', 'RiskyStock', 'MemeStock']


class TestStonksModelRun:
    def test_smoke_test(self):
        model = StonksModel({**DEFAULT_PARAMS, 'steps': 50})
        results = model.run()
        assert results is not None

    def test_records_expected_columns(self):
        model = StonksModel({**DEFAULT_PARAMS, 'steps': 20})
        results = model.run()
        data = results.variables.StonksModel
        expected = {f'price_{n}' for n in NAMES} | {f'bankrupt_{n}' for n in NAMES}
        assert expected.issubset(set(data.columns))

    def test_initial_row_holds_default_prices(self):
        model = StonksModel({**DEFAULT_PARAMS, 'steps': 5})
        data = model.run().variables.StonksModel
        assert data['price_BabyStock'].iloc[0] == 50.0
        assert data['price_RiskyStock'].iloc[0] == 100.0
        assert data['price_MemeStock'].iloc[0] == 1.0

    def test_price_stays_above_floor(self):
        model = StonksModel({**DEFAULT_PARAMS, 'steps': 3000})
        data = model.run().variables.StonksModel
        for name in NAMES:
            assert (data[f'price_{name}'] >= MINIMUM_PRICE).all()

    def test_reproducibility(self):
        params = {**DEFAULT_PARAMS, 'steps': 100, 'seed': 42}
        r1 = StonksModel(params).run()
        r2 = StonksModel(params).run()
        for name in NAMES:
            np.testing.assert_array_equal(
                r1.variables.StonksModel[f'price_{name}'].values,
                r2.variables.StonksModel[f'price_{name}'].values)

    def test_reports_summary(self):
        model = StonksModel({**DEFAULT_PARAMS, 'steps': 3000})
        results = model.run()
        reporters = results.reporters
        for name in NAMES:
            assert f'bankruptcies_{name}' in reporters.columns
            assert f'max_price_{name}' in reporters.columns
        data = results.variables.StonksModel
        assert reporters['bankruptcies_MemeStock'].iloc[0] == data['bankrupt_MemeStock'].sum()
