"""Tests for the JSON stocks file."""

import json

import pytest

from stonks.baby_stock import BabyStock
from stonks.exceptions import InvalidArgumentError, InvalidStateError, StorageError
from stonks.meme_stock import MemeStock
from stonks.risky_stock import RiskyStock
from stonks.sign import Sign
from stonks.storage import (
    DEFAULT_FILENAME,
    StocksFile,
    resolve_path,
    stock_from_record,
    stock_to_record,
)


def _write(path, data):
    path.write_text(json.dumps(data))


class TestRecords:
    def test_baby_record(self):
        stock = BabyStock(price=12.5, sign_vector=[1, -1], failure_level=2,
                          stock_id="b1")
        assert stock_to_record(stock) == {
            'stockType': 'BabyStock',
            'stockId': 'b1',
            'price': 12.5,
            'signVector': [1, -1],
            'bankrupt': False,
            'failureLevel': 2,
        }

    def test_meme_record(self):
        record = stock_to_record(MemeStock(failing=True, strikes=3))
        assert record['failing'] is True
        assert record['strikes'] == 3
        assert 'failureLevel' not in record

    def test_from_record_dispatches_on_type(self):
        record = {'stockType': 'RiskyStock', 'stockId': 'r1', 'price': 80.0,
                  'signVector': [1, -1, 1], 'bankrupt': False, 'failureLevel': 4}
        stock = stock_from_record(record)
        assert isinstance(stock, RiskyStock)
        assert stock.failure_level == 4
        assert stock.sign_vector == [Sign.POSITIVE, Sign.NEGATIVE, Sign.POSITIVE]
        assert stock.stock_id == 'r1'

    def test_unknown_type(self):
        with pytest.raises(InvalidStateError):
            stock_from_record({'stockType': 'PennyStock', 'price': 1.0,
                               'signVector': [1], 'bankrupt': False})

    def test_missing_field(self):
        with pytest.raises(InvalidStateError, match="failing"):
            stock_from_record({'stockType': 'MemeStock', 'price': 1.0,
                               'signVector': [1, 1], 'bankrupt': False,
                               'strikes': 0})

    def test_invariant_violation(self):
        with pytest.raises(InvalidStateError, match="failing and bankrupt"):
            stock_from_record({'stockType': 'MemeStock', 'price': 1.0,
                               'signVector': [1, 1], 'bankrupt': True,
                               'failing': True, 'strikes': 0})

    def test_bad_price_type(self):
        with pytest.raises(InvalidStateError):
            stock_from_record({'stockType': 'BabyStock', 'price': 'cheap',
                               'signVector': [1, 1], 'bankrupt': False,
                               'failureLevel': 0})

    @pytest.mark.parametrize("field, value", [
        ('bankrupt', "false"),
        ('failureLevel', 2.5),
        ('failureLevel', "1"),
    ])
    def test_mistyped_fields_rejected(self, field, value):
        record = stock_to_record(BabyStock())
        record[field] = value
        with pytest.raises(InvalidStateError):
            stock_from_record(record)

    def test_not_an_object(self):
        with pytest.raises(InvalidStateError):
            stock_from_record([1, 2, 3])


class TestResolvePath:
    def test_directory_gets_default_filename(self, tmp_path):
        assert resolve_path(tmp_path) == tmp_path / DEFAULT_FILENAME

    def test_file_kept(self, tmp_path):
        assert resolve_path(tmp_path / 'mine.json') == tmp_path / 'mine.json'

    def test_none_rejected(self):
        with pytest.raises(InvalidArgumentError):
            resolve_path(None)


class TestStocksFile:
    def test_creates_defaults_in_directory(self, tmp_path, caplog):
        stocks_file = StocksFile(tmp_path)
        assert (tmp_path / DEFAULT_FILENAME).is_file()
        assert "not found" in caplog.text
        stocks = stocks_file.read_stocks()
        assert [type(s) for s in stocks] == [BabyStock, RiskyStock, MemeStock]
        assert [s.get_price() for s in stocks] == [50.0, 100.0, 1.0]

    def test_existing_file_not_overwritten(self, tmp_path):
        path = tmp_path / 'stocks.json'
        _write(path, [stock_to_record(BabyStock(price=7.0))])
        stocks = StocksFile(path).read_stocks()
        assert len(stocks) == 1
        assert stocks[0].get_price() == 7.0

    def test_round_trip_preserves_state(self, tmp_path):
        original = [
            BabyStock(price=3.5, sign_vector=[-1, 1], failure_level=6),
            RiskyStock(price=0.25, bankrupt=True),
            MemeStock(price=420.0, sign_vector=[-1, -1], failing=True, strikes=3),
        ]
        stocks_file = StocksFile(tmp_path / 'stocks.json')
        stocks_file.write_stocks(original)
        loaded = stocks_file.read_stocks()
        assert [stock_to_record(s) for s in loaded] == [stock_to_record(s) for s in original]

    def test_write_leaves_no_temp_files(self, tmp_path):
        stocks_file = StocksFile(tmp_path)
        stocks_file.write_stocks(stocks_file.read_stocks())
        assert [p.name for p in tmp_path.iterdir()] == [DEFAULT_FILENAME]

    def test_invalid_json(self, tmp_path):
        path = tmp_path / 'stocks.json'
        path.write_text("{not json")
        with pytest.raises(StorageError, match="cannot be parsed"):
            StocksFile(path).read_stocks()

    def test_not_a_list(self, tmp_path):
        path = tmp_path / 'stocks.json'
        _write(path, {'stockType': 'BabyStock'})
        with pytest.raises(StorageError, match="list of stocks"):
            StocksFile(path).read_stocks()

    def test_invalid_record(self, tmp_path):
        path = tmp_path / 'stocks.json'
        record = stock_to_record(BabyStock())
        record['price'] = 0.1
        _write(path, [record])
        with pytest.raises(StorageError, match="index 0"):
            StocksFile(path).read_stocks()

    def test_deleted_while_running(self, tmp_path):
        stocks_file = StocksFile(tmp_path)
        (tmp_path / DEFAULT_FILENAME).unlink()
        with pytest.raises(StorageError, match="no longer exists"):
            stocks_file.read_stocks()

    def test_rngs_assigned_in_order(self, tmp_path):
        stocks_file = StocksFile(tmp_path)
        sources = [object(), object(), object()]
        stocks = stocks_file.read_stocks(rngs=sources)
        assert [s.rng for s in stocks] == sources
