"""Synthetic stock price models advanced one period at a time."""

__version__ = "0.1.0"

from .baby_stock import BabyStock
from .collection import STOCK_TYPES, StockCollection, default_stock_list, spawn_rngs
from .config import DEFAULT_PARAMS
from .exceptions import (
    InvalidArgumentError,
    InvalidStateError,
    StonksError,
    StorageError,
)
from .meme_stock import MemeStock
from .model import StonksModel
from .risky_stock import RiskyStock
from .sign import Sign
from .stock import MINIMUM_PRICE, Stock, StockState, StockType
from .storage import StocksFile, stock_from_record, stock_to_record

__all__ = [
    "BabyStock",
    "DEFAULT_PARAMS",
    "InvalidArgumentError",
    "InvalidStateError",
    "MINIMUM_PRICE",
    "MemeStock",
    "RiskyStock",
    "STOCK_TYPES",
    "Sign",
    "Stock",
    "StockCollection",
    "StockState",
    "StockType",
    "StonksModel",
    "StocksFile",
    "StonksError",
    "StorageError",
    "default_stock_list",
    "spawn_rngs",
    "stock_from_record",
    "stock_to_record",
]
