"""JSON persistence of stock state between invocations.

The file holds a list of records, each tagged with a ``stockType``
discriminator so the matching variant can be rebuilt:

    [
      {
        "stockType": "BabyStock",
        "stockId": "3f2b...",
        "price": 52.0,
        "signVector": [1, -1],
        "bankrupt": false,
        "failureLevel": 0
      },
      ...
    ]
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from .baby_stock import BabyStock
from .collection import default_stock_list
from .config import DEFAULT_PARAMS
from .exceptions import InvalidArgumentError, InvalidStateError, StorageError
from .meme_stock import MemeStock
from .risky_stock import RiskyStock
from .stock import Stock, StockType

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = DEFAULT_PARAMS['stocks_filename']


def stock_to_record(stock: Stock) -> dict:
    """Serialize the persisted fields of a stock to a JSON-ready dict."""
    record = {
        'stockType': stock.STOCK_TYPE.value,
        'stockId': stock.stock_id,
        'price': stock.price,
        'signVector': [sign.value for sign in stock.sign_vector],
        'bankrupt': stock.bankrupt,
    }
    match stock.STOCK_TYPE:
        case StockType.BABY | StockType.RISKY:
            record['failureLevel'] = stock.failure_level
        case StockType.MEME:
            record['failing'] = stock.failing
            record['strikes'] = stock.strikes
    return record


def stock_from_record(record: dict, rng=None) -> Stock:
    """Rebuild a stock from a persisted record.

    Raises
    ------
    InvalidStateError
        If the discriminator is unknown, a field is missing, or the values
        violate the variant's invariants.
    """
    if not isinstance(record, dict):
        raise InvalidStateError(f"Stock record must be an object, got {type(record).__name__}")

    try:
        stock_type = StockType(record['stockType'])
        common = dict(
            price=record['price'],
            sign_vector=record['signVector'],
            bankrupt=record['bankrupt'],
            stock_id=record.get('stockId'),
            rng=rng,
        )
        match stock_type:
            case StockType.BABY:
                return BabyStock(failure_level=record['failureLevel'], **common)
            case StockType.RISKY:
                return RiskyStock(failure_level=record['failureLevel'], **common)
            case StockType.MEME:
                return MemeStock(failing=record['failing'],
                                 strikes=record['strikes'], **common)
    except InvalidStateError:
        raise
    except KeyError as e:
        raise InvalidStateError(f"Stock record is missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise InvalidStateError(f"Invalid stock record {record!r}: {e}") from e


def resolve_path(path) -> Path:
    """Map a directory to the default stocks file inside it."""
    if path is None:
        raise InvalidArgumentError("You must provide a valid file path")
    resolved = Path(path)
    if resolved.is_dir():
        resolved = resolved / DEFAULT_FILENAME
    return resolved


class StocksFile:
    """Reads and writes the stocks file, creating it with defaults if absent."""

    def __init__(self, path, indent: int = DEFAULT_PARAMS['json_indent']):
        self.path = resolve_path(path)
        self.indent = indent

        if not self.path.exists():
            logger.warning("Stocks file (%s) not found, creating...", self.path)
            self.write_stocks(default_stock_list())
        elif not self.path.is_file():
            raise StorageError(
                f"The given path ({path}) is not a valid file nor a valid directory")

    def _corrupted(self, reason: str) -> StorageError:
        return StorageError(
            f"The file ({self.path}) {reason}. It is likely corrupted, so "
            f"delete the file and try again.")

    def read_stocks(self, rngs=None) -> list[Stock]:
        """Load every stock in the file, in file order.

        Parameters
        ----------
        rngs : sequence of random sources, optional
            Assigned to the loaded stocks in order.
        """
        try:
            with self.path.open(encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise StorageError(
                f"The file ({self.path}) no longer exists. Was it deleted "
                f"while the program was running?") from e
        except json.JSONDecodeError as e:
            raise self._corrupted("contains JSON that cannot be parsed") from e
        except OSError as e:
            raise self._corrupted(f"could not be opened ({e})") from e

        if not isinstance(data, list):
            raise self._corrupted("does not contain a list of stocks")
        if rngs is not None and len(rngs) != len(data):
            raise InvalidArgumentError(
                f"Expected {len(data)} random sources, got {len(rngs)}")

        stocks = []
        for i, record in enumerate(data):
            rng = rngs[i] if rngs is not None else None
            try:
                stocks.append(stock_from_record(record, rng=rng))
            except InvalidStateError as e:
                raise self._corrupted(f"holds an invalid stock at index {i}: {e}") from e

        logger.debug("Read %d stocks from %s", len(stocks), self.path)
        return stocks

    def write_stocks(self, stocks: list[Stock]):
        """Overwrite the file with the given stocks."""
        payload = json.dumps([stock_to_record(s) for s in stocks], indent=self.indent)

        # Write beside the target and swap in, so a crash never truncates it
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent,
                                            prefix=f".{self.path.name}.",
                                            suffix='.tmp')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    f.write(payload)
                    f.write('\n')
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Could not write stocks to {self.path}: {e}") from e

        logger.debug("Wrote %d stocks to %s", len(stocks), self.path)
