"""Statistics over simulated price paths."""

import numpy as np
import pandas as pd
from scipy.stats import jarque_bera, kurtosis, skew
from statsmodels.tsa.stattools import acf

from .collection import STOCK_TYPES


def compute_returns(prices) -> np.ndarray:
    """Simple period-over-period returns of a price series."""
    prices = np.asarray(prices, dtype=float)
    if len(prices) < 2:
        return np.array([])
    return np.diff(prices) / prices[:-1]


def compute_return_statistics(returns: np.ndarray) -> dict:
    """Compute descriptive statistics for a return series."""
    jb = jarque_bera(returns)
    return {
        'mean': float(np.mean(returns)),
        'std': float(np.std(returns)),
        'skewness': float(skew(returns)),
        'kurtosis': float(kurtosis(returns, fisher=True)),  # excess kurtosis
        'jb_statistic': float(jb.statistic),
        'jb_pvalue': float(jb.pvalue),
        'min': float(np.min(returns)),
        'max': float(np.max(returns)),
        'n': len(returns),
    }


def compute_autocorrelation(returns: np.ndarray, nlags: int = 20) -> dict:
    """Compute ACF for returns and absolute returns."""
    return {
        'acf_returns': acf(returns, nlags=nlags, fft=True),
        'acf_abs_returns': acf(np.abs(returns), nlags=nlags, fft=True),
        'nlags': nlags,
    }


def bankruptcy_events(flags) -> np.ndarray:
    """Indices at which a stock enters bankruptcy.

    A bankruptcy lasts a single period, but consecutive flagged periods are
    still counted once in case a series was resampled.
    """
    flags = np.asarray(flags, dtype=bool)
    if len(flags) == 0:
        return np.array([], dtype=int)
    starts = flags & ~np.concatenate(([False], flags[:-1]))
    return np.flatnonzero(starts)


def summarize_run(data: pd.DataFrame) -> pd.DataFrame:
    """Per-stock summary of a ``StonksModel`` run.

    Parameters
    ----------
    data : DataFrame
        Recorded model variables with ``price_<variant>`` and
        ``bankrupt_<variant>`` columns.
    """
    rows = {}
    for stock_type in STOCK_TYPES:
        name = stock_type.value
        price_col = f'price_{name}'
        if price_col not in data.columns:
            continue
        prices = data[price_col].to_numpy(dtype=float)
        returns = compute_returns(prices)
        rows[name] = {
            'final_price': float(prices[-1]),
            'mean_price': float(np.mean(prices)),
            'min_price': float(np.min(prices)),
            'max_price': float(np.max(prices)),
            'return_std': float(np.std(returns)) if len(returns) else 0.0,
            'bankruptcies': len(bankruptcy_events(data[f'bankrupt_{name}'])),
        }
    return pd.DataFrame.from_dict(rows, orient='index')
