"""Reusable matplotlib plotting functions for model outputs."""

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from scipy.stats import norm

from .analytics import bankruptcy_events, compute_autocorrelation, compute_returns
from .collection import STOCK_TYPES

STOCK_COLORS = {
    'BabyStock': '#2196F3',
    'RiskyStock': '#FF9800',
    'MemeStock': '#F44336',
}


def _stock_names(data: pd.DataFrame) -> list[str]:
    return [t.value for t in STOCK_TYPES if f'price_{t.value}' in data.columns]


def plot_price_paths(data: pd.DataFrame, ax: plt.Axes | None = None,
                     log_scale: bool = False, **kwargs) -> plt.Axes:
    """Plot each stock's price series, marking bankruptcies."""
    if ax is None:
        _, ax = plt.subplots(figsize=(12, 4))
    for name in _stock_names(data):
        prices = data[f'price_{name}']
        color = STOCK_COLORS.get(name)
        ax.plot(data.index, prices, label=name, color=color,
                alpha=0.9, linewidth=0.8)
        events = bankruptcy_events(data[f'bankrupt_{name}'])
        if len(events):
            ax.scatter(data.index[events], prices.iloc[events], marker='x',
                       color=color, s=30, zorder=3)
    if log_scale:
        ax.set_yscale('log')
    ax.set_xlabel('Step')
    ax.set_ylabel('Price')
    ax.set_title('Stock Prices (x = bankruptcy)')
    ax.legend()
    return ax


def plot_return_distribution(returns: np.ndarray, ax_hist: plt.Axes | None = None,
                             ax_qq: plt.Axes | None = None, label: str = 'Simulated',
                             **kwargs) -> tuple[plt.Axes, plt.Axes]:
    """Plot return histogram with normal overlay, and QQ plot."""
    if ax_hist is None or ax_qq is None:
        fig, (ax_hist, ax_qq) = plt.subplots(1, 2, figsize=(12, 4))

    std = np.std(returns)
    standardized = (returns - np.mean(returns)) / std if std > 0 else returns * 0.0

    # Histogram
    sns.histplot(standardized, bins=80, stat='density', color='steelblue',
                 edgecolor='none', alpha=0.7, label=label, ax=ax_hist)
    x = np.linspace(-5, 5, 200)
    ax_hist.plot(x, norm.pdf(x), 'r-', linewidth=1.5, label='Normal')
    ax_hist.set_xlabel('Standardized Return')
    ax_hist.set_ylabel('Density')
    ax_hist.set_title(f'{label} Return Distribution')
    ax_hist.legend()
    ax_hist.set_xlim(-5, 5)

    # QQ plot
    sorted_returns = np.sort(standardized)
    theoretical = norm.ppf(np.linspace(0.001, 0.999, len(sorted_returns)))
    ax_qq.scatter(theoretical, sorted_returns, s=2, alpha=0.5, color='steelblue')
    lim = max(abs(theoretical.min()), abs(theoretical.max())) if len(theoretical) else 1.0
    ax_qq.plot([-lim, lim], [-lim, lim], 'r--', linewidth=1)
    ax_qq.set_xlabel('Theoretical Quantiles')
    ax_qq.set_ylabel('Sample Quantiles')
    ax_qq.set_title('QQ Plot vs Normal')

    return ax_hist, ax_qq


def plot_bankruptcy_timeline(data: pd.DataFrame, ax: plt.Axes | None = None,
                             **kwargs) -> plt.Axes:
    """One row per stock with a tick at every bankruptcy."""
    if ax is None:
        _, ax = plt.subplots(figsize=(12, 2))
    names = _stock_names(data)
    for row, name in enumerate(names):
        events = bankruptcy_events(data[f'bankrupt_{name}'])
        ax.vlines(data.index[events], row - 0.4, row + 0.4,
                  color=STOCK_COLORS.get(name), linewidth=1.5)
    ax.set_yticks(range(len(names)))
    ax.set_yticklabels(names)
    ax.set_ylim(-0.5, len(names) - 0.5)
    ax.set_xlim(data.index[0], data.index[-1])
    ax.set_xlabel('Step')
    ax.set_title('Bankruptcies')
    return ax


def plot_autocorrelation_panel(returns: np.ndarray, nlags: int = 20,
                               axes: list | None = None, label: str = '',
                               **kwargs) -> list[plt.Axes]:
    """Two-panel ACF plot: returns and |returns|."""
    if axes is None:
        fig, axes = plt.subplots(1, 2, figsize=(12, 3.5))

    acf_data = compute_autocorrelation(returns, nlags=nlags)
    conf = 1.96 / np.sqrt(len(returns))
    lags = np.arange(nlags + 1)

    prefix = f'{label} ' if label else ''
    titles = [f'{prefix}ACF of Returns', f'{prefix}ACF of |Returns|']
    keys = ['acf_returns', 'acf_abs_returns']

    for ax, title, key in zip(axes, titles, keys):
        ax.bar(lags[1:], acf_data[key][1:], width=0.6, color='steelblue', alpha=0.7)
        ax.axhline(conf, color='red', linestyle='--', linewidth=0.8, alpha=0.6)
        ax.axhline(-conf, color='red', linestyle='--', linewidth=0.8, alpha=0.6)
        ax.axhline(0, color='black', linewidth=0.5)
        ax.set_xlabel('Lag')
        ax.set_ylabel('ACF')
        ax.set_title(title)

    return list(axes)


def plot_simulation_dashboard(data: pd.DataFrame, figsize: tuple = (20, 12),
                              nlags: int = 20,
                              **kwargs) -> plt.Figure:
    """Full simulation dashboard.

    Panels:
      1. Price paths
      2. Bankruptcy timeline
      3. Per stock: return distribution (histogram + QQ) and ACF panel
    """
    names = _stock_names(data)
    fig = plt.figure(figsize=figsize, constrained_layout=True)
    gs = fig.add_gridspec(2 + len(names), 5)

    ax_price = fig.add_subplot(gs[0, :])
    plot_price_paths(data, ax=ax_price)

    ax_bankrupt = fig.add_subplot(gs[1, :])
    plot_bankruptcy_timeline(data, ax=ax_bankrupt)

    for row, name in enumerate(names, start=2):
        returns = compute_returns(data[f'price_{name}'])
        ax_hist = fig.add_subplot(gs[row, :2])
        ax_qq = fig.add_subplot(gs[row, 2])
        plot_return_distribution(returns, ax_hist=ax_hist, ax_qq=ax_qq, label=name)
        ax_acf = [fig.add_subplot(gs[row, 3]), fig.add_subplot(gs[row, 4])]
        plot_autocorrelation_panel(returns, nlags=min(nlags, len(returns) // 3),
                                   axes=ax_acf, label=name)

    fig.suptitle("Stonks Dashboard", fontsize=13, fontweight='bold')
    return fig
