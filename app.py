"""Streamlit dashboard for the synthetic stock simulation."""

import sys
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd
import streamlit as st

# Ensure the project package is importable
sys.path.insert(0, str(Path(__file__).resolve().parent))

from stonks.analytics import compute_return_statistics, compute_returns, summarize_run
from stonks.config import DEFAULT_PARAMS
from stonks.model import StonksModel
from stonks.visualization import (
    plot_autocorrelation_panel,
    plot_bankruptcy_timeline,
    plot_price_paths,
    plot_return_distribution,
)

# ── Page config ──────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Stonks Dashboard",
    page_icon="📈",
    layout="wide",
)


@st.cache_data(show_spinner=False)
def run_simulation(steps: int, seed: int) -> pd.DataFrame:
    """Run the model and return its recorded variables. Cached on params."""
    model = StonksModel({**DEFAULT_PARAMS, 'steps': steps, 'seed': seed})
    results = model.run(display=False)
    return results.variables.StonksModel


# ── Sidebar ──────────────────────────────────────────────────────────────────

st.sidebar.title("Stonks")

with st.sidebar.expander("Simulation", expanded=True):
    steps = st.slider("steps", min_value=50, max_value=20000,
                      value=DEFAULT_PARAMS['steps'], step=50)
    seed = st.number_input("seed", value=DEFAULT_PARAMS['seed'], step=1)
    log_scale = st.checkbox("log price axis", value=False)

run_clicked = st.sidebar.button("▶  Run Simulation", type="primary",
                                use_container_width=True)

if run_clicked:
    with st.spinner("Running simulation..."):
        data = run_simulation(int(steps), int(seed))
    st.session_state["data"] = data

# ── Main area ────────────────────────────────────────────────────────────────

if "data" not in st.session_state:
    st.info("Configure parameters in the sidebar, then click **▶  Run Simulation**.")
    st.stop()

data: pd.DataFrame = st.session_state["data"]
total_steps = len(data)

start, end = st.slider(
    "Time range",
    min_value=0,
    max_value=total_steps - 1,
    value=(0, total_steps - 1),
    step=1,
    key="time_range",
)
data_slice = data.iloc[start : end + 1]

# ── Row 1: Price paths ──────────────────────────────────────────────────────

st.markdown("### Prices")
fig1, ax1 = plt.subplots(figsize=(12, 4))
plot_price_paths(data_slice, ax=ax1, log_scale=log_scale)
fig1.tight_layout()
st.pyplot(fig1)
plt.close(fig1)

# ── Row 2: Bankruptcies ─────────────────────────────────────────────────────

st.markdown("### Bankruptcies")
fig2, ax2 = plt.subplots(figsize=(12, 2))
plot_bankruptcy_timeline(data_slice, ax=ax2)
fig2.tight_layout()
st.pyplot(fig2)
plt.close(fig2)

# ── Row 3: Return distributions ─────────────────────────────────────────────

st.markdown("### Return Distributions")
if len(data_slice) < 10:
    st.warning("Selected range too short for analysis. Widen the time range slider.")
    st.stop()

stock_name = st.selectbox("Stock", ["BabyStock", "RiskyStock", "MemeStock"])
returns = compute_returns(data_slice[f"price_{stock_name}"])
fig3, (ax3a, ax3b) = plt.subplots(1, 2, figsize=(12, 4))
plot_return_distribution(returns, ax_hist=ax3a, ax_qq=ax3b, label=stock_name)
fig3.tight_layout()
st.pyplot(fig3)
plt.close(fig3)

# ── Row 4: ACF Panel ────────────────────────────────────────────────────────

st.markdown("### Autocorrelation Panel")
nlags = min(50, len(returns) // 3)
if nlags >= 5:
    fig4, axes4 = plt.subplots(1, 2, figsize=(12, 3.5))
    plot_autocorrelation_panel(returns, nlags=nlags, axes=list(axes4), label=stock_name)
    fig4.tight_layout()
    st.pyplot(fig4)
    plt.close(fig4)
else:
    st.info("Range too short for meaningful ACF (need > 15 observations).")

# ── Summary ─────────────────────────────────────────────────────────────────

with st.expander("Run Summary", expanded=True):
    st.dataframe(summarize_run(data_slice), use_container_width=True)

    st.markdown(f"**{stock_name} return statistics**")
    stats = compute_return_statistics(returns)
    stats_df = pd.DataFrame(
        {k: [f"{v:.6f}" if isinstance(v, float) else v]
         for k, v in stats.items()}
    ).T
    stats_df.columns = ["Value"]
    st.dataframe(stats_df, use_container_width=True)
