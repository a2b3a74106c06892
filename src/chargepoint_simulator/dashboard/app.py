"""Chargepoint Demand Simulator — Streamlit dashboard.

Layout: sidebar inputs → headline metrics → four charts
(cumulative monthly energy, weekly energy, energy per chargepoint,
hourly energy on day 1).  A Monte-Carlo expander shows the spread of
peak power across seeds.

Run with:
    streamlit run src/chargepoint_simulator/dashboard/app.py
"""

from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go
import streamlit as st
from pydantic import ValidationError

from chargepoint_simulator.config import Scenario, SimulationConfig
from chargepoint_simulator.engine.orchestrator import run_engine, run_monte_carlo
from chargepoint_simulator.models.results import ChartPoint
from chargepoint_simulator.reporting.rollups import build_charts

# ---------------------------------------------------------------------------
# Default instances — single source of truth for sidebar defaults
# ---------------------------------------------------------------------------
_DEF_SIM = SimulationConfig()

_ACCENT = "#82ca9d"
_LAYOUT = dict(
    height=300,
    margin=dict(l=20, r=20, t=30, b=20),
    showlegend=False,
    plot_bgcolor="rgba(0,0,0,0)",
    paper_bgcolor="rgba(0,0,0,0)",
)

st.set_page_config(page_title="Chargepoint Demand Simulator", page_icon="⚡", layout="wide")


@st.cache_data(show_spinner="Simulating one year…")
def _simulate(scenario_json: str):
    scenario = Scenario.model_validate_json(scenario_json)
    result = run_engine(scenario)
    return result, build_charts(result)


def _chart(points: list[ChartPoint], kind: str, y_title: str) -> go.Figure:
    df = pd.DataFrame([p.model_dump() for p in points])
    fig = go.Figure()
    if kind == "area":
        fig.add_trace(go.Scatter(x=df["name"], y=df["value"], fill="tozeroy",
                                 line=dict(color=_ACCENT)))
    else:
        fig.add_trace(go.Bar(x=df["name"], y=df["value"], marker_color=_ACCENT))
    fig.update_layout(yaxis_title=y_title, **_LAYOUT)
    return fig


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
st.sidebar.header("Inputs")

with st.sidebar.expander("Site", expanded=True):
    chargepoints = st.number_input("Chargepoints", 0, 500, _DEF_SIM.chargepoint_count, 1)
    multiplier = st.slider("Arrival probability multiplier (%)", 0, 200,
                           int(_DEF_SIM.arrival_multiplier_pct), 5,
                           help="Scales every hourly arrival probability. 100 = reference profile.")
    consumption = st.number_input("EV consumption (kWh/100 km)", 0.0, 60.0,
                                  _DEF_SIM.ev_consumption_kwh_per_100km, 0.5)
    power = st.number_input("Charging power per chargepoint (kW)", 1.0, 350.0,
                            _DEF_SIM.charging_power_kw, 0.1)

with st.sidebar.expander("Randomness"):
    seed = st.number_input("Seed", 0, 999_999, 42, help="Random seed for reproducibility")
    mc_runs = st.number_input("Monte-Carlo runs", 1, 200, 20)

try:
    scenario = Scenario(
        simulation=SimulationConfig(
            chargepoint_count=int(chargepoints),
            arrival_multiplier_pct=float(multiplier),
            ev_consumption_kwh_per_100km=float(consumption),
            charging_power_kw=float(power),
        ),
        random_seed=int(seed),
    )
except ValidationError as exc:
    st.error(f"Invalid inputs: {exc}")
    st.stop()

result, charts = _simulate(scenario.model_dump_json())

# ---------------------------------------------------------------------------
# Headline metrics
# ---------------------------------------------------------------------------
st.title("Chargepoint Demand Simulator")

m1, m2, m3, m4 = st.columns(4)
m1.metric("Energy / year", f"{result.total_energy_kwh:,.0f} kWh")
m2.metric("Theoretical max power", f"{result.theoretical_max_power_kw:,.1f} kW")
m3.metric("Actual max power", f"{result.actual_max_power_kw:,.1f} kW")
m4.metric("Concurrency factor", f"{result.concurrency_factor:.0%}")

# ---------------------------------------------------------------------------
# Charts
# ---------------------------------------------------------------------------
c1, c2 = st.columns(2)
with c1:
    st.subheader("Aggregated consumption (kWh)")
    st.plotly_chart(_chart(charts["monthly_cumulative"], "area", "kWh"), use_container_width=True)
    st.subheader("Consumption per chargepoint (kWh)")
    st.plotly_chart(_chart(charts["chargepoints"], "bar", "kWh"), use_container_width=True)
with c2:
    st.subheader("Weekly consumption (kWh)")
    st.plotly_chart(_chart(charts["weekly"], "area", "kWh"), use_container_width=True)
    st.subheader("Consumption per hour on the first day (kWh)")
    st.plotly_chart(_chart(charts["first_day"], "bar", "kWh"), use_container_width=True)

with st.expander("Monte-Carlo spread"):
    if st.button("Run Monte-Carlo"):
        mc = run_monte_carlo(scenario.model_copy(update={"monte_carlo_runs": int(mc_runs)}))
        s = mc.summary
        st.dataframe(pd.DataFrame(
            {
                "P10": [s.energy_p10_kwh, s.peak_power_p10_kw, s.concurrency_p10],
                "P50": [s.energy_p50_kwh, s.peak_power_p50_kw, s.concurrency_p50],
                "P90": [s.energy_p90_kwh, s.peak_power_p90_kw, s.concurrency_p90],
            },
            index=["Energy (kWh)", "Peak power (kW)", "Concurrency factor"],
        ))
        st.caption(f"Worst peak across {s.num_runs} runs: {s.max_peak_power_kw:,.1f} kW")
