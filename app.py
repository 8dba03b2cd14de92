"""Marriage Surplus Calculator - Streamlit UI.

Unmarried Christian women versus available men by age bracket, under
monogamy and an optional polygyny scenario.
"""

import logging

import numpy as np
import plotly.graph_objects as go
import streamlit as st

from surplus.data import load_census_data, load_religious_data, load_sources
from surplus.formatting import format_number, format_percent
from surplus.model import calculate_results
from surplus.report import bracket_frame, chart_frame, summary_frame, to_csv
from surplus.types import (
    AGE_BRACKETS,
    DENOMINATIONS,
    MULTIPLE_WIFE_FIELDS,
    RELIGIOSITY_LEVELS,
    CalculatorFilters,
    distribution_from_multiples,
    is_polygynous,
    max_for_field,
    order_brackets,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

st.set_page_config(page_title="Marriage Surplus Calculator", layout="wide")

census = load_census_data()
religious = load_religious_data()
sources, limitations = load_sources()

# ── Sidebar: Filters ───────────────────────────────────────────────────

st.sidebar.header("Demographics")

denomination = st.sidebar.selectbox(
    "Denomination", list(DENOMINATIONS), format_func=DENOMINATIONS.get,
)
religiosity = st.sidebar.selectbox(
    "Religiosity", list(RELIGIOSITY_LEVELS), format_func=RELIGIOSITY_LEVELS.get,
)

st.sidebar.subheader("Population Filters")
include_divorced = st.sidebar.toggle("Include divorced", value=True)
include_widows = st.sidebar.toggle("Include widowed", value=True)
selected = st.sidebar.multiselect("Age brackets", list(AGE_BRACKETS), default=list(AGE_BRACKETS))
# Results are listed youngest first, whatever the click order
age_brackets = order_brackets(selected)

st.sidebar.subheader("Age Matching")
age_overlap = st.sidebar.slider("Age overlap (years)", min_value=0, max_value=20, value=0, step=10)
st.sidebar.caption("Same age only" if age_overlap == 0
                   else f"±{age_overlap} years: older men seeking younger women")

st.sidebar.subheader("Polygyny Scenario")
show_polygyny = st.sidebar.toggle("Compare with polygyny", value=False)

if "dist" not in st.session_state:
    st.session_state.dist = distribution_from_multiples()

dist = st.session_state.dist
if show_polygyny:
    for field_name, label in (("two_wives", "2 wives"), ("three_wives", "3 wives"),
                              ("four_plus_wives", "4+ wives")):
        limit = int(max_for_field(dist, field_name))
        if limit == 0:
            st.sidebar.caption(f"% of men with {label}: 0 (no share left)")
            continue
        value = st.sidebar.slider(f"% of men with {label}", 0, limit, int(getattr(dist, field_name)))
        shares = {f: getattr(dist, f) for f in MULTIPLE_WIFE_FIELDS}
        shares[field_name] = value
        dist = distribution_from_multiples(**shares)
    st.session_state.dist = dist
    st.sidebar.caption(f"{dist.one_wife:g}% monogamous")

# ── Calculate ──────────────────────────────────────────────────────────

filters = CalculatorFilters(
    age_brackets=age_brackets,
    denomination=denomination,
    religiosity=religiosity,
    include_widows=include_widows,
    include_divorced=include_divorced,
    age_overlap=age_overlap,
)
result = calculate_results(filters, census, religious, dist if show_polygyny else None)
monogamy = result.monogamy
alternative = result.alternative
comparing = show_polygyny and is_polygynous(dist) and alternative is not None

# ── Headline ───────────────────────────────────────────────────────────

st.title(format_number(monogamy.total_surplus))
st.markdown("#### Christian women without marriage prospects")

col_a, col_b, col_c, col_d = st.columns(4)
col_a.metric("Unmarried Women", format_number(monogamy.total_unmarried_women))
col_b.metric("Unmarried Men", format_number(monogamy.total_unmarried_men))
col_c.metric("Widows", format_number(monogamy.total_widows))
col_d.metric("Surplus", format_percent(monogamy.surplus_percent))

if comparing:
    st.subheader(alternative.name)
    st.caption(alternative.description)
    col_1, col_2, col_3 = st.columns(3)
    col_1.metric("Surplus with Polygyny", format_number(alternative.total_surplus),
                 delta=f"-{format_number(result.surplus_reduction)}", delta_color="inverse")
    col_2.metric("Women Gaining Prospects", format_number(result.surplus_reduction))
    col_3.metric("Remaining Surplus", format_percent(alternative.surplus_percent))

# ── Surplus by age bracket ─────────────────────────────────────────────

st.subheader("Surplus by Age Bracket")

chart = chart_frame(result)
if chart.empty:
    st.info("Select at least one age bracket.")
else:
    fig = go.Figure()
    fig.add_trace(go.Bar(x=chart.index, y=chart["Available Men"], name="Available Men",
                         marker_color="#5c8a8d", offsetgroup="men"))
    fig.add_trace(go.Bar(x=chart.index, y=chart["Women w/ Prospects"], name="Women w/ Prospects",
                         marker_color="#9cb58a", offsetgroup="women"))
    fig.add_trace(go.Bar(x=chart.index, y=chart["Surplus Women"], name="Surplus Women",
                         marker_color="#d9984a", offsetgroup="women",
                         base=chart["Women w/ Prospects"]))
    if comparing:
        fig.add_trace(go.Bar(x=chart.index, y=chart["Polygyny Surplus"], name="With Polygyny Surplus",
                             marker_color="#fc9d85", offsetgroup="alt"))

    women = chart["Women w/ Prospects"] + chart["Surplus Women"]
    top = float(np.max([chart["Available Men"].max(), women.max()])) * 1.1 or 1.0
    ticks = np.linspace(0, top, 6)
    fig.update_layout(
        barmode="group",
        xaxis_title="Age Group",
        yaxis=dict(tickvals=ticks, ticktext=[format_number(v) for v in ticks], title="People"),
        height=450,
        margin=dict(t=30, b=40),
    )
    st.plotly_chart(fig, use_container_width=True)

# ── Detailed breakdown ─────────────────────────────────────────────────

st.subheader("Detailed Breakdown")
st.dataframe(bracket_frame(result), hide_index=True, use_container_width=True)
st.dataframe(summary_frame(result), hide_index=True, use_container_width=True)

st.download_button(
    label="Download CSV",
    data=to_csv(result),
    file_name=f"surplus_{denomination}_{religiosity}_{age_overlap}y.csv",
    mime="text/csv",
)

# ── Sources ────────────────────────────────────────────────────────────

st.caption(" | ".join(f"[{s.name}]({s.url}) ({s.data_year})" for s in sources))
with st.expander("Limitations"):
    for item in limitations:
        st.markdown(f"- {item}")
