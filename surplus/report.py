"""Tabular views of a calculation for display and CSV export."""

import pandas as pd

from surplus.formatting import round_fixed
from surplus.types import CalculatorResult, ScenarioResult


def bracket_frame(result: CalculatorResult) -> pd.DataFrame:
    """Per-bracket breakdown, with polygyny columns when an alternative exists."""
    rows = []
    alt = result.alternative.by_bracket if result.alternative else ()
    for i, b in enumerate(result.monogamy.by_bracket):
        row = {
            "Age": b.age_bracket,
            "Unmarried Women": b.unmarried_women,
            "Unmarried Men": b.unmarried_men,
            "Widows": b.widows,
            "Available Men": b.available_men,
            "Surplus": b.surplus,
            "Surplus %": round_fixed(b.surplus_percent, 1),
        }
        if alt:
            row["Polygyny Available Men"] = alt[i].available_men
            row["Polygyny Surplus"] = alt[i].surplus
            row["Polygyny Surplus %"] = round_fixed(alt[i].surplus_percent, 1)
        rows.append(row)
    return pd.DataFrame(rows)


def chart_frame(result: CalculatorResult) -> pd.DataFrame:
    """Series for the surplus bar chart, indexed by age bracket."""
    rows = []
    alt = result.alternative.by_bracket if result.alternative else ()
    for i, b in enumerate(result.monogamy.by_bracket):
        row = {
            "Age": b.age_bracket,
            "Available Men": b.available_men,
            "Women w/ Prospects": min(b.unmarried_women, b.available_men),
            "Surplus Women": b.surplus,
        }
        if alt:
            row["Polygyny Surplus"] = alt[i].surplus
        rows.append(row)
    if not rows:
        return pd.DataFrame()
    return pd.DataFrame(rows).set_index("Age")


def _summary_row(scenario: ScenarioResult) -> dict:
    return {
        "Scenario": scenario.name,
        "Description": scenario.description,
        "Unmarried Women": scenario.total_unmarried_women,
        "Unmarried Men": scenario.total_unmarried_men,
        "Widows": scenario.total_widows,
        "Surplus": scenario.total_surplus,
        "Surplus %": round_fixed(scenario.surplus_percent, 1),
    }


def summary_frame(result: CalculatorResult) -> pd.DataFrame:
    scenarios = [result.monogamy]
    if result.alternative:
        scenarios.append(result.alternative)
    return pd.DataFrame([_summary_row(s) for s in scenarios])


def to_csv(result: CalculatorResult) -> str:
    return bracket_frame(result).to_csv(index=False)
