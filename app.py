"""Self-Employed Retirement Contribution Calculator - Streamlit App."""

from __future__ import annotations

import logging

import plotly.graph_objects as go
import streamlit as st

from core.api import result_to_json
from core.engine import calculate_contributions, quick_estimate
from core.entities import entity_income_requirements
from core.exceptions import ContributionCalculatorError, ValidationError
from core.inputs import ContributionType, FilingEntity
from core.scenarios import compare_entities, income_grid, income_sweep, result_to_frame
from core.states import state_choices
from core.tax_config import IRS_LIMITS_BY_YEAR, limits_for_year
from utils.helpers import (
    format_compact_currency,
    format_currency,
    format_percentage,
    parse_currency,
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CONTRIBUTION_TYPE_LABELS = {
    ContributionType.PRE_TAX: "Pre-tax (traditional)",
    ContributionType.ROTH: "Roth",
    ContributionType.MIX: "Mix of pre-tax and Roth",
}

INCOME_LABELS = {
    "netProfit": "Net profit (Schedule C)",
    "w2Wages": "W-2 wages",
    "businessProfit": "Business profit",
}

st.set_page_config(page_title="Retirement Contribution Calculator", layout="wide")

st.title("Self-Employed Retirement Contribution Calculator")
st.caption("Solo 401(k) contribution limits by business structure, age and income.")


def currency_input(label: str, value: float, key: str, help_text: str | None = None) -> float:
    """Create a currency input field."""
    raw_value = st.text_input(
        label,
        key=key,
        help=help_text,
        value=st.session_state.get(key, format_currency(value)),
    )
    return parse_currency(raw_value, value)


# =============================================================================
# SIDEBAR INPUTS
# =============================================================================

with st.sidebar:
    st.header("Business")
    tax_year = st.selectbox("Tax year", sorted(IRS_LIMITS_BY_YEAR), index=0)
    limits = limits_for_year(tax_year)

    filing_entity = st.selectbox(
        "Business structure",
        list(FilingEntity),
        format_func=lambda entity: entity.label,
    )
    states = state_choices()
    state_index = st.selectbox(
        "State",
        range(len(states)),
        index=[code for code, _ in states].index("CA"),
        format_func=lambda i: states[i][1],
    )
    state_code = states[state_index][0]

    st.header("Profile")
    age = st.number_input("Age", min_value=18, max_value=100, value=40)

    st.header("Income")
    requirements = entity_income_requirements(filing_entity)
    incomes: dict[str, float] = {}
    for field_name in requirements.required + requirements.optional:
        incomes[field_name] = currency_input(
            INCOME_LABELS[field_name],
            value=100_000.0 if field_name in requirements.required else 0.0,
            key=f"{filing_entity.value}_{field_name}",
            help_text=requirements.descriptions[field_name],
        )

    st.header("Preferences")
    contribution_type = st.radio(
        "Employee contribution type",
        list(ContributionType),
        format_func=lambda ctype: CONTRIBUTION_TYPE_LABELS[ctype],
    )
    roth_percentage = 50
    if contribution_type is ContributionType.MIX:
        roth_percentage = st.slider("Roth share of employee deferral (%)", 0, 100, 50, step=5)

    with st.expander("Advanced options", expanded=False):
        marginal_tax_rate = (
            st.slider("Federal marginal tax rate (%)", 0, 50, 22, step=1) / 100
        )
        enable_catch_up = st.checkbox("Include catch-up contributions (age 50+)", value=age >= 50)
        assume_se_tax = st.checkbox("Account for self-employment tax", value=True)

raw_input = {
    "filingEntity": filing_entity.value,
    "state": state_code,
    "age": int(age),
    **incomes,
    "contributionType": contribution_type.value,
    "rothPercentage": roth_percentage,
    "enableCatchUp": enable_catch_up,
    "assumeSelfEmploymentTax": assume_se_tax,
    "marginalTaxRate": marginal_tax_rate,
}

# =============================================================================
# CALCULATION
# =============================================================================

try:
    result = calculate_contributions(raw_input, limits=limits)
except ValidationError as e:
    st.error("Please fix the following input errors:")
    for field_name, message in e.errors:
        st.warning(f"{field_name}: {message}")
    st.stop()
except ContributionCalculatorError as e:
    logger.info(f"Calculation rejected [{e.code}]: {e.message}")
    st.error(e.message)
    estimate = quick_estimate(raw_input, limits=limits)
    if estimate is not None:
        st.caption(
            f"Rough estimate: up to {format_currency(estimate.estimated_total)} total"
        )
    st.stop()

contributions = result.contributions
tax_savings = result.tax_savings

# =============================================================================
# SUMMARY
# =============================================================================

metric_cols = st.columns(4)
with metric_cols[0]:
    st.metric("Total contribution", format_currency(contributions.total))
with metric_cols[1]:
    st.metric("Employee deferral", format_currency(contributions.employee_deferral))
with metric_cols[2]:
    st.metric("Employer contribution", format_currency(contributions.employer_contribution))
with metric_cols[3]:
    st.metric(
        "Estimated tax savings",
        format_currency(tax_savings.estimated_savings),
        help=f"At a {format_percentage(tax_savings.marginal_rate, 0)} marginal rate",
    )

for warning in result.warnings:
    st.warning(warning)

hit_flags = {
    "Elective deferral limit": result.flags.hit_elective_deferral_limit,
    "Catch-up limit": result.flags.hit_catch_up_limit,
    "415(c) overall limit": result.flags.hit_415c_limit,
    "Compensation limit": result.flags.hit_compensation_limit,
}
reached = [name for name, hit in hit_flags.items() if hit]
if reached:
    st.info(f"**Limits reached:** {' | '.join(reached)}")

# =============================================================================
# CHARTS
# =============================================================================

source_chart = go.Figure(
    data=[
        go.Bar(
            x=["Employee deferral", "Employer contribution"],
            y=[contributions.employee_deferral, contributions.employer_contribution],
            marker_color=["#0d6efd", "#198754"],
        )
    ]
)
source_chart.update_layout(title="Contribution Sources", yaxis_title="Dollars")

tax_chart = go.Figure(
    data=[
        go.Pie(
            labels=["Pre-tax", "Roth"],
            values=[contributions.pre_tax_amount, contributions.roth_amount],
            hole=0.4,
        )
    ]
)
tax_chart.update_layout(title="Tax Treatment", legend_title="Type")

tabs = st.tabs(["Overview", "Income Sweep", "Compare Structures", "Limits", "Export"])

with tabs[0]:
    chart_cols = st.columns(2)
    with chart_cols[0]:
        st.plotly_chart(source_chart, use_container_width=True)
    with chart_cols[1]:
        st.plotly_chart(tax_chart, use_container_width=True)

    st.write(
        {
            "Catch-up portion": format_currency(contributions.catch_up_amount),
            "Pre-tax amount": format_currency(contributions.pre_tax_amount),
            "Roth amount": format_currency(contributions.roth_amount),
            "Effective contribution cost": format_currency(tax_savings.effective_contribution_cost),
        }
    )

    st.subheader("Notes")
    for note in result.notes:
        st.caption(f"- {note}")

with tabs[1]:
    base_income = max(incomes.get("netProfit", 0.0), incomes.get("w2Wages", 0.0))
    sweep_max = max(base_income * 3, 400_000.0)
    sweep = income_sweep(result.input, income_grid(10_000, sweep_max, 30), limits=limits)

    sweep_chart = go.Figure()
    for column, label in [
        ("employee_deferral", "Employee"),
        ("employer_contribution", "Employer"),
        ("total", "Total"),
    ]:
        sweep_chart.add_trace(go.Scatter(x=sweep["income"], y=sweep[column], name=label))
    sweep_chart.add_vline(x=base_income, line_dash="dash", line_color="gray")
    sweep_chart.update_layout(
        title="Contributions by Income",
        xaxis_title=INCOME_LABELS[requirements.required[0]],
        yaxis_title="Dollars",
    )
    st.plotly_chart(sweep_chart, use_container_width=True)
    st.caption(
        f"Total contributions stop growing at the 415(c) limit of "
        f"{format_compact_currency(result.limits.overall_limit_415c)}."
    )

with tabs[2]:
    comparison = compare_entities(result.input, base_income, limits=limits)
    st.dataframe(
        comparison[["employee_deferral", "employer_contribution", "total", "estimated_savings"]]
        .rename(index=lambda value: FilingEntity(value).label)
        .style.format("${:,.0f}"),
        use_container_width=True,
    )
    st.caption("Same income treated as net profit (sole proprietor) or W-2 wages (corporations).")

with tabs[3]:
    st.subheader(f"IRS limits applied ({result.tax_year})")
    st.write(
        {
            "Elective deferral limit": format_currency(result.limits.elective_deferral_limit),
            "Catch-up limit": format_currency(result.limits.catch_up_limit),
            "415(c) overall limit": format_currency(result.limits.overall_limit_415c),
            "Compensation basis": format_currency(result.limits.compensation_limit),
            "IRS compensation cap": format_currency(limits.compensation_limit),
            "Social Security wage base": format_currency(limits.social_security_wage_base),
        }
    )

with tabs[4]:
    st.download_button(
        "Download JSON",
        data=result_to_json(result),
        file_name="retirement_contributions.json",
        mime="application/json",
    )
    st.download_button(
        "Download CSV",
        data=result_to_frame(result).to_csv(index=False),
        file_name="retirement_contributions.csv",
        mime="text/csv",
    )
