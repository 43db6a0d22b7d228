"""What-if analysis across incomes and filing entities."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

import numpy as np
import pandas as pd

from core.engine import CalculationResult, calculate_contributions
from core.inputs import CalculatorInput, FilingEntity
from core.tax_config import IRSLimits, current_limits

SWEEP_COLUMNS = [
    "income",
    "compensation",
    "employee_deferral",
    "employer_contribution",
    "total",
    "pre_tax_amount",
    "roth_amount",
    "estimated_savings",
    "effective_cost",
    "hit_415c_limit",
]


def _with_income(base: CalculatorInput, income: float, entity: FilingEntity | None = None) -> CalculatorInput:
    entity = entity or base.filing_entity
    if entity is FilingEntity.SOLE_PROP:
        return replace(base, filing_entity=entity, net_profit=income, w2_wages=None)
    return replace(base, filing_entity=entity, w2_wages=income, net_profit=None)


def _row(income: float, result: CalculationResult) -> dict[str, float | bool]:
    contributions = result.contributions
    return {
        "income": income,
        "compensation": result.limits.compensation_limit,
        "employee_deferral": contributions.employee_deferral,
        "employer_contribution": contributions.employer_contribution,
        "total": contributions.total,
        "pre_tax_amount": contributions.pre_tax_amount,
        "roth_amount": contributions.roth_amount,
        "estimated_savings": result.tax_savings.estimated_savings,
        "effective_cost": result.tax_savings.effective_contribution_cost,
        "hit_415c_limit": result.flags.hit_415c_limit,
    }


def income_grid(min_income: float, max_income: float, n_points: int = 25) -> np.ndarray:
    """Evenly spaced positive incomes, rounded to whole dollars."""
    if n_points < 2:
        raise ValueError("n_points must be at least 2")
    if min_income <= 0 or max_income <= min_income:
        raise ValueError("Require 0 < min_income < max_income")
    return np.round(np.linspace(min_income, max_income, n_points))


def income_sweep(
    base_input: CalculatorInput,
    incomes: Iterable[float],
    limits: IRSLimits | None = None,
) -> pd.DataFrame:
    """
    Recalculate contributions at each income level.

    The income replaces net profit for sole proprietors and W-2 wages for
    corporations; every other input is held fixed.

    Returns:
        DataFrame with one row per income, columns as in SWEEP_COLUMNS
    """
    limits = limits or current_limits()
    rows = []
    for income in np.asarray(list(incomes), dtype=float):
        result = calculate_contributions(_with_income(base_input, float(income)), limits)
        rows.append(_row(float(income), result))
    return pd.DataFrame(rows, columns=SWEEP_COLUMNS)


def compare_entities(
    base_input: CalculatorInput,
    income: float,
    limits: IRSLimits | None = None,
) -> pd.DataFrame:
    """
    Run the same income under each filing entity.

    Returns:
        DataFrame indexed by entity value
    """
    limits = limits or current_limits()
    rows = []
    for entity in FilingEntity:
        result = calculate_contributions(_with_income(base_input, income, entity), limits)
        row = _row(income, result)
        row["entity"] = entity.value
        row["warnings"] = len(result.warnings)
        rows.append(row)
    return pd.DataFrame(rows).set_index("entity")


def result_to_frame(result: CalculationResult) -> pd.DataFrame:
    """Flatten a result into (section, item, value) rows for CSV export."""
    rows = []
    sections = {
        "contributions": result.contributions.to_dict(),
        "taxSavings": result.tax_savings.to_dict(),
        "limits": result.limits.to_dict(),
        "flags": result.flags.to_dict(),
    }
    for section, values in sections.items():
        for item, value in values.items():
            rows.append({"section": section, "item": item, "value": value})
    for i, note in enumerate(result.notes):
        rows.append({"section": "notes", "item": str(i + 1), "value": note})
    for i, warning in enumerate(result.warnings):
        rows.append({"section": "warnings", "item": str(i + 1), "value": warning})
    return pd.DataFrame(rows, columns=["section", "item", "value"])
