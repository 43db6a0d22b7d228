"""Split contribution room into employee and employer dollars, pre-tax and Roth."""

from __future__ import annotations

import math
from dataclasses import dataclass

from core.entities import EntityLimitResult
from core.inputs import CalculatorInput, ContributionType
from core.tax_config import IRSLimits, current_limits


@dataclass(frozen=True)
class ContributionBreakdown:
    """
    Final contribution amounts.

    Employer money is always pre-tax, so ``pre_tax_amount`` includes the
    employer contribution and ``pre_tax_amount + roth_amount == total``.
    """

    employee_deferral: float
    employer_contribution: float
    total: float
    catch_up_amount: float
    pre_tax_amount: float
    roth_amount: float

    @property
    def employee_pre_tax_amount(self) -> float:
        """Pre-tax portion of the employee deferral only."""
        return self.pre_tax_amount - self.employer_contribution

    def to_dict(self) -> dict[str, float]:
        return {
            "employeeDeferral": self.employee_deferral,
            "employerContribution": self.employer_contribution,
            "total": self.total,
            "catchUpAmount": self.catch_up_amount,
            "preTaxAmount": self.pre_tax_amount,
            "rothAmount": self.roth_amount,
        }


def round_half_up(value: float) -> float:
    """Round to the nearest dollar, halves away from zero for positive amounts."""
    return float(math.floor(value + 0.5))


def catch_up_portion(employee_deferral: float, age: int, limits: IRSLimits | None = None) -> float:
    """
    Portion of the employee deferral above the base elective deferral limit.

    Zero under age 50, and never negative when the deferral is below the
    base limit.
    """
    limits = limits or current_limits()
    if not limits.is_catch_up_eligible(age):
        return 0.0
    return max(0.0, min(limits.catch_up_limit, employee_deferral - limits.elective_deferral_limit))


def split_employee_deferral(
    employee_deferral: float,
    contribution_type: ContributionType,
    roth_percentage: float = 0.0,
) -> tuple[float, float]:
    """
    Split the employee deferral by preference.

    Returns:
        (pre_tax_amount, roth_amount) for the employee money only
    """
    if contribution_type is ContributionType.PRE_TAX:
        return employee_deferral, 0.0
    if contribution_type is ContributionType.ROTH:
        return 0.0, employee_deferral
    if contribution_type is ContributionType.MIX:
        roth_amount = round_half_up(employee_deferral * roth_percentage / 100)
        return employee_deferral - roth_amount, roth_amount
    raise ValueError(f"Unknown contribution type: {contribution_type}")


def calculate_contribution_breakdown(
    calculator_input: CalculatorInput,
    entity_result: EntityLimitResult,
    limits: IRSLimits | None = None,
) -> ContributionBreakdown:
    """
    Determine actual contribution amounts from entity ceilings and preferences.

    The employee deferral is filled first; the employer contribution takes
    whatever 415(c) and compensation room remains, up to its own maximum.

    Args:
        calculator_input: Validated input (age and contribution preference)
        entity_result: Ceilings from the entity limit rules
        limits: IRS limit table

    Returns:
        ContributionBreakdown with the pre-tax / Roth split applied
    """
    limits = limits or current_limits()
    age = calculator_input.age
    overall_limit = limits.overall_415c_limit(age)
    compensation = entity_result.compensation

    employee_deferral = min(entity_result.max_employee_deferral, compensation, overall_limit)

    remaining_room = min(
        overall_limit - employee_deferral,
        entity_result.max_employer_contribution,
        compensation - employee_deferral,
    )
    employer_contribution = max(0.0, remaining_room)

    total = employee_deferral + employer_contribution
    catch_up_amount = catch_up_portion(employee_deferral, age, limits)

    pre_tax_amount, roth_amount = split_employee_deferral(
        employee_deferral,
        calculator_input.contribution_type,
        calculator_input.roth_percentage,
    )
    # Employer contributions are always pre-tax
    pre_tax_amount += employer_contribution

    return ContributionBreakdown(
        employee_deferral=employee_deferral,
        employer_contribution=employer_contribution,
        total=total,
        catch_up_amount=catch_up_amount,
        pre_tax_amount=pre_tax_amount,
        roth_amount=roth_amount,
    )
