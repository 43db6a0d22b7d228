"""Entity-specific contribution limits for self-employed retirement plans."""

from __future__ import annotations

from dataclasses import dataclass

from core.exceptions import MissingIncomeFieldError, UnsupportedEntityError
from core.inputs import FilingEntity
from core.tax_config import IRSLimits, current_limits
from utils.helpers import format_currency

LOW_NET_PROFIT_THRESHOLD = 1_000
LOW_W2_WAGES_THRESHOLD = 30_000
HIGH_BUSINESS_PROFIT_THRESHOLD = 50_000


@dataclass(frozen=True)
class EntityLimitResult:
    """
    Contribution ceilings derived from a filing entity and its income.

    Attributes:
        compensation: Compensation basis, capped at the IRS compensation limit
        max_employee_deferral: Largest allowed elective deferral
        max_employer_contribution: Largest allowed employer contribution
        total_max_contribution: Combined ceiling (415(c) and compensation capped)
        notes: Explanatory notes, in display order
        warnings: Cautions, in display order
    """

    compensation: float
    max_employee_deferral: float
    max_employer_contribution: float
    total_max_contribution: float
    notes: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class IncomeRequirements:
    """Which income fields a filing entity needs, with form descriptions."""

    required: tuple[str, ...]
    optional: tuple[str, ...]
    descriptions: dict[str, str]


def sole_proprietor_adjusted_earnings(net_profit: float, limits: IRSLimits | None = None) -> float:
    """
    Net earnings after deducting the deductible half of self-employment tax.

    SE tax is capped at the Social Security wage base.
    """
    limits = limits or current_limits()
    se_tax = min(
        net_profit * limits.self_employment_tax_rate,
        limits.social_security_wage_base * limits.self_employment_tax_rate,
    )
    return net_profit - se_tax * limits.self_employment_tax_deduction


def max_employer_contribution(
    entity: FilingEntity,
    compensation: float,
    net_earnings: float | None = None,
    limits: IRSLimits | None = None,
) -> float:
    """
    Calculate the maximum employer contribution for a filing entity.

    Sole proprietors get the effective rate (about 20%) on net earnings after
    the SE tax deduction. Corporations get 25% of W-2 wages. Either way the
    rate basis is capped at the compensation limit.

    Args:
        entity: Filing entity
        compensation: Compensation basis (W-2 wages for corporations)
        net_earnings: Schedule C net profit (sole proprietors only)
        limits: IRS limit table

    Returns:
        Maximum employer contribution in dollars
    """
    limits = limits or current_limits()

    if entity is FilingEntity.SOLE_PROP:
        if not net_earnings:
            return 0.0
        rate = limits.sole_proprietor_effective_rate
        adjusted = sole_proprietor_adjusted_earnings(net_earnings, limits)
        return min(adjusted * rate, limits.compensation_limit * rate)
    if entity in (FilingEntity.S_CORP, FilingEntity.C_CORP):
        rate = limits.solo_401k_employer_rate
        return min(compensation, limits.compensation_limit) * rate
    raise UnsupportedEntityError(entity)


def _ceilings(
    entity: FilingEntity,
    compensation: float,
    age: int,
    limits: IRSLimits,
    net_earnings: float | None = None,
) -> tuple[float, float, float]:
    max_employee = min(compensation, limits.max_elective_deferral(age))
    max_employer = max_employer_contribution(entity, compensation, net_earnings, limits)
    total = min(
        max_employee + max_employer,
        limits.overall_415c_limit(age),
        compensation,
    )
    return max_employee, max_employer, total


def calculate_sole_proprietor_limits(
    net_profit: float,
    age: int,
    limits: IRSLimits | None = None,
) -> EntityLimitResult:
    """Calculate contribution limits for a sole proprietor (Schedule C)."""
    limits = limits or current_limits()

    compensation = min(net_profit, limits.compensation_limit)
    max_employee, max_employer, total = _ceilings(
        FilingEntity.SOLE_PROP, compensation, age, limits, net_earnings=net_profit
    )

    notes = [
        "As a sole proprietor, your contributions are based on net profit from Schedule C",
        "Employer contributions are approximately 20% of net earnings after "
        "self-employment tax deduction",
    ]
    warnings = []
    if net_profit > limits.compensation_limit:
        warnings.append(
            f"Income exceeds IRS compensation limit of {format_currency(limits.compensation_limit)}"
        )
    if net_profit < LOW_NET_PROFIT_THRESHOLD:
        warnings.append("Very low net profit may limit contribution opportunities")

    return EntityLimitResult(
        compensation=compensation,
        max_employee_deferral=max_employee,
        max_employer_contribution=max_employer,
        total_max_contribution=total,
        notes=tuple(notes),
        warnings=tuple(warnings),
    )


def calculate_s_corp_limits(
    w2_wages: float,
    business_profit: float,
    age: int,
    limits: IRSLimits | None = None,
) -> EntityLimitResult:
    """Calculate contribution limits for an S-Corporation owner-employee.

    Only W-2 wages count as compensation; K-1 profit is context for warnings.
    """
    limits = limits or current_limits()

    compensation = min(w2_wages, limits.compensation_limit)
    max_employee, max_employer, total = _ceilings(FilingEntity.S_CORP, compensation, age, limits)

    notes = [
        "As an S-Corp owner, contributions are based only on W-2 wages, not business profits",
        "Employer contributions are 25% of W-2 wages",
        "Business profits (K-1 income) do not count as compensation for contribution purposes",
    ]
    warnings = []
    if business_profit > w2_wages * 2:
        warnings.append("Consider increasing W-2 wages to maximize contribution opportunities")
        warnings.append('IRS requires "reasonable compensation" for S-Corp owner-employees')
    if w2_wages < LOW_W2_WAGES_THRESHOLD and business_profit > HIGH_BUSINESS_PROFIT_THRESHOLD:
        warnings.append("W-2 wages may be too low relative to business profits - consult a CPA")

    return EntityLimitResult(
        compensation=compensation,
        max_employee_deferral=max_employee,
        max_employer_contribution=max_employer,
        total_max_contribution=total,
        notes=tuple(notes),
        warnings=tuple(warnings),
    )


def calculate_c_corp_limits(
    w2_wages: float,
    business_profit: float,
    age: int,
    limits: IRSLimits | None = None,
) -> EntityLimitResult:
    """Calculate contribution limits for a C-Corporation owner-employee."""
    limits = limits or current_limits()

    compensation = min(w2_wages, limits.compensation_limit)
    max_employee, max_employer, total = _ceilings(FilingEntity.C_CORP, compensation, age, limits)

    notes = [
        "As a C-Corp owner-employee, contributions are based on W-2 wages",
        "Employer contributions are 25% of W-2 wages",
        "C-Corp profits are subject to double taxation but provide flexibility",
    ]
    if business_profit > 0:
        notes.append("Business profits shown are after corporate income tax")

    return EntityLimitResult(
        compensation=compensation,
        max_employee_deferral=max_employee,
        max_employer_contribution=max_employer,
        total_max_contribution=total,
        notes=tuple(notes),
        warnings=(),
    )


def calculate_entity_limits(
    entity: FilingEntity,
    age: int,
    net_profit: float | None = None,
    w2_wages: float | None = None,
    business_profit: float | None = None,
    limits: IRSLimits | None = None,
) -> EntityLimitResult:
    """
    Dispatch to the limit rules for a filing entity.

    This is the domain validation pass: the income field the entity needs
    must be present and non-zero.

    Raises:
        MissingIncomeFieldError: If the required income field is missing or zero
        UnsupportedEntityError: If the entity has no limit rules
    """
    limits = limits or current_limits()
    business_profit = business_profit or 0.0

    if entity is FilingEntity.SOLE_PROP:
        if not net_profit:
            raise MissingIncomeFieldError(
                "netProfit",
                "Net profit is required for sole proprietor calculations",
                "MISSING_NET_PROFIT",
            )
        return calculate_sole_proprietor_limits(net_profit, age, limits)

    if entity is FilingEntity.S_CORP:
        if not w2_wages:
            raise MissingIncomeFieldError(
                "w2Wages",
                "W-2 wages are required for S-Corp calculations",
                "MISSING_W2_WAGES",
            )
        return calculate_s_corp_limits(w2_wages, business_profit, age, limits)

    if entity is FilingEntity.C_CORP:
        if not w2_wages:
            raise MissingIncomeFieldError(
                "w2Wages",
                "W-2 wages are required for C-Corp calculations",
                "MISSING_W2_WAGES",
            )
        return calculate_c_corp_limits(w2_wages, business_profit, age, limits)

    raise UnsupportedEntityError(entity)


def entity_income_requirements(entity: FilingEntity) -> IncomeRequirements:
    """Get the income fields a filing entity requires, for form rendering."""
    if entity is FilingEntity.SOLE_PROP:
        return IncomeRequirements(
            required=("netProfit",),
            optional=(),
            descriptions={"netProfit": "Net profit from Schedule C (after business expenses)"},
        )
    if entity is FilingEntity.S_CORP:
        return IncomeRequirements(
            required=("w2Wages",),
            optional=("businessProfit",),
            descriptions={
                "w2Wages": "W-2 wages paid to owner-employee",
                "businessProfit": "Additional business profit (K-1 income) - optional for context",
            },
        )
    if entity is FilingEntity.C_CORP:
        return IncomeRequirements(
            required=("w2Wages",),
            optional=("businessProfit",),
            descriptions={
                "w2Wages": "W-2 wages paid to owner-employee",
                "businessProfit": "Business profit after corporate taxes - optional for context",
            },
        )
    raise UnsupportedEntityError(entity)
