"""Main calculation engine for self-employed retirement contribution optimization."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from core.contributions import ContributionBreakdown, calculate_contribution_breakdown
from core.entities import EntityLimitResult, calculate_entity_limits
from core.exceptions import CalculationError, ContributionCalculatorError
from core.inputs import CalculatorInput, FilingEntity
from core.states import get_state_rules
from core.tax_config import IRSLimits, current_limits
from core.taxes import TaxSavingsEstimate, calculate_tax_savings
from core.validation import parse_calculator_input

logger = logging.getLogger(__name__)

DISCLAIMER_NOTES = (
    "These are planning estimates only - consult with a CPA for personalized advice",
    "Contribution limits and tax rules may change - verify current limits before contributing",
)


@dataclass(frozen=True)
class AppliedLimits:
    """
    IRS limits as applied to this participant.

    ``elective_deferral_limit`` and ``overall_limit_415c`` already include
    catch-up room for age 50+. ``compensation_limit`` is the compensation
    basis actually used.
    """

    elective_deferral_limit: float
    catch_up_limit: float
    overall_limit_415c: float
    compensation_limit: float

    def to_dict(self) -> dict[str, float]:
        return {
            "electiveDeferralLimit": self.elective_deferral_limit,
            "catchUpLimit": self.catch_up_limit,
            "overallLimit415c": self.overall_limit_415c,
            "compensationLimit": self.compensation_limit,
        }


@dataclass(frozen=True)
class LimitFlags:
    """Which contribution ceilings the result reached."""

    hit_elective_deferral_limit: bool
    hit_catch_up_limit: bool
    hit_415c_limit: bool
    hit_compensation_limit: bool

    def to_dict(self) -> dict[str, bool]:
        return {
            "hitElectiveDeferralLimit": self.hit_elective_deferral_limit,
            "hitCatchUpLimit": self.hit_catch_up_limit,
            "hit415cLimit": self.hit_415c_limit,
            "hitCompensationLimit": self.hit_compensation_limit,
        }


@dataclass(frozen=True)
class CalculationResult:
    """Complete result of a contribution calculation."""

    input: CalculatorInput
    contributions: ContributionBreakdown
    tax_savings: TaxSavingsEstimate
    limits: AppliedLimits
    flags: LimitFlags
    notes: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    tax_year: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with wire (camelCase) keys."""
        return {
            "input": self.input.to_dict(),
            "contributions": self.contributions.to_dict(),
            "taxSavings": self.tax_savings.to_dict(),
            "limits": self.limits.to_dict(),
            "flags": self.flags.to_dict(),
            "notes": list(self.notes),
            "warnings": list(self.warnings),
            "taxYear": self.tax_year,
        }


@dataclass(frozen=True)
class QuickEstimate:
    """Rough contribution preview for a partially completed form."""

    estimated_employee: float
    estimated_employer: float
    estimated_total: float


def calculate_limit_flags(
    contributions: ContributionBreakdown,
    entity_result: EntityLimitResult,
    age: int,
    limits: IRSLimits | None = None,
) -> LimitFlags:
    """Determine which contribution limits were reached."""
    limits = limits or current_limits()
    return LimitFlags(
        hit_elective_deferral_limit=(
            contributions.employee_deferral >= entity_result.max_employee_deferral
        ),
        hit_catch_up_limit=(
            limits.is_catch_up_eligible(age)
            and contributions.catch_up_amount >= limits.catch_up_limit
        ),
        hit_415c_limit=contributions.total >= limits.overall_415c_limit(age),
        hit_compensation_limit=contributions.total >= entity_result.compensation,
    )


def state_tax_note(state_code: str) -> str:
    """Informational note about state income tax treatment."""
    rules = get_state_rules(state_code)
    if rules.tax_info.has_state_tax:
        return (
            f"{rules.name} has state income tax - pre-tax contributions may provide "
            "additional state tax savings"
        )
    return f"{rules.name} has no state income tax - focus on federal tax optimization"


def _perform_calculation(calculator_input: CalculatorInput, limits: IRSLimits) -> CalculationResult:
    entity_result = calculate_entity_limits(
        calculator_input.filing_entity,
        calculator_input.age,
        net_profit=calculator_input.net_profit,
        w2_wages=calculator_input.w2_wages,
        business_profit=calculator_input.business_profit,
        limits=limits,
    )
    contributions = calculate_contribution_breakdown(calculator_input, entity_result, limits)
    tax_savings = calculate_tax_savings(contributions, calculator_input.marginal_tax_rate)
    flags = calculate_limit_flags(contributions, entity_result, calculator_input.age, limits)

    notes = list(entity_result.notes)
    notes.append(state_tax_note(calculator_input.state))
    notes.extend(DISCLAIMER_NOTES)

    return CalculationResult(
        input=calculator_input,
        contributions=contributions,
        tax_savings=tax_savings,
        limits=AppliedLimits(
            elective_deferral_limit=limits.max_elective_deferral(calculator_input.age),
            catch_up_limit=limits.catch_up_limit,
            overall_limit_415c=limits.overall_415c_limit(calculator_input.age),
            compensation_limit=entity_result.compensation,
        ),
        flags=flags,
        notes=tuple(notes),
        warnings=entity_result.warnings,
        tax_year=limits.year,
    )


def calculate_contributions(raw_input: Any, limits: IRSLimits | None = None) -> CalculationResult:
    """
    Calculate optimal retirement contributions.

    Runs structural validation, the entity limit rules, the contribution
    breakdown and the tax savings estimate, in that order.

    Args:
        raw_input: Wire-format mapping (camelCase keys) or a CalculatorInput
        limits: IRS limit table; defaults to the current tax year

    Returns:
        CalculationResult

    Raises:
        ContributionCalculatorError: Always a subclass of it. Validation and
            missing-income errors propagate unchanged; anything unexpected is
            wrapped in CalculationError.
    """
    limits = limits or current_limits()
    try:
        calculator_input = parse_calculator_input(raw_input)
        logger.debug(
            "Calculating contributions: entity=%s age=%s tax_year=%s",
            calculator_input.filing_entity.value,
            calculator_input.age,
            limits.year,
        )
        return _perform_calculation(calculator_input, limits)
    except ContributionCalculatorError:
        raise
    except Exception as e:
        logger.exception("Unexpected error during contribution calculation")
        raise CalculationError(str(e)) from e


def quick_estimate(
    partial_input: Mapping[str, Any],
    limits: IRSLimits | None = None,
) -> QuickEstimate | None:
    """
    Rough contribution estimate without full validation.

    Uses flat 20% (sole proprietor) or 25% (corporation) employer rates.
    Returns None until the entity and age are known, or when the entity
    tag is not recognized.
    """
    limits = limits or current_limits()
    entity_value = partial_input.get("filingEntity")
    age = partial_input.get("age")
    if not entity_value or not age:
        return None

    try:
        entity = FilingEntity(entity_value)
    except ValueError:
        return None

    max_deferral = limits.max_elective_deferral(age)
    income = partial_input.get("netProfit") or partial_input.get("w2Wages") or 0.0

    estimated_employer = 0.0
    if income > 0:
        if entity is FilingEntity.SOLE_PROP:
            estimated_employer = income * limits.sole_proprietor_effective_rate
        else:
            estimated_employer = income * limits.solo_401k_employer_rate

    estimated_employee = min(max_deferral, income)
    return QuickEstimate(
        estimated_employee=estimated_employee,
        estimated_employer=max(0.0, min(estimated_employer, income - max_deferral)),
        estimated_total=min(
            max_deferral + estimated_employer,
            limits.overall_415c_limit(age),
            income,
        ),
    )
