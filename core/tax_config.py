"""IRS contribution limits and configuration for self-employed retirement plans."""

from __future__ import annotations

from dataclasses import dataclass

CATCH_UP_AGE = 50


@dataclass(frozen=True)
class IRSLimits:
    """
    IRS contribution limits for a given tax year.

    These limits are updated annually by the IRS and should be
    verified against current IRS publications (Publication 560).
    A new tax year is adopted by building a new instance, never by
    editing an existing one.

    Attributes:
        year: Tax year these limits apply to
        elective_deferral_limit: Annual 401(k) employee deferral limit
        catch_up_limit: Additional deferral allowed for age 50+
        overall_limit_415c: Employee + employer cap (IRC 415(c))
        overall_limit_415c_with_catch_up: 415(c) cap including catch-up
        compensation_limit: Maximum compensation considered for contributions
        sep_rate: SEP-IRA contribution rate on compensation
        sep_min_compensation: Minimum compensation to receive a SEP contribution
        solo_401k_employer_rate: Employer rate on W-2 wages for corporations
        sole_proprietor_effective_rate: Employer rate on adjusted net earnings
        self_employment_tax_rate: Combined SE tax rate
        self_employment_tax_deduction: Deductible fraction of SE tax
        social_security_wage_base: Wage base capping the SE tax
    """

    year: int
    elective_deferral_limit: float = 23_000
    catch_up_limit: float = 7_500
    overall_limit_415c: float = 69_000
    overall_limit_415c_with_catch_up: float = 76_500
    compensation_limit: float = 345_000
    sep_rate: float = 0.25
    sep_min_compensation: float = 750
    solo_401k_employer_rate: float = 0.25
    sole_proprietor_effective_rate: float = 0.20
    self_employment_tax_rate: float = 0.1413
    self_employment_tax_deduction: float = 0.5
    social_security_wage_base: float = 160_200

    def __post_init__(self) -> None:
        if self.overall_limit_415c_with_catch_up != self.overall_limit_415c + self.catch_up_limit:
            raise ValueError(
                "overall_limit_415c_with_catch_up must equal overall_limit_415c + catch_up_limit"
            )
        if self.compensation_limit <= self.overall_limit_415c:
            raise ValueError("compensation_limit must exceed overall_limit_415c")

    def is_catch_up_eligible(self, age: int) -> bool:
        """Return True if the participant may make catch-up contributions."""
        return age >= CATCH_UP_AGE

    def max_elective_deferral(self, age: int) -> float:
        """Get total elective deferral limit including catch-up if eligible."""
        base = self.elective_deferral_limit
        if self.is_catch_up_eligible(age):
            base += self.catch_up_limit
        return base

    def overall_415c_limit(self, age: int) -> float:
        """Get the 415(c) limit, raised by the catch-up amount at 50+."""
        if self.is_catch_up_eligible(age):
            return self.overall_limit_415c_with_catch_up
        return self.overall_limit_415c


# IRS limits by year
# Source: IRS Publication 560, Notice 2023-75
IRS_LIMITS_2024 = IRSLimits(
    year=2024,
    elective_deferral_limit=23_000,
    catch_up_limit=7_500,
    overall_limit_415c=69_000,
    overall_limit_415c_with_catch_up=76_500,
    compensation_limit=345_000,
    sep_rate=0.25,
    sep_min_compensation=750,
    solo_401k_employer_rate=0.25,
    sole_proprietor_effective_rate=0.20,
    self_employment_tax_rate=0.1413,
    self_employment_tax_deduction=0.5,
    social_security_wage_base=160_200,
)

# Source: IRS Notice 2024-80
IRS_LIMITS_2025 = IRSLimits(
    year=2025,
    elective_deferral_limit=23_500,
    catch_up_limit=7_500,
    overall_limit_415c=70_000,
    overall_limit_415c_with_catch_up=77_500,
    compensation_limit=350_000,
    sep_rate=0.25,
    sep_min_compensation=750,
    solo_401k_employer_rate=0.25,
    sole_proprietor_effective_rate=0.20,
    self_employment_tax_rate=0.1413,
    self_employment_tax_deduction=0.5,
    social_security_wage_base=176_100,
)

IRS_LIMITS_BY_YEAR: dict[int, IRSLimits] = {
    IRS_LIMITS_2024.year: IRS_LIMITS_2024,
    IRS_LIMITS_2025.year: IRS_LIMITS_2025,
}

# Default to current year
CURRENT_IRS_LIMITS = IRS_LIMITS_2024


def current_limits() -> IRSLimits:
    """Return the active IRS limit table."""
    return CURRENT_IRS_LIMITS


def limits_for_year(year: int) -> IRSLimits:
    """
    Get the IRS limit table for a tax year.

    Args:
        year: Tax year

    Returns:
        The registered IRSLimits for that year

    Raises:
        KeyError: If no table is registered for the year
    """
    try:
        return IRS_LIMITS_BY_YEAR[year]
    except KeyError:
        available = ", ".join(str(y) for y in sorted(IRS_LIMITS_BY_YEAR))
        raise KeyError(f"No IRS limits for {year} (available: {available})") from None


def is_catch_up_eligible(age: int, limits: IRSLimits | None = None) -> bool:
    """Check if catch-up contributions are allowed at this age."""
    return (limits or current_limits()).is_catch_up_eligible(age)


def max_elective_deferral(age: int, limits: IRSLimits | None = None) -> float:
    """Get the maximum elective deferral including catch-up if applicable."""
    return (limits or current_limits()).max_elective_deferral(age)


def overall_415c_limit(age: int, limits: IRSLimits | None = None) -> float:
    """Get the overall 415(c) limit including catch-up if applicable."""
    return (limits or current_limits()).overall_415c_limit(age)
