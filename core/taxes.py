"""Tax savings estimates for retirement contributions."""

from __future__ import annotations

from dataclasses import dataclass

from core.contributions import ContributionBreakdown


@dataclass(frozen=True)
class TaxSavingsEstimate:
    """Result of a tax savings estimate."""

    marginal_rate: float
    estimated_savings: float
    effective_contribution_cost: float

    @property
    def savings_rate(self) -> float:
        """Savings as a fraction of the total contribution."""
        cost = self.effective_contribution_cost + self.estimated_savings
        if cost <= 0:
            return 0.0
        return self.estimated_savings / cost

    def to_dict(self) -> dict[str, float]:
        return {
            "marginalRate": self.marginal_rate,
            "estimatedSavings": self.estimated_savings,
            "effectiveContributionCost": self.effective_contribution_cost,
        }


def calculate_tax_savings(
    contributions: ContributionBreakdown,
    marginal_rate: float,
) -> TaxSavingsEstimate:
    """
    Estimate current-year federal tax savings.

    Only pre-tax dollars (employee pre-tax deferral plus all employer money)
    reduce taxable income; Roth deferrals save nothing today.

    Args:
        contributions: Contribution breakdown
        marginal_rate: Federal marginal tax rate, 0 to 0.5

    Returns:
        TaxSavingsEstimate with savings and net out-of-pocket cost
    """
    estimated_savings = contributions.pre_tax_amount * marginal_rate
    return TaxSavingsEstimate(
        marginal_rate=marginal_rate,
        estimated_savings=estimated_savings,
        effective_contribution_cost=contributions.total - estimated_savings,
    )
