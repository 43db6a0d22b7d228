"""Calculator input model: filing entities, contribution preferences, user inputs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FilingEntity(Enum):
    """Business structure the owner files under."""

    SOLE_PROP = "sole_prop"
    S_CORP = "s_corp"
    C_CORP = "c_corp"

    @property
    def label(self) -> str:
        return ENTITY_LABELS[self]


ENTITY_LABELS: dict[FilingEntity, str] = {
    FilingEntity.SOLE_PROP: "Sole Proprietor (Schedule C)",
    FilingEntity.S_CORP: "S-Corporation",
    FilingEntity.C_CORP: "C-Corporation",
}


class ContributionType(Enum):
    """How the employee deferral should be split between pre-tax and Roth."""

    PRE_TAX = "pre_tax"
    ROTH = "roth"
    MIX = "mix"


DEFAULT_ROTH_PERCENTAGE = 50.0
DEFAULT_MARGINAL_TAX_RATE = 0.22


@dataclass(frozen=True)
class CalculatorInput:
    """
    Validated calculator inputs.

    Income fields are conditional on the filing entity: sole proprietors
    supply ``net_profit``; S-Corp and C-Corp owners supply ``w2_wages``
    and optionally ``business_profit``.
    """

    filing_entity: FilingEntity
    state: str
    age: int
    contribution_type: ContributionType
    net_profit: float | None = None
    w2_wages: float | None = None
    business_profit: float | None = None
    roth_percentage: float = DEFAULT_ROTH_PERCENTAGE
    enable_catch_up: bool = False
    assume_self_employment_tax: bool = True
    marginal_tax_rate: float = DEFAULT_MARGINAL_TAX_RATE

    def to_dict(self) -> dict[str, Any]:
        """Return the input using wire (camelCase) keys, omitting unset income fields."""
        data: dict[str, Any] = {
            "filingEntity": self.filing_entity.value,
            "state": self.state,
            "age": self.age,
        }
        if self.net_profit is not None:
            data["netProfit"] = self.net_profit
        if self.w2_wages is not None:
            data["w2Wages"] = self.w2_wages
        if self.business_profit is not None:
            data["businessProfit"] = self.business_profit
        data.update(
            {
                "contributionType": self.contribution_type.value,
                "rothPercentage": self.roth_percentage,
                "enableCatchUp": self.enable_catch_up,
                "assumeSelfEmploymentTax": self.assume_self_employment_tax,
                "marginalTaxRate": self.marginal_tax_rate,
            }
        )
        return data
