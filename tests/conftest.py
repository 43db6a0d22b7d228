"""Shared pytest fixtures for contribution calculator tests."""

import pytest

from core.inputs import CalculatorInput, ContributionType, FilingEntity
from core.tax_config import IRS_LIMITS_2024, IRSLimits


@pytest.fixture
def limits_2024() -> IRSLimits:
    """2024 IRS limit table."""
    return IRS_LIMITS_2024


@pytest.fixture
def sole_prop_request() -> dict:
    """Sole proprietor, age 35, $100k net profit, pre-tax."""
    return {
        "filingEntity": "sole_prop",
        "state": "CA",
        "age": 35,
        "netProfit": 100_000,
        "contributionType": "pre_tax",
        "rothPercentage": 50,
        "enableCatchUp": False,
        "assumeSelfEmploymentTax": True,
        "marginalTaxRate": 0.22,
    }


@pytest.fixture
def s_corp_request() -> dict:
    """S-Corp owner, age 45, $80k wages + $50k profit, Roth."""
    return {
        "filingEntity": "s_corp",
        "state": "TX",
        "age": 45,
        "w2Wages": 80_000,
        "businessProfit": 50_000,
        "contributionType": "roth",
        "rothPercentage": 50,
        "enableCatchUp": False,
        "assumeSelfEmploymentTax": False,
        "marginalTaxRate": 0.24,
    }


@pytest.fixture
def catch_up_request() -> dict:
    """Sole proprietor, age 55, $150k net profit, catch-up enabled."""
    return {
        "filingEntity": "sole_prop",
        "state": "NY",
        "age": 55,
        "netProfit": 150_000,
        "contributionType": "pre_tax",
        "rothPercentage": 50,
        "enableCatchUp": True,
        "assumeSelfEmploymentTax": True,
        "marginalTaxRate": 0.32,
    }


@pytest.fixture
def sole_prop_input() -> CalculatorInput:
    """Validated sole proprietor input."""
    return CalculatorInput(
        filing_entity=FilingEntity.SOLE_PROP,
        state="CA",
        age=35,
        contribution_type=ContributionType.PRE_TAX,
        net_profit=100_000.0,
    )


@pytest.fixture
def s_corp_input() -> CalculatorInput:
    """Validated S-Corp input with a 60% Roth mix."""
    return CalculatorInput(
        filing_entity=FilingEntity.S_CORP,
        state="FL",
        age=40,
        contribution_type=ContributionType.MIX,
        w2_wages=120_000.0,
        roth_percentage=60,
    )
