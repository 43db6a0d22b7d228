"""Tests for the contribution breakdown."""

from dataclasses import replace

import pytest

from core.contributions import (
    calculate_contribution_breakdown,
    catch_up_portion,
    round_half_up,
    split_employee_deferral,
)
from core.entities import EntityLimitResult, calculate_entity_limits
from core.inputs import ContributionType, FilingEntity


def _breakdown(calculator_input):
    entity_result = calculate_entity_limits(
        calculator_input.filing_entity,
        calculator_input.age,
        net_profit=calculator_input.net_profit,
        w2_wages=calculator_input.w2_wages,
        business_profit=calculator_input.business_profit,
    )
    return calculate_contribution_breakdown(calculator_input, entity_result)


class TestBreakdown:
    """Tests for employee/employer allocation."""

    def test_sole_prop_pre_tax(self, sole_prop_input):
        """Employee fills first, employer gets its full room."""
        result = _breakdown(sole_prop_input)
        assert result.employee_deferral == 23_000
        assert result.employer_contribution == pytest.approx(18_587)
        assert result.total == pytest.approx(41_587)
        assert result.roth_amount == 0
        assert result.pre_tax_amount == pytest.approx(result.total)
        assert result.catch_up_amount == 0

    def test_employer_limited_by_415c(self, sole_prop_input):
        """High income: employer share shrinks to fit under 415(c)."""
        result = _breakdown(replace(sole_prop_input, net_profit=500_000.0))
        assert result.employee_deferral == 23_000
        assert result.employer_contribution == 46_000
        assert result.total == 69_000

    def test_employer_limited_by_compensation(self, sole_prop_input):
        """Low income: total cannot exceed compensation."""
        result = _breakdown(replace(sole_prop_input, net_profit=15_000.0))
        assert result.employee_deferral == 15_000
        assert result.employer_contribution == 0
        assert result.total == 15_000

    def test_manual_entity_result(self, sole_prop_input):
        """Employer room is floored at zero."""
        entity_result = EntityLimitResult(
            compensation=20_000,
            max_employee_deferral=23_000,
            max_employer_contribution=5_000,
            total_max_contribution=20_000,
        )
        result = calculate_contribution_breakdown(sole_prop_input, entity_result)
        assert result.employee_deferral == 20_000
        assert result.employer_contribution == 0.0

    def test_sums_hold(self, s_corp_input):
        """pre-tax + Roth equals total; employee split equals deferral."""
        result = _breakdown(s_corp_input)
        assert result.pre_tax_amount + result.roth_amount == pytest.approx(result.total)
        assert result.roth_amount + result.employee_pre_tax_amount == pytest.approx(
            result.employee_deferral
        )
        assert result.total == result.employee_deferral + result.employer_contribution


class TestPreferences:
    """Tests for pre-tax / Roth splits."""

    def test_roth_preference(self, s_corp_input):
        """All employee money is Roth, only employer money is pre-tax."""
        result = _breakdown(replace(s_corp_input, contribution_type=ContributionType.ROTH))
        assert result.roth_amount == result.employee_deferral
        assert result.pre_tax_amount == result.employer_contribution

    def test_mix_preference(self, s_corp_input):
        """60% Roth mix."""
        result = _breakdown(s_corp_input)
        assert result.roth_amount == 13_800
        assert result.employee_pre_tax_amount == 9_200
        assert result.roth_amount / result.employee_deferral == pytest.approx(0.6)
        assert result.pre_tax_amount > result.roth_amount

    def test_mix_rounds_to_dollars(self):
        """Roth share is rounded to the nearest dollar, halves up."""
        pre_tax, roth = split_employee_deferral(1_001, ContributionType.MIX, 50)
        assert roth == 501
        assert pre_tax == 500

    @pytest.mark.parametrize("percentage,expected_roth", [(0, 0), (100, 23_000)])
    def test_mix_extremes(self, percentage, expected_roth):
        pre_tax, roth = split_employee_deferral(23_000, ContributionType.MIX, percentage)
        assert roth == expected_roth
        assert pre_tax + roth == 23_000

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(2.49) == 2


class TestCatchUp:
    """Tests for the catch-up portion."""

    def test_under_50(self):
        """No catch-up before 50 regardless of deferral."""
        assert catch_up_portion(30_500, 49) == 0

    def test_full_catch_up(self):
        assert catch_up_portion(30_500, 55) == 7_500

    def test_partial_catch_up(self):
        assert catch_up_portion(25_000, 55) == 2_000

    def test_floored_at_zero(self):
        """Deferral below the base limit never yields a negative catch-up."""
        assert catch_up_portion(10_000, 60) == 0

    def test_breakdown_at_55(self, sole_prop_input):
        result = _breakdown(replace(sole_prop_input, age=55, net_profit=150_000.0))
        assert result.employee_deferral == 30_500
        assert result.catch_up_amount == 7_500
        assert result.total <= 76_500

    def test_low_income_at_60(self, sole_prop_input):
        result = _breakdown(replace(sole_prop_input, age=60, net_profit=12_000.0))
        assert result.catch_up_amount == 0
        assert result.total == 12_000


class TestInvariants:
    """Limit invariants across a grid of inputs."""

    @pytest.mark.parametrize("entity", list(FilingEntity))
    @pytest.mark.parametrize("age", [25, 49, 50, 70])
    @pytest.mark.parametrize("income", [800, 20_000, 95_000, 250_000, 1_000_000])
    def test_total_within_limits(self, sole_prop_input, entity, age, income):
        calculator_input = replace(
            sole_prop_input,
            filing_entity=entity,
            age=age,
            net_profit=float(income),
            w2_wages=float(income),
        )
        entity_result = calculate_entity_limits(
            entity, age, net_profit=float(income), w2_wages=float(income)
        )
        result = calculate_contribution_breakdown(calculator_input, entity_result)
        overall = 76_500 if age >= 50 else 69_000
        assert result.total <= overall
        assert result.total <= entity_result.compensation
        assert result.employee_deferral <= entity_result.max_employee_deferral
        assert result.catch_up_amount >= 0
        if age < 50:
            assert result.catch_up_amount == 0
