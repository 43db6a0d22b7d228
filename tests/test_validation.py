"""Tests for input validation."""

import pytest

from core.exceptions import ValidationError
from core.inputs import CalculatorInput, ContributionType, FilingEntity
from core.validation import (
    MAX_INCOME,
    ValidationResult,
    parse_calculator_input,
    validate_age,
    validate_all,
    validate_entity,
    validate_flags,
    validate_income,
    validate_preferences,
    validate_state,
)


class TestEntityValidation:
    """Tests for filing entity validation."""

    @pytest.mark.parametrize("entity", ["sole_prop", "s_corp", "c_corp", FilingEntity.S_CORP])
    def test_known_entities(self, entity):
        assert validate_entity(entity).is_valid()

    @pytest.mark.parametrize("entity", ["llc", "", None, 3])
    def test_unknown_entity(self, entity):
        result = validate_entity(entity)
        assert not result.is_valid()
        assert result.errors[0][0] == "filingEntity"


class TestStateValidation:
    """Tests for state code validation."""

    def test_valid_code(self):
        assert validate_state("CA").is_valid()

    @pytest.mark.parametrize("state", ["C", "CAL", "", None])
    def test_invalid_code(self, state):
        assert not validate_state(state).is_valid()


class TestAgeValidation:
    """Tests for age validation."""

    def test_valid_ages(self):
        """Boundary ages pass."""
        assert validate_age(18).is_valid()
        assert validate_age(100).is_valid()
        assert validate_age(45.0).is_valid()

    def test_too_young(self):
        """Age under 18 fails."""
        result = validate_age(17)
        assert not result.is_valid()
        assert any("age" in e[0] for e in result.errors)

    def test_too_old(self):
        """Age over 100 fails."""
        assert not validate_age(101).is_valid()

    def test_huge_integer_age(self):
        """Integers too large for a float are range errors, not crashes."""
        result = validate_age(10**400)
        assert result.errors == [("age", "Must be at most 100")]

    @pytest.mark.parametrize("age", [35.5, "35", True, None, float("nan")])
    def test_not_whole_number(self, age):
        assert not validate_age(age).is_valid()


class TestIncomeValidation:
    """Tests for income field validation."""

    def test_valid_incomes(self):
        result = validate_income({"netProfit": 100_000, "w2Wages": 0, "businessProfit": None})
        assert result.is_valid()

    def test_missing_incomes_pass(self):
        """Presence is checked later by the entity rules."""
        assert validate_income({}).is_valid()

    def test_negative_income(self):
        result = validate_income({"w2Wages": -1})
        assert not result.is_valid()
        assert result.errors == [("w2Wages", "Cannot be negative")]

    def test_non_numeric_income(self):
        assert not validate_income({"netProfit": "lots"}).is_valid()

    def test_income_upper_bound(self):
        assert validate_income({"netProfit": MAX_INCOME}).is_valid()
        result = validate_income({"netProfit": MAX_INCOME + 1})
        assert result.errors == [("netProfit", "Exceeds maximum allowed value")]

    def test_huge_integer_income(self):
        result = validate_income({"w2Wages": 10**400})
        assert result.errors == [("w2Wages", "Exceeds maximum allowed value")]


class TestPreferenceValidation:
    """Tests for contribution preferences and tax rate."""

    def test_valid_preferences(self):
        assert validate_preferences("mix", 60, 0.24).is_valid()

    def test_unknown_contribution_type(self):
        assert not validate_preferences("after_tax", 50, 0.22).is_valid()

    @pytest.mark.parametrize("roth_percentage", [-1, 101])
    def test_roth_percentage_range(self, roth_percentage):
        assert not validate_preferences("mix", roth_percentage, 0.22).is_valid()

    @pytest.mark.parametrize("rate", [-0.01, 0.51])
    def test_marginal_rate_range(self, rate):
        assert not validate_preferences("pre_tax", 50, rate).is_valid()

    def test_boundaries(self):
        assert validate_preferences("roth", 0, 0.0).is_valid()
        assert validate_preferences("roth", 100, 0.5).is_valid()


class TestFlagValidation:
    def test_booleans_required(self):
        assert validate_flags({"enableCatchUp": True}).is_valid()
        assert not validate_flags({"enableCatchUp": "yes"}).is_valid()


class TestValidateAll:
    """Tests for combined validation."""

    def test_all_valid(self, sole_prop_request):
        assert validate_all(sole_prop_request).is_valid()

    def test_defaults_fill_optional_fields(self):
        """Optional preferences may be omitted."""
        result = validate_all(
            {"filingEntity": "s_corp", "state": "TX", "age": 40, "contributionType": "roth"}
        )
        assert result.is_valid()

    def test_multiple_errors(self):
        """Multiple invalid inputs collect all errors."""
        result = validate_all(
            {
                "filingEntity": "llc",
                "state": "Texas",
                "age": 12,
                "netProfit": -5,
                "contributionType": "pre_tax",
                "marginalTaxRate": 0.9,
            }
        )
        assert not result.is_valid()
        assert len(result.errors) >= 5
        assert len(result.error_messages()) == len(result.errors)

    def test_result_accumulates(self):
        result = ValidationResult()
        result.add_error("age", "Must be at least 18")
        assert result.error_messages() == ["age: Must be at least 18"]


class TestParseCalculatorInput:
    """Tests for building a CalculatorInput from raw input."""

    def test_parses_request(self, sole_prop_request):
        parsed = parse_calculator_input(sole_prop_request)
        assert parsed == CalculatorInput(
            filing_entity=FilingEntity.SOLE_PROP,
            state="CA",
            age=35,
            contribution_type=ContributionType.PRE_TAX,
            net_profit=100_000,
            roth_percentage=50,
            enable_catch_up=False,
            assume_self_employment_tax=True,
            marginal_tax_rate=0.22,
        )

    def test_applies_defaults(self):
        parsed = parse_calculator_input(
            {"filingEntity": "c_corp", "state": "NY", "age": 50, "w2Wages": 90_000, "contributionType": "mix"}
        )
        assert parsed.roth_percentage == 50
        assert parsed.marginal_tax_rate == 0.22
        assert parsed.enable_catch_up is False
        assert parsed.assume_self_employment_tax is True
        assert parsed.net_profit is None

    def test_round_trip_through_dict(self, sole_prop_input):
        assert parse_calculator_input(sole_prop_input.to_dict()) == sole_prop_input

    def test_raises_with_all_errors(self, sole_prop_request):
        with pytest.raises(ValidationError) as exc_info:
            parse_calculator_input(dict(sole_prop_request, age=15, rothPercentage=150))
        error = exc_info.value
        assert error.field == "age"
        assert {name for name, _ in error.errors} == {"age", "rothPercentage"}
        assert "rothPercentage" in error.message

    @pytest.mark.parametrize("raw", [None, [], "sole_prop", 42])
    def test_non_mapping(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            parse_calculator_input(raw)
        assert exc_info.value.field == "input"
