"""Input validation for contribution calculator parameters."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Mapping

from core.exceptions import ValidationError
from core.inputs import (
    DEFAULT_MARGINAL_TAX_RATE,
    DEFAULT_ROTH_PERCENTAGE,
    CalculatorInput,
    ContributionType,
    FilingEntity,
)

INCOME_FIELDS = ("netProfit", "w2Wages", "businessProfit")
MAX_INCOME = 1_000_000_000


@dataclass
class ValidationResult:
    """Result of validation containing any errors found."""

    errors: list[tuple[str, str]] = field(default_factory=list)

    def add_error(self, field_name: str, message: str) -> None:
        """Add a validation error."""
        self.errors.append((field_name, message))

    def is_valid(self) -> bool:
        """Return True if no validation errors."""
        return len(self.errors) == 0

    def error_messages(self) -> list[str]:
        """Return formatted error messages."""
        return [f"{field_name}: {message}" for field_name, message in self.errors]


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def validate_entity(value: Any) -> ValidationResult:
    """Validate the filing entity tag."""
    result = ValidationResult()
    allowed = [entity.value for entity in FilingEntity]
    if value not in allowed and not isinstance(value, FilingEntity):
        result.add_error("filingEntity", f"Must be one of {', '.join(allowed)}")
    return result


def validate_state(value: Any) -> ValidationResult:
    """Validate the two-letter state code."""
    result = ValidationResult()
    if not isinstance(value, str):
        result.add_error("state", "Must be a string")
    elif len(value) != 2:
        result.add_error("state", "Must be a two-letter state code")
    return result


def validate_age(age: Any) -> ValidationResult:
    """Validate participant age."""
    result = ValidationResult()

    if not _is_number(age) or (isinstance(age, float) and not age.is_integer()):
        result.add_error("age", "Must be a whole number")
        return result

    if age < 18:
        result.add_error("age", "Must be at least 18")
    if age > 100:
        result.add_error("age", "Must be at most 100")

    return result


def validate_income(incomes: Mapping[str, Any]) -> ValidationResult:
    """Validate optional income fields. Presence per entity is checked later."""
    result = ValidationResult()

    for field_name in INCOME_FIELDS:
        value = incomes.get(field_name)
        if value is None:
            continue
        if not _is_number(value):
            result.add_error(field_name, "Must be a number")
        elif value < 0:
            result.add_error(field_name, "Cannot be negative")
        elif value > MAX_INCOME:  # 1 billion sanity check
            result.add_error(field_name, "Exceeds maximum allowed value")

    return result


def validate_preferences(
    contribution_type: Any,
    roth_percentage: Any,
    marginal_tax_rate: Any,
) -> ValidationResult:
    """Validate contribution preferences and tax rate."""
    result = ValidationResult()

    allowed = [ctype.value for ctype in ContributionType]
    if contribution_type not in allowed and not isinstance(contribution_type, ContributionType):
        result.add_error("contributionType", f"Must be one of {', '.join(allowed)}")

    if not _is_number(roth_percentage):
        result.add_error("rothPercentage", "Must be a number")
    elif roth_percentage < 0 or roth_percentage > 100:
        result.add_error("rothPercentage", "Must be between 0 and 100")

    if not _is_number(marginal_tax_rate):
        result.add_error("marginalTaxRate", "Must be a number")
    elif marginal_tax_rate < 0 or marginal_tax_rate > 0.5:
        result.add_error("marginalTaxRate", "Must be between 0 and 50%")

    return result


def validate_flags(flags: Mapping[str, Any]) -> ValidationResult:
    """Validate boolean option flags."""
    result = ValidationResult()
    for field_name, value in flags.items():
        if not isinstance(value, bool):
            result.add_error(field_name, "Must be true or false")
    return result


def _with_defaults(raw: Mapping[str, Any]) -> dict[str, Any]:
    data = dict(raw)
    data.setdefault("rothPercentage", DEFAULT_ROTH_PERCENTAGE)
    data.setdefault("enableCatchUp", False)
    data.setdefault("assumeSelfEmploymentTax", True)
    data.setdefault("marginalTaxRate", DEFAULT_MARGINAL_TAX_RATE)
    return data


def validate_all(raw: Mapping[str, Any]) -> ValidationResult:
    """Run all schema validations on raw input and combine results."""
    combined = ValidationResult()
    data = _with_defaults(raw)

    validations = [
        validate_entity(data.get("filingEntity")),
        validate_state(data.get("state")),
        validate_age(data.get("age")),
        validate_income(data),
        validate_preferences(
            data.get("contributionType"),
            data.get("rothPercentage"),
            data.get("marginalTaxRate"),
        ),
        validate_flags(
            {
                "enableCatchUp": data.get("enableCatchUp"),
                "assumeSelfEmploymentTax": data.get("assumeSelfEmploymentTax"),
            }
        ),
    ]

    for result in validations:
        combined.errors.extend(result.errors)

    return combined


def parse_calculator_input(raw: Any) -> CalculatorInput:
    """
    Validate raw (wire-format) input and build a CalculatorInput.

    This is the structural pass only: it checks types and ranges. Whether
    the income field a filing entity needs is present is decided later by
    the entity limit rules.

    Args:
        raw: Mapping with camelCase keys, e.g. a decoded JSON request body

    Returns:
        CalculatorInput with defaults applied

    Raises:
        ValidationError: If any field is malformed or out of range
    """
    if isinstance(raw, CalculatorInput):
        raw = raw.to_dict()
    if not isinstance(raw, Mapping):
        raise ValidationError("input", "Must be an object")

    result = validate_all(raw)
    if not result.is_valid():
        field_name, message = result.errors[0]
        raise ValidationError(field_name, message, result.errors)

    data = _with_defaults(raw)
    return CalculatorInput(
        filing_entity=FilingEntity(data["filingEntity"]),
        state=data["state"],
        age=int(data["age"]),
        contribution_type=ContributionType(data["contributionType"]),
        net_profit=data.get("netProfit"),
        w2_wages=data.get("w2Wages"),
        business_profit=data.get("businessProfit"),
        roth_percentage=data["rothPercentage"],
        enable_catch_up=data["enableCatchUp"],
        assume_self_employment_tax=data["assumeSelfEmploymentTax"],
        marginal_tax_rate=data["marginalTaxRate"],
    )
