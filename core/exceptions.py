"""Custom exceptions for the contribution calculator."""

from __future__ import annotations


class ContributionCalculatorError(Exception):
    """Base exception for contribution calculator errors.

    Every error surfaced to callers carries a stable machine-readable
    ``code`` and a human-readable ``message``.
    """

    code = "CALCULATION_ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)


class ValidationError(ContributionCalculatorError):
    """Raised when input validation fails."""

    code = "VALIDATION_ERROR"

    def __init__(
        self,
        field: str,
        message: str,
        errors: list[tuple[str, str]] | None = None,
    ) -> None:
        self.field = field
        self.errors = errors if errors is not None else [(field, message)]
        super().__init__("; ".join(f"{name}: {text}" for name, text in self.errors))


class MissingIncomeFieldError(ContributionCalculatorError):
    """Raised when the income field required by a filing entity is absent or zero."""

    def __init__(self, field: str, message: str, code: str) -> None:
        self.field = field
        super().__init__(message, code)


class UnsupportedEntityError(ContributionCalculatorError):
    """Raised when a filing entity has no limit rules."""

    code = "UNSUPPORTED_ENTITY"

    def __init__(self, entity: object) -> None:
        self.entity = entity
        super().__init__(f"Unsupported entity type: {entity}")


class CalculationError(ContributionCalculatorError):
    """Raised when a calculation fails for a reason other than bad input."""

    code = "CALCULATION_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(f"Calculation failed: {message}")
