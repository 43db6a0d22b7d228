"""State tax information used for informational notes.

No state currently imposes its own contribution limits; ``additional_limits``
exists so that one can be added without changing callers.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class StateTaxInfo:
    """How a state treats retirement contributions (informational only)."""

    has_state_tax: bool
    deducts_pretax_contributions: bool
    taxes_roth_contributions: bool = False
    notes: tuple[str, ...] = ()


@dataclass(frozen=True)
class StateLimits:
    """State-specific contribution limits."""

    max_contribution: float | None = None
    special_rules: tuple[str, ...] = ()


@dataclass(frozen=True)
class StateRules:
    """Rules for a single state."""

    code: str
    name: str
    tax_info: StateTaxInfo
    additional_limits: StateLimits = field(default_factory=StateLimits)


_NO_INCOME_TAX = frozenset({"AK", "FL", "NV", "NH", "SD", "TN", "TX", "WA", "WY"})

_STATE_NAMES: dict[str, str] = {
    "AL": "Alabama",
    "AK": "Alaska",
    "AZ": "Arizona",
    "AR": "Arkansas",
    "CA": "California",
    "CO": "Colorado",
    "CT": "Connecticut",
    "DE": "Delaware",
    "FL": "Florida",
    "GA": "Georgia",
    "HI": "Hawaii",
    "ID": "Idaho",
    "IL": "Illinois",
    "IN": "Indiana",
    "IA": "Iowa",
    "KS": "Kansas",
    "KY": "Kentucky",
    "LA": "Louisiana",
    "ME": "Maine",
    "MD": "Maryland",
    "MA": "Massachusetts",
    "MI": "Michigan",
    "MN": "Minnesota",
    "MS": "Mississippi",
    "MO": "Missouri",
    "MT": "Montana",
    "NE": "Nebraska",
    "NV": "Nevada",
    "NH": "New Hampshire",
    "NJ": "New Jersey",
    "NM": "New Mexico",
    "NY": "New York",
    "NC": "North Carolina",
    "ND": "North Dakota",
    "OH": "Ohio",
    "OK": "Oklahoma",
    "OR": "Oregon",
    "PA": "Pennsylvania",
    "RI": "Rhode Island",
    "SC": "South Carolina",
    "SD": "South Dakota",
    "TN": "Tennessee",
    "TX": "Texas",
    "UT": "Utah",
    "VT": "Vermont",
    "VA": "Virginia",
    "WA": "Washington",
    "WV": "West Virginia",
    "WI": "Wisconsin",
    "WY": "Wyoming",
    "DC": "District of Columbia",
}


def _build_rules(code: str, name: str) -> StateRules:
    taxed = code not in _NO_INCOME_TAX
    return StateRules(
        code=code,
        name=name,
        tax_info=StateTaxInfo(
            has_state_tax=taxed,
            deducts_pretax_contributions=taxed,
            taxes_roth_contributions=False,
        ),
    )


class UnknownStateError(LookupError):
    """Raised when a code is not a US state or DC."""


STATE_RULES: dict[str, StateRules] = {
    code: _build_rules(code, name) for code, name in _STATE_NAMES.items()
}


def get_state_rules(state_code: str) -> StateRules:
    """
    Get rules for a two-letter state code (case-insensitive).

    Raises:
        UnknownStateError: If the code is not a US state or DC
    """
    try:
        return STATE_RULES[state_code.upper()]
    except KeyError:
        raise UnknownStateError(f"Unknown state code: {state_code}") from None


def get_state_tax_info(state_code: str) -> StateTaxInfo:
    """Get state tax information for retirement planning context."""
    return get_state_rules(state_code).tax_info


def has_state_specific_limits(state_code: str) -> bool:
    """Check if a state imposes its own contribution limits."""
    limits = get_state_rules(state_code).additional_limits
    return bool(limits.max_contribution or limits.special_rules)


def state_choices() -> list[tuple[str, str]]:
    """Return (code, name) pairs in display order."""
    return [(rules.code, rules.name) for rules in STATE_RULES.values()]
