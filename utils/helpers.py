from __future__ import annotations


def format_currency(value: float) -> str:
    return f"${value:,.0f}"


def format_compact_currency(value: float) -> str:
    """Format as $150K / $1.2M for chart labels."""
    if abs(value) >= 1_000_000:
        return f"${value / 1_000_000:.1f}M"
    if abs(value) >= 1_000:
        return f"${value / 1_000:.0f}K"
    return format_currency(value)


def format_percentage(value: float, decimals: int = 1) -> str:
    return f"{value * 100:.{decimals}f}%"


def parse_currency(value: str, fallback: float) -> float:
    """Parse a currency string like "$1,250" to float."""
    cleaned = value.replace("$", "").replace(",", "").strip()
    if not cleaned:
        return fallback
    try:
        return float(cleaned)
    except ValueError:
        return fallback
