from typing import Optional


def fmt_currency(value: Optional[float]) -> str:
    """
    Compact currency formatter for charts and summaries.
    """
    if value is None:
        return "-"

    try:
        value = float(value)
    except (TypeError, ValueError):
        return "-"

    if abs(value) >= 1_000_000:
        return f"${value/1_000_000:.2f}M"
    if abs(value) >= 1_000:
        return f"${value/1_000:.1f}K"
    return f"${value:,.0f}"


def fmt_amount(value: float) -> str:
    """
    Thousands-separated amount without currency sign.

    Whole amounts print without decimals (20000 -> "20,000"),
    anything else with two (1234.5 -> "1,234.50").
    """
    value = float(value)
    if value.is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"

