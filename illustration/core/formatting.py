"""String rendering for illustration outputs.

Report consumers expect every monetary and percentage figure as a display
string, so the engines work in floats and the result builders call these
helpers at the very end.
"""

from typing import Union

Number = Union[int, float]


def format_money(value: Number) -> str:
    """``105000`` -> ``"105,000.00"``."""
    return f"{value:,.2f}"


def format_fixed(value: Number) -> str:
    """Two decimals, no separators (``"105000.00"``)."""
    return f"{value:.2f}"


def format_currency(value: Number) -> str:
    """US-dollar rendering (``"$105,000.00"``, ``"-$12.50"``)."""
    if value < 0:
        return f"-${-value:,.2f}"
    return f"${value:,.2f}"


def format_percent(rate: Number) -> str:
    """Decimal rate to percent string (``0.045`` -> ``"4.50%"``)."""
    return f"{rate * 100:.2f}%"


def parse_money(value: Union[str, Number]) -> float:
    """Inverse of the money formatters; accepts plain numbers too.

    Raises ``ValueError`` for anything that is not a number or a money string.
    """
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        raise ValueError(f"expected a number or money string, got {type(value).__name__}")
    cleaned = value.replace(",", "").replace("$", "").strip()
    try:
        return float(cleaned)
    except ValueError:
        raise ValueError(f"not a money amount: {value!r}") from None
