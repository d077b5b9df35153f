"""Rate conversion utilities."""

MONTHS_PER_YEAR = 12


def annual_to_monthly(annual_rate: float) -> float:
    # callers reject rates <= -1 before converting
    return (1.0 + annual_rate) ** (1.0 / MONTHS_PER_YEAR) - 1.0
