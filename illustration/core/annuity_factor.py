"""Life-contingent annuitization factor and monthly income."""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

import numpy as np

from illustration.core.errors import InputValidationError
from illustration.core.formatting import format_money, parse_money
from illustration.core.mortality import MortalityTable, get_mortality_table
from illustration.schemas.illustration import AnnuityFactorResult

logger = logging.getLogger(__name__)


def monthly_factor_per_1000(
    mortality: np.ndarray,
    annuitization_rate: float,
    certain_year: int,
) -> float:
    """Monthly income per $1000 of value for the given mortality sequence.

    The first ``certain_year`` periods are paid regardless of survival, so
    their mortality is treated as zero.
    """
    if annuitization_rate <= -1:
        raise InputValidationError(["annuitization_rate must be greater than -1"])

    q = np.array(mortality, dtype=float)
    q[: min(certain_year, len(q))] = 0.0

    discount = (1.0 / (1.0 + annuitization_rate)) ** np.arange(len(q), dtype=float)
    survivorship = np.cumprod(1.0 - q)
    present_value = float(np.sum(discount * survivorship))
    if present_value == 0.0:
        raise InputValidationError(
            ["annuity present value is zero; no mortality rows at or above the maturity age"]
        )
    return 1000.0 / present_value / 12.0


def compute_annuity_factor(
    account_values: Sequence[Union[str, float]],
    annuitization_rate: float,
    gender: str,
    certain_year: int = 10,
    maturity_age: int = 100,
    table: Optional[MortalityTable] = None,
) -> AnnuityFactorResult:
    """Guaranteed and current monthly income for two account values."""
    table = table or get_mortality_table()
    mortality = table.rates_from_age(gender, maturity_age)

    factor = monthly_factor_per_1000(mortality, annuitization_rate, certain_year)
    guaranteed_value, current_value = (parse_money(v) for v in account_values[:2])

    logger.debug(
        "Annuity factor gender=%s rate=%s certain=%s maturity=%s factor=%.4f",
        gender, annuitization_rate, certain_year, maturity_age, factor,
    )
    return AnnuityFactorResult(
        monthly_factor_per_1000=format_money(factor),
        guaranteed_monthly_annuity_income=format_money(guaranteed_value / 1000.0 * factor),
        current_monthly_annuity_income=format_money(current_value / 1000.0 * factor),
    )
