"""Indexed (FIA) projection engine.

Five sub-accounts are tracked month by month:
  - the fixed interest account compounds monthly at ``fixed_rate``;
  - the four index accounts only move at each 12-month boundary, when the
    reference index return for the year is credited through a cap or a
    participation rate (never below zero).

Withdrawals are drawn from every bucket in proportion to its share of the
prior month's total, before that month's growth or index credit. Premium
bonus recapture on early withdrawals comes out of the fixed account first,
then pro rata from the index accounts when the fixed account runs short.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

import numpy as np

from illustration.core.dates import age_on
from illustration.core.defaults import DEFAULT_INDEXED_CONSTANTS
from illustration.core.formatting import format_currency, format_percent
from illustration.core.rates import MONTHS_PER_YEAR, annual_to_monthly
from illustration.schemas.client import IndexedClientParameters
from illustration.schemas.constants import IndexAccountRates, IndexedProductConstants
from illustration.schemas.illustration import (
    IndexedProjectionResult,
    ProjectionRow,
    TrackYear,
)

logger = logging.getLogger(__name__)

# Row order of MonthlyBuckets.values; the fixed account is last.
BUCKETS = (
    "ptp_w_cap_rate",
    "ptp_w_participation_rate_500",
    "ptp_w_participation_rate_marc5",
    "ptp_w_participation_rate_tca",
    "fixed_interest_account",
)
FIXED_BUCKET = len(BUCKETS) - 1


@dataclass(frozen=True)
class MonthlyBuckets:
    """Month-indexed projection; ``values`` has one row per bucket."""

    values: np.ndarray
    withdrawals: np.ndarray
    recaptures: np.ndarray

    @property
    def totals(self) -> np.ndarray:
        return self.values.sum(axis=0)

    def bucket(self, name: str) -> np.ndarray:
        return self.values[BUCKETS.index(name)]


def credited_returns(index_return: float, rates: IndexAccountRates) -> np.ndarray:
    """Year-end credit per index bucket for a net index return (0.08 == +8%)."""
    return np.array(
        [
            max(0.0, min(index_return, rates.ptp_w_cap_rate)),
            max(0.0, index_return * rates.ptp_w_part_rate_500),
            max(0.0, index_return * rates.ptp_w_part_rate_marc5),
            max(0.0, index_return * rates.ptp_w_part_rate_tca),
        ]
    )


def index_return_for_month(month: int, constants: IndexedProductConstants) -> float:
    """Net reference return credited at the anniversary ending at ``month``."""
    returns = constants.index_returns
    return returns[(month // MONTHS_PER_YEAR - 1) % len(returns)] - 1.0


def allocation_weights(params: IndexedClientParameters) -> np.ndarray:
    weights = np.array([getattr(params, name) for name in BUCKETS], dtype=float) / 100.0
    # tolerated rounding in the inputs must not create or lose premium
    return weights / weights.sum()


def _should_withdraw(params: IndexedClientParameters, month: int) -> bool:
    # month 0 is the issue date and is never projected, so a withdrawal due
    # only there (annual, first year) is skipped; the fixed engine pays it
    if params.withdrawal_type == "none":
        return False
    first = (params.withdrawal_from_year - 1) * MONTHS_PER_YEAR
    last = params.withdrawal_to_year * MONTHS_PER_YEAR - 1
    return first <= month <= last and month % params.withdrawal_interval_months == 0


def _period_withdrawal(params: IndexedClientParameters, start_of_year_value: float) -> float:
    if params.withdrawal_type == "fixed":
        return params.withdrawal_amount / params.frequency
    return start_of_year_value * params.withdrawal_amount / 100.0 / params.frequency


def _charge_recapture(current: np.ndarray, recapture: float) -> float:
    """Deduct ``recapture`` in place and return the amount actually charged.

    The fixed account pays first; any shortfall comes out of the index
    accounts in proportion to their values.
    """
    from_fixed = min(recapture, max(0.0, current[FIXED_BUCKET]))
    current[FIXED_BUCKET] -= from_fixed
    shortfall = recapture - from_fixed

    index_total = float(current[:FIXED_BUCKET].sum())
    if shortfall <= 0 or index_total <= 0:
        return from_fixed
    if shortfall >= index_total:
        current[:FIXED_BUCKET] = 0.0
        return from_fixed + index_total
    current[:FIXED_BUCKET] -= shortfall * current[:FIXED_BUCKET] / index_total
    return recapture


def project_indexed_months(
    params: IndexedClientParameters,
    constants: IndexedProductConstants,
) -> MonthlyBuckets:
    """Bucket values for months ``0 .. projection_years * 12``."""
    months = constants.projection_years * MONTHS_PER_YEAR + 1
    fixed_monthly = annual_to_monthly(constants.fixed_rate)
    rates = constants.index_account_cap_part

    values = np.zeros((len(BUCKETS), months))
    withdrawals = np.zeros(months)
    recaptures = np.zeros(months)

    premium_with_bonus = params.premium * (1.0 + constants.premium_bonus)
    values[:, 0] = premium_with_bonus * allocation_weights(params)
    start_of_year_value = premium_with_bonus
    cumulative_withdrawals = 0.0

    for i in range(1, months):
        year = i // MONTHS_PER_YEAR + 1
        prior = values[:, i - 1].copy()
        prior_total = float(prior.sum())
        if i % MONTHS_PER_YEAR == 0:
            start_of_year_value = prior_total

        current = prior.copy()
        if _should_withdraw(params, i):
            amount = min(_period_withdrawal(params, start_of_year_value), max(0.0, prior_total))
            cumulative_withdrawals += amount

            # only the part of the withdrawal still drawing on premium is recaptured
            against_premium = max(
                0.0, amount - max(0.0, cumulative_withdrawals - params.premium)
            )
            recapture = (
                constants.premium_bonus_recapture.get(year, 0.0)
                * constants.premium_bonus
                * against_premium
                * (1.0 + prior_total / premium_with_bonus)
            )

            if amount >= prior_total:
                current[:] = 0.0
            else:
                current -= amount * prior / prior_total
            withdrawals[i] = amount
            recaptures[i] = _charge_recapture(current, recapture)

        current[FIXED_BUCKET] *= 1.0 + fixed_monthly
        if i % MONTHS_PER_YEAR == 0:
            credit = credited_returns(index_return_for_month(i, constants), rates)
            current[:FIXED_BUCKET] *= 1.0 + credit

        values[:, i] = np.maximum(current, 0.0)

    return MonthlyBuckets(values=values, withdrawals=withdrawals, recaptures=recaptures)


def anniversary_rows(
    params: IndexedClientParameters,
    constants: IndexedProductConstants,
    buckets: MonthlyBuckets,
    age: int,
) -> List[TrackYear]:
    """Collapse the monthly projection to one row per policy anniversary."""
    totals = buckets.totals
    rows: List[TrackYear] = []
    previous_value = 0.0
    for k in range(constants.projection_years + 1):
        month = k * MONTHS_PER_YEAR
        account_value = float(totals[month])
        if k == 0:
            withdrawn = 0.0
            interest = account_value - params.premium
        else:
            withdrawn = float(buckets.withdrawals[month - MONTHS_PER_YEAR + 1 : month + 1].sum())
            interest = max(0.0, account_value - previous_value + withdrawn)

        charge = constants.surrender_charges.get(k + 1, 0.0)
        rows.append(
            TrackYear(
                age=age + k,
                year=k,
                premium=params.premium if k == 0 else 0.0,
                credited_interest=interest,
                withdrawal=withdrawn,
                account_value=account_value,
                surrender_value=max(0.0, account_value * (1.0 - charge)),
                death_benefit=account_value,
            )
        )
        previous_value = account_value
    return rows


def _allocation_summary(params: IndexedClientParameters) -> Dict[str, str]:
    return {name: format_percent(getattr(params, name) / 100.0) for name in BUCKETS}


def compute_indexed_projection(
    params: IndexedClientParameters,
    constants: Optional[IndexedProductConstants] = None,
    as_of: Optional[date] = None,
) -> IndexedProjectionResult:
    """Run the indexed projection and build the report payload."""
    constants = constants or DEFAULT_INDEXED_CONSTANTS
    age = age_on(params.birthday, as_of)
    logger.info(
        "Starting indexed projection premium=%.2f age=%d allocations=%s",
        params.premium, age, _allocation_summary(params),
    )

    buckets = project_indexed_months(params, constants)
    rows = anniversary_rows(params, constants, buckets, age)
    table = [
        ProjectionRow(
            age=row.age,
            year=row.year,
            premium=format_currency(row.premium),
            credited_interest=format_currency(row.credited_interest),
            withdrawal=format_currency(row.withdrawal),
            account_value=format_currency(row.account_value),
            surrender_value=format_currency(row.surrender_value),
            death_benefit=format_currency(row.death_benefit),
        )
        for row in rows
    ]

    result = IndexedProjectionResult(
        table=table,
        data=[
            [
                row.age,
                row.year,
                row.premium,
                row.credited_interest,
                row.withdrawal,
                row.account_value,
                row.surrender_value,
                row.death_benefit,
            ]
            for row in table
        ],
        durations=f"{constants.projection_years} Years",
        ages=[row.age for row in table],
        years=[row.year for row in table],
        premiums=[row.premium for row in table],
        credited_interest=[row.credited_interest for row in table],
        withdrawals=[row.withdrawal for row in table],
        accumulated_values=[row.account_value for row in table],
        surrender_values=[row.surrender_value for row in table],
        death_benefits=[row.death_benefit for row in table],
        accumulation_value_at_maturity=[table[-1].account_value],
        complete_surrender_values=[row.surrender_value for row in table],
        premium_bonus=format_percent(constants.premium_bonus),
        fixed_rate=format_percent(constants.fixed_rate),
        term_1_surrender_rates=[
            format_percent(charge)
            for _, charge in sorted(constants.surrender_charges.items())
        ],
        age=age,
        index_allocations=_allocation_summary(params),
    )

    logger.info(
        "Indexed projection completed rows=%d duration=%s", len(table), result.durations
    )
    return result
