"""Fixed-rate (MYGA) projection engine.

Order of operations (per month):
  1) Credit interest at the policy year's monthly-equivalent rate.
  2) Take the scheduled withdrawal, clamped to the balance.
At each policy-year end the year's totals are recorded together with a
surrender value that only charges the part of the balance above the
remaining penalty-free allowance.

The same projection runs once per rate track (guaranteed and current).
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from illustration.core.dates import age_on
from illustration.core.defaults import DEFAULT_FIXED_CONSTANTS
from illustration.core.formatting import format_fixed, format_money, format_percent
from illustration.core.rates import MONTHS_PER_YEAR, annual_to_monthly
from illustration.schemas.client import ClientParameters
from illustration.schemas.constants import FixedProductConstants, RateTrack
from illustration.schemas.illustration import (
    FixedProjectionResult,
    ProjectionRow,
    TrackYear,
)

logger = logging.getLogger(__name__)


def rate_for_year(
    year: int,
    params: ClientParameters,
    track: RateTrack,
    mgir: float,
) -> float:
    """Annual crediting rate for ``year`` on ``track``."""
    floor = track.floor_rate if track.floor_rate is not None else mgir
    if year <= params.first_term:
        return track.year_rates.get(year, floor)
    if year <= params.first_term + params.second_term:
        if track.second_term_rate is not None:
            return track.second_term_rate
        return track.year_rates.get(year, floor)
    return floor


def issue_age(params: ClientParameters, as_of: Optional[date] = None) -> int:
    # age at the end of the first policy year
    return age_on(params.birthday, as_of) + 1


def projection_years(age: int, maximum_age: int) -> int:
    return max(maximum_age - age + 1, 1)


def _period_withdrawal(params: ClientParameters, start_of_year_value: float) -> float:
    if params.withdrawal_type == "fixed":
        return params.withdrawal_amount / params.frequency
    return start_of_year_value * params.withdrawal_amount / 100.0 / params.frequency


def surrender_value(
    account_value: float,
    start_of_year_value: float,
    withdrawn: float,
    free_fraction: float,
    charge: float,
) -> float:
    """Account value less the charge on the balance above the free allowance."""
    used = withdrawn / start_of_year_value if start_of_year_value > 0 else 0.0
    free_amount = max(0.0, free_fraction - used) * start_of_year_value
    penalty = charge * max(0.0, account_value - free_amount)
    return max(0.0, account_value - penalty)


def project_fixed_track(
    params: ClientParameters,
    constants: FixedProductConstants,
    track: RateTrack,
    as_of: Optional[date] = None,
) -> List[TrackYear]:
    """Year-by-year values for one rate track, up to ``constants.maximum_age``."""
    age = issue_age(params, as_of)
    interval = params.withdrawal_interval_months

    balance = float(params.premium)
    rows: List[TrackYear] = []
    for year in range(1, projection_years(age, constants.maximum_age) + 1):
        monthly_rate = annual_to_monthly(rate_for_year(year, params, track, constants.mgir))
        withdrawing = params.withdraws_in_year(year)
        start_value = balance
        interest = 0.0
        withdrawn = 0.0

        for month in range(MONTHS_PER_YEAR):
            credited = balance * monthly_rate
            balance += credited
            interest += credited

            if withdrawing and month % interval == 0:
                amount = min(_period_withdrawal(params, start_value), balance)
                balance -= amount
                withdrawn += amount

        rows.append(
            TrackYear(
                age=age + year - 1,
                year=year,
                premium=params.premium if year == 1 else 0.0,
                credited_interest=interest,
                withdrawal=withdrawn,
                account_value=balance,
                surrender_value=surrender_value(
                    balance,
                    start_value,
                    withdrawn,
                    constants.free_withdrawal.get(year, 0.0),
                    constants.surrender_charges.get(year, 0.0),
                ),
                death_benefit=balance,
            )
        )

    return rows


def format_rows(rows: List[TrackYear], formatter=format_money) -> List[ProjectionRow]:
    return [
        ProjectionRow(
            age=row.age,
            year=row.year,
            premium=formatter(row.premium),
            credited_interest=formatter(row.credited_interest),
            withdrawal=formatter(row.withdrawal),
            account_value=formatter(row.account_value),
            surrender_value=formatter(row.surrender_value),
            death_benefit=formatter(row.death_benefit),
        )
        for row in rows
    ]


def compute_fixed_projection(
    params: ClientParameters,
    constants: Optional[FixedProductConstants] = None,
    as_of: Optional[date] = None,
) -> FixedProjectionResult:
    """Run the guaranteed and current tracks and build the report payload."""
    constants = constants or DEFAULT_FIXED_CONSTANTS
    logger.info(
        "Starting fixed projection premium=%.2f first_term=%d second_term=%d withdrawal=%s",
        params.premium, params.first_term, params.second_term, params.withdrawal_type,
    )

    guaranteed = project_fixed_track(params, constants, constants.guaranteed, as_of)
    current = project_fixed_track(params, constants, constants.current_track, as_of)
    table = format_rows(guaranteed)
    current_table = format_rows(current)

    data = [
        [
            g.age,
            g.year,
            g.premium,
            g.withdrawal,
            g.account_value,
            g.surrender_value,
            c.withdrawal,
            c.account_value,
            c.surrender_value,
        ]
        for g, c in zip(table, current_table)
    ]

    year_0_surrender = params.premium * (1 - constants.surrender_charges.get(1, 0.0))
    term_1_rate = rate_for_year(max(params.first_term, 1), params, constants.guaranteed, constants.mgir)

    result = FixedProjectionResult(
        table=table,
        current_table=current_table,
        data=data,
        durations=len(guaranteed),
        account_values=[format_fixed(row.account_value) for row in guaranteed],
        accumulation_value_at_maturity=[table[-1].account_value, current_table[-1].account_value],
        complete_surrender_values=[format_money(year_0_surrender)]
        + [row.surrender_value for row in current_table],
        mgir=format_percent(constants.mgir),
        term_1_rate=format_percent(term_1_rate),
        term_1_surrender_rates=[
            format_percent(constants.surrender_charges.get(year, 0.0))
            for year in range(1, params.first_term + 1)
        ],
        age=guaranteed[0].age,
    )

    logger.info("Fixed projection completed rows=%d age=%d", result.durations, result.age)
    return result
