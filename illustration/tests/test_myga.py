from datetime import date

import pytest

from illustration.core.defaults import DEFAULT_FIXED_CONSTANTS
from illustration.core.formatting import parse_money
from illustration.core.myga import (
    compute_fixed_projection,
    project_fixed_track,
    rate_for_year,
    surrender_value,
)
from illustration.schemas.client import ClientParameters
from illustration.schemas.constants import FixedProductConstants, RateTrack

BIRTHDAY = date(1960, 6, 2)


def make_params(**overrides) -> ClientParameters:
    data = {
        "birthday": BIRTHDAY,
        "premium": 100000,
        "first_term": 5,
        "second_term": 0,
        "withdrawal_type": "none",
        "withdrawal_amount": 0,
        "withdrawal_from_year": 1,
        "withdrawal_to_year": 1,
        "frequency": 1,
    }
    data.update(overrides)
    return ClientParameters.model_validate(data)


def five_and_three() -> FixedProductConstants:
    return FixedProductConstants(
        mgir=0.03,
        guaranteed=RateTrack(year_rates={year: 0.05 for year in range(1, 6)}),
        surrender_charges={1: 0.07, 2: 0.06, 3: 0.05, 4: 0.04, 5: 0.03},
        free_withdrawal={year: 0.10 for year in range(1, 6)},
    )


def test_first_term_rate_then_mgir(as_of):
    rows = project_fixed_track(make_params(), five_and_three(), five_and_three().guaranteed, as_of)

    assert rows[0].account_value == pytest.approx(105000.0)
    assert rows[4].account_value == pytest.approx(100000 * 1.05**5)
    assert rows[5].account_value / rows[4].account_value == pytest.approx(1.03)
    assert rows[0].credited_interest == pytest.approx(5000.0)


def test_runs_to_maximum_age(as_of):
    rows = project_fixed_track(make_params(), five_and_three(), five_and_three().guaranteed, as_of)

    # 64 on the as-of date, 65 at the end of the first policy year
    assert rows[0].age == 65
    assert rows[-1].age == 100
    assert len(rows) == 36


def test_second_term_rate_applies_between_terms():
    params = make_params(first_term=3, second_term=2)
    track = RateTrack(year_rates={1: 0.05, 2: 0.05, 3: 0.05}, second_term_rate=0.04)

    assert rate_for_year(3, params, track, 0.02) == 0.05
    assert rate_for_year(4, params, track, 0.02) == 0.04
    assert rate_for_year(5, params, track, 0.02) == 0.04
    assert rate_for_year(6, params, track, 0.02) == 0.02


def test_track_floor_overrides_mgir():
    track = RateTrack(year_rates={1: 0.05}, floor_rate=0.025)
    assert rate_for_year(2, make_params(first_term=1), track, 0.01) == 0.025


def test_fixed_withdrawal_larger_than_balance_empties_account(as_of):
    params = make_params(
        withdrawal_type="fixed",
        withdrawal_amount=10_000_000,
        withdrawal_from_year=1,
        withdrawal_to_year=3,
    )
    rows = project_fixed_track(params, five_and_three(), five_and_three().guaranteed, as_of)

    assert rows[0].account_value == 0.0
    assert rows[0].withdrawal == pytest.approx(100000 * 1.05 ** (1 / 12))
    assert all(row.account_value == 0.0 for row in rows[1:])
    assert all(row.surrender_value == 0.0 for row in rows)


def test_values_are_non_negative_and_surrender_below_account_value(as_of):
    params = make_params(
        withdrawal_type="percentage",
        withdrawal_amount=12,
        withdrawal_from_year=1,
        withdrawal_to_year=40,
        frequency=12,
    )
    for rows in (
        project_fixed_track(params, DEFAULT_FIXED_CONSTANTS, DEFAULT_FIXED_CONSTANTS.guaranteed, as_of),
        project_fixed_track(params, five_and_three(), five_and_three().guaranteed, as_of),
    ):
        for row in rows:
            assert row.account_value >= 0
            assert 0 <= row.surrender_value <= row.account_value + 1e-9


def test_surrender_charge_spares_remaining_free_allowance():
    # 10% free allowance of 100k, 4k already withdrawn -> 6k free
    value = surrender_value(
        account_value=100000,
        start_of_year_value=100000,
        withdrawn=4000,
        free_fraction=0.10,
        charge=0.05,
    )
    assert value == pytest.approx(100000 - 0.05 * 94000)


def test_no_charge_after_schedule(as_of):
    rows = project_fixed_track(make_params(), five_and_three(), five_and_three().guaranteed, as_of)
    assert rows[5].surrender_value == rows[5].account_value


def test_percentage_withdrawal_uses_start_of_year_value(as_of):
    params = make_params(
        withdrawal_type="percentage",
        withdrawal_amount=6,
        withdrawal_from_year=2,
        withdrawal_to_year=2,
        frequency=4,
    )
    rows = project_fixed_track(params, five_and_three(), five_and_three().guaranteed, as_of)

    assert rows[0].withdrawal == 0.0
    assert rows[1].withdrawal == pytest.approx(rows[0].account_value * 0.06)
    assert rows[2].withdrawal == 0.0


def test_report_payload_formats_both_tracks(as_of):
    constants = five_and_three().model_copy(
        update={"current": RateTrack(year_rates={year: 0.06 for year in range(1, 6)})}
    )
    result = compute_fixed_projection(make_params(), constants, as_of)

    assert result.table[0].account_value == "105,000.00"
    assert result.account_values[0] == "105000.00"
    assert parse_money(result.current_table[0].account_value) == pytest.approx(106000.0)
    assert result.data[0][:3] == [65, 1, "100,000.00"]
    assert len(result.data[0]) == 9
    assert result.durations == 36
    assert result.complete_surrender_values[0] == "93,000.00"
    assert len(result.complete_surrender_values) == result.durations + 1
    assert result.mgir == "3.00%"
    assert result.term_1_rate == "5.00%"
    assert result.term_1_surrender_rates == ["7.00%", "6.00%", "5.00%", "4.00%", "3.00%"]
    assert result.age == 65
