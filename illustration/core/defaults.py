"""Default product constants.

Kept in one place so a product configuration sourced elsewhere can replace a
bundle wholesale without touching engine code.
"""

from illustration.schemas.constants import (
    FixedProductConstants,
    IndexAccountRates,
    IndexedProductConstants,
    RateTrack,
)

# Gross annual factors of the reference index; cycled past the 20th year.
REFERENCE_INDEX_RETURNS = (
    1.12, 1.08, 1.15, 1.05, 1.18, 1.02, 1.22, 1.07, 1.13, 1.09,
    1.11, 1.06, 1.19, 1.04, 1.16, 1.03, 1.21, 1.08, 1.14, 1.10,
)

# Reference rate environment for the MVA chart.
MVA_BASE_RATE = 0.0483
MVA_RATE_SHOCK = 0.01

DEFAULT_FIXED_CONSTANTS = FixedProductConstants(
    mgir=0.045,
    guaranteed=RateTrack(
        year_rates={1: 0.055, 2: 0.050, 3: 0.048, 4: 0.046, 5: 0.045},
    ),
    surrender_charges={
        1: 0.08, 2: 0.07, 3: 0.06, 4: 0.05, 5: 0.04,
        6: 0.03, 7: 0.02, 8: 0.01, 9: 0.00, 10: 0.00,
    },
    free_withdrawal={
        1: 0.00, 2: 0.10, 3: 0.10, 4: 0.10, 5: 0.10,
        6: 0.10, 7: 0.10, 8: 0.10, 9: 0.10, 10: 0.10,
    },
    maximum_age=100,
)

DEFAULT_INDEXED_CONSTANTS = IndexedProductConstants(
    premium_bonus=0.10,
    premium_bonus_recapture={
        1: 0.10, 2: 0.09, 3: 0.08, 4: 0.07, 5: 0.06,
        6: 0.05, 7: 0.04, 8: 0.03, 9: 0.02, 10: 0.01,
    },
    fixed_rate=0.03,
    index_account_cap_part=IndexAccountRates(
        ptp_w_cap_rate=0.06,
        ptp_w_part_rate_500=0.85,
        ptp_w_part_rate_marc5=0.80,
        ptp_w_part_rate_tca=0.75,
    ),
    surrender_charges={
        1: 0.09, 2: 0.08, 3: 0.07, 4: 0.06, 5: 0.05,
        6: 0.04, 7: 0.03, 8: 0.02, 9: 0.01, 10: 0.00,
    },
    free_withdrawal={year: 0.10 for year in range(1, 11)},
    projection_years=10,
    index_returns=REFERENCE_INDEX_RETURNS,
)
