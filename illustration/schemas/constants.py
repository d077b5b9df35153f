"""Product constants bundles consumed by the projection engines."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class RateTrack(BaseModel):
    """One crediting path (guaranteed or current) for the fixed engine."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    year_rates: Dict[int, float] = Field(
        default_factory=dict, description="First-term rate keyed by policy year."
    )
    second_term_rate: Optional[float] = Field(None, gt=-1)
    floor_rate: Optional[float] = Field(
        None, gt=-1, description="Rate after both terms; defaults to the product MGIR."
    )


class FixedProductConstants(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    mgir: float = Field(..., gt=-1, description="Minimum guaranteed interest rate.")
    guaranteed: RateTrack
    current: Optional[RateTrack] = None
    surrender_charges: Dict[int, float] = Field(default_factory=dict)
    free_withdrawal: Dict[int, float] = Field(default_factory=dict)
    maximum_age: int = Field(100, ge=1, le=120, description="Projection ends at this age.")

    @property
    def current_track(self) -> RateTrack:
        return self.current or self.guaranteed


class IndexAccountRates(BaseModel):
    """Cap and participation rates of the four index-linked sub-accounts."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    ptp_w_cap_rate: float = Field(..., ge=0)
    ptp_w_part_rate_500: float = Field(..., ge=0)
    ptp_w_part_rate_marc5: float = Field(..., ge=0)
    ptp_w_part_rate_tca: float = Field(..., ge=0)


class IndexedProductConstants(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    premium_bonus: float = Field(..., ge=0)
    premium_bonus_recapture: Dict[int, float] = Field(default_factory=dict)
    fixed_rate: float = Field(..., gt=-1)
    index_account_cap_part: IndexAccountRates
    surrender_charges: Dict[int, float] = Field(default_factory=dict)
    free_withdrawal: Dict[int, float] = Field(default_factory=dict)
    projection_years: int = Field(10, ge=1, le=60)
    index_returns: Tuple[float, ...] = Field(
        ...,
        min_length=1,
        description="Gross annual index factors (1.08 == +8%), cycled over the horizon.",
    )
