"""Data contracts for client-supplied illustration parameters."""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# allowed drift of the allocation total, in percentage points
ALLOCATION_TOLERANCE = 0.05


class ClientParameters(BaseModel):
    """Inputs describing the client and the requested withdrawal schedule."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    birthday: date
    premium: float = Field(..., gt=0, description="Single initial deposit.")
    first_term: int = Field(..., ge=0, description="Years in the first guaranteed-rate term.")
    second_term: int = Field(0, ge=0, description="Years in the renewal term.")
    withdrawal_type: Literal["none", "fixed", "percentage"] = "none"
    withdrawal_amount: float = Field(
        0.0,
        ge=0,
        description="Dollars per year for 'fixed', percent of value per year for 'percentage'.",
    )
    withdrawal_from_year: int = Field(1, ge=1)
    withdrawal_to_year: int = Field(1, ge=1)
    frequency: int = Field(1, ge=1, le=12, description="Withdrawals per year.")

    @field_validator("frequency")
    @classmethod
    def frequency_divides_year(cls, value: int) -> int:
        if 12 % value:
            raise ValueError("frequency must divide 12 evenly (1, 2, 3, 4, 6 or 12)")
        return value

    @model_validator(mode="after")
    def ensure_withdrawal_window(self) -> "ClientParameters":
        if self.withdrawal_type != "none" and self.withdrawal_to_year < self.withdrawal_from_year:
            raise ValueError("withdrawal_to_year must not precede withdrawal_from_year")
        return self

    @property
    def withdrawal_interval_months(self) -> int:
        return 12 // self.frequency

    def withdraws_in_year(self, year: int) -> bool:
        return (
            self.withdrawal_type != "none"
            and self.withdrawal_from_year <= year <= self.withdrawal_to_year
        )


class IndexedClientParameters(ClientParameters):
    """Client inputs plus the five sub-account allocations, in whole percents."""

    ptp_w_cap_rate: float = Field(0.0, ge=0, le=100)
    ptp_w_participation_rate_500: float = Field(0.0, ge=0, le=100)
    ptp_w_participation_rate_marc5: float = Field(0.0, ge=0, le=100)
    ptp_w_participation_rate_tca: float = Field(0.0, ge=0, le=100)
    fixed_interest_account: float = Field(0.0, ge=0, le=100)

    @model_validator(mode="after")
    def ensure_allocations_total(self) -> "IndexedClientParameters":
        total = self.total_allocation
        if abs(total - 100) > ALLOCATION_TOLERANCE:
            raise ValueError(
                f"Allocation percentages must sum to 100%. Current total: {total:.2f}%"
            )
        return self

    @property
    def total_allocation(self) -> float:
        return (
            self.ptp_w_cap_rate
            + self.ptp_w_participation_rate_500
            + self.ptp_w_participation_rate_marc5
            + self.ptp_w_participation_rate_tca
            + self.fixed_interest_account
        )
