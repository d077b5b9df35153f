"""Request and response contracts for the illustration calculators."""

from __future__ import annotations

from typing import Annotated, Dict, List, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from illustration.core.formatting import parse_money
from illustration.schemas.client import ClientParameters, IndexedClientParameters
from illustration.schemas.constants import FixedProductConstants, IndexedProductConstants

# "105,000.00", "$1,250.50" or a plain number; parsed to float on input
Money = Annotated[float, BeforeValidator(parse_money)]


class TrackYear(BaseModel):
    """Raw (unformatted) projection values for one policy year."""

    age: int
    year: int
    premium: float = Field(..., ge=0)
    credited_interest: float
    withdrawal: float = Field(..., ge=0)
    account_value: float = Field(..., ge=0)
    surrender_value: float = Field(..., ge=0)
    death_benefit: float = Field(..., ge=0)


class ProjectionRow(BaseModel):
    """One reported year; monetary fields are display strings."""

    age: int
    year: int
    premium: str
    credited_interest: str
    withdrawal: str
    account_value: str
    surrender_value: str
    death_benefit: str


class FixedProjectionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    client_data: ClientParameters
    constants: Optional[FixedProductConstants] = None


class FixedProjectionResult(BaseModel):
    table: List[ProjectionRow]
    current_table: List[ProjectionRow]
    # age, year, premium, then withdrawal/value/surrender for each track
    data: List[List[Union[int, str]]]
    durations: int
    account_values: List[str]
    accumulation_value_at_maturity: List[str]
    complete_surrender_values: List[str]
    mgir: str
    term_1_rate: str
    term_1_surrender_rates: List[str]
    age: int


class IndexedProjectionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    client_data: IndexedClientParameters
    constants: Optional[IndexedProductConstants] = None


class IndexedProjectionResult(BaseModel):
    table: List[ProjectionRow]
    data: List[List[Union[int, str]]]
    durations: str
    ages: List[int]
    years: List[int]
    premiums: List[str]
    credited_interest: List[str]
    withdrawals: List[str]
    accumulated_values: List[str]
    surrender_values: List[str]
    death_benefits: List[str]
    accumulation_value_at_maturity: List[str]
    complete_surrender_values: List[str]
    premium_bonus: str
    fixed_rate: str
    term_1_surrender_rates: List[str]
    age: int
    index_allocations: Dict[str, str]


class AnnuityFactorRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    account_values: List[Money] = Field(..., min_length=2, max_length=2)
    annuitization_rate: float
    gender: str = Field(..., min_length=1)
    certain_year: int = Field(10, ge=0)
    maturity_age: int = Field(100, ge=0)


class AnnuityFactorResult(BaseModel):
    monthly_factor_per_1000: str
    guaranteed_monthly_annuity_income: str
    current_monthly_annuity_income: str


class SurrenderChartRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    current_surrender_values: List[Money]
    term_1: int = Field(..., ge=0)
    term: int = Field(10, ge=1)


class SurrenderChartResponse(BaseModel):
    svg: str
