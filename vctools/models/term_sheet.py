from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DealParams(BaseModel):
    """One term sheet's headline numbers. Raw dollars and share counts."""
    model_config = ConfigDict(frozen=True)

    name: str = "Term Sheet"
    share_price: float = Field(..., gt=0)
    pre_money: float = Field(..., ge=0)
    investment: float = Field(..., ge=0)
    option_pool: int = Field(0, ge=0, description="Option pool shares")
    founder_shares: int = Field(..., ge=0)


class DealStructure(BaseModel):
    name: str
    share_price: float
    pre_money: float
    investment: float
    shares_issued: int
    post_money: float
    founder_shares: int
    option_shares: int
    total_shares: int
    founder_pct: float
    option_pct: float
    series_a_pct: float
    founder_value: float


class LiquidationTerms(BaseModel):
    """Dividend and participation rights attached to the Series A preferred."""
    model_config = ConfigDict(frozen=True)

    participating: bool = False
    cumulative_dividends: bool = False
    dividend_per_share: float = Field(0.0, ge=0, description="Annual dividend ($ per share)")
    dividend_cap_pct: Optional[float] = Field(None, ge=0, description="Cap on accrued dividends as a fraction of issue price")
    guaranteed_return_rate: Optional[float] = Field(None, ge=0, description="Compounded annual guaranteed return")
    years_to_exit: float = Field(5.0, ge=0)


class Preference(BaseModel):
    amount: float
    investment: float
    guaranteed_return: float = 0.0
    cumulative_dividends: float = 0.0
    dividend_years: float = 0.0


class WaterfallRow(BaseModel):
    exit_value: float
    vc_payout: float
    common_payout: float
    vc_converts: bool
    vc_multiple: float


class WaterfallResult(BaseModel):
    deal_name: str
    participating: bool
    preference: Preference
    conversion_threshold: float
    table: list[WaterfallRow]
    curve: list[WaterfallRow]


class AntiDilutionMethod(str, Enum):
    NONE = "none"
    WEIGHTED_AVERAGE = "weighted-average"
    FULL_RATCHET = "full-ratchet"
    HYBRID = "hybrid"


class DownRound(BaseModel):
    model_config = ConfigDict(frozen=True)

    price: float = Field(..., gt=0, description="Down-round share price")
    investment: float = Field(..., ge=0)


class CapTableSnapshot(BaseModel):
    founder_shares: int
    option_shares: int
    series_a_shares: int
    new_investor_shares: int = 0
    total_shares: int
    founder_pct: float
    option_pct: float
    series_a_pct: float
    new_investor_pct: float = 0.0


class AntiDilutionScenario(BaseModel):
    method: AntiDilutionMethod
    applied_method: AntiDilutionMethod
    new_shares: int
    adjusted_price: float
    adjusted_series_a_shares: int
    additional_shares: int
    before: CapTableSnapshot
    without_ad: CapTableSnapshot
    with_ad: CapTableSnapshot


class TermSheetComparison(BaseModel):
    deal: DealStructure
    waterfall: WaterfallResult


class LiquidationParams(BaseModel):
    """One term sheet plus the exits to evaluate; None uses the headline exits."""
    model_config = ConfigDict(frozen=True)

    deal: DealParams
    terms: LiquidationTerms = LiquidationTerms()
    exit_values: Optional[tuple[float, ...]] = None


class AntiDilutionParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    deal: DealParams
    down_round: DownRound
    method: AntiDilutionMethod = AntiDilutionMethod.WEIGHTED_AVERAGE


class TermSheetComparisonParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    sheets: tuple[LiquidationParams, ...] = Field(..., min_length=1)
    exit_values: Optional[tuple[float, ...]] = None
