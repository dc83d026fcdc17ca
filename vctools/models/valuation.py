from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class VCMethodParams(BaseModel):
    """Venture capital method inputs. Money in $ millions, shares as raw counts."""
    model_config = ConfigDict(frozen=True)

    investment: float = Field(3.0, gt=0, description="Round size ($M)")
    net_income: float = Field(3.0, gt=0, description="Net income in the exit year ($M)")
    pe_multiple: float = Field(18.0, gt=0)
    required_return: float = Field(0.40, ge=0, description="Target annual return (RRR)")
    years_to_exit: float = Field(5.0, gt=0)
    current_shares: float = Field(1_000_000, gt=0, description="Shares outstanding before the round")
    alt_required_return: Optional[float] = Field(None, ge=0, description="Second RRR to compare against")


class VCMethodValuation(BaseModel):
    required_return: float
    future_investment_value: float
    required_stake: float
    post_money: float
    pre_money: float
    share_price: float
    new_shares: float


class VCMethodResult(BaseModel):
    future_company_value: float
    primary: VCMethodValuation
    alternate: Optional[VCMethodValuation] = None
    warnings: list[str] = Field(default_factory=list)


class OptionPoolParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    investment: float = Field(..., gt=0, description="Round size ($M)")
    current_shares: float = Field(..., gt=0)
    target_stake: float = Field(..., gt=0, lt=1, description="VC ownership the investor requires")
    option_pool_pct: float = Field(0.20, ge=0, lt=1)

    @model_validator(mode="after")
    def check_room_for_pool(self):
        # the post-round pool grosses the stake up to target / (1 - pool)
        if self.target_stake + self.option_pool_pct >= 1:
            raise ValueError(
                f"Target stake {self.target_stake:.1%} plus option pool {self.option_pool_pct:.1%} "
                "must stay below 100%"
            )
        return self


class CapTableScenario(BaseModel):
    label: str
    founder_shares: float
    option_shares: float
    vc_shares: float
    total_shares: float
    founder_pct: float
    option_pct: float
    vc_pct: float
    share_price: float
    pre_money: float
    post_money: float


class OptionPoolResult(BaseModel):
    target_stake: float
    pool_before: CapTableScenario
    pool_after_naive: CapTableScenario
    pool_after_adjusted: CapTableScenario


class MultiRoundParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    vc_method: VCMethodParams
    option_pool_pct: float = Field(0.20, ge=0, lt=1)
    series_b_investment: float = Field(7.0, gt=0, description="Series B round size ($M)")
    series_b_return: float = Field(0.20, ge=0)
    years_b_to_exit: float = Field(2.0, gt=0)


class MultiRoundResult(BaseModel):
    series_b_stake: float
    series_a_stake_at_exit: float
    series_a_stake_pre_b: float
    series_b_pre_money: float
    series_b_post_money: float
    scenarios: Optional[OptionPoolResult] = Field(None, description="None when the stakes leave no room for the pool")
    warnings: list[str] = Field(default_factory=list)


class ConvertibleNoteParams(BaseModel):
    """Note conversion inputs in raw dollars."""
    model_config = ConfigDict(frozen=True)

    note_amount: float = Field(500_000, gt=0)
    current_shares: float = Field(2_040_000, gt=0)
    series_a_raise: float = Field(3_000_000, gt=0)
    series_a_stake: float = Field(0.32, gt=0, lt=1)
    discount: float = Field(0.80, gt=0, le=1, description="Fraction of the Series A price the note pays")
    valuation_cap: float = Field(6_000_000, gt=0)


class NoteConversion(BaseModel):
    series_a_stake: float
    post_money: float
    pre_money: float
    series_a_price: float
    series_a_shares: float
    total_after_a: float
    discount_price: float
    cap_price: float
    effective_price: float
    cap_binding: bool
    note_shares: float
    grand_total: float
    founder_pct: float
    series_a_pct: float
    note_pct: float


class ConvertibleNoteResult(BaseModel):
    conversion: NoteConversion
    sensitivity: list[NoteConversion]


class OptionPricingParams(BaseModel):
    """Investment-plus-warrant inputs in raw dollars."""
    model_config = ConfigDict(frozen=True)

    current_shares: float = Field(3_000_000, gt=0)
    share_price: float = Field(2.0, gt=0)
    investment: float = Field(4_000_000, gt=0)
    option_amount: float = Field(4_000_000, ge=0, description="Dollar value of shares under option at the strike")
    strike_premium: float = Field(0.25, ge=0, description="Strike premium over the share price")
    volatility: float = Field(0.40, ge=0)


class BinomialNode(BaseModel):
    ups: int
    downs: int
    frequency: float
    multiplier: float
    share_value: float
    total_stock_value: float
    option_payoff_per_share: float
    total_option_payoff: float
    contribution: float


class OptionPricingResult(BaseModel):
    up_factor: float
    down_factor: float
    strike_price: float
    investment_shares: float
    option_shares: float
    nodes: list[BinomialNode]
    expected_option_value: float
    implied_investment: float
    implied_share_price: float
    implied_pre_money: float


class PreferredParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    vc_method: VCMethodParams
    negotiated_pre_money: float = Field(7.0, gt=0, description="Pre-money agreed in the term sheet ($M)")
    dividend_rate: float = Field(0.10, ge=0, description="Simple annual dividend on the investment")


class PreferredRow(BaseModel):
    exit_value: float
    vc_participating: float
    founder_participating: float
    vc_non_participating: float
    founder_non_participating: float
    vc_no_dividends: Optional[float] = None
    effective_vc_pct: float
    annualized_return: float


class PreferredResult(BaseModel):
    pre_money: float
    post_money: float
    share_price: float
    vc_shares: float
    total_shares: float
    vc_ownership: float
    future_company_value: float
    claim: float
    accrued_dividends: float = 0.0
    conversion_threshold: float
    implied_pre_money: float
    rows: list[PreferredRow]
