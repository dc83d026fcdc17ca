from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class FeeType(str, Enum):
    RATE = "rate"
    BUDGET = "budget"


class FeeBasis(str, Enum):
    COMMITTED = "committed"
    INVESTED = "invested"


class CarryBasis(str, Enum):
    WHOLE_FUND = "whole-fund"
    DEAL_BY_DEAL = "deal-by-deal"


class FundFeeParams(BaseModel):
    """Fund economics inputs. Money in $ millions, rates as fractions."""
    model_config = ConfigDict(frozen=True)

    fund_size: float = Field(..., gt=0, description="Committed capital ($M)")
    investment_period: int = Field(..., ge=0, description="Investment period (years)")
    fund_life: int = Field(..., ge=1, description="Fund life (years)")
    fee_type: FeeType = FeeType.RATE
    fee_rate: float = Field(0.02, ge=0, description="Annual fee rate during the investment period")
    step_down: bool = False
    post_fee_rate: float = Field(0.02, ge=0, description="Annual fee rate after the investment period when stepping down")
    fee_basis: FeeBasis = FeeBasis.COMMITTED
    total_budget: float = Field(2.0, ge=0, description="Management company budget in year 1 ($M/yr)")
    budget_growth_rate: float = Field(0.05, description="Annual growth of the management budget")
    other_funds_aum: float = Field(0.0, ge=0, description="AUM of other funds sharing the budget ($M)")
    carry_rate: float = Field(0.20, ge=0, le=1)
    hurdle_rate: float = Field(0.08, ge=0)
    carry_basis: CarryBasis = CarryBasis.WHOLE_FUND
    success_rate: float = Field(0.50, ge=0, le=1, description="Share of invested capital in winning deals")
    gross_tvpi: float = Field(2.5, ge=0)


class YearRecord(BaseModel):
    year: int
    mgmt_fee: float
    cumul_fees: float
    distribution: float = 0.0
    carry: float = 0.0
    cumul_dist: float = 0.0
    cumul_carry: float = 0.0
    net_to_lp: float = 0.0


class FundFeeResult(BaseModel):
    years: list[YearRecord]
    total_fees: float
    invested_capital: float
    gross_proceeds: float
    total_carry: float
    whole_fund_carry: float
    deal_by_deal_carry: float = 0.0
    clawback: float = 0.0
    net_to_lps: float
    net_tvpi: float
    fee_drag: float
    warnings: list[str] = Field(default_factory=list)


class BarKind(str, Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    SUBTOTAL = "subtotal"
    TOTAL = "total"


class WaterfallBar(BaseModel):
    label: str
    value: float
    start: float
    kind: BarKind


class TvpiSensitivityPoint(BaseModel):
    gross: float
    net: float
    no_fee: float
