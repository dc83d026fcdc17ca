from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Stage(str, Enum):
    SEED = "seed"
    SERIES_A = "series_a"
    SERIES_B = "series_b"


class ExitBucket(BaseModel):
    model_config = ConfigDict(frozen=True)

    probability: float = Field(..., ge=0, le=1)
    multiple: float = Field(..., ge=0)


class StageProfile(BaseModel):
    """Cash-flow shape of one entry stage. Amounts in thousands, timings in months."""
    model_config = ConfigDict(frozen=True)

    name: str
    initial_check: float = Field(..., ge=0)
    follow_on_to_a: float = Field(0.0, ge=0)
    follow_on_to_b: float = Field(0.0, ge=0)
    survival_to_a: float = Field(1.0, ge=0, le=1)
    survival_to_b: float = Field(1.0, ge=0, le=1)
    survival_to_exit: float = Field(1.0, ge=0, le=1)
    time_to_a: int = Field(0, ge=0)
    time_to_b: int = Field(0, ge=0)
    time_to_exit: int = Field(..., ge=0)
    exit_distribution: tuple[ExitBucket, ...]

    @model_validator(mode="after")
    def check_distribution(self):
        total = sum(b.probability for b in self.exit_distribution)
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Exit distribution probabilities for {self.name} sum to {total}, expected 1.0")
        return self

    @property
    def expected_multiple(self) -> float:
        return sum(b.probability * b.multiple for b in self.exit_distribution)


class StageAllocation(BaseModel):
    """Whole-percentage split of companies across entry stages."""
    model_config = ConfigDict(frozen=True)

    seed: float = Field(0.0, ge=0, le=100)
    series_a: float = Field(0.0, ge=0, le=100)
    series_b: float = Field(0.0, ge=0, le=100)

    @model_validator(mode="after")
    def check_total(self):
        total = self.seed + self.series_a + self.series_b
        if abs(total - 100) > 1e-9:
            raise ValueError(f"Stage allocation sums to {total}%, expected 100%")
        return self

    def pct(self, stage: Stage) -> float:
        match stage:
            case Stage.SEED:
                return self.seed
            case Stage.SERIES_A:
                return self.series_a
            case Stage.SERIES_B:
                return self.series_b
        raise ValueError(f"Unknown stage: {stage}")


class FundSimParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    fund_size: float = Field(..., gt=0, description="Fund size (thousands)")
    num_companies: int = Field(..., ge=1)
    stage_allocation: StageAllocation
    deployment_years: float = Field(..., gt=0)
    follow_on_reserve: float = Field(50.0, ge=0, le=100, description="Reserve held for follow-ons (%)")


class MonthlyCashFlow(BaseModel):
    month: int
    calls_out: float
    distributions: float
    net_flow: float
    cumulative: float


class YearlyCashFlow(BaseModel):
    year: int
    calls: float
    distributions: float
    net: float


class PointInTimeMetrics(BaseModel):
    year: int
    total_called: float
    total_distributed: float
    dpi: float


class FundSimResult(BaseModel):
    months: list[MonthlyCashFlow]
    companies_per_stage: dict[Stage, int]
    total_invested: float
    total_returned: float
    tvpi_expected: float
    metrics_at_year: dict[int, PointInTimeMetrics]
    yearly: list[YearlyCashFlow]
    peak_capital_call: float
    trough_month: int
    break_even_month: Optional[int] = Field(None, description="None when break-even falls beyond the horizon")
    break_even_year: Optional[float] = None
    warnings: list[str] = Field(default_factory=list)
