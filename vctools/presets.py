"""Named parameter bundles offered by the calculators.

Presets are plain parameter records; the engine treats them exactly like
hand-entered values.
"""
from dataclasses import dataclass

from pydantic import BaseModel

from vctools.models.fund_fees import CarryBasis, FeeBasis, FundFeeParams
from vctools.models.jcurve import FundSimParams, StageAllocation
from vctools.models.valuation import (
    ConvertibleNoteParams, OptionPricingParams, PreferredParams, VCMethodParams,
)


@dataclass(frozen=True)
class Preset:
    key: str
    label: str
    params: BaseModel
    description: str = ""


FUND_FEE_PRESETS: dict[str, Preset] = {
    "standard": Preset(
        key="standard",
        label="Standard 2/20",
        params=FundFeeParams(
            fund_size=100, investment_period=5, fund_life=10,
            fee_rate=0.02, post_fee_rate=0.02, carry_rate=0.20, hurdle_rate=0.08,
            gross_tvpi=2.5,
        ),
    ),
    "founder_friendly": Preset(
        key="founder_friendly",
        label="Founder Friendly",
        params=FundFeeParams(
            fund_size=75, investment_period=4, fund_life=10,
            fee_rate=0.02, step_down=True, post_fee_rate=0.015, fee_basis=FeeBasis.INVESTED,
            carry_rate=0.20, hurdle_rate=0.08, gross_tvpi=2.0,
        ),
    ),
    "top_tier": Preset(
        key="top_tier",
        label="Top-Tier GP",
        params=FundFeeParams(
            fund_size=500, investment_period=5, fund_life=12,
            fee_rate=0.02, post_fee_rate=0.02, carry_rate=0.25, hurdle_rate=0.0,
            carry_basis=CarryBasis.DEAL_BY_DEAL, success_rate=0.50, gross_tvpi=3.5,
        ),
    ),
    "no_hurdle": Preset(
        key="no_hurdle",
        label="No Hurdle",
        params=FundFeeParams(
            fund_size=200, investment_period=5, fund_life=10,
            fee_rate=0.02, post_fee_rate=0.02, carry_rate=0.20, hurdle_rate=0.0,
            gross_tvpi=2.5,
        ),
    ),
}

JCURVE_PRESETS: dict[str, Preset] = {
    "seed_specialist": Preset(
        key="seed_specialist",
        label="Seed Specialist",
        params=FundSimParams(
            fund_size=50_000, num_companies=25,
            stage_allocation=StageAllocation(seed=100, series_a=0, series_b=0),
            deployment_years=4, follow_on_reserve=60,
        ),
        description="High-risk, high-reward. Deep J-curve with long recovery but potential for outlier returns.",
    ),
    "series_a_focused": Preset(
        key="series_a_focused",
        label="Series A Focused",
        params=FundSimParams(
            fund_size=100_000, num_companies=20,
            stage_allocation=StageAllocation(seed=20, series_a=80, series_b=0),
            deployment_years=4, follow_on_reserve=50,
        ),
        description="Balanced risk profile. Moderate trough depth with more predictable exit timing.",
    ),
    "growth_stage": Preset(
        key="growth_stage",
        label="Growth / Series B",
        params=FundSimParams(
            fund_size=200_000, num_companies=15,
            stage_allocation=StageAllocation(seed=0, series_a=20, series_b=80),
            deployment_years=3, follow_on_reserve=30,
        ),
        description="Lower variance, faster exits. Shallower J-curve but compressed multiples.",
    ),
    "multi_stage": Preset(
        key="multi_stage",
        label="Multi-Stage Balanced",
        params=FundSimParams(
            fund_size=150_000, num_companies=22,
            stage_allocation=StageAllocation(seed=30, series_a=45, series_b=25),
            deployment_years=4, follow_on_reserve=45,
        ),
        description="Diversified across stages. Blended risk/return with staggered cash flows.",
    ),
}

DEFAULT_VC_METHOD = VCMethodParams(alt_required_return=0.30)
DEFAULT_PREFERRED = PreferredParams(vc_method=DEFAULT_VC_METHOD)
DEFAULT_CONVERTIBLE_NOTE = ConvertibleNoteParams()
DEFAULT_OPTION_PRICING = OptionPricingParams()


def get_preset(catalog: dict[str, Preset], key: str) -> Preset:
    try:
        return catalog[key]
    except KeyError:
        raise KeyError(f"Unknown preset '{key}'. Available: {', '.join(sorted(catalog))}") from None
