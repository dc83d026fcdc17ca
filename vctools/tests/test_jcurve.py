import pytest

from vctools.engine.jcurve import (
    DEFAULT_STAGE_PROFILES, HORIZON_MONTHS, companies_per_stage, rebalance_allocation, simulate_fund,
)
from vctools.models.jcurve import ExitBucket, FundSimParams, Stage, StageAllocation


def _params(num_companies: int, seed: float, series_a: float, series_b: float, years: float = 4) -> FundSimParams:
    return FundSimParams(
        fund_size=100_000,
        num_companies=num_companies,
        stage_allocation=StageAllocation(seed=seed, series_a=series_a, series_b=series_b),
        deployment_years=years,
    )


def test_company_counts_sum_exactly():
    counts = companies_per_stage(22, StageAllocation(seed=30, series_a=45, series_b=25))
    assert counts == {Stage.SEED: 7, Stage.SERIES_A: 10, Stage.SERIES_B: 5}
    assert sum(counts.values()) == 22


def test_company_counts_round_half_up():
    counts = companies_per_stage(10, StageAllocation(seed=25, series_a=25, series_b=50))
    assert counts[Stage.SEED] == 3
    assert counts[Stage.SERIES_A] == 3
    assert counts[Stage.SERIES_B] == 4


def test_single_seed_company_cash_flows():
    result = simulate_fund(_params(1, 100, 0, 0))
    # 500 initial, 1500 x 40% at month 18, 4000 x 40% x 65% at month 36
    assert abs(result.total_invested - 2140.0) < 1e-9
    assert abs(result.months[0].calls_out - 500.0) < 1e-9
    assert abs(result.months[18].calls_out - 600.0) < 1e-9
    assert abs(result.months[36].calls_out - 1040.0) < 1e-9
    # 6000 deployed x 2.86 expected multiple x (0.4 x 0.65 x 0.7) survival
    assert abs(result.months[84].distributions - 3123.12) < 1e-6
    assert abs(result.total_returned - 3123.12) < 1e-6


def test_break_even_and_trough():
    result = simulate_fund(_params(1, 100, 0, 0))
    assert result.break_even_month == 84
    assert abs(result.break_even_year - 7.0) < 1e-12
    assert abs(result.peak_capital_call - 2140.0) < 1e-9
    assert result.trough_month == 36


def test_metrics_at_year():
    result = simulate_fund(_params(1, 100, 0, 0))
    assert set(result.metrics_at_year) == {5, 7, 10, 12}
    assert result.metrics_at_year[5].dpi == 0.0
    year7 = result.metrics_at_year[7]
    assert abs(year7.total_called - 2140.0) < 1e-9
    assert abs(year7.dpi - 3123.12 / 2140.0) < 1e-9


def test_totals_match_monthly_arrays():
    result = simulate_fund(_params(22, 30, 45, 25))
    assert len(result.months) == HORIZON_MONTHS
    assert abs(sum(m.calls_out for m in result.months) - result.total_invested) < 1e-6
    assert abs(sum(m.distributions for m in result.months) - result.total_returned) < 1e-6
    assert result.months[0].cumulative == result.months[0].net_flow
    assert abs(result.months[-1].cumulative - (result.total_returned - result.total_invested)) < 1e-6
    assert sum(result.companies_per_stage.values()) == 22


def test_yearly_rollup():
    result = simulate_fund(_params(20, 20, 80, 0))
    assert len(result.yearly) == 13
    first_156 = result.months[:156]
    assert abs(sum(y.calls for y in result.yearly) - sum(m.calls_out for m in first_156)) < 1e-6
    for y in result.yearly:
        assert abs(y.net - (y.distributions - y.calls)) < 1e-9


def test_flows_beyond_horizon_are_dropped():
    slow_seed = DEFAULT_STAGE_PROFILES[Stage.SEED].model_copy(update={"time_to_exit": HORIZON_MONTHS + 20})
    profiles = {**DEFAULT_STAGE_PROFILES, Stage.SEED: slow_seed}
    result = simulate_fund(_params(1, 100, 0, 0), profiles)
    assert result.total_returned == 0.0
    assert result.break_even_month is None
    assert result.break_even_year is None
    assert any("dropped" in w for w in result.warnings)


def test_never_breaks_even_with_zero_multiples():
    wipeout = DEFAULT_STAGE_PROFILES[Stage.SERIES_B].model_copy(
        update={"exit_distribution": (ExitBucket(probability=1.0, multiple=0),)}
    )
    profiles = {**DEFAULT_STAGE_PROFILES, Stage.SERIES_B: wipeout}
    result = simulate_fund(_params(5, 0, 0, 100), profiles)
    assert result.total_returned == 0.0
    assert result.break_even_month is None
    assert result.tvpi_expected == 0.0


def test_companies_are_spread_evenly():
    result = simulate_fund(_params(4, 0, 0, 100, years=1))
    invest_months = [m.month for m in result.months if m.calls_out > 0]
    assert invest_months == [0, 3, 6, 9]


def test_rebalance_allocation():
    allocation = rebalance_allocation(StageAllocation(seed=20, series_a=80, series_b=0), Stage.SEED, 50)
    assert allocation.seed == 38
    assert allocation.series_a == 62
    assert allocation.series_b == 0


def test_exit_distribution_must_sum_to_one():
    with pytest.raises(ValueError):
        DEFAULT_STAGE_PROFILES[Stage.SEED].model_validate({
            **DEFAULT_STAGE_PROFILES[Stage.SEED].model_dump(),
            "exit_distribution": [{"probability": 0.5, "multiple": 2}],
        })


def test_rebalance_zeroing_only_stage_is_left_alone():
    allocation = StageAllocation(seed=100, series_a=0, series_b=0)
    assert rebalance_allocation(allocation, Stage.SEED, 0) == allocation


def test_rebalance_always_totals_one_hundred():
    # thirds round down to 33 each without the largest-remainder top-up
    allocation = rebalance_allocation(StageAllocation(seed=50, series_a=50, series_b=0), Stage.SERIES_B, 50)
    assert allocation.seed + allocation.series_a + allocation.series_b == 100
    assert sorted([allocation.seed, allocation.series_a, allocation.series_b]) == [33, 33, 34]


def test_stage_allocation_must_total_one_hundred():
    with pytest.raises(ValueError):
        StageAllocation(seed=60, series_a=60, series_b=0)
    with pytest.raises(ValueError):
        StageAllocation(seed=0, series_a=0, series_b=0)


def test_company_counts_never_go_negative():
    # 4.5 and 5.5 both round up, leaving nothing for Series B
    counts = companies_per_stage(10, StageAllocation(seed=45, series_a=55, series_b=0))
    assert counts == {Stage.SEED: 5, Stage.SERIES_A: 5, Stage.SERIES_B: 0}
    result = simulate_fund(_params(10, 45, 55, 0))
    assert sum(result.companies_per_stage.values()) == 10
