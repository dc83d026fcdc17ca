import pytest

from vctools.models.valuation import MultiRoundParams, OptionPoolParams, VCMethodParams
from vctools.valuation.option_pool import compute_multi_round, compute_option_pool
from vctools.valuation.vc_method import compute_vc_method


def test_vc_method_defaults():
    result = compute_vc_method(VCMethodParams())
    assert result.future_company_value == 54.0
    v = result.primary
    assert abs(v.future_investment_value - 3 * 1.4 ** 5) < 1e-9
    assert abs(v.required_stake - v.future_investment_value / 54.0) < 1e-12
    assert abs(v.post_money * v.required_stake - 3.0) < 1e-9
    assert abs(v.post_money - v.pre_money - 3.0) < 1e-9
    # $M over millions of shares gives dollars per share
    assert abs(v.share_price - v.pre_money) < 1e-9
    assert abs(v.new_shares * v.share_price / 1_000_000 - 3.0) < 1e-9
    assert result.alternate is None


def test_vc_method_lower_return_means_higher_valuation():
    result = compute_vc_method(VCMethodParams(alt_required_return=0.30))
    assert result.alternate is not None
    assert result.alternate.pre_money > result.primary.pre_money
    assert result.alternate.new_shares < result.primary.new_shares


def _pool(**overrides) -> OptionPoolParams:
    base = dict(investment=3.0, current_shares=1_000_000, target_stake=0.3, option_pool_pct=0.2)
    base.update(overrides)
    return OptionPoolParams(**base)


def test_option_pool_before_round_hits_target():
    s = compute_option_pool(_pool()).pool_before
    assert abs(s.vc_pct - 0.3) < 1e-12
    assert abs(s.founder_shares - 800_000) < 1e-6
    assert abs(s.option_shares - 200_000) < 1e-6


def test_option_pool_after_naive_dilutes_vc():
    s = compute_option_pool(_pool()).pool_after_naive
    assert s.vc_pct < 0.3
    assert abs(s.vc_pct - 0.3 * 0.8) < 1e-12
    assert abs(s.option_pct - 0.2) < 1e-12


def test_option_pool_after_adjusted_hits_target():
    s = compute_option_pool(_pool()).pool_after_adjusted
    assert abs(s.vc_pct - 0.3) < 1e-12
    assert abs(s.option_pct - 0.2) < 1e-12


def test_option_pool_prices_are_consistent():
    result = compute_option_pool(_pool())
    for s in (result.pool_before, result.pool_after_naive, result.pool_after_adjusted):
        assert abs(s.share_price * s.vc_shares / 1_000_000 - 3.0) < 1e-9
        assert abs(s.post_money - s.pre_money - 3.0) < 1e-9
        assert abs(s.pre_money - s.share_price) < 1e-9
        assert abs(s.founder_pct + s.option_pct + s.vc_pct - 1.0) < 1e-12


def test_multi_round_backs_out_pre_series_b_stake():
    params = MultiRoundParams(vc_method=VCMethodParams())
    result = compute_multi_round(params)
    assert abs(result.series_b_stake - 7 * 1.2 ** 2 / 54) < 1e-12
    assert abs(result.series_a_stake_pre_b - result.series_a_stake_at_exit / (1 - result.series_b_stake)) < 1e-12
    assert abs(result.series_b_post_money * result.series_b_stake - 7.0) < 1e-9
    assert abs(result.series_b_post_money - result.series_b_pre_money - 7.0) < 1e-9
    assert abs(result.scenarios.pool_after_adjusted.vc_pct - result.series_a_stake_pre_b) < 1e-12
    assert not result.warnings


def test_vc_method_full_stake_reports_zero_price():
    # required return of 0 with a company worth exactly the investment
    result = compute_vc_method(VCMethodParams(investment=3, net_income=1, pe_multiple=3, required_return=0.0))
    v = result.primary
    assert abs(v.required_stake - 1.0) < 1e-12
    assert abs(v.pre_money) < 1e-12
    assert v.share_price == 0.0
    assert v.new_shares == 0.0
    assert result.warnings


def test_vc_method_warns_only_for_the_infeasible_return():
    result = compute_vc_method(VCMethodParams(investment=3, net_income=1, pe_multiple=5, alt_required_return=0.0))
    assert result.primary.share_price == 0.0
    assert result.alternate.share_price > 0
    assert len(result.warnings) == 1


def test_option_pool_rejects_stake_without_room_for_pool():
    with pytest.raises(ValueError):
        _pool(target_stake=0.8, option_pool_pct=0.2)


def test_multi_round_without_room_for_pool_skips_scenarios():
    # Series B alone needs 7 x 1.44 / 10 = 100.8% of the company
    params = MultiRoundParams(vc_method=VCMethodParams(investment=10, net_income=1, pe_multiple=10))
    result = compute_multi_round(params)
    assert result.series_b_stake > 1
    assert result.series_a_stake_pre_b == float("inf")
    assert result.scenarios is None
    assert result.warnings


def test_multi_round_series_b_takes_exactly_everything():
    # 7 x 1.2^2 = 10.08 = 1 x 10.08
    params = MultiRoundParams(vc_method=VCMethodParams(net_income=1, pe_multiple=10.08))
    result = compute_multi_round(params)
    assert result.scenarios is None
    assert result.warnings
