from vctools.models.valuation import PreferredParams, VCMethodParams
from vctools.valuation.preferred import (
    EXIT_VALUES_M, compute_cumulative_dividends, compute_participating_preferred,
)


def _row(result, exit_value):
    return next(r for r in result.rows if r.exit_value == exit_value)


def test_participating_defaults():
    result = compute_participating_preferred(PreferredParams(vc_method=VCMethodParams()))
    assert abs(result.vc_ownership - 0.3) < 1e-12
    assert abs(result.conversion_threshold - 10.0) < 1e-9
    assert [r.exit_value for r in result.rows] == list(EXIT_VALUES_M)

    at_three = _row(result, 3)
    assert at_three.vc_participating == 3
    assert at_three.founder_participating == 0

    at_ten = _row(result, 10)
    assert abs(at_ten.vc_participating - 5.1) < 1e-9
    assert abs(at_ten.vc_non_participating - 3.0) < 1e-9
    assert at_ten.vc_no_dividends is None


def test_participating_rows_conserve_exit():
    result = compute_participating_preferred(PreferredParams(vc_method=VCMethodParams()))
    for r in result.rows:
        assert abs(r.vc_participating + r.founder_participating - r.exit_value) < 1e-9
        assert abs(r.vc_non_participating + r.founder_non_participating - r.exit_value) < 1e-9
        assert r.vc_participating >= r.vc_non_participating - 1e-9


def test_participating_implied_pre_money():
    vc = VCMethodParams()
    result = compute_participating_preferred(PreferredParams(vc_method=vc))
    target = 3 * 1.4 ** 5
    implied_own = (target - 3) / (54 - 3)
    assert abs(result.implied_pre_money - (3 / implied_own - 3)) < 1e-9


def test_annualized_return():
    result = compute_participating_preferred(PreferredParams(vc_method=VCMethodParams()))
    at_three = _row(result, 3)
    assert abs(at_three.annualized_return) < 1e-12


def test_cumulative_dividends_claim():
    result = compute_cumulative_dividends(PreferredParams(vc_method=VCMethodParams(), dividend_rate=0.10))
    assert abs(result.accrued_dividends - 1.5) < 1e-9
    assert abs(result.claim - 4.5) < 1e-9

    at_ten = _row(result, 10)
    assert abs(at_ten.vc_participating - (4.5 + 5.5 * 0.3)) < 1e-9
    assert abs(at_ten.vc_no_dividends - 5.1) < 1e-9
    assert abs(at_ten.vc_non_participating - 4.5) < 1e-9


def test_cumulative_dividends_raise_implied_pre_money():
    params = PreferredParams(vc_method=VCMethodParams(), dividend_rate=0.10)
    with_div = compute_cumulative_dividends(params)
    without = compute_participating_preferred(params)
    assert with_div.implied_pre_money > without.implied_pre_money


def test_claim_above_company_value_implies_full_ownership():
    vc = VCMethodParams(net_income=0.1, pe_multiple=10)
    result = compute_cumulative_dividends(PreferredParams(vc_method=vc, dividend_rate=0.10))
    # implied ownership of 1 leaves no pre-money
    assert abs(result.implied_pre_money) < 1e-12
