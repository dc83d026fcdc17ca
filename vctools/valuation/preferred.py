from vctools.models.valuation import PreferredParams, PreferredResult, PreferredRow
from vctools.valuation.vc_method import SHARES_PER_MILLION

EXIT_VALUES_M = (3, 5, 10, 15, 20, 30, 40, 50, 54, 75, 100, 200, 500, 1000, 5000, 10000)


def _participating_payout(exit_value: float, claim: float, ownership: float) -> float:
    if exit_value <= claim:
        return exit_value
    return claim + (exit_value - claim) * ownership


def _implied_pre_money(params: PreferredParams, claim: float, future_company_value: float) -> float:
    """Pre-money at which a participating claim still hits the target return at the expected exit."""
    vc = params.vc_method
    target_payout = vc.investment * (1 + vc.required_return) ** vc.years_to_exit
    if future_company_value > claim:
        implied_ownership = (target_payout - claim) / (future_company_value - claim)
    else:
        implied_ownership = 1.0
    implied_post_money = vc.investment / implied_ownership if implied_ownership > 0 else 0.0
    return implied_post_money - vc.investment


def _build(params: PreferredParams, claim: float, accrued_dividends: float, with_baseline: bool) -> PreferredResult:
    vc = params.vc_method
    pre_money = params.negotiated_pre_money
    post_money = pre_money + vc.investment
    share_price = pre_money / (vc.current_shares / SHARES_PER_MILLION)
    vc_shares = vc.investment / share_price * SHARES_PER_MILLION
    total_shares = vc.current_shares + vc_shares
    ownership = vc_shares / total_shares
    future_company_value = vc.net_income * vc.pe_multiple

    rows: list[PreferredRow] = []
    for exit_value in EXIT_VALUES_M:
        vc_part = _participating_payout(exit_value, claim, ownership)
        vc_non_part = min(exit_value, max(claim, exit_value * ownership))
        vc_no_div = _participating_payout(exit_value, vc.investment, ownership) if with_baseline else None

        if vc_part > 0:
            annualized = (vc_part / vc.investment) ** (1 / vc.years_to_exit) - 1
        else:
            annualized = -1.0

        rows.append(PreferredRow(
            exit_value=exit_value,
            vc_participating=vc_part,
            founder_participating=exit_value - vc_part,
            vc_non_participating=vc_non_part,
            founder_non_participating=exit_value - vc_non_part,
            vc_no_dividends=vc_no_div,
            effective_vc_pct=vc_part / exit_value if exit_value > 0 else 0.0,
            annualized_return=annualized,
        ))

    return PreferredResult(
        pre_money=pre_money,
        post_money=post_money,
        share_price=share_price,
        vc_shares=vc_shares,
        total_shares=total_shares,
        vc_ownership=ownership,
        future_company_value=future_company_value,
        claim=claim,
        accrued_dividends=accrued_dividends,
        conversion_threshold=vc.investment / ownership,
        implied_pre_money=_implied_pre_money(params, claim, future_company_value),
        rows=rows,
    )


def compute_participating_preferred(params: PreferredParams) -> PreferredResult:
    """Participating vs non-participating payouts across the exit grid ($M)."""
    return _build(params, params.vc_method.investment, 0.0, with_baseline=False)


def compute_cumulative_dividends(params: PreferredParams) -> PreferredResult:
    """Participating preferred whose claim grows by simple accrued dividends."""
    vc = params.vc_method
    accrued = vc.investment * params.dividend_rate * vc.years_to_exit
    return _build(params, vc.investment + accrued, accrued, with_baseline=True)
