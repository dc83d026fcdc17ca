import logging

from vctools.models.valuation import (
    CapTableScenario, MultiRoundParams, MultiRoundResult, OptionPoolParams, OptionPoolResult,
)
from vctools.valuation.vc_method import SHARES_PER_MILLION

logger = logging.getLogger(__name__)


def _priced(
    label: str,
    investment: float,
    current_shares: float,
    founder_shares: float,
    option_shares: float,
    vc_shares: float,
) -> CapTableScenario:
    """Cap table with share price set by what the VC pays per share."""
    total = founder_shares + option_shares + vc_shares
    share_price = investment / (vc_shares / SHARES_PER_MILLION)
    pre_money = share_price * current_shares / SHARES_PER_MILLION
    return CapTableScenario(
        label=label,
        founder_shares=founder_shares,
        option_shares=option_shares,
        vc_shares=vc_shares,
        total_shares=total,
        founder_pct=founder_shares / total,
        option_pct=option_shares / total,
        vc_pct=vc_shares / total,
        share_price=share_price,
        pre_money=pre_money,
        post_money=pre_money + investment,
    )


def _pool_after(label: str, investment: float, current_shares: float, stake: float, pool_pct: float) -> CapTableScenario:
    vc_shares = current_shares * stake / (1 - stake)
    total_after_vc = current_shares + vc_shares
    option_shares = total_after_vc * pool_pct / (1 - pool_pct)
    return _priced(label, investment, current_shares, current_shares, option_shares, vc_shares)


def compute_option_pool(params: OptionPoolParams) -> OptionPoolResult:
    """Where the option pool sits decides who it dilutes.

    Three structures for the same required stake ``f``: pool carved out of the
    founders before the round, pool added after the round without adjusting
    the VC's share count (the VC lands below ``f``), and pool added after the
    round with ``f`` grossed up by ``1 / (1 - pool)`` so the VC ends at ``f``.
    """
    f = params.target_stake
    pool = params.option_pool_pct
    shares = params.current_shares

    before = _priced(
        "pool-before",
        params.investment,
        shares,
        founder_shares=shares * (1 - pool),
        option_shares=shares * pool,
        vc_shares=shares * f / (1 - f),
    )
    naive = _pool_after("pool-after-naive", params.investment, shares, f, pool)
    adjusted = _pool_after("pool-after-adjusted", params.investment, shares, f / (1 - pool), pool)

    return OptionPoolResult(
        target_stake=f,
        pool_before=before,
        pool_after_naive=naive,
        pool_after_adjusted=adjusted,
    )


def compute_multi_round(params: MultiRoundParams) -> MultiRoundResult:
    """Series A stake needed today so that it survives Series B dilution."""
    vc = params.vc_method
    warnings: list[str] = []
    future_company_value = vc.net_income * vc.pe_multiple

    series_b_future_value = params.series_b_investment * (1 + params.series_b_return) ** params.years_b_to_exit
    series_b_stake = series_b_future_value / future_company_value

    series_a_future_value = vc.investment * (1 + vc.required_return) ** vc.years_to_exit
    series_a_stake_at_exit = series_a_future_value / future_company_value
    # Series B taking the whole company leaves nothing to dilute from
    if series_b_stake < 1:
        series_a_stake_pre_b = series_a_stake_at_exit / (1 - series_b_stake)
    else:
        series_a_stake_pre_b = float("inf")

    scenarios = None
    if series_a_stake_pre_b + params.option_pool_pct < 1:
        scenarios = compute_option_pool(OptionPoolParams(
            investment=vc.investment,
            current_shares=vc.current_shares,
            target_stake=series_a_stake_pre_b,
            option_pool_pct=params.option_pool_pct,
        ))
    else:
        warnings.append(
            f"Required stakes exceed the company: Series B {series_b_stake:.1%}, "
            f"Series A pre-B {series_a_stake_pre_b:.1%}, pool {params.option_pool_pct:.1%}; "
            "no option pool scenarios computed"
        )
        logger.warning(warnings[-1])

    series_b_post_money = params.series_b_investment / series_b_stake
    return MultiRoundResult(
        series_b_stake=series_b_stake,
        series_a_stake_at_exit=series_a_stake_at_exit,
        series_a_stake_pre_b=series_a_stake_pre_b,
        series_b_pre_money=series_b_post_money - params.series_b_investment,
        series_b_post_money=series_b_post_money,
        scenarios=scenarios,
        warnings=warnings,
    )
