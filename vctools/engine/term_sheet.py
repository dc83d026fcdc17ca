import logging

from vctools.models.term_sheet import (
    AntiDilutionMethod, AntiDilutionScenario, CapTableSnapshot, DealParams, DealStructure,
    DownRound, LiquidationTerms, Preference, TermSheetComparison, WaterfallResult, WaterfallRow,
)
from vctools.utils import round_half_up

logger = logging.getLogger(__name__)

MILLION = 1_000_000
TABLE_EXIT_VALUES = tuple(v * MILLION for v in (5, 10, 20, 50, 100))

# Hybrid protection falls back to full ratchet at or below this fraction of the original price
HYBRID_PRICE_THRESHOLD = 0.5


def compute_deal_structure(params: DealParams) -> DealStructure:
    """Cap table immediately after the Series A closes."""
    shares_issued = round_half_up(params.investment / params.share_price)
    total_shares = params.founder_shares + params.option_pool + shares_issued
    post_money = params.pre_money + params.investment

    if total_shares > 0:
        founder_pct = params.founder_shares / total_shares
        option_pct = params.option_pool / total_shares
        series_a_pct = shares_issued / total_shares
    else:
        founder_pct = option_pct = series_a_pct = 0.0

    return DealStructure(
        name=params.name,
        share_price=params.share_price,
        pre_money=params.pre_money,
        investment=params.investment,
        shares_issued=shares_issued,
        post_money=post_money,
        founder_shares=params.founder_shares,
        option_shares=params.option_pool,
        total_shares=total_shares,
        founder_pct=founder_pct,
        option_pct=option_pct,
        series_a_pct=series_a_pct,
        founder_value=founder_pct * post_money,
    )


def compute_preference(deal: DealStructure, terms: LiquidationTerms) -> Preference:
    """Liquidation preference: investment plus guaranteed return and accrued dividends."""
    guaranteed_return = 0.0
    if terms.guaranteed_return_rate is not None:
        guaranteed_return = deal.investment * ((1 + terms.guaranteed_return_rate) ** terms.years_to_exit - 1)

    cumulative_dividends = 0.0
    dividend_years = 0.0
    if terms.cumulative_dividends and terms.dividend_per_share > 0:
        dividend_years = terms.years_to_exit
        if terms.dividend_cap_pct is not None:
            cap_per_share = terms.dividend_cap_pct * deal.share_price
            years_to_cap = cap_per_share / terms.dividend_per_share
            dividend_years = min(terms.years_to_exit, years_to_cap)
        cumulative_dividends = deal.shares_issued * terms.dividend_per_share * dividend_years

    return Preference(
        amount=deal.investment + guaranteed_return + cumulative_dividends,
        investment=deal.investment,
        guaranteed_return=guaranteed_return,
        cumulative_dividends=cumulative_dividends,
        dividend_years=dividend_years,
    )


def compute_payout(
    deal: DealStructure,
    terms: LiquidationTerms,
    exit_value: float,
    preference: Preference | None = None,
) -> WaterfallRow:
    """Split one exit between the Series A and common holders."""
    preference = preference or compute_preference(deal, terms)
    pref = preference.amount
    as_converted = exit_value * deal.series_a_pct

    if terms.participating:
        if exit_value <= pref:
            preferred_payout = exit_value
        else:
            preferred_payout = pref + (exit_value - pref) * deal.series_a_pct
    else:
        preferred_payout = min(exit_value, pref)

    vc_payout = max(preferred_payout, as_converted)
    return WaterfallRow(
        exit_value=exit_value,
        vc_payout=vc_payout,
        common_payout=exit_value - vc_payout,
        vc_converts=as_converted > preferred_payout,
        vc_multiple=vc_payout / deal.investment if deal.investment > 0 else 0.0,
    )


def exit_curve_values() -> list[float]:
    """$1M-$150M: half-million steps below $10M, $1M below $50M, $5M above."""
    values: list[float] = []
    half_millions = 2
    while half_millions <= 300:
        values.append(half_millions * MILLION / 2)
        if half_millions < 20:
            half_millions += 1
        elif half_millions < 100:
            half_millions += 2
        else:
            half_millions += 10
    return values


def compute_liquidation(
    deal: DealStructure,
    terms: LiquidationTerms,
    exit_values: tuple[float, ...] = TABLE_EXIT_VALUES,
) -> WaterfallResult:
    """Waterfall table at the headline exits plus a dense curve for charting."""
    preference = compute_preference(deal, terms)
    table = [compute_payout(deal, terms, v, preference) for v in exit_values]
    curve = [compute_payout(deal, terms, v, preference) for v in exit_curve_values()]

    conversion_threshold = deal.investment / deal.series_a_pct if deal.series_a_pct > 0 else 0.0

    logger.debug(
        f"Liquidation [{deal.name}]: preference=${preference.amount:,.0f}, "
        f"participating={terms.participating}"
    )

    return WaterfallResult(
        deal_name=deal.name,
        participating=terms.participating,
        preference=preference,
        conversion_threshold=conversion_threshold,
        table=table,
        curve=curve,
    )


def resolve_method(
    method: AntiDilutionMethod,
    down_price: float,
    original_price: float,
) -> AntiDilutionMethod:
    """Hybrid protection becomes weighted-average for mild down rounds, full ratchet otherwise."""
    if method != AntiDilutionMethod.HYBRID:
        return method
    if down_price > HYBRID_PRICE_THRESHOLD * original_price:
        return AntiDilutionMethod.WEIGHTED_AVERAGE
    return AntiDilutionMethod.FULL_RATCHET


def _snapshot(founders: int, options: int, series_a: int, new_investor: int, total: int) -> CapTableSnapshot:
    return CapTableSnapshot(
        founder_shares=founders,
        option_shares=options,
        series_a_shares=series_a,
        new_investor_shares=new_investor,
        total_shares=total,
        founder_pct=founders / total if total > 0 else 0.0,
        option_pct=options / total if total > 0 else 0.0,
        series_a_pct=series_a / total if total > 0 else 0.0,
        new_investor_pct=new_investor / total if total > 0 else 0.0,
    )


def compute_anti_dilution(
    deal: DealStructure,
    down_round: DownRound,
    method: AntiDilutionMethod,
) -> AntiDilutionScenario:
    """Series A share adjustment after a down round under the given protection."""
    old_price = deal.share_price
    old_shares = deal.total_shares
    new_shares = round_half_up(down_round.investment / down_round.price)
    applied = resolve_method(method, down_round.price, old_price)

    match applied:
        case AntiDilutionMethod.NONE:
            adjusted_price = old_price
            adjusted_shares = deal.shares_issued
        case AntiDilutionMethod.WEIGHTED_AVERAGE:
            adjusted_price = old_price * (
                (old_shares + down_round.investment / old_price) / (old_shares + new_shares)
            )
            adjusted_shares = round_half_up(deal.investment / adjusted_price)
        case AntiDilutionMethod.FULL_RATCHET:
            adjusted_price = down_round.price
            adjusted_shares = round_half_up(deal.investment / down_round.price)
        case _:
            raise ValueError(f"Unresolved anti-dilution method: {applied}")

    additional_shares = adjusted_shares - deal.shares_issued
    total_without = old_shares + new_shares
    total_with = old_shares + new_shares + additional_shares

    logger.debug(
        f"Anti-dilution [{deal.name}]: {method.value} -> {applied.value}, "
        f"additional Series A shares={additional_shares:,}"
    )

    return AntiDilutionScenario(
        method=method,
        applied_method=applied,
        new_shares=new_shares,
        adjusted_price=adjusted_price,
        adjusted_series_a_shares=adjusted_shares,
        additional_shares=additional_shares,
        before=_snapshot(deal.founder_shares, deal.option_shares, deal.shares_issued, 0, old_shares),
        without_ad=_snapshot(deal.founder_shares, deal.option_shares, deal.shares_issued, new_shares, total_without),
        with_ad=_snapshot(deal.founder_shares, deal.option_shares, adjusted_shares, new_shares, total_with),
    )


def compare_term_sheets(
    sheets: list[tuple[DealParams, LiquidationTerms]],
    exit_values: tuple[float, ...] = TABLE_EXIT_VALUES,
) -> list[TermSheetComparison]:
    """Deal structure and waterfall for several term sheets side by side."""
    comparisons: list[TermSheetComparison] = []
    for params, terms in sheets:
        deal = compute_deal_structure(params)
        comparisons.append(TermSheetComparison(
            deal=deal,
            waterfall=compute_liquidation(deal, terms, exit_values),
        ))
    return comparisons
