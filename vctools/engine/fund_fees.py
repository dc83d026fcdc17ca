import logging

from vctools.models.fund_fees import (
    BarKind, CarryBasis, FeeBasis, FeeType, FundFeeParams, FundFeeResult,
    TvpiSensitivityPoint, WaterfallBar, YearRecord,
)

logger = logging.getLogger(__name__)

# Distributions start in this year (or the final year for shorter funds)
DISTRIBUTION_START_YEAR = 4


def _annual_fee(params: FundFeeParams, year: int, cumul_fees: float) -> float:
    """Management fee for one year given fees charged so far."""
    match params.fee_type:
        case FeeType.BUDGET:
            total_expense = params.total_budget * (1 + params.budget_growth_rate) ** (year - 1)
            total_aum = params.fund_size + params.other_funds_aum
            return total_expense * (params.fund_size / total_aum) if total_aum > 0 else 0.0
        case FeeType.RATE:
            if year <= params.investment_period:
                return params.fund_size * params.fee_rate
            rate = params.post_fee_rate if params.step_down else params.fee_rate
            match params.fee_basis:
                case FeeBasis.INVESTED:
                    return (params.fund_size - cumul_fees) * rate
                case FeeBasis.COMMITTED:
                    return params.fund_size * rate
    raise ValueError(f"Unhandled fee configuration: {params.fee_type}/{params.fee_basis}")


def _fee_schedule(params: FundFeeParams) -> list[YearRecord]:
    years: list[YearRecord] = []
    cumul_fees = 0.0
    for y in range(1, params.fund_life + 1):
        fee = _annual_fee(params, y, cumul_fees)
        cumul_fees += fee
        years.append(YearRecord(year=y, mgmt_fee=fee, cumul_fees=cumul_fees))
    return years


def _carry(params: FundFeeParams, invested_capital: float, gross_proceeds: float) -> tuple[float, float, float, float]:
    """Returns (total_carry, whole_fund_carry, deal_by_deal_carry, clawback)."""
    total_profit = gross_proceeds - params.fund_size
    hurdle_amount = 0.0
    if params.hurdle_rate > 0:
        hurdle_amount = params.fund_size * ((1 + params.hurdle_rate) ** params.fund_life - 1)

    whole_fund_carry = max(0.0, total_profit - hurdle_amount) * params.carry_rate

    match params.carry_basis:
        case CarryBasis.WHOLE_FUND:
            return whole_fund_carry, whole_fund_carry, 0.0, 0.0
        case CarryBasis.DEAL_BY_DEAL:
            winner_cost = invested_capital * params.success_rate
            deal_by_deal = params.carry_rate * max(0.0, gross_proceeds - winner_cost)
            clawback = max(0.0, deal_by_deal - whole_fund_carry)
            # GP keeps whole-fund carry once the clawback is settled
            return whole_fund_carry, whole_fund_carry, deal_by_deal, clawback
    raise ValueError(f"Unhandled carry basis: {params.carry_basis}")


def compute_fund_fees(params: FundFeeParams) -> FundFeeResult:
    """Year-by-year fees, carry and net LP outcome for a fund."""
    warnings: list[str] = []

    years = _fee_schedule(params)
    total_fees = years[-1].cumul_fees
    invested_capital = params.fund_size - total_fees
    gross_proceeds = invested_capital * params.gross_tvpi

    if invested_capital < 0:
        warnings.append(
            f"Management fees ({total_fees:.2f}) exceed committed capital ({params.fund_size:.2f}); "
            f"invested capital is negative"
        )

    total_carry, whole_fund_carry, deal_by_deal_carry, clawback = _carry(
        params, invested_capital, gross_proceeds,
    )

    dist_start = min(DISTRIBUTION_START_YEAR, params.fund_life)
    dist_years = max(1, params.fund_life - dist_start + 1)
    total_weight = dist_years * (dist_years + 1) / 2

    cumul_dist = 0.0
    cumul_carry = 0.0
    records: list[YearRecord] = []
    for rec in years:
        if rec.year >= dist_start and gross_proceeds > 0:
            weight = (rec.year - dist_start + 1) / total_weight
            dist = gross_proceeds * weight
            carry = total_carry * weight
            cumul_dist += dist
            cumul_carry += carry
            records.append(rec.model_copy(update={
                "distribution": dist,
                "carry": carry,
                "cumul_dist": cumul_dist,
                "cumul_carry": cumul_carry,
                "net_to_lp": dist - carry - rec.mgmt_fee,
            }))
        else:
            records.append(rec.model_copy(update={
                "cumul_dist": cumul_dist,
                "cumul_carry": cumul_carry,
                "net_to_lp": -rec.mgmt_fee,
            }))

    net_to_lps = gross_proceeds - total_fees - total_carry
    net_tvpi = net_to_lps / params.fund_size

    logger.debug(
        f"Fund fees: size={params.fund_size}, fees={total_fees:.3f}, "
        f"carry={total_carry:.3f}, net TVPI={net_tvpi:.3f}"
    )

    return FundFeeResult(
        years=records,
        total_fees=total_fees,
        invested_capital=invested_capital,
        gross_proceeds=gross_proceeds,
        total_carry=total_carry,
        whole_fund_carry=whole_fund_carry,
        deal_by_deal_carry=deal_by_deal_carry,
        clawback=clawback,
        net_to_lps=net_to_lps,
        net_tvpi=net_tvpi,
        fee_drag=params.gross_tvpi - net_tvpi,
        warnings=warnings,
    )


def compute_tvpi_sensitivity(params: FundFeeParams) -> list[TvpiSensitivityPoint]:
    """Net TVPI across gross TVPI 0.5x-5.0x in 0.1x steps, all other terms fixed."""
    points: list[TvpiSensitivityPoint] = []
    for tenths in range(5, 51):
        gross = tenths / 10
        result = compute_fund_fees(params.model_copy(update={"gross_tvpi": gross}))
        points.append(TvpiSensitivityPoint(gross=gross, net=result.net_tvpi, no_fee=gross))
    return points


def build_waterfall_bars(params: FundFeeParams, result: FundFeeResult) -> list[WaterfallBar]:
    """Committed capital down to net LP proceeds as stacked bar segments."""
    fund_size = params.fund_size
    gross_returns = result.gross_proceeds - result.invested_capital

    bars = [
        WaterfallBar(label="Committed Capital", value=fund_size, start=0.0, kind=BarKind.ADD),
        WaterfallBar(label="Mgmt Fees", value=result.total_fees,
                     start=fund_size - result.total_fees, kind=BarKind.SUBTRACT),
        WaterfallBar(label="Invested Capital", value=result.invested_capital, start=0.0, kind=BarKind.SUBTOTAL),
        WaterfallBar(label="Gross Returns", value=max(0.0, gross_returns),
                     start=result.invested_capital, kind=BarKind.ADD),
    ]

    show_clawback = params.carry_basis == CarryBasis.DEAL_BY_DEAL and result.clawback > 0
    if show_clawback:
        after_dbd_carry = result.gross_proceeds - result.deal_by_deal_carry
        bars.append(WaterfallBar(label="D-b-D Carry", value=result.deal_by_deal_carry,
                                 start=after_dbd_carry, kind=BarKind.SUBTRACT))
        bars.append(WaterfallBar(label="Clawback", value=result.clawback,
                                 start=after_dbd_carry, kind=BarKind.ADD))
    else:
        bars.append(WaterfallBar(label="Carry", value=result.total_carry,
                                 start=result.gross_proceeds - result.total_carry, kind=BarKind.SUBTRACT))

    bars.append(WaterfallBar(label="Net to LPs", value=result.net_to_lps, start=0.0, kind=BarKind.TOTAL))
    return bars
