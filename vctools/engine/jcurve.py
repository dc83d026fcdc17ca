import logging
import math

from vctools.models.jcurve import (
    ExitBucket, FundSimParams, FundSimResult, MonthlyCashFlow, PointInTimeMetrics,
    Stage, StageAllocation, StageProfile, YearlyCashFlow,
)
from vctools.utils import round_half_up

logger = logging.getLogger(__name__)

HORIZON_MONTHS = 180
METRIC_YEARS = (5, 7, 10, 12)
REPORTED_YEARS = 13

STAGE_ORDER = (Stage.SEED, Stage.SERIES_A, Stage.SERIES_B)

DEFAULT_STAGE_PROFILES: dict[Stage, StageProfile] = {
    Stage.SEED: StageProfile(
        name="Seed",
        initial_check=500,
        follow_on_to_a=1500,
        follow_on_to_b=4000,
        survival_to_a=0.40,
        survival_to_b=0.65,
        survival_to_exit=0.70,
        time_to_a=18,
        time_to_b=36,
        time_to_exit=84,
        exit_distribution=(
            ExitBucket(probability=0.60, multiple=0),
            ExitBucket(probability=0.20, multiple=2),
            ExitBucket(probability=0.12, multiple=8),
            ExitBucket(probability=0.06, multiple=15),
            ExitBucket(probability=0.02, multiple=30),
        ),
    ),
    Stage.SERIES_A: StageProfile(
        name="Series A",
        initial_check=2000,
        follow_on_to_b=5000,
        survival_to_b=0.55,
        survival_to_exit=0.75,
        time_to_b=20,
        time_to_exit=60,
        exit_distribution=(
            ExitBucket(probability=0.50, multiple=0),
            ExitBucket(probability=0.25, multiple=1.5),
            ExitBucket(probability=0.15, multiple=5),
            ExitBucket(probability=0.08, multiple=10),
            ExitBucket(probability=0.02, multiple=18),
        ),
    ),
    Stage.SERIES_B: StageProfile(
        name="Series B",
        initial_check=5000,
        survival_to_exit=0.65,
        time_to_exit=42,
        exit_distribution=(
            ExitBucket(probability=0.40, multiple=0),
            ExitBucket(probability=0.30, multiple=1.2),
            ExitBucket(probability=0.20, multiple=3),
            ExitBucket(probability=0.08, multiple=6),
            ExitBucket(probability=0.02, multiple=12),
        ),
    ),
}


def companies_per_stage(num_companies: int, allocation: StageAllocation) -> dict[Stage, int]:
    """Split the portfolio across stages; the last stage absorbs rounding.

    Earlier stages are capped at what is left, so two stages rounding up
    can never push the last one below zero.
    """
    counts: dict[Stage, int] = {}
    remaining = num_companies
    for idx, stage in enumerate(STAGE_ORDER):
        if idx == len(STAGE_ORDER) - 1:
            counts[stage] = remaining
        else:
            counts[stage] = min(remaining, round_half_up(num_companies * allocation.pct(stage) / 100))
            remaining -= counts[stage]
    return counts


def rebalance_allocation(allocation: StageAllocation, stage: Stage, value: float) -> StageAllocation:
    """Set one stage's share, then renormalize all three to whole percentages.

    Uses largest remainders so the result always totals exactly 100. Zeroing
    the only funded stage leaves the allocation unchanged.
    """
    raw = {s: allocation.pct(s) for s in STAGE_ORDER}
    raw[stage] = value
    total = sum(raw.values())
    if total <= 0:
        return allocation

    shares = {s: v / total * 100 for s, v in raw.items()}
    whole = {s: math.floor(v) for s, v in shares.items()}
    leftover = 100 - sum(whole.values())
    by_remainder = sorted(STAGE_ORDER, key=lambda s: shares[s] - whole[s], reverse=True)
    for s in by_remainder[:leftover]:
        whole[s] += 1

    return StageAllocation(
        seed=whole[Stage.SEED],
        series_a=whole[Stage.SERIES_A],
        series_b=whole[Stage.SERIES_B],
    )


def _metrics_through(month: int, calls: list[float], dists: list[float], year: int) -> PointInTimeMetrics:
    total_called = sum(calls[:month + 1])
    total_dist = sum(dists[:month + 1])
    dpi = total_dist / total_called if total_called > 0 else 0.0
    return PointInTimeMetrics(year=year, total_called=total_called, total_distributed=total_dist, dpi=dpi)


def _break_even_month(cumulative: list[float]) -> int | None:
    for i in range(1, len(cumulative)):
        if cumulative[i] >= 0 and cumulative[i - 1] < 0:
            return i
    return None


def simulate_fund(
    params: FundSimParams,
    profiles: dict[Stage, StageProfile] | None = None,
) -> FundSimResult:
    """Expected-value monthly cash flows for a staged portfolio over a 15-year horizon.

    Each company is invested at an evenly spaced month. Follow-ons and exits are
    scaled by the cumulative survival probability rather than drawn at random,
    and any flow landing at or after month 180 is dropped.
    """
    profiles = profiles or DEFAULT_STAGE_PROFILES
    warnings: list[str] = []

    calls = [0.0] * HORIZON_MONTHS
    dists = [0.0] * HORIZON_MONTHS
    flows = [0.0] * HORIZON_MONTHS

    counts = companies_per_stage(params.num_companies, params.stage_allocation)
    months_per_company = params.deployment_years * 12 / params.num_companies

    company_index = 0
    total_invested = 0.0
    total_returned = 0.0
    dropped_flows = 0

    for stage in STAGE_ORDER:
        profile = profiles[stage]
        expected_multiple = profile.expected_multiple

        for _ in range(counts[stage]):
            invest_month = math.floor(company_index * months_per_company)
            company_index += 1

            initial = profile.initial_check
            if invest_month < HORIZON_MONTHS:
                flows[invest_month] -= initial
                calls[invest_month] += initial
                total_invested += initial
            else:
                dropped_flows += 1

            expected_companies = 1.0
            capital_in_company = initial

            follow_ons = (
                (profile.follow_on_to_a, profile.time_to_a, profile.survival_to_a),
                (profile.follow_on_to_b, profile.time_to_b, profile.survival_to_b),
            )
            for amount, delay, survival in follow_ons:
                if amount <= 0 or delay <= 0:
                    continue
                month = invest_month + delay
                expected_companies *= survival
                expected_amount = amount * expected_companies
                if month < HORIZON_MONTHS and expected_amount > 0:
                    flows[month] -= expected_amount
                    calls[month] += expected_amount
                    total_invested += expected_amount
                    capital_in_company += amount
                elif month >= HORIZON_MONTHS:
                    dropped_flows += 1

            exit_month = invest_month + profile.time_to_exit
            expected_companies *= profile.survival_to_exit
            exit_value = capital_in_company * expected_multiple * expected_companies

            if exit_month < HORIZON_MONTHS:
                flows[exit_month] += exit_value
                dists[exit_month] += exit_value
                total_returned += exit_value
            else:
                dropped_flows += 1

    if dropped_flows:
        warnings.append(f"{dropped_flows} cash flow(s) fell beyond month {HORIZON_MONTHS} and were dropped")

    months: list[MonthlyCashFlow] = []
    cumulative: list[float] = []
    running = 0.0
    for m in range(HORIZON_MONTHS):
        running += flows[m]
        cumulative.append(running)
        months.append(MonthlyCashFlow(
            month=m,
            calls_out=calls[m],
            distributions=dists[m],
            net_flow=flows[m],
            cumulative=running,
        ))

    yearly: list[YearlyCashFlow] = []
    for y in range(REPORTED_YEARS):
        start = y * 12
        end = min((y + 1) * 12, HORIZON_MONTHS)
        year_calls = sum(calls[start:end])
        year_dists = sum(dists[start:end])
        yearly.append(YearlyCashFlow(year=y + 1, calls=year_calls, distributions=year_dists,
                                     net=year_dists - year_calls))

    min_cash = min(cumulative)
    trough_month = cumulative.index(min_cash)
    break_even = _break_even_month(cumulative)

    logger.debug(
        f"J-curve: {params.num_companies} companies, invested={total_invested:,.0f}, "
        f"returned={total_returned:,.0f}, break-even={break_even}"
    )

    return FundSimResult(
        months=months,
        companies_per_stage=counts,
        total_invested=total_invested,
        total_returned=total_returned,
        tvpi_expected=total_returned / total_invested if total_invested > 0 else 0.0,
        metrics_at_year={
            year: _metrics_through(year * 12, calls, dists, year) for year in METRIC_YEARS
        },
        yearly=yearly,
        peak_capital_call=abs(min_cash),
        trough_month=trough_month,
        break_even_month=break_even,
        break_even_year=break_even / 12 if break_even is not None else None,
        warnings=warnings,
    )
