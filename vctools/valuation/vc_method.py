from vctools.models.valuation import VCMethodParams, VCMethodResult, VCMethodValuation

SHARES_PER_MILLION = 1_000_000


def _valuation_at(
    params: VCMethodParams,
    future_company_value: float,
    required_return: float,
    warnings: list[str],
) -> VCMethodValuation:
    future_investment_value = params.investment * (1 + required_return) ** params.years_to_exit
    required_stake = future_investment_value / future_company_value
    post_money = params.investment / required_stake
    pre_money = post_money - params.investment

    # A required stake of 100% or more leaves nothing for existing holders
    if pre_money > 0:
        share_price = pre_money / (params.current_shares / SHARES_PER_MILLION)
        new_shares = params.investment / share_price * SHARES_PER_MILLION
    else:
        share_price = 0.0
        new_shares = 0.0
        warnings.append(
            f"At a {required_return:.0%} required return the investor needs {required_stake:.1%} "
            f"of the company; pre-money is {pre_money:.2f}M, so share price and new shares are reported as 0"
        )

    return VCMethodValuation(
        required_return=required_return,
        future_investment_value=future_investment_value,
        required_stake=required_stake,
        post_money=post_money,
        pre_money=pre_money,
        share_price=share_price,
        new_shares=new_shares,
    )


def compute_vc_method(params: VCMethodParams) -> VCMethodResult:
    """Back-solve today's valuation from exit earnings and a target return."""
    warnings: list[str] = []
    future_company_value = params.net_income * params.pe_multiple
    primary = _valuation_at(params, future_company_value, params.required_return, warnings)

    alternate = None
    if params.alt_required_return is not None:
        alternate = _valuation_at(params, future_company_value, params.alt_required_return, warnings)

    return VCMethodResult(
        future_company_value=future_company_value,
        primary=primary,
        alternate=alternate,
        warnings=warnings,
    )
