from vctools.models.valuation import BinomialNode, OptionPricingParams, OptionPricingResult
from vctools.utils import comb

TREE_PERIODS = 5


def compute_option_pricing(params: OptionPricingParams) -> OptionPricingResult:
    """Value a warrant sweetener with a 5-period binomial tree.

    The up factor is ``1 + volatility`` and the down factor its reciprocal; each
    terminal node is weighted by its path count over ``2^5``. The expected option
    payoff is treated as value the investor receives for free, so it comes off
    the headline investment before backing out the implied price.
    """
    u = 1 + params.volatility
    d = 1 / u
    strike_price = params.share_price * (1 + params.strike_premium)
    investment_shares = params.investment / params.share_price
    option_shares = params.option_amount / strike_price

    nodes: list[BinomialNode] = []
    expected_option_value = 0.0
    for k in range(TREE_PERIODS, -1, -1):
        frequency = comb(TREE_PERIODS, k) / 2 ** TREE_PERIODS
        multiplier = u ** k * d ** (TREE_PERIODS - k)
        share_value = params.share_price * multiplier
        payoff_per_share = max(0.0, share_value - strike_price)
        total_payoff = payoff_per_share * option_shares
        contribution = frequency * total_payoff
        expected_option_value += contribution
        nodes.append(BinomialNode(
            ups=k,
            downs=TREE_PERIODS - k,
            frequency=frequency,
            multiplier=multiplier,
            share_value=share_value,
            total_stock_value=share_value * option_shares,
            option_payoff_per_share=payoff_per_share,
            total_option_payoff=total_payoff,
            contribution=contribution,
        ))

    implied_investment = params.investment - expected_option_value
    implied_share_price = implied_investment / investment_shares
    return OptionPricingResult(
        up_factor=u,
        down_factor=d,
        strike_price=strike_price,
        investment_shares=investment_shares,
        option_shares=option_shares,
        nodes=nodes,
        expected_option_value=expected_option_value,
        implied_investment=implied_investment,
        implied_share_price=implied_share_price,
        implied_pre_money=implied_share_price * params.current_shares,
    )
