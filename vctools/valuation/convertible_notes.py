from vctools.models.valuation import ConvertibleNoteParams, ConvertibleNoteResult, NoteConversion

# Series A stakes swept by the sensitivity table, in whole percent
SENSITIVITY_STAKES = range(10, 56)


def _convert(params: ConvertibleNoteParams, stake: float) -> NoteConversion:
    post_money = params.series_a_raise / stake
    pre_money = post_money - params.series_a_raise
    series_a_price = pre_money / params.current_shares
    series_a_shares = params.series_a_raise / series_a_price
    total_after_a = params.current_shares + series_a_shares

    discount_price = series_a_price * params.discount
    cap_price = params.valuation_cap / total_after_a
    effective_price = min(discount_price, cap_price)
    note_shares = params.note_amount / effective_price
    grand_total = params.current_shares + series_a_shares + note_shares

    return NoteConversion(
        series_a_stake=stake,
        post_money=post_money,
        pre_money=pre_money,
        series_a_price=series_a_price,
        series_a_shares=series_a_shares,
        total_after_a=total_after_a,
        discount_price=discount_price,
        cap_price=cap_price,
        effective_price=effective_price,
        cap_binding=cap_price < discount_price,
        note_shares=note_shares,
        grand_total=grand_total,
        founder_pct=params.current_shares / grand_total,
        series_a_pct=series_a_shares / grand_total,
        note_pct=note_shares / grand_total,
    )


def compute_convertible_note(params: ConvertibleNoteParams) -> ConvertibleNoteResult:
    """Note conversion at the lower of the discounted Series A price and the cap price."""
    return ConvertibleNoteResult(
        conversion=_convert(params, params.series_a_stake),
        sensitivity=[_convert(params, s / 100) for s in SENSITIVITY_STAKES],
    )
