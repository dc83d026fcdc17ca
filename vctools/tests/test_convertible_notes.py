from vctools.models.valuation import ConvertibleNoteParams
from vctools.valuation.convertible_notes import compute_convertible_note


def test_default_note_converts_at_cap():
    c = compute_convertible_note(ConvertibleNoteParams()).conversion
    assert abs(c.post_money - 9_375_000) < 1e-6
    assert abs(c.pre_money - 6_375_000) < 1e-6
    assert abs(c.series_a_price - 3.125) < 1e-12
    assert abs(c.series_a_shares - 960_000) < 1e-6
    assert abs(c.total_after_a - 3_000_000) < 1e-6
    assert abs(c.discount_price - 2.5) < 1e-12
    assert abs(c.cap_price - 2.0) < 1e-12
    assert c.effective_price == c.cap_price
    assert c.cap_binding
    assert abs(c.note_shares - 250_000) < 1e-6
    assert abs(c.grand_total - 3_250_000) < 1e-6
    assert abs(c.founder_pct + c.series_a_pct + c.note_pct - 1.0) < 1e-12


def test_discount_binds_when_cap_is_generous():
    c = compute_convertible_note(ConvertibleNoteParams(valuation_cap=50_000_000)).conversion
    assert not c.cap_binding
    assert c.effective_price == c.discount_price


def test_sensitivity_sweeps_stake_range():
    result = compute_convertible_note(ConvertibleNoteParams())
    stakes = [round(row.series_a_stake * 100) for row in result.sensitivity]
    assert stakes == list(range(10, 56))
    for row in result.sensitivity:
        assert row.effective_price == min(row.discount_price, row.cap_price)
        assert abs(row.founder_pct + row.series_a_pct + row.note_pct - 1.0) < 1e-12
    # a bigger Series A stake means a lower price per share
    prices = [row.series_a_price for row in result.sensitivity]
    assert all(a > b for a, b in zip(prices, prices[1:]))
