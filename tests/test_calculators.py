import pytest

from tradedesk.core.calculators import calculate_profit, project_compounding
from tradedesk.core.errors import ValidationError


def test_profit_with_fees():
    result = calculate_profit(buy_price=100.0, sell_price=110.0, quantity=10.0, fee_percent=0.1)

    assert result.total_buy == pytest.approx(1000.0)
    assert result.total_sell == pytest.approx(1100.0)
    assert result.fees == pytest.approx(2.1)
    assert result.net_profit == pytest.approx(97.9)
    assert result.profit_percent == pytest.approx(9.79)


def test_losing_round_trip():
    result = calculate_profit(buy_price=100.0, sell_price=90.0, quantity=1.0)
    assert result.net_profit == pytest.approx(-10.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(buy_price=0.0, sell_price=10.0, quantity=1.0),
        dict(buy_price=10.0, sell_price=10.0, quantity=0.0),
        dict(buy_price=10.0, sell_price=-1.0, quantity=1.0),
        dict(buy_price=10.0, sell_price=10.0, quantity=1.0, fee_percent=-0.5),
    ],
)
def test_profit_rejects_bad_input(kwargs):
    with pytest.raises(ValidationError):
        calculate_profit(**kwargs)


def test_full_reinvestment_compounds():
    periods = project_compounding(1000.0, 10.0, 3)

    assert [p.period for p in periods] == [1, 2, 3]
    assert [p.end_capital for p in periods] == pytest.approx([1100.0, 1210.0, 1331.0])
    assert periods[1].start_capital == pytest.approx(periods[0].end_capital)


def test_partial_reinvestment():
    periods = project_compounding(1000.0, 10.0, 2, reinvestment_rate=50.0)

    assert periods[0].target_profit == pytest.approx(100.0)
    assert periods[0].reinvested_profit == pytest.approx(50.0)
    assert [p.end_capital for p in periods] == pytest.approx([1050.0, 1102.5])


@pytest.mark.parametrize(
    "args",
    [
        (0.0, 10.0, 3, 100.0),
        (1000.0, 10.0, 0, 100.0),
        (1000.0, 10.0, 3, 120.0),
    ],
)
def test_compounding_rejects_bad_input(args):
    with pytest.raises(ValidationError):
        project_compounding(*args)


def test_tools_reject_non_finite_input():
    with pytest.raises(ValidationError):
        calculate_profit(buy_price=float("nan"), sell_price=10.0, quantity=1.0)
    with pytest.raises(ValidationError):
        project_compounding(1000.0, float("inf"), 3)
