# tradedesk/core/sheet_stats.py
"""
Statistics over manually recorded backtest sheets.
"""

import logging
from typing import Optional, Sequence, Tuple

import pandas as pd

from ..models.sheet import BucketStat, SheetEquityPoint, SheetMetrics, SheetSummary, SheetTrade


logger = logging.getLogger(__name__)


def _trades_frame(trades: Sequence[SheetTrade]) -> pd.DataFrame:
    df = pd.DataFrame([
        {
            'date': t.trade_date.isoformat(),
            'weekday': t.trade_date.strftime('%A'),
            'hour': f"{t.trade_time.hour:02d}:00" if t.trade_time is not None else None,
            'session': t.session.value,
            'result': t.result,
            'rr': t.rr,
            'win': t.win,
        }
        for t in trades
    ])
    return df


def _extremes(series: pd.Series) -> Tuple[Optional[BucketStat], Optional[BucketStat]]:
    """(best, worst) bucket of a grouped series; first bucket wins ties."""
    if series.empty:
        return None, None
    best_key = series.idxmax()
    worst_key = series.idxmin()
    return (
        BucketStat(key=str(best_key), value=float(series[best_key])),
        BucketStat(key=str(worst_key), value=float(series[worst_key])),
    )


def calculate_summary_stats(trades: Sequence[SheetTrade]) -> SheetSummary:
    """
    Win rate, averages and best/worst buckets for a sheet.

    Days are ranked by summed result; sessions, weekdays and hours by
    average result. Trades without a time of day are left out of the hour
    buckets.
    """
    if not trades:
        return SheetSummary(total_trades=0, win_rate=0.0, avg_rr=0.0, avg_return_per_trade=0.0)

    df = _trades_frame(trades)
    total_trades = len(df)

    best_day, worst_day = _extremes(df.groupby('date', sort=False)['result'].sum())
    best_session, _ = _extremes(df.groupby('session', sort=False)['result'].mean())
    best_weekday, worst_weekday = _extremes(df.groupby('weekday', sort=False)['result'].mean())
    best_hour, worst_hour = _extremes(df.dropna(subset=['hour']).groupby('hour', sort=False)['result'].mean())

    return SheetSummary(
        total_trades=total_trades,
        win_rate=float(df['win'].sum()) / total_trades * 100,
        avg_rr=float(df['rr'].mean()),
        avg_return_per_trade=float(df['result'].sum()) / total_trades,
        best_day=best_day,
        worst_day=worst_day,
        most_profitable_session=best_session,
        most_profitable_weekday=best_weekday,
        least_profitable_weekday=worst_weekday,
        most_profitable_hour=best_hour,
        least_profitable_hour=worst_hour,
    )


def calculate_detailed_metrics(trades: Sequence[SheetTrade], initial_capital: float) -> SheetMetrics:
    """
    Summary statistics plus capital based metrics.

    The equity curve has one point per trade after a starting point at
    the initial capital. Max drawdown is measured against a running peak
    that starts at the initial capital.
    """
    summary = calculate_summary_stats(trades)

    net_profit = sum(t.result for t in trades)
    net_profit_percent = (net_profit / initial_capital * 100) if initial_capital > 0 else 0.0

    gross_profit = sum(t.result for t in trades if t.win)
    gross_loss = abs(sum(t.result for t in trades if not t.win))
    profit_factor = gross_profit / gross_loss if gross_loss > 0 else None

    equity = initial_capital
    peak = initial_capital
    max_drawdown = 0.0
    equity_curve = [SheetEquityPoint(trade=0, balance=initial_capital)]

    for index, trade in enumerate(trades, start=1):
        equity += trade.result
        equity_curve.append(SheetEquityPoint(trade=index, balance=equity))
        if equity > peak:
            peak = equity
        drawdown = ((peak - equity) / peak * 100) if peak > 0 else 0.0
        if drawdown > max_drawdown:
            max_drawdown = drawdown

    wins = len([t for t in trades if t.win])
    logger.debug(f"Sheet metrics over {len(trades)} trades: net {net_profit:.2f}, max drawdown {max_drawdown:.2f}%")

    return SheetMetrics(
        **summary.model_dump(),
        net_profit=net_profit,
        net_profit_percent=net_profit_percent,
        gross_profit=gross_profit,
        gross_loss=gross_loss,
        profit_factor=profit_factor,
        max_drawdown=max_drawdown,
        wins=wins,
        losses=len(trades) - wins,
        equity_curve=equity_curve,
    )
