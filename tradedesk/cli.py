# tradedesk/cli.py
"""
Command line interface for sizing trades and running backtests.
"""

import sys
from datetime import date, timedelta

import click

from .core.errors import TradeDeskError
from .models.results import BacktestParameters
from .models.risk import Currency, Direction, RiskMethod, TradeParameters
from .service import compute_risk, run_backtest
from .utils.config_loader import load_config
from .utils.logging_config import configure_logging
from .utils.time_helpers import format_duration


def _choice(enum_cls):
    return click.Choice([member.value for member in enum_cls], case_sensitive=False)


def _enum_value(enum_cls, value: str):
    for member in enum_cls:
        if member.value.lower() == value.lower():
            return member
    raise click.BadParameter(value)


@click.group()
@click.option('--config', '-c', 'config_path', default=None, help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Verbose logging')
@click.pass_context
def cli(ctx, config_path, verbose):
    """Trade planning and strategy backtesting tools."""
    app_config = load_config(config_path)
    configure_logging(app_config.logging, verbose=verbose)
    ctx.obj = app_config


@cli.command()
@click.option('--symbol', default='BTC/USD', show_default=True, help='Trading symbol')
@click.option('--currency', type=_choice(Currency), default=Currency.USD.value, show_default=True)
@click.option('--balance', type=float, required=True, help='Account balance')
@click.option('--entry', type=float, required=True, help='Entry price')
@click.option('--stop', type=float, required=True, help='Stop-loss price')
@click.option('--target', type=float, required=True, help='Target price')
@click.option('--direction', type=_choice(Direction), default=Direction.LONG.value, show_default=True)
@click.option('--leverage', type=float, default=1.0, show_default=True)
@click.option('--method', type=_choice(RiskMethod), default=RiskMethod.FIXED_PERCENTAGE.value, show_default=True)
@click.option('--risk-pct', type=float, default=1.0, show_default=True, help='Percent of balance at risk')
@click.option('--risk-amount', type=float, default=0.0, help='Fixed amount at risk')
@click.option('--win-prob', type=float, default=0.0, help='Kelly win probability (0-1)')
@click.option('--win-loss-ratio', type=float, default=0.0, help='Kelly win/loss ratio')
def risk(symbol, currency, balance, entry, stop, target, direction, leverage, method,
         risk_pct, risk_amount, win_prob, win_loss_ratio):
    """Size a trade from risk parameters."""
    params = TradeParameters(
        symbol=symbol,
        account_currency=_enum_value(Currency, currency),
        account_balance=balance,
        entry_price=entry,
        stop_loss_price=stop,
        target_price=target,
        direction=_enum_value(Direction, direction),
        leverage=leverage,
        risk_method=_enum_value(RiskMethod, method),
        risk_percentage=risk_pct,
        fixed_risk_amount=risk_amount,
        win_probability=win_prob,
        win_loss_ratio=win_loss_ratio,
    )

    try:
        result = compute_risk(params)
    except TradeDeskError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(1)

    cur = result.account_currency.value
    click.echo("=" * 50)
    click.echo(f"POSITION SIZE: {params.symbol} ({params.direction.value})")
    click.echo("=" * 50)
    click.echo(f"Position Size: {result.position_size_asset:.6f} {result.asset_name}")
    click.echo(f"Position Value: {result.position_size_fiat:.2f} {cur}")
    click.echo(f"Notional Value: {result.notional_value:.2f} {cur}")
    click.echo(f"Max Loss: {result.max_loss_fiat:.2f} {cur} ({result.max_loss_percent:.2f}%)")
    click.echo(f"Reward:Risk: {result.reward_risk_ratio:.2f}")
    for level in result.take_profit_levels:
        click.echo(f"  TP {level.rr:g}R: {level.price:.4f} -> +{level.profit:.2f} {cur}")


@cli.command()
@click.option('--symbol', default=None, help='Trading symbol')
@click.option('--timeframe', default=None, help='Bar interval (1m,5m,15m,30m,1h,4h,1D,1W)')
@click.option('--start', 'start_date', type=click.DateTime(formats=['%Y-%m-%d']), default=None,
              help='Start date (YYYY-MM-DD), defaults to 60 days before end')
@click.option('--end', 'end_date', type=click.DateTime(formats=['%Y-%m-%d']), default=None,
              help='End date (YYYY-MM-DD), defaults to today')
@click.option('--balance', type=float, default=None, help='Initial balance')
@click.option('--rules', default=None, help='Rule text; use \\n between directives')
@click.option('--stop-loss', type=float, default=None, help='Stop-loss percent')
@click.option('--take-profit', type=float, default=None, help='Take-profit percent')
@click.option('--seed', type=int, default=None, help='Synthesizer seed')
@click.option('--rsi-period', type=int, default=None, help='RSI lookback period')
@click.option('--force-close', is_flag=True, help='Close an open position at the last candle')
@click.option('--output', '-o', default=None, help='Write the full report as JSON')
@click.option('--trades-csv', default=None, help='Write closed trades as CSV')
@click.option('--progress', is_flag=True, help='Show a progress bar')
@click.pass_obj
def backtest(app_config, symbol, timeframe, start_date, end_date, balance, rules, stop_loss,
             take_profit, seed, rsi_period, force_close, output, trades_csv, progress):
    """Run an RSI rule backtest on synthetic candles."""
    defaults = app_config.backtest
    end = end_date.date() if end_date else date.today()
    start = start_date.date() if start_date else end - timedelta(days=60)

    params = BacktestParameters(
        symbol=symbol or defaults.symbol,
        timeframe=timeframe or defaults.timeframe,
        start_date=start,
        end_date=end,
        initial_balance=balance if balance is not None else defaults.initial_balance,
        strategy_rules=(rules.replace('\\n', '\n') if rules else defaults.strategy_rules),
        stop_loss_percent=stop_loss if stop_loss is not None else defaults.stop_loss_percent,
        take_profit_percent=take_profit if take_profit is not None else defaults.take_profit_percent,
        seed=seed if seed is not None else defaults.seed,
        rsi_period=rsi_period if rsi_period is not None else defaults.rsi_period,
        force_close_at_end=force_close or defaults.force_close_at_end,
    )

    click.echo(f"Starting backtest: {params.symbol} {params.timeframe} {params.start_date} -> {params.end_date}")
    try:
        result = run_backtest(params, config=app_config.engine, show_progress=progress)
    except TradeDeskError as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(1)

    metrics = result.metrics
    click.echo("\n" + "=" * 50)
    click.echo("BACKTEST RESULTS")
    click.echo("=" * 50)
    click.echo(f"Seed: {result.seed}  Candles: {result.total_candles}")
    click.echo(f"Net Profit: {metrics.net_profit:.2f} ({metrics.net_profit_percent:.2f}%)")
    click.echo(f"Final Balance: {metrics.final_balance:.2f}")
    click.echo(f"Max Drawdown: {metrics.max_drawdown:.2f}%")
    click.echo(f"Total Trades: {metrics.total_trades} "
               f"(won {metrics.winning_trades}, lost {metrics.losing_trades})")
    click.echo(f"Win Rate: {metrics.win_rate:.2f}%")
    click.echo(f"Avg Trade Duration: {format_duration(metrics.avg_trade_duration)}")
    if result.open_position is not None:
        click.echo(f"Open Position: unrealized {result.open_position.unrealized_profit:.2f}")

    if output:
        result.save_to_json(output)
        click.echo(f"Report saved to {output}")
    if trades_csv:
        result.save_trades_csv(trades_csv)
        click.echo(f"Trades saved to {trades_csv}")


@cli.command()
@click.option('--host', default=None, help='Server host')
@click.option('--port', type=int, default=None, help='Server port')
@click.pass_obj
def serve(app_config, host, port):
    """Serve the HTTP API."""
    import uvicorn

    from .api import create_app

    host = host or app_config.api.host
    port = port or app_config.api.port
    click.echo(f"Starting API at http://{host}:{port}")
    uvicorn.run(
        create_app(app_config),
        host=host,
        port=port,
        log_level=app_config.logging.level.lower()
    )


def main():
    cli()


if __name__ == '__main__':
    main()
