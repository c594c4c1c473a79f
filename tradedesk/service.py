# tradedesk/service.py
"""
Entry points consumed by the CLI, the HTTP API and other collaborators.
"""

import logging
import math
from typing import Optional

from .core.backtest_engine import BacktestEngine
from .core.errors import InsufficientDataError, ValidationError
from .core.indicators import calculate_rsi
from .core.risk_calculator import RiskCalculator
from .data.synthetic_data import SyntheticDataProvider
from .models.config import EngineConfig
from .models.results import BacktestParameters, BacktestReport
from .models.risk import RiskResult, TradeParameters
from .strategies.rule_strategy import RuleStrategy
from .utils.time_helpers import count_bars, normalize_timeframe, TIMEFRAME_MINUTES


logger = logging.getLogger(__name__)


def compute_risk(params: TradeParameters) -> RiskResult:
    """
    Size a trade.

    Raises:
        ValidationError: If the parameters are non-positive or inconsistent
    """
    return RiskCalculator().calculate(params)


def validate_backtest_parameters(params: BacktestParameters, config: EngineConfig) -> int:
    """
    Check numeric inputs and the candle count the range will produce.

    Returns:
        Number of candles the synthesizer will generate

    Raises:
        ValidationError: On invalid numbers, timeframe or an oversized range
        InsufficientDataError: If the range yields fewer than min_candles
    """
    for name in ("initial_balance", "stop_loss_percent", "take_profit_percent"):
        if not math.isfinite(getattr(params, name)):
            raise ValidationError(f"{name} must be a finite number.")
    if params.initial_balance <= 0:
        raise ValidationError("Initial balance must be positive.")
    if params.stop_loss_percent <= 0 or params.stop_loss_percent >= 100:
        raise ValidationError("Stop-loss percentage must be between 0 and 100.")
    if params.take_profit_percent <= 0:
        raise ValidationError("Take-profit percentage must be positive.")
    if params.rsi_period < 1:
        raise ValidationError("RSI period must be at least 1.")
    if params.seed is not None and params.seed < 0:
        raise ValidationError("Seed must be a non-negative integer.")
    if normalize_timeframe(params.timeframe) is None:
        raise ValidationError(
            f"Unsupported timeframe: {params.timeframe}. Allowed: {', '.join(TIMEFRAME_MINUTES)}"
        )
    if params.end_date < params.start_date:
        raise ValidationError("End date must not be before start date.")

    bar_count = count_bars(params.start_date, params.end_date, params.timeframe)
    if bar_count > config.max_candles:
        raise ValidationError(
            f"Requested range produces {bar_count} candles, above the limit of {config.max_candles}. "
            f"Shorten the range or use a longer timeframe."
        )
    if bar_count < config.min_candles:
        raise InsufficientDataError(
            f"Requested range produces {bar_count} candles; at least {config.min_candles} are needed."
        )
    return bar_count


def run_backtest(
    params: BacktestParameters,
    config: Optional[EngineConfig] = None,
    show_progress: bool = False
) -> BacktestReport:
    """
    Generate candles, compute RSI, compile rules and simulate.

    All validation, including rule compilation, happens before any candle
    is generated.

    Raises:
        ValidationError: On invalid parameters
        ConfigurationError: If the rules lack a BUY or SELL rule
        InsufficientDataError: If the range is too short
    """
    config = config or EngineConfig()
    bar_count = validate_backtest_parameters(params, config)
    strategy = RuleStrategy.from_text(params.strategy_rules)

    provider = SyntheticDataProvider(seed=params.seed, config=config)
    logger.info(
        f"Backtest {params.symbol} {params.timeframe} {params.start_date} -> {params.end_date}: "
        f"{bar_count} candles, seed {provider.seed}"
    )

    candles = provider.generate_ohlcv(params.start_date, params.end_date, params.timeframe)
    indicator = calculate_rsi(candles, params.rsi_period)

    engine = BacktestEngine(params, strategy, seed=provider.seed, config=config, show_progress=show_progress)
    return engine.run(candles, indicator)
