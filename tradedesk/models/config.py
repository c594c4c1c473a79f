# tradedesk/models/config.py
"""
Configuration models for the trade desk engine.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from ..utils.time_helpers import TIMEFRAME_MINUTES, normalize_timeframe


class EngineConfig(BaseModel):
    """Simulation limits and synthesizer shape."""
    min_candles: int = Field(default=20, description="Fewest candles a backtest accepts")
    max_candles: int = Field(default=500_000, description="Most candles a backtest may generate")
    base_price: float = Field(default=50000.0, description="Base value for the first synthetic close")
    price_jitter: float = Field(default=10000.0, description="Upper bound of random jitter added to the base price")
    max_drift_pct: float = Field(default=1.5, description="Largest per-bar close drift in percent")
    wick_pct: float = Field(default=1.0, description="Largest wick extension in percent of the bar body edge")
    volume_base: float = Field(default=1000.0, description="Base synthetic volume")

    @field_validator('min_candles', 'max_candles')
    @classmethod
    def validate_counts(cls, v):
        if v < 2:
            raise ValueError("Candle bounds must be at least 2")
        return v

    @field_validator('base_price')
    @classmethod
    def validate_base_price(cls, v):
        if v <= 0:
            raise ValueError("Base price must be positive")
        return v

    @field_validator('price_jitter', 'max_drift_pct', 'wick_pct', 'volume_base')
    @classmethod
    def validate_non_negative(cls, v):
        if v < 0:
            raise ValueError("Synthesizer settings cannot be negative")
        return v

    @model_validator(mode='after')
    def validate_bounds(self):
        if self.min_candles > self.max_candles:
            raise ValueError("min_candles cannot exceed max_candles")
        return self


class BacktestDefaults(BaseModel):
    """Defaults used by the CLI and API when a request omits a field."""
    symbol: str = Field(default="BTC/USD", description="Trading symbol")
    timeframe: str = Field(default="1h", description="Bar interval")
    initial_balance: float = Field(default=10000.0, description="Starting balance")
    strategy_rules: str = Field(default="BUY when RSI < 30\nSELL when RSI > 70", description="Rule text")
    stop_loss_percent: float = Field(default=2.0, description="Stop-loss percentage")
    take_profit_percent: float = Field(default=4.0, description="Take-profit percentage")
    seed: Optional[int] = Field(default=None, description="Synthesizer seed, fresh per run when unset")
    rsi_period: int = Field(default=14, description="RSI lookback period")
    force_close_at_end: bool = Field(default=False, description="Close an open position at the last candle")

    @field_validator('timeframe')
    @classmethod
    def validate_timeframe(cls, v):
        normalized = normalize_timeframe(v)
        if normalized is None:
            raise ValueError(f"Timeframe must be one of {list(TIMEFRAME_MINUTES)}")
        return normalized


class APIConfig(BaseModel):
    """HTTP API configuration."""
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    title: str = Field(default="Trade Desk", description="API title")


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s", description="Log format")
    file: Optional[str] = Field(default=None, description="Log file path")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"Logging level must be one of {valid_levels}")
        return v.upper()


class AppConfig(BaseModel):
    """Main application configuration."""
    engine: EngineConfig = Field(default_factory=EngineConfig)
    backtest: BacktestDefaults = Field(default_factory=BacktestDefaults)
    api: APIConfig = Field(default_factory=APIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'AppConfig':
        """Create from dictionary."""
        return cls(**config_dict)
