"""API routes for running backtests and sheet statistics."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...core.sheet_stats import calculate_detailed_metrics
from ...models.config import EngineConfig
from ...models.results import BacktestParameters, BacktestReport
from ...models.sheet import SheetMetrics, SheetTrade
from ...service import run_backtest
from ..deps import get_engine_config


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["backtest"])


class SheetStatsRequest(BaseModel):
    initial_capital: float
    trades: List[SheetTrade]


@router.post("/backtest", response_model=BacktestReport)
def run_backtest_endpoint(
    params: BacktestParameters,
    engine_config: EngineConfig = Depends(get_engine_config),
):
    report = run_backtest(params, config=engine_config)
    logger.info(f"Backtest served: {report.metrics.total_trades} trades, seed {report.seed}")
    return report


@router.post("/sheet/stats", response_model=SheetMetrics)
def sheet_stats_endpoint(request: SheetStatsRequest):
    return calculate_detailed_metrics(request.trades, request.initial_capital)
