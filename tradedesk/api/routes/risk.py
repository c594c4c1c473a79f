"""API routes for position sizing and trade tools."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter
from pydantic import BaseModel, Field

from ...core.calculators import calculate_profit, project_compounding
from ...models.risk import RiskResult, TradeParameters
from ...models.tools import CompoundingPeriod, ProfitResult
from ...service import compute_risk


router = APIRouter(prefix="/api", tags=["risk"])


class ProfitRequest(BaseModel):
    buy_price: float
    sell_price: float
    quantity: float
    fee_percent: float = 0.0


class CompoundingRequest(BaseModel):
    initial_capital: float
    target_profit_percent: float
    periods: int = Field(..., description="Number of periods to project")
    reinvestment_rate: float = 100.0


@router.post("/risk", response_model=RiskResult)
def compute_risk_endpoint(params: TradeParameters):
    return compute_risk(params)


@router.post("/tools/profit", response_model=ProfitResult)
def profit_endpoint(request: ProfitRequest):
    return calculate_profit(
        buy_price=request.buy_price,
        sell_price=request.sell_price,
        quantity=request.quantity,
        fee_percent=request.fee_percent,
    )


@router.post("/tools/compounding", response_model=List[CompoundingPeriod])
def compounding_endpoint(request: CompoundingRequest):
    return project_compounding(
        initial_capital=request.initial_capital,
        target_profit_percent=request.target_profit_percent,
        periods=request.periods,
        reinvestment_rate=request.reinvestment_rate,
    )
