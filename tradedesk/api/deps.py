from __future__ import annotations

from fastapi import Request

from ..models.config import AppConfig, EngineConfig


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_engine_config(request: Request) -> EngineConfig:
    return request.app.state.config.engine
