from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.errors import ConfigurationError, InsufficientDataError, TradeDeskError, ValidationError
from ..models.config import AppConfig
from .deps import get_config
from .routes.backtest import router as backtest_router
from .routes.risk import router as risk_router


ERROR_STATUS = {
    ValidationError: 422,
    InsufficientDataError: 422,
    ConfigurationError: 400,
}


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    config = config or AppConfig()
    app = FastAPI(title=config.api.title)
    app.state.config = config

    logger = logging.getLogger(__name__)

    @app.exception_handler(TradeDeskError)
    async def domain_exception_handler(request: Request, exc: TradeDeskError):
        status_code = ERROR_STATUS.get(type(exc), 400)
        logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc)
        return JSONResponse(
            status_code=status_code,
            content={"detail": str(exc), "error": type(exc).__name__},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        logger.warning("Validation error: %s", exc.errors())
        return await request_validation_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error")
        return JSONResponse(
            status_code=500, content={"detail": "Internal server error"}
        )

    @app.get("/api/health")
    def health(app_config: AppConfig = Depends(get_config)):
        return {"status": "ok", "service": app_config.api.title}

    app.include_router(risk_router)
    app.include_router(backtest_router)
    return app
