"""FastAPI application for the transport order service.

Domain errors raised by the order service are mapped to HTTP responses
here, so the routes only translate payloads.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..config import AppConfig, configure_logging, get_config
from ..domain.errors import (
    CollaboratorError,
    InvalidTransitionError,
    OrderNotFoundError,
    PartialCreationError,
)
from .routes import router

logger = logging.getLogger(__name__)


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    config = config or get_config()
    configure_logging(config.observability)

    app = FastAPI(title=config.api.title)
    app.include_router(router)

    @app.get("/health")
    def health():
        return {"ok": True}

    @app.exception_handler(OrderNotFoundError)
    async def order_not_found(request: Request, exc: OrderNotFoundError):
        return JSONResponse(status_code=404, content={"detail": exc.message})

    @app.exception_handler(InvalidTransitionError)
    async def invalid_transition(request: Request, exc: InvalidTransitionError):
        return JSONResponse(
            status_code=409,
            content={
                "detail": exc.message,
                "currentStatus": exc.current.value if exc.current else None,
            },
        )

    @app.exception_handler(PartialCreationError)
    async def partial_creation(request: Request, exc: PartialCreationError):
        logger.error(
            "Order created with missing cargo",
            extra={"order_id": exc.order_id, "cargo_index": exc.cargo_index},
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": exc.message,
                "orderId": exc.order_id,
                "cargoIndex": exc.cargo_index,
                "registeredCargoIds": list(exc.registered_cargo_ids),
            },
        )

    @app.exception_handler(CollaboratorError)
    async def collaborator_failed(request: Request, exc: CollaboratorError):
        return JSONResponse(
            status_code=502,
            content={
                "detail": str(exc),
                "stage": exc.stage.value if exc.stage else None,
                "cargoIndex": exc.cargo_index,
            },
        )

    return app
