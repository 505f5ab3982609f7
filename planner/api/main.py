"""FastAPI application factory."""

from __future__ import annotations
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from planner.api.routes import router
from planner.config import settings
from planner.core.errors import InvalidOperationError, UnknownShapeError


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    app = FastAPI(
        title="Building Planner",
        description="Building geometry, rooftop objects and rooftop polygon engine",
        version="0.1.0",
    )

    # CORS for the Vite dev server
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidOperationError)
    async def invalid_operation(request: Request, exc: InvalidOperationError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(UnknownShapeError)
    async def unknown_shape(request: Request, exc: UnknownShapeError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    app.include_router(router, prefix="/api")

    return app


app = create_app()
