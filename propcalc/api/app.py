"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from propcalc.api.routes import calculators, deals
from propcalc.config import settings


async def health():
    return {"status": "ok"}


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FastAPI(
        title=settings.app_name,
        description="UK property investment calculators",
        version="0.1.0",
        debug=settings.debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(calculators.router)
    app.include_router(deals.router)
    app.add_api_route("/health", health, methods=["GET"])
    app.add_api_route("/api/v1/health", health, methods=["GET"])
    return app


app = create_app()
