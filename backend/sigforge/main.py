"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sigforge.config import settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.sigforge_log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def create_app() -> FastAPI:
    app = FastAPI(
        title="sigforge",
        description="Animated signature rendering: text to stroke-by-stroke SVG, PNG and GIF",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from sigforge.api import share
    from sigforge.api.router import api_router

    app.include_router(api_router)
    # Catch-all share links go last so /api/* and the docs routes match first
    app.include_router(share.router)

    return app


app = create_app()
