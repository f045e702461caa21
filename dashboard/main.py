"""
Dashboard - API.

============================================================
RESPONSIBILITY
============================================================
REST API over project metrics and cross-chain comparison.

The session factory is injected through create_app(); when
none is given it is built from the environment on first use.
============================================================
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import sessionmaker

from dashboard.routers import cross_chain, health, metrics

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


def create_app(session_factory: Optional[sessionmaker] = None) -> FastAPI:
    app = FastAPI(
        title="Project Metrics Dashboard API",
        description="Growth, health and risk scores for on-chain projects, with cross-chain comparison.",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.session_factory = session_factory
    app.state.started_at = datetime.now(timezone.utc)

    # CORS (Allow local frontend development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Restrict in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include Routers
    app.include_router(health.router)
    app.include_router(metrics.router)
    app.include_router(cross_chain.router)

    @app.get("/", tags=["Root"])
    def root():
        return {
            "service": "Project Metrics Dashboard API",
            "version": API_VERSION,
            "docs": "/docs",
        }

    return app


app = create_app()

