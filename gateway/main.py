"""
gateway/main.py

FastAPI application entry point for the clinic vitals gateway.
Configures logging and registers routers.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI

from gateway.logging_setup import configure_logging
from gateway.routers.ai import router as ai_router
from gateway.routers.vitals import router as vitals_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle: startup and shutdown."""
    configure_logging()
    logger.info("gateway_starting", port=8000)
    yield
    logger.info("gateway_shutting_down")


app = FastAPI(
    title="Clinic Vitals Gateway",
    description="Vitals triage coloring, threshold rules and AI text endpoints",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(vitals_router)
app.include_router(ai_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
