"""CJ4 FADEC - closed-loop engine throttle controller

FastAPI backend exposing the FADEC gauge to a host simulator.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.core.config import settings
from backend.api.routes import controls, gauge, health
from backend.services.gauge_manager import GaugeService

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
)
logger = logging.getLogger("fadec")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    logger.info("Starting %s v%s", settings.PROJECT_NAME, settings.VERSION)
    service = GaugeService()
    await service.start()
    yield
    await service.stop()
    logger.info("Shutting down %s", settings.PROJECT_NAME)


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Closed-loop engine throttle controller for the CJ4",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(health.router, tags=["health"])
app.include_router(
    gauge.router,
    prefix=f"{settings.API_V1_STR}/gauge",
    tags=["gauge"],
)
app.include_router(
    controls.router,
    prefix=f"{settings.API_V1_STR}/controls",
    tags=["controls"],
)


def run():
    import uvicorn

    uvicorn.run("backend.main:app", host=settings.HOST, port=settings.PORT, reload=settings.RELOAD)


if __name__ == "__main__":
    run()
