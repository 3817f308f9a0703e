import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kellysim.config import settings
from kellysim.api.routes import simulation

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"Kelly Simulator API starting ({settings.ENVIRONMENT}), "
        f"max {settings.MAX_DAY_COUNT} days x {settings.MAX_GAMES_PER_DAY} games"
    )
    yield


app = FastAPI(
    title="Kelly Simulator API",
    description="Compares flat staking with fractional Kelly staking over simulated betting days",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(simulation.router, tags=["simulation"])


@app.api_route("/health", methods=["GET", "HEAD"])
async def health_check():
    return {"status": "healthy", "environment": settings.ENVIRONMENT}
