"""Main FastAPI application for Clubhouse API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.v1 import auth, clubs, discover, events, stats
from app.config import settings
from app.database import Base, engine
from app import models  # noqa: F401  (registers tables on Base.metadata)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("%s started", settings.PROJECT_NAME)
    yield


# Create FastAPI application instance
app = FastAPI(
    title=settings.PROJECT_NAME,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# Include API routers
app.include_router(
    auth.router,
    prefix=f"{settings.API_V1_PREFIX}/auth",
    tags=["Authentication"]
)

app.include_router(
    clubs.router,
    prefix=f"{settings.API_V1_PREFIX}/clubs",
    tags=["Clubs"]
)

app.include_router(
    events.router,
    prefix=f"{settings.API_V1_PREFIX}/clubs/{{club_id}}/events",
    tags=["Events"]
)

app.include_router(
    stats.router,
    prefix=f"{settings.API_V1_PREFIX}/clubs/{{club_id}}/stats",
    tags=["Stats"]
)

app.include_router(
    discover.router,
    prefix=f"{settings.API_V1_PREFIX}/discover",
    tags=["Discover"]
)


@app.get("/")
def root():
    """Root endpoint - API welcome message."""
    return {
        "message": "Welcome to Clubhouse API",
        "docs": "/docs",
        "version": "1.0.0"
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
