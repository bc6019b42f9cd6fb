"""FastAPI application for the Training Planner."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .api.routes import calendar, training_types, user_goal, workouts
from .api.exception_handlers import register_exception_handlers

logger = logging.getLogger(__name__)

APP_VERSION = "0.1.0"


def configure_logging(level: str) -> None:
    """Send application logs to stderr at the configured level."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Starting Training Planner v{APP_VERSION}")
    logger.info(f"Supabase URL: {settings.supabase_url or '(not configured)'}")
    yield
    # Shutdown
    logger.info("Shutting down Training Planner")


app = FastAPI(
    title="Training Planner API",
    description="Workout planning, onboarding and goal tracking",
    version=APP_VERSION,
    lifespan=lifespan,
)

# CORS middleware
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(workouts.router, prefix="/api/v1/workouts", tags=["workouts"])
app.include_router(
    training_types.router, prefix="/api/v1/training-types", tags=["training-types"]
)
app.include_router(user_goal.router, prefix="/api/v1/user-goal", tags=["user-goal"])
app.include_router(calendar.router, prefix="/api/v1/calendar", tags=["calendar"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Training Planner API",
        "version": APP_VERSION,
        "status": "healthy",
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
