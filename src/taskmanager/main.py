"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor

from taskmanager.api.handlers import register_exception_handlers
from taskmanager.api.routes import auth, tasks, users
from taskmanager.config import get_settings
from taskmanager.core.logging import setup_logging
from taskmanager.database import init_db
from taskmanager.telemetry import TelemetryManager

API_PREFIX = "/api/v1"

# Get settings
settings = get_settings()

# Configure logging
setup_logging(settings)
logger = logging.getLogger(__name__)

# Initialize telemetry
telemetry_manager = TelemetryManager(settings)
telemetry_manager.setup()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting TaskManager application")

    # Initialize database
    init_db(settings)
    logger.info("Database initialized")

    yield

    # Shutdown telemetry
    telemetry_manager.shutdown()
    logger.info("Shutting down TaskManager application")


# Create FastAPI application
app = FastAPI(
    title="TaskManager",
    description="Task management API with JWT authentication",
    version="0.1.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "Content-Type", "Authorization"],
)

# Instrument FastAPI with OpenTelemetry
if settings.otel_enabled:
    FastAPIInstrumentor.instrument_app(app)
    logger.info("FastAPI instrumented with OpenTelemetry")

register_exception_handlers(app)

# Include routers
app.include_router(auth.router, prefix=API_PREFIX)
app.include_router(users.router, prefix=API_PREFIX)
app.include_router(tasks.router, prefix=API_PREFIX)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "taskmanager.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )
