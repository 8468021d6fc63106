"""
FastAPI application entry point.

WHAT: Main application setup and wiring
WHY: Initialize all components and routes
HOW: Create FastAPI app, register middleware, routers, handlers
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from .core.config import settings
from .core.session_manager import session_manager
from .utils.logger import setup_logging, get_logger
from .middleware.error_handler import register_exception_handlers
from .api.v1.router import api_router

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    WHAT: Startup and shutdown logic
    WHY: Run idle-session eviction only while the app is serving
    HOW: Async context manager for FastAPI lifespan
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    session_manager.start_cleanup_thread()
    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application")
    session_manager.stop_cleanup_thread()
    logger.info("Application shutdown complete")


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
register_exception_handlers(app)

# Include API router
app.include_router(api_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "mandimind.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
