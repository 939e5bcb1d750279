"""
Telecom KPI Monitoring API

FastAPI application entry point.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.app.core.config import get_settings
from backend.app.core.exceptions import BadFixtureError, NotFoundError
from backend.app.core.logging import setup_logging, get_logger
from backend.app.api import base_stations, health, kpis
from backend.app.middleware.trace import TracingMiddleware

settings = get_settings()

# Initialize logging
setup_logging(level=settings.log_level)
logger = get_logger(__name__)


def available_endpoints() -> list[str]:
    prefix = settings.api_prefix
    return [
        f"GET {prefix}/health",
        f"GET {prefix}/ready",
        f"GET {prefix}/kpis",
        f"GET {prefix}/kpis/:kpiName",
        f"GET {prefix}/regional",
        f"GET {prefix}/alerts",
        f"GET {prefix}/base-stations",
        f"GET {prefix}/base-stations/:stationId",
    ]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(f"🚀 Starting {settings.app_name} v{settings.app_version}")
    logger.info(
        "Serving base data fixture",
        extra={
            "extra_data": {
                "data_path": str(settings.data_path),
                "simulation_seed": settings.simulation_seed,
                "endpoints": available_endpoints(),
            }
        },
    )
    yield
    logger.info(f"👋 Shutting down {settings.app_name}")


app = FastAPI(
    title=settings.app_name,
    description="Synthetic live KPI feed for the network monitoring dashboard",
    version=settings.app_version,
    lifespan=lifespan,
)

# Add Middleware
app.add_middleware(TracingMiddleware)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type", "X-Correlation-ID"],
    expose_headers=["X-Correlation-ID", "X-Event-ID", "X-Trace-ID"],
)


# ===================== ERROR HANDLERS =====================

@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(
        status_code=404,
        content={"error": exc.error, exc.available_key: exc.available},
    )


@app.exception_handler(BadFixtureError)
async def bad_fixture_handler(request: Request, exc: BadFixtureError):
    logger.error(f"Base data unavailable for {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": str(exc)},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(
            status_code=404,
            content={"error": "Route not found", "available_endpoints": available_endpoints()},
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Server error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": str(exc)},
    )


# Include routers
app.include_router(health.router, prefix=settings.api_prefix, tags=["Health"])
app.include_router(kpis.router, prefix=settings.api_prefix, tags=["Live KPIs"])
app.include_router(base_stations.router, prefix=settings.api_prefix, tags=["Base Stations"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Telecom network KPI monitoring API",
        "docs": "/docs",
    }


def run():
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "backend.app.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        reload=settings.debug,
        log_config=None,
    )


if __name__ == "__main__":
    run()
