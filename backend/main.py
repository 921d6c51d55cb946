"""
FastAPI application entry point for the GitHub Dashboard API.

Routes live under /api except the liveness endpoints at / and /health.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from github_dashboard.config.settings import get_settings
from github_dashboard.database.session import reset_engine
from github_dashboard.integrations.github.client import get_github_client
from github_dashboard.api.routes import health
from github_dashboard.api.routes import dashboards
from github_dashboard.api.routes import clients
from github_dashboard.api.routes import catalog
from github_dashboard.api.routes import github
from github_dashboard.api.routes import layouts

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info("Starting GitHub Dashboard API", extra={"env": settings.env})

    database_url = settings.database_url
    if not database_url:
        logger.error("DATABASE_URL is not set. Database-backed endpoints will return 503.")
        app.state.database_configured = False
    else:
        masked = database_url.split("@")[-1] if "@" in database_url else "(no credentials)"
        logger.info("DATABASE_URL configured", extra={"host_db": masked})
        app.state.database_configured = True

    app.state.github_client = get_github_client(
        token=settings.github_token,
        base_url=settings.github_base_url,
    )

    yield

    logger.info("Shutting down GitHub Dashboard API")
    await app.state.github_client.close()
    reset_engine()


app = FastAPI(
    title="GitHub Dashboard API",
    description="Client dashboards over GitHub user and repository activity",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(dashboards.router)
app.include_router(clients.router)
app.include_router(catalog.router)
app.include_router(github.router)
app.include_router(layouts.router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Reject malformed bodies and unknown fields with 400."""
    logger.info(
        "Request validation failed",
        extra={"path": request.url.path, "error_count": len(exc.errors())},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation failed", "detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unhandled exceptions with proper logging."""
    logger.error(
        "Unhandled exception",
        extra={
            "error": str(exc),
            "error_type": type(exc).__name__,
            "path": request.url.path
        },
        exc_info=True
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred"
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.env == "development"
    )
