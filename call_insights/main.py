"""
FastAPI application entry point for the Sales Call Insights API.

This module configures logging and CORS, registers the API routers, turns
request validation failures into the service's JSON error envelope, and
manages the database pool over the application lifespan.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from call_insights import __version__
from call_insights.api import api_router
from call_insights.api.analysis import ANALYSIS_ERROR
from call_insights.api.comparisons import COMPARISON_ERROR
from call_insights.api.responses import CORS_HEADERS, preflight_response
from call_insights.core.config import get_settings
from call_insights.core.database import close_db, init_db, init_schema
from call_insights.services.oracle import close_oracles

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

ORACLE_ENDPOINT_ERRORS = {
    "/analyze-sales-call": ANALYSIS_ERROR,
    "/compare-datasets": COMPARISON_ERROR,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Lifespan context manager for FastAPI application startup and shutdown events.

    On startup:
        - Report whether the language model credential is configured
        - Initialize the database connection pool (and schema, if enabled)

    On shutdown:
        - Close the shared OpenAI clients
        - Close the database connection pool
    """
    settings = get_settings()
    logger.info("Sales Call Insights API starting")

    if settings.oracle_configured:
        logger.info(f"OpenAI API: configured (model {settings.openai_model})")
    else:
        # Analysis endpoints answer with a configuration error until this is set
        logger.warning("OpenAI API: OPENAI_API_KEY is not configured")

    try:
        await init_db()
        logger.info("Database connection pool initialized")
        if settings.create_schema_on_startup:
            await init_schema()
            logger.info("Database schema ensured")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        # Continue startup; requests report storage errors until the database is reachable

    yield

    logger.info("Sales Call Insights API shutting down")
    try:
        await close_oracles()
    except Exception as e:
        logger.error(f"Error closing OpenAI clients: {e}")
    try:
        await close_db()
        logger.info("Database connection pool closed")
    except Exception as e:
        logger.error(f"Error closing database pool: {e}")


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    application = FastAPI(
        title="Sales Call Insights API",
        version=__version__,
        description=(
            "Scores sales call transcripts with a language model and compares "
            "two transcript cohorts (Set A / Set B)."
        ),
        lifespan=lifespan,
    )

    @application.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        """Attach the fixed CORS header set to every response."""
        response = await call_next(request)
        for name, value in CORS_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    application.include_router(api_router)

    # Registered after the routers so explicit OPTIONS routes match first
    @application.options("/{path:path}", include_in_schema=False)
    async def preflight(path: str) -> Response:
        return preflight_response()

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
        # The analysis endpoints report every failure as 500 under their own label
        label = ORACLE_ENDPOINT_ERRORS.get(request.url.path)
        if label is not None:
            return JSONResponse(
                status_code=500,
                content={"error": label, "details": str(exc.errors())},
                headers=CORS_HEADERS,
            )
        return JSONResponse(
            status_code=400,
            content={"error": "Invalid request", "details": str(exc.errors())},
            headers=CORS_HEADERS,
        )

    @application.get("/health")
    async def health_check():
        """Health check endpoint for monitoring and load balancers."""
        return {"status": "healthy"}

    @application.get("/")
    async def root():
        """Root endpoint providing API information."""
        return {
            "name": "Sales Call Insights API",
            "version": __version__,
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    return application


app = create_app()


# Run with uvicorn when executed directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "call_insights.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
