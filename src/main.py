"""ridertrack - earnings and hours tracking for delivery riders."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.core.db_client import DatabaseError, RecordNotFoundError, close_connection, init_db
from src.core.errors import RecordValidationError, classify_error_with_response
from src.core.logging import configure_logfire, instrument_fastapi
from src.interface.api_router import router as api_router


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan context manager."""
    # Startup
    configure_logfire()

    await init_db()
    logger.info("Database initialized")

    yield

    # Shutdown
    await close_connection()


app = FastAPI(
    title="ridertrack",
    description="Earnings, hours and satisfaction tracking for delivery riders",
    version="0.1.0",
    lifespan=lifespan,
)

# Instrument FastAPI with Logfire
instrument_fastapi(app)

# Register routers
app.include_router(api_router)


def _error_response(exc: Exception, status_code: int) -> JSONResponse:
    response = classify_error_with_response(exc)
    return JSONResponse(content=response.model_dump(mode="json"), status_code=status_code)


@app.exception_handler(RecordValidationError)
async def handle_validation_error(request: Request, exc: RecordValidationError) -> JSONResponse:
    logger.info("request_rejected", extra={"path": request.url.path, "field": exc.field})
    return _error_response(exc, status.HTTP_422_UNPROCESSABLE_ENTITY)


@app.exception_handler(RecordNotFoundError)
async def handle_not_found(request: Request, exc: RecordNotFoundError) -> JSONResponse:
    logger.info("record_not_found", extra={"path": request.url.path, "error": str(exc)})
    return _error_response(exc, status.HTTP_404_NOT_FOUND)


@app.exception_handler(DatabaseError)
async def handle_database_error(request: Request, exc: DatabaseError) -> JSONResponse:
    logger.error("store_error", extra={"path": request.url.path, "error": str(exc)})
    return _error_response(exc, status.HTTP_503_SERVICE_UNAVAILABLE)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "healthy"}, status_code=200)


def main() -> None:
    """Run the application with uvicorn."""
    import uvicorn

    uvicorn.run("src.main:app", host="0.0.0.0", port=8000, log_level="info")  # noqa: S104


if __name__ == "__main__":
    main()
