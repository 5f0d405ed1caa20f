"""
Main application entry point
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional

import structlog
import uvicorn
from fastapi import Body, FastAPI, File, HTTPException, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from . import __version__
from .config import config
from .container import container
from .error_handlers import (
    ErrorCode,
    ErrorHandler,
    global_exception_handler,
    http_exception_handler,
    reconciliation_exception_handler,
    validation_exception_handler,
)
from .services import read_expected_rows
from .types import BatchInputError, BatchOutcome, InputMode, ReconciliationError
from .utils.logger import setup_logging


setup_logging(config.logging.level, config.logging.log_format)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    logger.info("Starting Booking Reconciliation API", version=__version__)

    try:
        await container.initialize()
    except Exception as e:
        logger.error("Failed to initialize service container", error=str(e))
        raise

    yield

    logger.info("Shutting down Booking Reconciliation API")

    try:
        await container.cleanup()
    except Exception as e:
        logger.error("Error during cleanup", error=str(e))


# Create FastAPI application
app = FastAPI(
    title="Booking Reconciliation API",
    description="Reconciles expected flight bookings against live reservation data",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if config.server.debug else None,
    redoc_url="/redoc" if config.server.debug else None,
)

# Add global error handlers
app.add_exception_handler(ReconciliationError, reconciliation_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)


@app.get("/health")
async def health_check():
    """
    Health check endpoint

    Returns the health status of the service and its configuration summary
    """
    return {
        "status": "healthy" if container.is_initialized() else "degraded",
        "timestamp": datetime.now().isoformat(),
        "version": __version__,
        "environment": config.server.environment,
        "services": container.list_services(),
        "reconciliation": {
            "timezone": config.reconciliation.timezone,
            "identities": len(config.reservation_api.identities),
            "token_max_attempts": config.reservation_api.token_max_attempts,
        },
    }


@app.post("/api/v1/bookings/retrieve", response_model=BatchOutcome)
async def retrieve_bookings(pnrs: List[str] = Body(...)):
    """
    Retrieve live booking summaries for a list of booking references.

    Each PNR yields either a summary line or an error entry.
    """
    orchestrator = container.get_orchestrator()
    return await orchestrator.reconcile_batch(pnrs, InputMode.REFERENCE_LIST)


@app.post("/api/v1/bookings/reconcile", response_model=BatchOutcome)
async def reconcile_bookings(file: Optional[UploadFile] = File(None)):
    """
    Reconcile an uploaded spreadsheet of expected bookings.

    The sheet must carry PNR, Flight, Pur, Dep, Arr and TravelDate columns.
    Each row is classified GOOD, BAD or Cancelled against the live booking.
    """
    if file is None or not file.filename:
        raise BatchInputError("No file uploaded")

    content = await file.read()
    rows = await asyncio.to_thread(read_expected_rows, content)

    logger.info("Spreadsheet received", filename=file.filename, rows=len(rows))

    orchestrator = container.get_orchestrator()
    return await orchestrator.reconcile_batch(rows, InputMode.SPREADSHEET)


@app.exception_handler(404)
async def not_found_handler(request, exc):
    """Custom 404 handler"""
    return JSONResponse(
        status_code=404,
        content=ErrorHandler.create_error_response(
            status_code=404,
            message=f"Endpoint not found: {request.method} {request.url.path}",
            error_code=ErrorCode.ENDPOINT_NOT_FOUND,
            details={
                "available_endpoints": [
                    "GET /health",
                    "POST /api/v1/bookings/retrieve",
                    "POST /api/v1/bookings/reconcile",
                ]
            }
        )
    )


def main():
    """Main entry point"""
    uvicorn.run(
        "booking_reconciler.main:app",
        host=config.server.host,
        port=config.server.port,
        reload=config.is_development,
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
