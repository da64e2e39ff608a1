import logging
import os
import uuid

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import (
    CORS_ALLOWED_ORIGINS,
    FILLS_API_TOKEN,
    FILLS_API_URL,
    FILLS_REFRESH_INTERVAL_SECONDS,
    LOG_LEVEL,
)
from core.http import cleanup_session
from fills import router as fills_router
from fills.services import FillSession, HttpFillFetcher

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


def build_fill_session() -> FillSession:
    """Create the app's FillSession from configuration."""
    fetcher = None
    if FILLS_API_URL:
        fetcher = HttpFillFetcher(FILLS_API_URL, token=FILLS_API_TOKEN or None)
    return FillSession(fetcher, refresh_interval=FILLS_REFRESH_INTERVAL_SECONDS)


app = FastAPI(title="Fuel Log")

if CORS_ALLOWED_ORIGINS:
    origins = CORS_ALLOWED_ORIGINS
    logger.info("CORS configured with specific origins: %s", origins)
else:
    origins = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    logger.warning(
        "CORS_ALLOWED_ORIGINS not set. Using development defaults: %s",
        origins,
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(fills_router)


# --- Application Lifecycle Events ---
@app.on_event("startup")
async def startup_event():
    """Create the fill session and start polling the fill API."""
    session = build_fill_session()
    app.state.fill_session = session
    session.start()
    logger.info("Application startup completed successfully.")


@app.on_event("shutdown")
async def shutdown_event():
    """Stop background refreshes and release HTTP resources."""
    session = getattr(app.state, "fill_session", None)
    if session is not None:
        await session.dispose()
    await cleanup_session()
    logger.info("Application shutdown completed successfully")


# --- Global Exception Handlers ---
@app.exception_handler(404)
async def not_found_handler(request: Request, exc: HTTPException):
    """Handle 404 Not Found errors."""
    logger.warning("404 Not Found: %s. Detail: %s", request.url, exc.detail)
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "Endpoint not found", "detail": exc.detail},
    )


@app.exception_handler(500)
async def internal_error_handler(request: Request, exc: Exception):
    """Handle 500 Internal Server Error errors."""
    error_id = str(uuid.uuid4())
    logger.error(
        "Internal Server Error (ID: %s): Request %s %s failed. Exception: %s",
        error_id,
        request.method,
        request.url,
        str(exc),
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "error_id": error_id,
            "detail": str(exc),
        },
    )


# --- Main Execution Block ---
if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8080"))
    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=port,
        log_level="info",
        reload=True,
    )
