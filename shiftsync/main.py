import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Import models so they're registered with SQLAlchemy Base before create_all
from . import models  # noqa: F401
from .config import (
    ALLOWED_ORIGINS,
    API_VERSION,
    ENVIRONMENT,
    PORT,
    SECURITY_HEADERS_ENABLED,
)
from .database import Base, engine
from .domain.auth.router import router as auth_router
from .domain.scheduling.router import router as schedule_router
from .domain.shifts.router import router as shifts_router
from .domain.study_sessions.router import router as study_sessions_router
from .domain.workplaces.router import router as workplaces_router
from .rate_limiter import api_limiter
from .security_headers import SecurityHeadersMiddleware
from .security_middleware import QueryInjectionMiddleware

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("passlib").setLevel(logging.ERROR)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")
            raise

    try:
        from .rate_limiter import get_redis_client

        get_redis_client()  # Connection test
        logger.info("Redis connection established")
    except Exception as e:
        logger.warning(f"Redis connection failed - rate limits are tracked per process: {e}")

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="ShiftSync API", version=API_VERSION, lifespan=lifespan)


def _field_name(loc) -> str:
    # Drop the "body"/"query" prefix FastAPI puts in front of the field path
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "header")]
    return ".".join(parts) or "request"


def _error_message(error: dict) -> str:
    message = error.get("msg", "Invalid value")
    # Messages from our own validators arrive as "Value error, <message>"
    return message.removeprefix("Value error, ")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        # Raised by the router itself: no route matched
        return JSONResponse(
            status_code=404,
            content={"success": False, "message": "Route not found", "path": request.url.path},
        )

    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": _field_name(error.get("loc", ())), "message": _error_message(error)}
        for error in exc.errors()
    ]
    logger.warning(f"Validation error for {request.url.path}: {errors}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Validation failed", "errors": errors},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"{request.method} {request.url.path} - Error: {str(exc)}", exc_info=exc)
    content = {"success": False, "message": "Internal server error"}
    if ENVIRONMENT == "development":
        content["error"] = str(exc)
    return JSONResponse(status_code=500, content=content)


app.add_middleware(QueryInjectionMiddleware)

if SECURITY_HEADERS_ENABLED:
    app.add_middleware(
        SecurityHeadersMiddleware, exclude_paths=["/api/health", "/docs", "/openapi.json"]
    )
    logger.info("Security headers enabled")
else:
    logger.warning("Security headers DISABLED - only use in development!")

logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Routes - everything under /api shares the general per-IP limit
for router in (
    auth_router,
    workplaces_router,
    shifts_router,
    study_sessions_router,
    schedule_router,
):
    app.include_router(router, prefix="/api", dependencies=[Depends(api_limiter)])


@app.get("/api/health")
def health():
    return {
        "status": "healthy",
        "message": "ShiftSync API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": API_VERSION,
    }


def run():
    """Console entry point: serve the API with uvicorn"""
    import uvicorn

    uvicorn.run("shiftsync.main:app", host="0.0.0.0", port=PORT)  # noqa: S104


if __name__ == "__main__":
    run()
