import asyncio
import logging
from collections import defaultdict
from typing import Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import (
    CORS_ORIGINS,
    GEMINI_MODEL,
    LOG_FILE,
    LOG_LEVEL,
    RATE_LIMIT_SWEEP_INTERVAL,
)
from models.errors import AppError, ValidationError
from routes.chat import router as chat_router
from routes.generation import router as generation_router
from routes.projects import router as projects_router
from routes.screens import router as screens_router
from services.rate_limiter import RateLimiter, run_periodic_sweep

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler(LOG_FILE)
    ]
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="ScreenCraft Backend",
    description="AI-powered mobile screen designer: prompt -> HTML/CSS screens on a canvas",
    version="1.0.0"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["x-ratelimit-limit", "x-ratelimit-remaining", "retry-after"]
)

# Include routers
app.include_router(generation_router)
app.include_router(projects_router)
app.include_router(screens_router)
app.include_router(chat_router)

# Constructed once per process; swept by a background task
app.state.rate_limiter = RateLimiter()


def format_validation_errors(errors: List[dict]) -> Dict[str, List[str]]:
    """Group pydantic errors by field name: {"prompt": ["..."]}."""
    field_errors: Dict[str, List[str]] = defaultdict(list)
    for error in errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        field_errors[field].append(error.get("msg", "Invalid value"))
    return dict(field_errors)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.debug(f"Validation failed for {request.url.path}: {exc.errors()}")
    error = ValidationError(details=format_validation_errors(exc.errors()))
    return JSONResponse(status_code=error.status_code, content=error.to_body())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.url.path}: {str(exc)}", exc_info=True)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.on_event("startup")
async def startup_event():
    """Start the rate limiter sweep"""
    app.state.sweep_task = asyncio.create_task(
        run_periodic_sweep(app.state.rate_limiter, RATE_LIMIT_SWEEP_INTERVAL)
    )
    logger.info("✅ ScreenCraft Backend started successfully")
    logger.info(f"✅ Model: {GEMINI_MODEL}")


@app.on_event("shutdown")
async def shutdown_event():
    sweep_task = getattr(app.state, "sweep_task", None)
    if sweep_task:
        sweep_task.cancel()


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "ScreenCraft Backend",
        "model": GEMINI_MODEL,
        "rate_limiter_tracked": app.state.rate_limiter.tracked,
    }


@app.get("/")
async def root():
    return {
        "message": "ScreenCraft Backend",
        "version": "1.0.0",
        "endpoints": {
            "generate": "/api/generate",
            "projects": "/api/projects",
            "preview": "/api/screens/{screen_id}/preview",
            "chat": "/api/chat",
            "health": "/health"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
