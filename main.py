"""
Dev Events - FastAPI Backend
Main application entry point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from app.core.config import settings
from app.core.db import get_connection_cache
from app.api import routes_bookings, routes_events, routes_pages, routes_public

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    database = await get_connection_cache().get_connection()
    database.create_all()
    logger.info("Database tables created")
    yield
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Dev Events",
    description="Event listing and booking service",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Anything escaping a route (e.g. a failed connection) becomes a generic 500"""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        content={"success": False, "error": "Internal server error"},
        status_code=500
    )

# Include routers
app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_events.router, prefix="/api", tags=["events"])
app.include_router(routes_bookings.router, prefix="/api", tags=["bookings"])
app.include_router(routes_pages.router, tags=["pages"])

# Note: Run this ASGI app directly with Uvicorn or Hypercorn. For Gunicorn,
# use `uvicorn.workers.UvicornWorker` instead of wrapping the app.

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
