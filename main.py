"""
Event Board - FastAPI Backend
Main application entry point
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from eventboard.core.config import settings
from eventboard.core.db import engine, Base
from eventboard.domain.errors import DomainError
from eventboard.api import routes_admin, routes_public
from eventboard.utils.responses import domain_error_response

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    # Create database tables
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")
    yield
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Event Board",
    description="Moderated post board for events, with interest declarations and exports",
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

@app.exception_handler(DomainError)
async def handle_domain_error(request: Request, exc: DomainError):
    """Business rule violations become the standard error envelope"""
    logger.info("%s %s refused: %s", request.method, request.url.path, exc)
    return domain_error_response(exc)

# Include routers
app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_admin.router, prefix="/admin", tags=["admin"])

# Note: Run this ASGI app directly with Uvicorn or Hypercorn. For Gunicorn,
# use `uvicorn.workers.UvicornWorker` instead of wrapping the app.

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
