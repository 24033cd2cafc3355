"""
FastAPI main application module for the storefront sitemap service
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import time
import logging

from storefront import __version__
from storefront.core.config import settings
from storefront.core.document_store import get_document_store, close_document_store
from storefront.api.api_v1.api import api_router
from storefront.api.api_v1.endpoints.sitemap import public_router

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Storefront Sitemap API",
    description="Sitemap generation for the storefront catalog",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response

# Include API routes
app.include_router(api_router, prefix="/api/v1")
app.include_router(public_router)

# Health check endpoint
@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring"""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "version": __version__
    }

# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "message": "Storefront Sitemap API",
        "version": __version__,
        "docs": "/docs",
        "endpoints": {
            "sitemap": "GET /sitemap.xml",
            "entries": "GET /api/v1/sitemap/entries",
            "invalidate": "POST /api/v1/sitemap/invalidate",
            "store_health": "GET /api/v1/store/health",
            "health": "GET /health",
        },
    }

# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": "An unexpected error occurred"
        }
    )

# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize application on startup"""
    logger.info("Starting Storefront Sitemap API...")

    # The store is only required to be reachable in production
    if not await get_document_store().check_connection():
        logger.error("Failed to connect to document store")
        if settings.ENVIRONMENT == "production":
            raise Exception("Document store connection failed")

    logger.info("Application startup complete")

# Shutdown event
@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on application shutdown"""
    logger.info("Shutting down Storefront Sitemap API...")
    await close_document_store()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "storefront.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info"
    )
