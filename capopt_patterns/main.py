"""
CapOpt Pattern Service
Main FastAPI application
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import sys

from capopt_patterns.config import get_settings
from capopt_patterns.errors import PatternServiceError, map_error_to_response
from capopt_patterns.router import frameworks_router, patterns_router

SERVICE_NAME = "capopt-patterns"
VERSION = "1.0.0"

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="CapOpt Pattern Service",
        description="Pattern assignment and canvas pattern analysis for industry frameworks",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(patterns_router)
    app.include_router(frameworks_router)

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "service": SERVICE_NAME,
            "version": VERSION,
            "status": "running"
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": VERSION
        }

    @app.on_event("startup")
    async def startup_event():
        logger.info("CapOpt Pattern Service starting up...")
        logger.info(f"Environment: {'DEBUG' if settings.debug else 'PRODUCTION'}")
        logger.info(f"Catalog source: {settings.catalog_source}")

    @app.exception_handler(PatternServiceError)
    async def pattern_service_error_handler(request: Request, exc: PatternServiceError):
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content=map_error_to_response(exc)
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler"""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        body = map_error_to_response(exc)
        if settings.debug:
            body["details"] = {"error": str(exc)}
        return JSONResponse(status_code=500, content=body)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "capopt_patterns.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level
    )
