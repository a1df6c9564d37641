import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from config import Settings, settings
from routers.canvas_router import router as canvas_router
from services.canvas_command_service import CanvasCommandService
from services.llm_service import LLMService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    app_settings: Settings = app.state.settings
    llm = LLMService(app_settings)
    app.state.llm_service = llm
    app.state.command_service = CanvasCommandService(app_settings, llm)
    logger.info("Application startup completed")

    yield

    # Shutdown
    logger.info("Application shutdown completed")


def create_app(app_settings: Settings) -> FastAPI:
    """Build the FastAPI application around an explicit settings object."""
    app = FastAPI(
        title=app_settings.app_name,
        version=app_settings.app_version,
        description="Inframe canvas command API",
        docs_url="/docs",
        lifespan=lifespan
    )
    app.state.settings = app_settings

    # Configure CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # Health check endpoint
    @app.get("/healthcheck", tags=["health"])
    async def healthcheck(request: Request) -> JSONResponse:
        llm = getattr(request.app.state, "llm_service", None)
        if llm is not None and llm.is_configured:
            return JSONResponse(
                status_code=status.HTTP_200_OK,
                content={
                    "status": "healthy",
                    "message": "Service is running properly",
                    "version": app_settings.app_version,
                    "llm": "configured"
                }
            )

        logger.error("Health check failed: LLM service is not configured")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "unhealthy",
                "message": "Service is experiencing issues",
                "version": app_settings.app_version,
                "llm": "not configured"
            }
        )

    # Root endpoint
    @app.get("/", tags=["root"])
    async def root() -> dict:
        return {
            "message": f"Welcome to {app_settings.app_name}",
            "version": app_settings.app_version,
            "docs": "/docs",
            "health": "/healthcheck"
        }

    # Include routers
    app.include_router(canvas_router)

    # Global exception handler
    @app.exception_handler(500)
    async def internal_server_error_handler(request, exc) -> JSONResponse:
        logger.error(f"Internal server error: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "actions": [],
                "message": "An unexpected error occurred. Please try again later."
            }
        )

    return app


# Create FastAPI application instance
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="info"
    )
