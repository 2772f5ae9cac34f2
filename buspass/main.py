import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from buspass.config import Settings, get_settings
from buspass.database import RecordStore
from buspass.exceptions import StoreUnavailableError
from buspass.applications import router as applications_router
from buspass.tickets import router as tickets_router

logger = logging.getLogger(__name__)

def describe_validation_errors(exc: RequestValidationError) -> str:
    """Flatten request validation errors into "field: message" pairs"""
    parts = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"] if part != "body") or "body"
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)

def create_app(settings: Optional[Settings] = None, store: Optional[RecordStore] = None) -> FastAPI:
    settings = settings or get_settings()
    store = store or RecordStore(settings.DATABASE_URL, connect_timeout=settings.DB_CONNECT_TIMEOUT)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
        # A store that cannot be reached at startup aborts the process
        store.connect()
        try:
            yield
        finally:
            store.dispose()

    # Create FastAPI app
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Bus pass application, verification and ticket booking API",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StoreUnavailableError)
    async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"success": False, "error": "DB not connected"},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = describe_validation_errors(exc)
        logger.info("Invalid request to %s %s: %s", request.method, request.url.path, errors)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": f"Invalid request: {errors}"},
        )

    # Include routers
    app.include_router(applications_router, tags=["Applications"])
    app.include_router(tickets_router, tags=["Tickets"])

    # Uploaded photos and Aadhar scans are publicly readable
    app.mount(
        settings.UPLOAD_URL_PREFIX,
        StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
        name="uploads",
    )

    @app.get("/")
    def root():
        """Root endpoint"""
        return {
            "message": settings.PROJECT_NAME,
            "version": "1.0.0",
            "docs": "/docs",
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        if not store.is_ready:
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unhealthy", "store": store.state.value},
            )
        return {"status": "healthy", "store": store.state.value}

    return app

def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

configure_logging(get_settings())
app = create_app()

if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
