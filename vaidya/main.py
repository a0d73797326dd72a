from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.staticfiles import StaticFiles
from pathlib import Path
from typing import Optional
import time
import logging

from .api.routes.auth import router as auth_router
from .api.routes.doctor import directory_router, router as doctor_router
from .api.routes.health import router as health_router
from .api.routes.patient import router as patient_router
from .core.config import Settings, get_settings
from .core.database import create_db_engine, create_session_factory, init_db
from .core.exceptions import register_exception_handlers
from .core.security import build_password_context

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around an explicit, immutable Settings object."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.VERSION,
        description="Healthcare appointment API for patients and doctors",
        openapi_url="/api/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    engine = create_db_engine(settings.DATABASE_URL)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.pwd_context = build_password_context(settings.BCRYPT_ROUNDS)

    # Middleware setup
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.ALLOWED_HOSTS != ["*"]:
        app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

    # Request logging and timing
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        return response

    register_exception_handlers(app)

    # Include routers
    app.include_router(health_router, prefix="/api")
    app.include_router(auth_router, prefix="/api")
    app.include_router(patient_router, prefix="/api")
    app.include_router(doctor_router, prefix="/api")
    app.include_router(directory_router, prefix="/api")

    @app.get("/api")
    async def api_info():
        """API information endpoint."""
        return {
            "name": settings.APP_NAME,
            "version": settings.VERSION,
            "endpoints": {
                "authentication": "/api/auth",
                "patient": "/api/patient",
                "doctor": "/api/doctor",
                "doctors": "/api/doctors",
                "health": "/api/health",
                "docs": "/docs",
            },
        }

    @app.on_event("startup")
    async def startup_event():
        """Initialize application on startup."""
        logger.info(f"Starting {settings.APP_NAME}...")

        if settings.uses_default_secret:
            logger.warning("SECRET_KEY is the development default; set it before deploying")

        try:
            init_db(engine)
            logger.info("Database initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize database: {str(e)}")
            raise

        logger.info("Application startup complete")

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on application shutdown."""
        logger.info(f"Shutting down {settings.APP_NAME}...")
        engine.dispose()

    # Mounted last so API routes take precedence
    if settings.FRONTEND_DIR:
        frontend_dir = Path(settings.FRONTEND_DIR)
        if frontend_dir.is_dir():
            app.mount("/", StaticFiles(directory=str(frontend_dir), html=True), name="frontend")
            logger.info(f"Serving frontend from {frontend_dir}")
        else:
            logger.warning(f"FRONTEND_DIR {frontend_dir} does not exist; frontend not served")

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "vaidya.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
