# backend/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from config.log_setup import configure_logging
from config.settings import settings
from database.session import engine, init_db
from gateway.gateway_router import gateway_router
from services.errors import DirectoryError

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_PREFIX = "/api"


def _database_ok() -> bool:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error("Database check failed: %s", e)
        return False


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("B2B directory API starting")
    init_db()
    if _database_ok():
        logger.info("Database connected")
    if settings.uses_dev_secret:
        logger.warning("JWT_SECRET is not set; using the development secret")
    if not settings.cloudinary_configured:
        logger.warning("Cloudinary is not configured; media upload is disabled")
    if settings.allow_anonymous_admin_console:
        logger.warning("Anonymous requirement updates are enabled (ALLOW_ANONYMOUS_ADMIN_CONSOLE)")

    yield
    # Shutdown
    logger.info("B2B directory API shutting down")


def _validation_message(errors) -> str:
    if not errors:
        return "Invalid request"
    first = errors[0]
    msg = first.get("msg", "Invalid value")
    if first.get("type") == "value_error":
        return msg.replace("Value error, ", "", 1)
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    return f"{field}: {msg}" if field else msg


def create_app() -> FastAPI:
    configure_logging(settings.log_level)

    app = FastAPI(
        title="B2B Directory",
        description="Company directory and requirement matching for manufacturers, distributors and retailers",
        version=API_VERSION,
        lifespan=lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DirectoryError)
    async def directory_error_handler(request: Request, exc: DirectoryError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = jsonable_encoder(exc.errors())
        return JSONResponse(
            status_code=400,
            content={"message": _validation_message(errors), "details": errors},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": str(exc)})

    @app.get("/health")
    def health():
        ok = _database_ok()
        return {
            "status": "healthy" if ok else "degraded",
            "service": "b2b-directory-api",
            "version": API_VERSION,
            "database": "connected" if ok else "unavailable",
            "media": "configured" if settings.cloudinary_configured else "not configured",
        }

    @app.get("/")
    def root():
        return {
            "message": "B2B Directory API",
            "version": API_VERSION,
            "api_base": API_PREFIX,
            "docs": "/docs",
            "endpoints": {
                "health": "/health",
                "auth": f"{API_PREFIX}/auth",
                "company": f"{API_PREFIX}/company",
                "requirements": f"{API_PREFIX}/requirements",
                "media": f"{API_PREFIX}/media/upload",
            },
        }

    app.include_router(gateway_router, prefix=API_PREFIX)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.log_level.lower(),
    )
