from contextlib import asynccontextmanager
from typing import Optional
import logging
import logging.config
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.httpsredirect import HTTPSRedirectMiddleware

from app.config import settings
from app.db import Database
from app.errors import setup_exception_handlers
from app.middleware.validation import ValidationMiddleware
from app.routes import health as health_router
from app.routes import items as items_router
from app.routes import rooms as rooms_router
from app.routes import serial_numbers as serial_numbers_router
from app.schema import init_schema
from app.utils import extract_request_metadata


# Configure logging centrally and allow log level from settings
LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
            "datefmt": "%Y-%m-%dT%H:%M:%SZ",
        }
    },
    "handlers": {
        "stdout": {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
            "formatter": "default",
            "level": settings.LOG_LEVEL,
        }
    },
    "root": {"handlers": ["stdout"], "level": settings.LOG_LEVEL},
    "loggers": {
        "uvicorn.error": {"level": settings.LOG_LEVEL, "handlers": ["stdout"], "propagate": False},
        "uvicorn.access": {"level": settings.LOG_LEVEL, "handlers": ["stdout"], "propagate": False},
    },
}

logging.config.dictConfig(LOGGING_CONFIG)

logger = logging.getLogger("app.requests")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # A database handed to create_app belongs to the caller; otherwise open one from settings
    owns_database = app.state.database is None
    if owns_database:
        app.state.database = Database.from_settings()
    init_schema(app.state.database, app.state.seed_data_path)
    try:
        yield
    finally:
        if owns_database:
            app.state.database.dispose()
            app.state.database = None


def create_app(database: Optional[Database] = None, seed_data_path: Optional[str] = None) -> FastAPI:
    app = FastAPI(debug=settings.DEBUG, title=settings.PROJECT_NAME, lifespan=lifespan)
    app.state.database = database
    app.state.seed_data_path = seed_data_path

    # Validation middleware applied early so requests are sanitized before route handlers
    app.add_middleware(ValidationMiddleware)

    # Allow requests from configured origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Enforce HTTPS when configured (useful for production behind a proxy)
    if settings.FORCE_HTTPS:
        app.add_middleware(HTTPSRedirectMiddleware)

    @app.middleware("http")
    async def set_security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        return response

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        meta = extract_request_metadata(request)
        logger.info(
            "%s %s -> %s (%.1fms) ip=%s",
            meta["method"],
            meta["request_path"],
            response.status_code,
            (time.perf_counter() - started) * 1000,
            meta["ip"],
        )
        return response

    setup_exception_handlers(app)

    # include routers
    app.include_router(health_router.router)
    app.include_router(items_router.router)
    app.include_router(serial_numbers_router.router)
    app.include_router(rooms_router.router)

    return app


app = create_app(seed_data_path=settings.SEED_DATA_PATH)


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=LOGGING_CONFIG)


if __name__ == "__main__":
    run()
