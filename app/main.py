import anyio
from fastapi import FastAPI
from fastapi.concurrency import asynccontextmanager
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from app.api.routes import api_router
from app.core.config import Environment, settings
from app.core.db import engine, ping_database
from app.core.exception_handlers import register_exception_handlers
from app.core.logger import configure_uvicorn_logging, setup_logger, shutdown_logger
from app.middleware.logging import LoggingMiddleware
from app.services.rate_limiter import login_rate_limiter


async def _check_dependencies():
    """Check essential dependencies before starting the app"""

    is_healthy = await ping_database()

    if not is_healthy:
        logger.error("Database health check failed. Exiting application.")
        raise RuntimeError("Database is not reachable.")

    logger.success("Database is reachable.")


async def _shutdown_dependencies():
    """Shutdown essential dependencies gracefully"""

    await engine.dispose()
    logger.success("Database connections closed.")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""

    setup_logger()
    configure_uvicorn_logging()

    logger.info("Initializing resources...")
    await _check_dependencies()
    logger.success("Resources initialized.")

    async with anyio.create_task_group() as tg:
        if settings.rate_limit_enabled and settings.rate_limit_sweep_interval > 0:
            tg.start_soon(login_rate_limiter.run_sweeper, settings.rate_limit_sweep_interval)

        yield  # Application runs here

        tg.cancel_scope.cancel()

    logger.info("Cleaning up resources...")
    await _shutdown_dependencies()
    logger.success("Resources cleaned up.")
    shutdown_logger()


ALLOWED_ENVIRONMENTS = {Environment.LOCAL, Environment.DEV, Environment.STG}

app = FastAPI(
    title=settings.app_title,
    version=settings.app_version,
    description=settings.app_description,
    openapi_url=("/openapi.json" if settings.current_environment in ALLOWED_ENVIRONMENTS else None),
    docs_url="/docs" if settings.current_environment in ALLOWED_ENVIRONMENTS else None,
    redoc_url="/redoc" if settings.current_environment in ALLOWED_ENVIRONMENTS else None,
    lifespan=lifespan,
    generate_unique_id_function=lambda route: f"{route.tags[0]}-{route.name}",
)

register_exception_handlers(app)

# Set CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Set logging middleware
app.add_middleware(LoggingMiddleware)

# Include API router
app.include_router(api_router)
