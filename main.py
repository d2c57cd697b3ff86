# main.py
"""Main application: search API with process-wide index locks"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from config import settings
from services.logger_config import setup_logging
from database.session import async_engine, init_db
from api.endpoints import router
from api.errors import register_error_handlers
from infrastructure.key_locks import KeyedLock

setup_logging()
logger = logging.getLogger(settings.LOGGER_NAME)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info("Starting application...")

    # Database initialization
    await init_db()
    logger.info("Database initialized")

    # One lock arena per process, shared by every request
    app.state.index_locks = KeyedLock()
    logger.info("Services initialized")
    yield

    await async_engine.dispose()
    logger.info("Application shutdown complete")

app = FastAPI(
    title=settings.APP_TITLE,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

register_error_handlers(app)
app.include_router(router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_level="info"
    )
