import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from taskkeeper import __version__
from taskkeeper.api import auth_router, health_router, task_router
from taskkeeper.config import Settings, get_settings
from taskkeeper.db.session import build_engine, build_sessionmaker, init_models
from taskkeeper.exceptions.http import AppError, InvalidCredentialsError
from taskkeeper.logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, InvalidCredentialsError) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Builds the FastAPI application.
    The engine and sessionmaker are attached to app.state up front so the app
    can serve requests even when the lifespan is not run (e.g. under a test transport).
    """
    settings = settings or get_settings()
    engine = build_engine(settings.database_url, echo=settings.database_echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(level=settings.log_level, log_file=settings.log_file)
        await init_models(engine)
        logger.info("taskkeeper %s started", __version__)
        yield
        await engine.dispose()

    app = FastAPI(title="taskkeeper", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.sessionmaker = build_sessionmaker(engine)

    app.add_exception_handler(AppError, _app_error_handler)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(task_router)
    return app
