import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from taskmanager import __version__
from taskmanager.config import Settings
from taskmanager.database import build_engine, build_session_factory, init_db
from taskmanager.errors import register_exception_handlers
from taskmanager.routers import tasks

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome to the Task Manager API!"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application and its storage handle.

    The schema is created before the app is returned, so a broken database
    aborts startup with StorageInitError instead of failing every request.
    """
    settings = settings or Settings.from_env()

    engine = build_engine(settings.database_url)
    init_db(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        engine.dispose()

    app = FastAPI(title="Task Manager API", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    register_exception_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    def welcome():
        return WELCOME_MESSAGE

    app.include_router(tasks.router)

    logger.info("Task Manager API configured (database=%s)", engine.url)
    return app
