import logging

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base

from taskmanager.errors import StorageInitError

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    # Only apply sqlite-specific connect_args when using sqlite
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(
        database_url,
        connect_args=connect_args,
        pool_pre_ping=True,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create the tasks table if it does not exist yet.

    Raises StorageInitError when the database cannot be opened or the table
    cannot be created, so the process stops before serving any request.
    """
    # registers the Task table on Base.metadata
    from taskmanager.models import task  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.error("Error initializing database at %s: %s", engine.url, e)
        raise StorageInitError(f"cannot initialize database at {engine.url}: {e}") from e
    logger.info("Database ready at %s", engine.url)


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
