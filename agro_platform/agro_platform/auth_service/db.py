from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional
import logging

from .config import settings

logger = logging.getLogger(__name__)

SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL


def make_engine(url: str) -> Engine:
    return create_engine(
        url,
        connect_args={"check_same_thread": False} if url.startswith("sqlite") else {},
    )


def make_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, autocommit=False, autoflush=False)


engine = make_engine(SQLALCHEMY_DATABASE_URL)
SessionLocal = make_session_factory(engine)
Base = declarative_base()


def init_db(bind: Optional[Engine] = None):
    # Import here so the tables are registered on Base
    from . import models  # noqa: F401

    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database initialized: %s", bind.url.render_as_string(hide_password=True))


def get_db(request: Request):
    """Per-request session from the factory the app was built with."""
    session_factory = getattr(request.app.state, "session_factory", SessionLocal)
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


def check_db_connection(bind: Optional[Engine] = None) -> bool:
    """Return True when the database answers a trivial query."""
    try:
        with (bind or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error("Database connection check failed: %s", e)
        return False
