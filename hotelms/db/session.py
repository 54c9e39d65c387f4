"""Database engine and session management."""
import logging
import time
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from hotelms.config.settings import Settings, settings

logger = logging.getLogger(__name__)


def _install_sqlite_listeners(engine: Engine) -> None:
    """
    Make every SQLite transaction take the write lock up front.

    pysqlite defers BEGIN until the first write, so a read-then-insert
    sequence from two connections can interleave. Driver-level autocommit is
    switched off and SQLAlchemy's ``begin`` emits ``BEGIN IMMEDIATE`` instead.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def _install_timing_listeners(engine: Engine, slow_query_seconds: float) -> None:
    @event.listens_for(engine, "before_cursor_execute")
    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault('query_start_time', []).append(time.perf_counter())

    @event.listens_for(engine, "after_cursor_execute")
    def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        total_time = time.perf_counter() - conn.info['query_start_time'].pop()
        if total_time > slow_query_seconds:
            logger.warning(f"Slow query detected ({total_time:.4f}s): {statement[:100]}...")


def build_engine(database_url: str, config: Optional[Settings] = None) -> Engine:
    """
    Create an engine for ``database_url`` with the locking and timing
    listeners installed.
    """
    config = config or settings

    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            echo=config.DB_ECHO,
            connect_args={"check_same_thread": False, "timeout": 30},
        )
        _install_sqlite_listeners(engine)
    else:
        engine = create_engine(
            database_url,
            pool_pre_ping=True,
            echo=config.DB_ECHO,
            pool_size=config.DB_POOL_SIZE,
            max_overflow=config.DB_POOL_OVERFLOW,
            pool_recycle=3600,
        )

    _install_timing_listeners(engine, config.DB_SLOW_QUERY_SECONDS)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


engine = build_engine(settings.get_database_url())

SessionLocal = build_session_factory(engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function that yields a database session.

    Usage in FastAPI endpoints:
        @router.get("/rooms")
        def list_rooms(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
