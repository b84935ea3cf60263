import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import Engine, make_url
from sqlmodel import Session, SQLModel, create_engine, select

from ..core.config import settings
from ..models import DEFAULT_LIST_ID, TaskList

logger = logging.getLogger(__name__)



def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # Cascades on task_labels/reminders/attachments/activity_logs and subtasks depend on this
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_db_engine(url: str, echo: bool = False, **kwargs) -> Engine:
    """Build an engine for ``url``.

    SQLite gets foreign keys switched on for every connection; PostgreSQL
    URLs are normalised to the sync psycopg2 driver and pooled.
    """
    # --- CONFIGURATION FOR SQLITE ---
    if url.startswith("sqlite"):
        database = make_url(url).database
        if database and database != ":memory:":
            Path(database).parent.mkdir(parents=True, exist_ok=True)

        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        engine = create_engine(url, echo=echo, connect_args=connect_args, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    # --- CONFIGURATION FOR POSTGRESQL ---
    sync_url = url.replace("postgres://", "postgresql://")
    if "+asyncpg" in sync_url:
        sync_url = sync_url.replace("+asyncpg", "")

    return create_engine(
        sync_url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        **kwargs,
    )


engine = create_db_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)


def init_db(bind: Engine = engine) -> None:
    """Create all tables and make sure the default list exists."""
    SQLModel.metadata.create_all(bind)

    with Session(bind) as session:
        inbox = session.exec(select(TaskList).where(TaskList.id == DEFAULT_LIST_ID)).first()
        if inbox is None:
            session.add(
                TaskList(
                    id=DEFAULT_LIST_ID,
                    name=settings.DEFAULT_LIST_NAME,
                    color=settings.DEFAULT_LIST_COLOR,
                    emoji=settings.DEFAULT_LIST_EMOJI,
                )
            )
            session.commit()
            logger.info("Created default list id=%s name=%s", DEFAULT_LIST_ID, settings.DEFAULT_LIST_NAME)


# Dependency: one session per request
def get_session():
    with Session(engine) as session:
        yield session


@contextmanager
def transaction(session: Session):
    """Commit everything done inside the block, or roll all of it back."""
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
