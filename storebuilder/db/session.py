# storebuilder/db/session.py
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storebuilder.core.settings import settings


def configure_sqlite(engine: Engine) -> Engine:
    """
    pysqlite defers BEGIN and ignores foreign keys by default, which breaks
    SAVEPOINTs (used by template seeding) and ON DELETE CASCADE.
    Take over transaction control and turn FK enforcement on.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


def build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return configure_sqlite(create_engine(url, **kwargs))

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_recycle=1800,
    )


engine = build_engine(settings.SQLALCHEMY_DATABASE_URL)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
