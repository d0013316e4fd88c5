from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.config import settings

# Seconds a SQLite connection waits for another writer's lock before failing.
SQLITE_BUSY_TIMEOUT = 30


def use_immediate_transactions(engine: AsyncEngine) -> AsyncEngine:
    """Make every SQLite transaction take the write lock up front.

    The sqlite3 driver normally defers BEGIN until the first INSERT/UPDATE, so
    reads made before that (and SELECT ... FOR UPDATE, which SQLite ignores)
    are not isolated from concurrent writers. Disabling the driver's own BEGIN
    and emitting BEGIN IMMEDIATE serialises read-check-write sequences such as
    the enrollment capacity check.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


_engine_kwargs = {"echo": settings.sql_echo, "future": True}
if settings.database_url.startswith("sqlite"):
    _engine_kwargs["connect_args"] = {"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT}
else:
    # pool_pre_ping: check connection is alive before use.
    # pool_recycle: discard connections after this many seconds to avoid stale connections.
    _engine_kwargs.update(pool_pre_ping=True, pool_recycle=300)

engine = create_async_engine(settings.database_url, **_engine_kwargs)
if engine.dialect.name == "sqlite":
    use_immediate_transactions(engine)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

Base = declarative_base()


async def get_db() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def create_all_tables() -> None:
    """Create tables for every imported model (local/dev databases)."""
    import app.core.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
