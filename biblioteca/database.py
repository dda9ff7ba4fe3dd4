# biblioteca/database.py
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import declarative_base, sessionmaker
from .config import settings

Base = declarative_base()


def build_engine(url: str, **kwargs):
    engine = create_async_engine(url, echo=settings.database_echo, **kwargs)

    if url.startswith("sqlite"):
        # SQLite só aplica chaves estrangeiras quando habilitadas por conexão
        @event.listens_for(engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = build_engine(settings.database_url)
async_session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_models():
    # Importar os modelos registra as tabelas em Base.metadata
    from . import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db():
    async with async_session() as session:
        yield session
