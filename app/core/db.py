from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings


def configure_sqlite(engine: AsyncEngine) -> None:
    """Включение внешних ключей и сериализуемых транзакций для SQLite"""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection, connection_record):
        # Транзакциями управляем сами через событие begin
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def on_begin(conn):
        # Писатели выстраиваются в очередь на старте транзакции
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    engine = create_async_engine(database_url, future=True, echo=echo)
    if engine.dialect.name == "sqlite":
        configure_sqlite(engine)
    return engine


# Асинхронный движок
engine = create_engine(settings.database_url, echo=settings.sql_echo)

# Сессии
SessionLocal = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


# Функция для dependency injection в FastAPI
async def get_db():
    async with SessionLocal() as session:
        yield session
