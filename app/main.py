import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.core.config import settings
from app.core.db import engine, SessionLocal
from app.core.exceptions import register_exception_handlers
from app.core.logging import setup_logging
from app.db.base import Base
from app.domains.identity.services import IdentityService
from app.db import models  # noqa: F401  регистрация моделей в metadata

logger = logging.getLogger(__name__)


async def bootstrap_admin_from_settings() -> None:
    """Создание администратора из настроек BOOTSTRAP_ADMIN_*, если они заданы"""
    if not (settings.bootstrap_admin_username and settings.bootstrap_admin_email
            and settings.bootstrap_admin_password):
        return

    async with SessionLocal() as session:
        await IdentityService(session).bootstrap_admin(
            username=settings.bootstrap_admin_username,
            email=settings.bootstrap_admin_email,
            password=settings.bootstrap_admin_password
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()

    if settings.create_tables_on_startup:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    await bootstrap_admin_from_settings()
    yield
    await engine.dispose()


app = FastAPI(
    title="Article Review Service",
    description="Подача статей и рецензирование с разграничением ролей",
    version="1.0.0",
    lifespan=lifespan
)

# Настройка CORS для работы с frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # В продакшене указать конкретные домены
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Подключаем роутеры
app.include_router(api_router)


@app.get("/")
async def root():
    """Корневой эндпоинт"""
    return {
        "message": "Article Review Service API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
