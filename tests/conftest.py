"""Общие фикстуры: временная SQLite БД, пользователи всех ролей, HTTP клиент."""

import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker

from app.core.db import create_engine, get_db
from app.core.security import create_access_token
from app.db.base import Base
from app.db import models  # noqa: F401
from app.db.repositories.user_repository import UserRepository
from app.domains.articles.entities import ManuscriptUpload
from app.domains.articles.services import ArticleService
from app.domains.identity.entities import Role, User
from app.infrastructure.storage import LocalFileStorage, get_storage
from app.main import app

PDF_BYTES = b"%PDF-1.4\n%test manuscript\n"


@pytest.fixture
async def engine(tmp_path):
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'reviews.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def storage(tmp_path):
    return LocalFileStorage(str(tmp_path / "uploads"))


@pytest.fixture
async def users(session_factory):
    """По пользователю на каждую роль плюс второй автор и второй рецензент."""
    accounts = {
        "admin": ("admin", "admin@journal.org", Role.ADMIN),
        "author": ("alice", "alice@journal.org", Role.AUTHOR),
        "other_author": ("carol", "carol@journal.org", Role.AUTHOR),
        "reviewer": ("rita", "rita@journal.org", Role.REVIEWER),
        "other_reviewer": ("roger", "roger@journal.org", Role.REVIEWER),
    }
    created = {}
    async with session_factory() as session:
        repository = UserRepository(session)
        for key, (username, email, role) in accounts.items():
            user = User.create_user(username=username, email=email, password="secret", role=role)
            created[key] = await repository.create(user)
    return created


@pytest.fixture
def callers(users):
    return {key: user.as_caller() for key, user in users.items()}


@pytest.fixture
def auth_headers(users):
    def make(key):
        user = users[key]
        token = create_access_token({"sub": str(user.id), "role": user.role.value})
        return {"Authorization": f"Bearer {token}"}
    return make


@pytest.fixture
def submit(session, storage, callers):
    """Подача статьи от имени автора. После commit сессия не держит транзакцию."""
    async def make(title="Paper X", filename="x.pdf", author="author"):
        service = ArticleService(session, storage)
        return await service.submit_article(
            callers[author], title, ManuscriptUpload(filename=filename, content=PDF_BYTES)
        )
    return make


@pytest.fixture
async def client(session_factory, storage):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
