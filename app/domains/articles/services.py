import logging
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.db.repositories.article_repository import ArticleRepository
from app.domains.articles.entities import (
    Article, ArticleAccess, ArticleDetail, ArticleSummary, ManuscriptUpload,
    document_extension
)
from app.domains.identity.access import require_role
from app.domains.identity.entities import Caller, Role
from app.infrastructure.storage import LocalFileStorage

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 200


class ArticleService:
    """Сервис для работы со статьями"""

    def __init__(
        self,
        session: AsyncSession,
        storage: Optional[LocalFileStorage] = None,
        allowed_extensions: Optional[List[str]] = None
    ):
        self.session = session
        self.article_repository = ArticleRepository(session)
        self.storage = storage or LocalFileStorage()
        self.allowed_extensions = allowed_extensions or settings.allowed_extension_list

    async def list_articles(self, caller: Caller) -> List[ArticleSummary]:
        """Список статей: автору только свои, остальным все"""
        caller = require_role(caller, Role.AUTHOR, Role.REVIEWER, Role.ADMIN)

        if caller.role is Role.AUTHOR:
            return await self.article_repository.list_summaries(author_id=caller.id)
        return await self.article_repository.list_summaries()

    async def get_article(self, caller: Caller, article_id: int) -> ArticleDetail:
        """Статья с рецензиями. Чужая статья для автора недоступна"""
        caller = require_role(caller, Role.AUTHOR, Role.REVIEWER, Role.ADMIN)

        article = await self.article_repository.get_detail(article_id)
        if not article:
            raise NotFoundError("Article not found")

        access = ArticleAccess(article.author_id)
        if not access.can_view(caller):
            raise AuthorizationError("You don't have permission to view this article")

        return article

    async def submit_article(self, caller: Caller, title: str, upload: Optional[ManuscriptUpload]) -> Article:
        """Подача новой статьи автором"""
        caller = require_role(caller, Role.AUTHOR)

        title = (title or "").strip()
        if not title:
            raise ValidationError("Title is required")
        if len(title) > MAX_TITLE_LENGTH:
            raise ValidationError(f"Title must be at most {MAX_TITLE_LENGTH} characters")

        if upload is None or upload.is_empty:
            raise ValidationError("No file uploaded")

        extension = document_extension(upload.filename, self.allowed_extensions)
        file_path = self.storage.save(upload.content, extension)

        article = Article.submit(title=title, file_path=file_path, author_id=caller.id)
        try:
            created = await self.article_repository.create(article)
        except Exception:
            await self.session.rollback()
            # Запись не создана, файл больше никому не нужен
            self.storage.delete(file_path)
            raise

        logger.info("Author %s submitted article %s", caller.id, created.id)
        return created

    async def delete_article(self, caller: Caller, article_id: int) -> None:
        """Удаление статьи администратором"""
        caller = require_role(caller, Role.ADMIN)

        article = await self.article_repository.get_by_id(article_id)
        if not article:
            raise NotFoundError("Article not found")

        await self.article_repository.delete(article.id)
        self.storage.delete(article.file_path)
        logger.info("Admin %s deleted article %s", caller.id, article.id)
