import logging
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.db.repositories.article_repository import ArticleRepository
from app.db.repositories.review_repository import ReviewRepository
from app.domains.articles.entities import ArticleSummary, ReviewDecision
from app.domains.identity.access import require_role
from app.domains.identity.entities import Caller, Role
from app.domains.reviews.entities import Review, ReviewSummary

logger = logging.getLogger(__name__)

REVIEW_UNIQUE_CONSTRAINT = "uq_reviews_article_reviewer"


def is_duplicate_review(error: IntegrityError) -> bool:
    """Нарушена ли уникальность пары (статья, рецензент)"""
    message = str(error.orig)
    # SQLite не называет ограничение, а перечисляет его столбцы
    return (
        REVIEW_UNIQUE_CONSTRAINT in message
        or "reviews.article_id, reviews.reviewer_id" in message
    )


def parse_decision(value) -> ReviewDecision:
    if isinstance(value, ReviewDecision):
        return value
    try:
        return ReviewDecision(value)
    except ValueError:
        raise ValidationError("Decision must be Accepted or Rejected")


class ReviewService:
    """Сервис рецензирования: решение по статье и списки рецензента"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.article_repository = ArticleRepository(session)
        self.review_repository = ReviewRepository(session)

    async def list_my_reviews(self, caller: Caller) -> List[ReviewSummary]:
        """Рецензии текущего рецензента"""
        caller = require_role(caller, Role.REVIEWER)
        return await self.review_repository.list_by_reviewer(caller.id)

    async def list_available_articles(self, caller: Caller) -> List[ArticleSummary]:
        """Статьи без решения, которые рецензент еще не оценивал"""
        caller = require_role(caller, Role.REVIEWER)
        return await self.article_repository.list_available_for(caller.id)

    async def create_review(self, caller: Caller, article_id: int, content: str, decision) -> Review:
        """
        Рецензия и новый статус статьи записываются одной транзакцией.
        Строка статьи блокируется, поэтому параллельные решения по одной
        статье выполняются по очереди.
        """
        caller = require_role(caller, Role.REVIEWER)
        decision = parse_decision(decision)

        if content is None or not content.strip():
            raise ValidationError("Review content is required")

        try:
            article = await self.article_repository.get_by_id(article_id, for_update=True)
            if not article:
                raise NotFoundError("Article not found")

            if await self.review_repository.exists_for(article.id, caller.id):
                raise ConflictError("You have already reviewed this article")

            new_status = article.decide(decision)

            review = await self.review_repository.add(
                Review.create_review(
                    content=content,
                    decision=decision,
                    reviewer_id=caller.id,
                    article_id=article.id
                )
            )

            if not await self.article_repository.mark_decided(article.id, new_status):
                raise ConflictError("Article has already been decided")

            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            if is_duplicate_review(e):
                raise ConflictError("You have already reviewed this article")
            logger.warning("Review of article %s by %s rejected by the database: %s", article_id, caller.id, e.orig)
            raise ConflictError("Review could not be saved, the article or reviewer no longer exists")
        except Exception:
            await self.session.rollback()
            raise

        logger.info(
            "Reviewer %s decided article %s: %s (review %s)",
            caller.id, article.id, decision.value, review.id
        )
        return review
